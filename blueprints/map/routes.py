"""
Public map routes.
The map page itself; pavilion data is loaded from the JSON API.
"""

from flask import render_template, redirect, request, abort, Blueprint

from models.ad_banner import get_ad_banner, record_click
from models.building import get_all_buildings
from models.category import get_all_categories
from models.settings import increment_page_views

map_bp = Blueprint('map', __name__)


@map_bp.route('/')
def index():
    """
    Public map page.

    Query params:
        pavilion: Pavilion id to preselect
    """
    increment_page_views()

    return render_template(
        'map.html',
        categories=get_all_categories(),
        buildings=get_all_buildings(),
        selected_pavilion=request.args.get('pavilion', '').strip() or None
    )


@map_bp.route('/banner/click')
def banner_click():
    """Count a banner click and follow the banner link."""
    banner = get_ad_banner()
    if not banner['is_active'] or not banner['link_url']:
        abort(404)

    record_click(banner['id'])
    return redirect(banner['link_url'])
