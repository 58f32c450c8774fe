"""
Public pavilion page routes.
Pages are reachable by id (/pavilion?id=...) and, for premium pavilions, by slug.
"""

from flask import render_template, redirect, url_for, request, abort, Blueprint

from blueprints.pavilion.services import ensure_pavilion_slug, page_context, share_payload
from models.ad_banner import get_active_banner, record_impression
from models.category import get_category_map
from models.pavilion import get_pavilion_by_id, get_pavilion_by_slug
from utils.messages import MESSAGES

pavilion_bp = Blueprint('pavilion', __name__)


def _public_or_404(pavilion):
    if not pavilion or not pavilion.get('tenant_approved'):
        abort(404, description=MESSAGES['pavilion_not_found'])
    return pavilion


def _render_page(pavilion):
    context = page_context(pavilion, get_category_map())

    banner = get_active_banner()
    if banner:
        record_impression(banner['id'])

    return render_template(
        'pavilion.html',
        banner=banner,
        share=share_payload(pavilion),
        **context
    )


@pavilion_bp.route('/pavilion')
def by_id():
    """Pavilion page by id; premium pavilions redirect to their slug URL."""
    pavilion_id = request.args.get('id', '').strip()
    if not pavilion_id:
        abort(404, description=MESSAGES['pavilion_not_found'])

    pavilion = _public_or_404(get_pavilion_by_id(pavilion_id))

    slug = ensure_pavilion_slug(pavilion)
    if slug:
        return redirect(url_for('pavilion.by_slug', slug=slug))

    return _render_page(pavilion)


@pavilion_bp.route('/pavilion/<slug>')
def by_slug(slug):
    """Pavilion page by slug."""
    pavilion = _public_or_404(get_pavilion_by_slug(slug))
    return _render_page(pavilion)
