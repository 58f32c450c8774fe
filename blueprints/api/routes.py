"""
API routes for JSON endpoints.
Public read access to the map data and the share counter.
"""

from flask import jsonify, request, Blueprint, current_app

from blueprints.pavilion.services import map_marker, info_panel, share_payload
from models.category import get_all_categories, get_category_map
from models.pavilion import (
    get_all_pavilions, get_pavilion_by_id, apply_map_filters,
    increment_share_count
)
from utils.api_response import api_success, api_error
from utils.messages import MESSAGES

api_bp = Blueprint('api', __name__)


@api_bp.route('/health')
def health_check():
    """
    Health check endpoint (no authentication required).

    Returns:
        JSON with status and version
    """
    return jsonify({
        'status': 'ok',
        'version': current_app.config.get('APP_VERSION', '1.0.0'),
        'app': current_app.config.get('APP_NAME', 'Карта Апрашки')
    })


@api_bp.route('/categories')
def api_categories():
    """Active category catalogue (name, color, icon)."""
    return api_success(data=get_all_categories())


@api_bp.route('/map/pavilions')
def map_pavilions():
    """
    Pavilions for the public map.

    Query params:
        category: Category code (optional)
        q: Search text on shop name, category and owner name (optional)

    Returns:
        JSON with pavilions, stats {visible, total} and categories
    """
    category = request.args.get('category', '').strip() or None
    query = request.args.get('q', '').strip() or None

    pavilions = get_all_pavilions(public_only=True)
    visible = apply_map_filters(pavilions, category, query)
    categories = get_category_map()

    return api_success(data={
        'pavilions': [map_marker(p, categories) for p in visible],
        'stats': {'visible': len(visible), 'total': len(pavilions)},
        'categories': get_all_categories(),
    })


def _public_pavilion(pavilion_id):
    pavilion = get_pavilion_by_id(pavilion_id)
    if not pavilion or not pavilion.get('tenant_approved'):
        return None
    return pavilion


@api_bp.route('/map/pavilions/<pavilion_id>')
def map_pavilion_detail(pavilion_id):
    """Info panel for a clicked marker."""
    pavilion = _public_pavilion(pavilion_id)
    if not pavilion:
        return api_error(MESSAGES['pavilion_not_found'], 404)

    return api_success(data=info_panel(pavilion, get_category_map()))


@api_bp.route('/pavilions/<pavilion_id>/share', methods=['POST'])
def share_pavilion(pavilion_id):
    """
    Share payload for a pavilion; premium pavilions count shares.

    Returns:
        JSON with url, text and share_count
    """
    pavilion = _public_pavilion(pavilion_id)
    if not pavilion:
        return api_error(MESSAGES['pavilion_not_found'], 404)

    payload = share_payload(pavilion)
    share_count = pavilion.get('share_count') or 0
    if pavilion.get('premium'):
        share_count = increment_share_count(pavilion_id)

    return api_success(data={**payload, 'share_count': share_count})
