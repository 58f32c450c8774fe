"""
Superadmin pavilion management: delete, change owner, toggle premium.
"""

from flask import request
from flask_login import login_required, current_user

from blueprints.superadmin.common import respond_ok, respond_error, request_data
from models.pavilion import (
    get_all_pavilions, get_pavilion_by_id, update_pavilion, delete_pavilion,
    filter_pavilions
)
from models.tenant import get_tenant_by_id
from utils.api_response import api_success
from utils.audit import log_audit
from utils.decorators import owner_required
from utils.messages import MESSAGES

TAB = 'pavilions'


def register_routes(bp):
    """Register pavilion management routes on the superadmin blueprint."""

    @bp.route('/api/pavilions')
    @login_required
    @owner_required
    def pavilions_list():
        """Filtered pavilion list (floor, category, premium, search)."""
        pavilions = filter_pavilions(
            get_all_pavilions(public_only=False),
            floor=request.args.get('floor', '').strip(),
            category=request.args.get('category', '').strip(),
            premium=request.args.get('premium', '').strip(),
            search=request.args.get('search', '').strip(),
        )
        return api_success(data=pavilions)

    @bp.route('/pavilions/<pavilion_id>/delete', methods=['POST'])
    @login_required
    @owner_required
    def pavilion_delete(pavilion_id):
        pavilion = get_pavilion_by_id(pavilion_id)
        if not pavilion:
            return respond_error(MESSAGES['pavilion_not_found'], TAB, 404)

        delete_pavilion(current_user, pavilion_id)
        log_audit('DELETE', 'pavilion', pavilion_id,
                  before={'shop_name': pavilion['shop_name'], 'tenant_id': pavilion['tenant_id']})
        return respond_ok(MESSAGES['pavilion_deleted'], TAB)

    @bp.route('/pavilions/<pavilion_id>/owner', methods=['POST'])
    @login_required
    @owner_required
    def pavilion_change_owner(pavilion_id):
        """Reassign a pavilion to another tenant."""
        pavilion = get_pavilion_by_id(pavilion_id)
        if not pavilion:
            return respond_error(MESSAGES['pavilion_not_found'], TAB, 404)

        tenant_id = (request_data().get('tenant_id') or '').strip()
        if not tenant_id or not get_tenant_by_id(tenant_id):
            return respond_error(MESSAGES['tenant_not_found'], TAB, 404)

        update_pavilion(current_user, pavilion_id, {'tenant_id': tenant_id})
        log_audit('UPDATE', 'pavilion', pavilion_id,
                  before={'tenant_id': pavilion['tenant_id']}, after={'tenant_id': tenant_id})
        return respond_ok(MESSAGES['owner_changed'], TAB, data={'tenant_id': tenant_id})

    @bp.route('/pavilions/<pavilion_id>/premium', methods=['POST'])
    @login_required
    @owner_required
    def pavilion_toggle_premium(pavilion_id):
        """Flip the pavilion's own premium flag."""
        pavilion = get_pavilion_by_id(pavilion_id)
        if not pavilion:
            return respond_error(MESSAGES['pavilion_not_found'], TAB, 404)

        is_premium = not bool(pavilion['is_premium'])
        update_pavilion(current_user, pavilion_id, {'is_premium': is_premium})
        log_audit('UPDATE', 'pavilion', pavilion_id,
                  before={'is_premium': bool(pavilion['is_premium'])}, after={'is_premium': is_premium})

        message = MESSAGES['premium_enabled' if is_premium else 'premium_disabled']
        return respond_ok(message, TAB, data={'is_premium': is_premium})
