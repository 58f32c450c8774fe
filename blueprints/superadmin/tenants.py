"""
Superadmin tenant management: whitelist approval, premium, manual add, delete.
"""

from flask import request
from flask_login import login_required, current_user

from blueprints.superadmin.common import respond_ok, respond_error, request_data, form_flag
from models.tenant import (
    get_all_tenants, get_tenant_by_id, create_tenant, update_tenant, delete_tenant
)
from utils.api_response import api_success
from utils.audit import log_audit
from utils.decorators import owner_required
from utils.messages import MESSAGES
from utils.validators import validate_email

TAB = 'tenants'


def register_routes(bp):
    """Register tenant management routes on the superadmin blueprint."""

    @bp.route('/api/tenants')
    @login_required
    @owner_required
    def tenants_list():
        """Tenants with pavilion counts, filtered by status and search."""
        tenants = get_all_tenants(
            status=request.args.get('status', '').strip() or None,
            search=request.args.get('search', '').strip() or None
        )
        return api_success(data=tenants)

    @bp.route('/tenants', methods=['POST'])
    @login_required
    @owner_required
    def tenant_create():
        """Add a tenant manually. Unapproved unless 'approved' is sent."""
        data = request_data()
        name = (data.get('name') or '').strip()
        phone = (data.get('phone') or '').strip()
        email = (data.get('email') or '').strip()

        if not name:
            return respond_error(MESSAGES['name_required'], TAB)
        if not phone:
            return respond_error(MESSAGES['phone_required'], TAB)
        if email and not validate_email(email):
            return respond_error(MESSAGES['invalid_email'], TAB)

        try:
            tenant_id = create_tenant(
                phone=phone,
                name=name,
                email=email or None,
                approved=form_flag(data, 'approved'),
                is_premium=form_flag(data, 'is_premium'),
            )
        except ValueError as e:
            return respond_error(str(e), TAB)

        log_audit('CREATE', 'tenant', tenant_id, after={'name': name, 'phone': phone})
        return respond_ok(MESSAGES['tenant_created'], TAB, data={'id': tenant_id})

    def _set_flag(tenant_id, field, value, message_key):
        tenant = get_tenant_by_id(tenant_id)
        if not tenant:
            return respond_error(MESSAGES['tenant_not_found'], TAB, 404)

        update_tenant(tenant_id, **{field: value})
        log_audit('UPDATE', 'tenant', tenant_id,
                  before={field: bool(tenant[field])}, after={field: bool(value)})
        return respond_ok(MESSAGES[message_key], TAB, data={field: bool(value)})

    @bp.route('/tenants/<tenant_id>/approve', methods=['POST'])
    @login_required
    @owner_required
    def tenant_approve(tenant_id):
        return _set_flag(tenant_id, 'approved', True, 'tenant_approved')

    @bp.route('/tenants/<tenant_id>/reject', methods=['POST'])
    @login_required
    @owner_required
    def tenant_reject(tenant_id):
        if tenant_id == current_user.id:
            return respond_error(MESSAGES['cannot_reject_self'], TAB)
        return _set_flag(tenant_id, 'approved', False, 'tenant_rejected')

    @bp.route('/tenants/<tenant_id>/premium', methods=['POST'])
    @login_required
    @owner_required
    def tenant_toggle_premium(tenant_id):
        tenant = get_tenant_by_id(tenant_id)
        if not tenant:
            return respond_error(MESSAGES['tenant_not_found'], TAB, 404)
        is_premium = not bool(tenant['is_premium'])
        return _set_flag(tenant_id, 'is_premium', is_premium,
                         'premium_enabled' if is_premium else 'premium_disabled')

    @bp.route('/tenants/<tenant_id>/delete', methods=['POST'])
    @login_required
    @owner_required
    def tenant_delete(tenant_id):
        """Delete a tenant and their pavilions."""
        if tenant_id == current_user.id:
            return respond_error(MESSAGES['cannot_delete_self'], TAB)

        tenant = get_tenant_by_id(tenant_id)
        if not tenant:
            return respond_error(MESSAGES['tenant_not_found'], TAB, 404)

        delete_tenant(tenant_id)
        log_audit('DELETE', 'tenant', tenant_id,
                  before={'name': tenant['name'], 'phone': tenant['phone']})
        return respond_ok(MESSAGES['tenant_deleted'], TAB)
