"""
Route decorators for authentication and authorization.
Provides owner (superadmin) access control for routes.
"""

from functools import wraps
from flask import flash, abort
from flask_login import login_required, current_user

from utils.messages import MESSAGES


def owner_required(func):
    """
    Decorator to restrict a route to owner (superadmin) tenants.

    Usage:
        @bp.route('/superadmin')
        @login_required
        @owner_required
        def dashboard():
            ...

    Non-owners get 403.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        if not current_user.is_authenticated or not current_user.is_owner:
            flash(MESSAGES['owner_required'], 'error')
            abort(403)

        return func(*args, **kwargs)
    return wrapper


def can_edit_pavilion(tenant, pavilion: dict) -> bool:
    """
    True if tenant may modify the pavilion.

    Args:
        tenant: Tenant object or dict (id, is_owner)
        pavilion: Pavilion dict (tenant_id)
    """
    if not tenant or not pavilion:
        return False

    if isinstance(tenant, dict):
        tenant_id, is_owner = tenant.get('id'), tenant.get('is_owner')
    else:
        tenant_id, is_owner = tenant.id, tenant.is_owner

    return bool(is_owner) or pavilion.get('tenant_id') == tenant_id


# Re-export login_required for convenience
__all__ = ['login_required', 'owner_required', 'can_edit_pavilion']
