"""
Audit logging utility.
Records superadmin writes with the acting tenant and request metadata.
"""

import logging
from flask import request, has_request_context
from flask_login import current_user

logger = logging.getLogger(__name__)


def log_audit(
    action: str,
    entity_type: str,
    entity_id=None,
    before: dict = None,
    after: dict = None,
    tenant_id: str = None
) -> int:
    """
    Log an audit entry.

    Captures the current tenant, IP address and user agent from the Flask
    request context.

    Args:
        action: Action type (CREATE, UPDATE, DELETE, APPROVE, ...)
        entity_type: Entity type (pavilion, tenant, banner, ...)
        entity_id: ID of the affected entity
        before: Entity state before the change
        after: Entity state after the change
        tenant_id: Override acting tenant (defaults to current_user.id)

    Returns:
        New audit log ID, or None if logging failed

    Example:
        log_audit('UPDATE', 'tenant', tenant_id, before={'approved': 0}, after={'approved': 1})
    """
    try:
        from models.audit_log import create_audit_log

        if tenant_id is None and current_user and current_user.is_authenticated:
            tenant_id = current_user.id

        ip_address = None
        user_agent = None
        if has_request_context():
            ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
            if ip_address and ',' in ip_address:
                ip_address = ip_address.split(',')[0].strip()
            user_agent = request.headers.get('User-Agent', '')[:255]

        changes = None
        if before is not None or after is not None:
            changes = {'before': before, 'after': after}

        return create_audit_log(
            action=action,
            entity_type=entity_type,
            entity_id=None if entity_id is None else str(entity_id),
            tenant_id=tenant_id,
            changes=changes,
            ip_address=ip_address,
            user_agent=user_agent
        )

    except Exception as e:
        # Audit logging should never fail the main operation
        logger.error(f"Failed to log audit entry: {e}", exc_info=True)
        return None
