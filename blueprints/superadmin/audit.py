"""
Audit log viewer for the superadmin.
"""

from flask import render_template, request
from flask_login import login_required

from utils.decorators import owner_required


def register_routes(bp):
    """Register audit log routes on the superadmin blueprint."""

    @bp.route('/audit')
    @login_required
    @owner_required
    def audit_logs():
        """Recent audit entries, filterable by entity type and action."""
        from models.audit_log import get_audit_logs, get_distinct_entity_types

        entity_type = request.args.get('entity_type', '').strip() or None
        action = request.args.get('action', '').strip() or None

        page = request.args.get('page', 1, type=int)
        per_page = min(request.args.get('per_page', 50, type=int), 100)
        offset = (max(page, 1) - 1) * per_page

        logs = get_audit_logs(
            action=action,
            entity_type=entity_type,
            limit=per_page,
            offset=offset
        )

        return render_template(
            'superadmin/audit.html',
            logs=logs,
            entity_types=get_distinct_entity_types(),
            entity_type=entity_type or '',
            action=action or '',
            page=page
        )
