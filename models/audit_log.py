"""
Audit Log model and data access functions.
Handles audit log creation and retrieval.
"""

import json
from database import get_db


# =============================================================================
# READ OPERATIONS
# =============================================================================

def get_audit_logs(
    tenant_id: str = None,
    action: str = None,
    entity_type: str = None,
    limit: int = 100,
    offset: int = 0
) -> list:
    """
    Get audit logs with optional filtering, most recent first.

    Args:
        tenant_id: Filter by acting tenant
        action: Filter by action type (CREATE, UPDATE, DELETE, etc.)
        entity_type: Filter by entity type (pavilion, tenant, etc.)
        limit: Maximum number of records to return (default 100)
        offset: Number of records to skip for pagination

    Returns:
        List of audit log dicts with parsed 'changes'
    """
    with get_db() as conn:
        cursor = conn.cursor()

        query = '''
            SELECT al.*, t.name as tenant_name, t.phone as tenant_phone
            FROM audit_log al
            LEFT JOIN tenants t ON al.tenant_id = t.id
            WHERE 1=1
        '''

        params = []

        if tenant_id is not None:
            query += ' AND al.tenant_id = ?'
            params.append(tenant_id)

        if action:
            query += ' AND al.action = ?'
            params.append(action)

        if entity_type:
            query += ' AND al.entity_type = ?'
            params.append(entity_type)

        query += ' ORDER BY al.created_at DESC, al.id DESC LIMIT ? OFFSET ?'
        params.extend([limit, offset])

        cursor.execute(query, params)
        logs = []
        for row in cursor.fetchall():
            log = dict(row)
            log['changes'] = json.loads(log['changes']) if log['changes'] else None
            logs.append(log)
        return logs


def get_distinct_entity_types() -> list:
    """
    Get list of distinct entity types in audit logs.

    Returns:
        List of distinct entity type strings
    """
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute('SELECT DISTINCT entity_type FROM audit_log ORDER BY entity_type')
        return [row['entity_type'] for row in cursor.fetchall()]


# =============================================================================
# CREATE OPERATIONS
# =============================================================================

def create_audit_log(
    action: str,
    entity_type: str,
    entity_id: str = None,
    tenant_id: str = None,
    changes: dict = None,
    ip_address: str = None,
    user_agent: str = None
) -> int:
    """
    Create a new audit log entry.

    Args:
        action: Action type (CREATE, UPDATE, DELETE, APPROVE, etc.)
        entity_type: Entity type (pavilion, tenant, banner, etc.)
        entity_id: ID of the affected entity
        tenant_id: Acting tenant (None for system actions)
        changes: Dictionary with before/after state
        ip_address: Client IP address
        user_agent: Client user agent string

    Returns:
        New audit log ID
    """
    changes_json = None
    if changes is not None:
        changes_json = json.dumps(changes, default=str, ensure_ascii=False)

    with get_db() as conn:
        cursor = conn.cursor()

        cursor.execute('''
            INSERT INTO audit_log
            (tenant_id, action, entity_type, entity_id, changes, ip_address, user_agent)
            VALUES (?, ?, ?, ?, ?, ?, ?)
        ''', (tenant_id, action, entity_type, entity_id, changes_json, ip_address, user_agent))

        conn.commit()
        return cursor.lastrowid
