"""
Tenant model and data access functions.
Handles the phone whitelist, CRUD operations, and Flask-Login integration.
"""

import logging
import sqlite3
import uuid

from database import get_db
from models.pavilion import invalidate_pavilion_cache
from utils.messages import MESSAGES
from utils.validators import format_phone_number, validate_email, validate_phone_number

logger = logging.getLogger(__name__)


class Tenant:
    """
    Tenant class for Flask-Login integration.
    Wraps database row dictionary with required Flask-Login properties.
    """

    def __init__(self, tenant_dict):
        """
        Initialize Tenant from database row.

        Args:
            tenant_dict: Dictionary with tenant data from database
        """
        self.id = tenant_dict['id']
        self.phone = tenant_dict['phone']
        self.name = tenant_dict['name']
        self.email = tenant_dict.get('email')
        self.approved = bool(tenant_dict.get('approved'))
        self.is_owner = bool(tenant_dict.get('is_owner'))
        self.is_premium = bool(tenant_dict.get('is_premium'))
        self.created_at = tenant_dict.get('created_at')

    @property
    def is_authenticated(self):
        """Required by Flask-Login."""
        return True

    @property
    def is_active(self):
        """Required by Flask-Login."""
        return self.approved

    @property
    def is_anonymous(self):
        """Required by Flask-Login."""
        return False

    def get_id(self):
        """Required by Flask-Login."""
        return str(self.id)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'phone': self.phone,
            'name': self.name,
            'email': self.email,
            'is_owner': self.is_owner,
            'is_premium': self.is_premium,
        }


# =============================================================================
# READ OPERATIONS
# =============================================================================

def get_tenant_by_id(tenant_id: str) -> dict:
    """
    Get tenant by ID.

    Args:
        tenant_id: Tenant UUID

    Returns:
        Tenant dict or None if not found
    """
    db = get_db()
    row = db.execute('SELECT * FROM tenants WHERE id = ?', (tenant_id,)).fetchone()
    return dict(row) if row else None


def get_tenant_by_phone(phone: str) -> dict:
    """
    Get tenant by normalized phone (+7XXXXXXXXXX).

    Args:
        phone: Phone number

    Returns:
        Tenant dict or None if not found
    """
    db = get_db()
    row = db.execute('SELECT * FROM tenants WHERE phone = ?', (phone,)).fetchone()
    return dict(row) if row else None


def get_all_tenants(status: str = None, search: str = None) -> list:
    """
    Get all tenants with their pavilion counts.

    Args:
        status: 'approved' or 'pending' (None for all)
        search: Case-insensitive substring of name or phone

    Returns:
        List of tenant dicts with 'pavilion_count', newest first
    """
    db = get_db()
    rows = db.execute('''
        SELECT t.*, COUNT(p.id) as pavilion_count
        FROM tenants t
        LEFT JOIN pavilions p ON p.tenant_id = t.id
        GROUP BY t.id
        ORDER BY t.created_at DESC, t.name
    ''').fetchall()

    return filter_tenants([dict(row) for row in rows], status, search)


def filter_tenants(tenants: list, status: str = None, search: str = None) -> list:
    """
    Filter a tenant list for the superadmin console.

    SQLite's lower() is ASCII-only, so Cyrillic names are matched here.

    Args:
        tenants: List of tenant dicts
        status: 'approved', 'pending' or empty for all
        search: Case-insensitive substring of name or phone

    Returns:
        Filtered list (input order kept)
    """
    result = tenants

    if status == 'approved':
        result = [t for t in result if t.get('approved')]
    elif status == 'pending':
        result = [t for t in result if not t.get('approved')]

    term = (search or '').strip().lower()
    if term:
        result = [
            t for t in result
            if term in (t.get('name') or '').lower() or term in (t.get('phone') or '')
        ]

    return result


def check_phone(phone: str) -> dict:
    """
    Look up a phone in the whitelist.

    Args:
        phone: Normalized phone number

    Returns:
        Tenant dict if the tenant exists and is approved, None otherwise

    Raises:
        ValueError: If the phone is not in +7XXXXXXXXXX format
    """
    if not validate_phone_number(phone):
        raise ValueError(MESSAGES['invalid_phone'])

    tenant = get_tenant_by_phone(phone.strip())

    if not tenant:
        logger.warning('Login attempt from unknown phone %s', phone)
        return None

    if not tenant['approved']:
        logger.warning('Login attempt from unapproved tenant %s', tenant['id'])
        return None

    return tenant


# =============================================================================
# WRITE OPERATIONS
# =============================================================================

def _clean_email(email):
    email = (email or '').strip()
    if not email:
        return None
    if not validate_email(email):
        raise ValueError(MESSAGES['invalid_email'])
    return email


def create_tenant(
    phone: str,
    name: str,
    approved: bool = False,
    is_premium: bool = False,
    is_owner: bool = False,
    email: str = None
) -> str:
    """
    Add a tenant to the whitelist.

    Args:
        phone: Phone number in any format (normalized here)
        name: Display name
        approved: Allow login immediately
        is_premium: Premium features
        is_owner: Superadmin access
        email: Optional email

    Returns:
        New tenant ID

    Raises:
        ValueError: If name is empty, phone or email is invalid, or the phone is taken
    """
    name = (name or '').strip()
    if not name:
        raise ValueError('Имя обязательно')

    phone = format_phone_number(phone)
    email = _clean_email(email)

    if get_tenant_by_phone(phone):
        raise ValueError(MESSAGES['phone_exists'])

    tenant_id = str(uuid.uuid4())

    with get_db() as conn:
        try:
            conn.execute('''
                INSERT INTO tenants (id, phone, name, email, approved, is_owner, is_premium)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            ''', (tenant_id, phone, name, email,
                  1 if approved else 0, 1 if is_owner else 0, 1 if is_premium else 0))
        except sqlite3.IntegrityError as e:
            raise ValueError(MESSAGES['phone_exists']) from e

    logger.info('Tenant %s created (approved=%s)', tenant_id, bool(approved))
    return tenant_id


def update_tenant(tenant_id: str, **kwargs) -> bool:
    """
    Update tenant fields.

    Args:
        tenant_id: Tenant UUID
        **kwargs: Fields to update

    Returns:
        True if updated successfully
    """
    allowed_fields = ['name', 'email', 'phone', 'approved', 'is_owner', 'is_premium']
    updates = []
    values = []

    for field in allowed_fields:
        if field in kwargs:
            value = kwargs[field]
            if field == 'phone':
                value = format_phone_number(value)
            elif field == 'email':
                value = _clean_email(value)
            elif field in ('approved', 'is_owner', 'is_premium'):
                value = 1 if value else 0
            updates.append(f'{field} = ?')
            values.append(value)

    if not updates:
        return False

    values.append(tenant_id)
    query = f'UPDATE tenants SET {", ".join(updates)} WHERE id = ?'

    with get_db() as conn:
        cursor = conn.execute(query, values)
        updated = cursor.rowcount > 0

    if updated:
        # Public listing embeds tenant name, phone and premium flag
        invalidate_pavilion_cache()
    return updated


def delete_tenant(tenant_id: str) -> bool:
    """
    Delete tenant. Their pavilions are removed by ON DELETE CASCADE.

    Args:
        tenant_id: Tenant UUID

    Returns:
        True if deleted successfully
    """
    with get_db() as conn:
        cursor = conn.execute('DELETE FROM tenants WHERE id = ?', (tenant_id,))
        deleted = cursor.rowcount > 0

    if deleted:
        invalidate_pavilion_cache()
        logger.info('Tenant %s deleted', tenant_id)
    return deleted


def upsert_tenant(
    phone: str,
    name: str,
    approved: bool = True,
    is_owner: bool = False,
    is_premium: bool = False
) -> str:
    """
    Create the tenant, or update name and flags when the phone exists.

    Returns:
        Tenant ID
    """
    normalized = format_phone_number(phone)
    existing = get_tenant_by_phone(normalized)

    if existing:
        update_tenant(
            existing['id'],
            name=name,
            approved=approved,
            is_owner=is_owner,
            is_premium=is_premium
        )
        return existing['id']

    return create_tenant(
        normalized,
        name,
        approved=approved,
        is_owner=is_owner,
        is_premium=is_premium
    )
