"""
Pavilion model and data access functions.
Handles pavilion CRUD with ownership checks, the cached public listing,
and list search/filter helpers.
"""

import copy
import json
import logging
import sqlite3
import uuid

from database import get_db
from utils.cache import pavilion_cache
from utils.decorators import can_edit_pavilion
from utils.messages import MESSAGES

logger = logging.getLogger(__name__)

CACHE_KEY = 'pavilions'

JSON_FIELDS = ('additional_categories', 'discounts', 'entrances')

# Fields a tenant may set on their own pavilion
EDITABLE_FIELDS = [
    'pavilion_number', 'building', 'floor', 'category', 'additional_categories',
    'shop_name', 'description', 'brand_color', 'entrances', 'discounts',
    'location_x', 'location_y', 'image_url'
]

# Fields only an owner (superadmin) may set
OWNER_FIELDS = ['tenant_id', 'is_premium', 'slug']

BASE_QUERY = '''
    SELECT p.*,
           t.name as tenant_name,
           t.phone as tenant_phone,
           t.is_premium as tenant_is_premium,
           t.approved as tenant_approved
    FROM pavilions p
    JOIN tenants t ON p.tenant_id = t.id
'''


# =============================================================================
# HELPERS
# =============================================================================

def _tenant_value(tenant, key):
    if isinstance(tenant, dict):
        return tenant.get(key)
    return getattr(tenant, key, None)


def _row_to_pavilion(row) -> dict:
    pavilion = dict(row)
    for field in JSON_FIELDS:
        raw = pavilion.get(field)
        try:
            pavilion[field] = json.loads(raw) if raw else []
        except (TypeError, ValueError):
            logger.warning('Invalid JSON in pavilion %s field %s', pavilion.get('id'), field)
            pavilion[field] = []
    pavilion['premium'] = is_premium_pavilion(pavilion)
    return pavilion


def is_premium_pavilion(pavilion: dict) -> bool:
    """Premium if the pavilion itself or its tenant has premium."""
    if not pavilion:
        return False
    return bool(pavilion.get('is_premium') or pavilion.get('tenant_is_premium'))


def _normalize_value(field: str, value):
    if field in JSON_FIELDS:
        return json.dumps(value or [], ensure_ascii=False)
    if field == 'floor':
        if value in (None, ''):
            return None
        return int(value)
    if field in ('location_x', 'location_y'):
        if value in (None, ''):
            return None
        return round(float(value), 2)
    if field == 'is_premium':
        return 1 if value else 0
    if field == 'slug':
        return (value or '').strip() or None
    if field == 'brand_color':
        return (value or '').strip() or '#ffffff'
    if isinstance(value, str):
        return value.strip()
    return value


def invalidate_pavilion_cache():
    pavilion_cache.clear(CACHE_KEY)


# =============================================================================
# READ OPERATIONS
# =============================================================================

def _load_pavilions(public_only: bool) -> list:
    db = get_db()
    query = BASE_QUERY
    if public_only:
        query += ' WHERE t.approved = 1'
    query += ' ORDER BY p.building, p.floor, p.pavilion_number, p.shop_name'
    return [_row_to_pavilion(row) for row in db.execute(query).fetchall()]


def get_all_pavilions(public_only: bool = True) -> list:
    """
    Get pavilions joined with their tenant's name, phone and premium flag.

    The public listing (approved tenants only) is served from the TTL cache.
    When the database read fails, the last cached listing is returned.

    Args:
        public_only: Only pavilions of approved tenants (cached)

    Returns:
        List of pavilion dicts
    """
    if not public_only:
        return _load_pavilions(public_only=False)

    cached = pavilion_cache.get(CACHE_KEY)
    if cached is not None:
        return copy.deepcopy(cached)

    try:
        pavilions = _load_pavilions(public_only=True)
    except sqlite3.Error as e:
        stale = pavilion_cache.get_stale(CACHE_KEY)
        if stale is None:
            raise
        logger.error('Pavilion load failed, serving cached listing: %s', e)
        return copy.deepcopy(stale)

    pavilion_cache.set(CACHE_KEY, pavilions)
    return copy.deepcopy(pavilions)


def get_pavilion_by_id(pavilion_id: str) -> dict:
    """
    Get pavilion by ID.

    Args:
        pavilion_id: Pavilion UUID

    Returns:
        Pavilion dict or None if not found
    """
    db = get_db()
    row = db.execute(BASE_QUERY + ' WHERE p.id = ?', (pavilion_id,)).fetchone()
    return _row_to_pavilion(row) if row else None


def get_pavilion_by_slug(slug: str) -> dict:
    db = get_db()
    row = db.execute(BASE_QUERY + ' WHERE p.slug = ?', (slug,)).fetchone()
    return _row_to_pavilion(row) if row else None


def get_pavilions_by_tenant(tenant_id: str) -> list:
    """Pavilions owned by one tenant, newest first."""
    db = get_db()
    rows = db.execute(
        BASE_QUERY + ' WHERE p.tenant_id = ? ORDER BY p.created_at DESC, p.shop_name',
        (tenant_id,)
    ).fetchall()
    return [_row_to_pavilion(row) for row in rows]


def get_slug_owner(slug: str) -> str:
    """ID of the pavilion holding slug, or None."""
    db = get_db()
    row = db.execute('SELECT id FROM pavilions WHERE slug = ?', (slug,)).fetchone()
    return row['id'] if row else None


def get_pavilion_stats() -> dict:
    db = get_db()
    row = db.execute('''
        SELECT COUNT(*) as total_pavilions,
               SUM(CASE WHEN p.is_premium = 1 OR t.is_premium = 1 THEN 1 ELSE 0 END)
                   as premium_pavilions
        FROM pavilions p
        JOIN tenants t ON p.tenant_id = t.id
    ''').fetchone()
    return {
        'total_pavilions': row['total_pavilions'] or 0,
        'premium_pavilions': row['premium_pavilions'] or 0,
    }


# =============================================================================
# WRITE OPERATIONS
# =============================================================================

def _collect_fields(data: dict, is_owner: bool, premium: bool) -> dict:
    fields = {}
    allowed = EDITABLE_FIELDS + (OWNER_FIELDS if is_owner else [])
    for field in allowed:
        if field in data:
            if field == 'additional_categories' and not (premium or is_owner):
                continue
            fields[field] = _normalize_value(field, data[field])
    return fields


def create_pavilion(tenant, data: dict) -> str:
    """
    Create a pavilion owned by the given tenant.

    Args:
        tenant: Logged-in Tenant (object or dict)
        data: Pavilion fields (shop_name and category required)

    Returns:
        New pavilion ID

    Raises:
        PermissionError: If no tenant is given
        ValueError: If required fields are missing
    """
    if not tenant or not _tenant_value(tenant, 'id'):
        raise PermissionError('Необходимо войти в систему')

    if not (data.get('shop_name') or '').strip():
        raise ValueError('Название магазина обязательно')
    if not data.get('category'):
        raise ValueError('Категория обязательна')

    is_owner = bool(_tenant_value(tenant, 'is_owner'))
    premium = bool(_tenant_value(tenant, 'is_premium'))
    fields = _collect_fields(data, is_owner, premium)

    pavilion_id = str(uuid.uuid4())
    fields['id'] = pavilion_id
    fields.setdefault('tenant_id', _tenant_value(tenant, 'id'))

    columns = ', '.join(fields.keys())
    placeholders = ', '.join('?' for _ in fields)

    with get_db() as conn:
        conn.execute(
            f'INSERT INTO pavilions ({columns}) VALUES ({placeholders})',
            list(fields.values())
        )

    invalidate_pavilion_cache()
    logger.info('Pavilion %s created by tenant %s', pavilion_id, _tenant_value(tenant, 'id'))
    return pavilion_id


def _get_editable_pavilion(tenant, pavilion_id: str) -> dict:
    pavilion = get_pavilion_by_id(pavilion_id)
    if not pavilion:
        raise ValueError(MESSAGES['pavilion_not_found'])
    if not can_edit_pavilion(tenant, pavilion):
        logger.warning('Tenant %s denied write on pavilion %s',
                       _tenant_value(tenant, 'id'), pavilion_id)
        raise PermissionError(MESSAGES['no_edit_rights'])
    return pavilion


def update_pavilion(tenant, pavilion_id: str, data: dict) -> bool:
    """
    Update a pavilion.

    Args:
        tenant: Acting tenant; must own the pavilion or be an owner
        pavilion_id: Pavilion UUID
        data: Fields to update

    Returns:
        True if updated

    Raises:
        ValueError: If the pavilion does not exist
        PermissionError: If the tenant may not edit it
    """
    pavilion = _get_editable_pavilion(tenant, pavilion_id)

    is_owner = bool(_tenant_value(tenant, 'is_owner'))
    fields = _collect_fields(data, is_owner, pavilion['premium'])
    if not fields:
        return False

    assignments = ', '.join(f'{field} = ?' for field in fields)
    values = list(fields.values()) + [pavilion_id]

    with get_db() as conn:
        cursor = conn.execute(
            f'UPDATE pavilions SET {assignments}, updated_at = CURRENT_TIMESTAMP WHERE id = ?',
            values
        )
        updated = cursor.rowcount > 0

    invalidate_pavilion_cache()
    return updated


def delete_pavilion(tenant, pavilion_id: str) -> bool:
    """
    Delete a pavilion.

    Raises:
        ValueError: If the pavilion does not exist
        PermissionError: If the tenant may not edit it
    """
    _get_editable_pavilion(tenant, pavilion_id)

    with get_db() as conn:
        cursor = conn.execute('DELETE FROM pavilions WHERE id = ?', (pavilion_id,))
        deleted = cursor.rowcount > 0

    invalidate_pavilion_cache()
    logger.info('Pavilion %s deleted by tenant %s', pavilion_id, _tenant_value(tenant, 'id'))
    return deleted


def save_pavilion(tenant, data: dict) -> str:
    """Create when data has no 'id', update otherwise. Returns the pavilion ID."""
    pavilion_id = data.get('id')
    if not pavilion_id:
        return create_pavilion(tenant, data)

    update_pavilion(tenant, pavilion_id, data)
    return pavilion_id


def set_pavilion_slug(pavilion_id: str, slug: str) -> None:
    """Persist a generated slug (no ownership check; slugs are derived data)."""
    with get_db() as conn:
        conn.execute(
            'UPDATE pavilions SET slug = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?',
            (slug, pavilion_id)
        )
    invalidate_pavilion_cache()


def increment_share_count(pavilion_id: str) -> int:
    """Bump share_count. Returns the new value (0 if not found)."""
    with get_db() as conn:
        conn.execute(
            'UPDATE pavilions SET share_count = share_count + 1 WHERE id = ?',
            (pavilion_id,)
        )
        row = conn.execute(
            'SELECT share_count FROM pavilions WHERE id = ?', (pavilion_id,)
        ).fetchone()
    return row['share_count'] if row else 0


# =============================================================================
# LIST SEARCH AND FILTERS
# =============================================================================

def search_pavilions(pavilions: list, query: str) -> list:
    """
    Case-insensitive substring search on shop name, category and tenant name.

    The category matches on its code and its display name.
    An empty query returns the list unchanged.
    """
    term = (query or '').strip().lower()
    if not term:
        return pavilions

    from models.category import get_category_map
    categories = get_category_map()

    def matches(pavilion):
        category = pavilion.get('category') or ''
        category_name = categories.get(category, {}).get('name', '')
        haystack = [
            pavilion.get('shop_name') or '',
            category,
            category_name,
            pavilion.get('tenant_name') or '',
        ]
        return any(term in value.lower() for value in haystack)

    return [p for p in pavilions if matches(p)]


def filter_by_category(pavilions: list, category: str) -> list:
    """Keep pavilions of one category. Empty category keeps all."""
    if not category:
        return pavilions
    return [p for p in pavilions if p.get('category') == category]


def apply_map_filters(pavilions: list, category: str = None, query: str = None) -> list:
    """Category filter followed by text search."""
    return search_pavilions(filter_by_category(pavilions, category), query)


def filter_pavilions(
    pavilions: list,
    floor=None,
    category: str = None,
    premium: str = None,
    search: str = None
) -> list:
    """
    Filter pavilions for the superadmin console.

    Args:
        pavilions: List of pavilion dicts
        floor: Floor number (str or int), empty for all
        category: Category code, empty for all
        premium: 'premium' or 'standard', empty for all
        search: Case-insensitive substring of shop name or owner name

    Returns:
        Filtered list
    """
    result = pavilions

    if floor not in (None, ''):
        result = [p for p in result if str(p.get('floor')) == str(floor)]

    result = filter_by_category(result, category)

    if premium == 'premium':
        result = [p for p in result if is_premium_pavilion(p)]
    elif premium == 'standard':
        result = [p for p in result if not is_premium_pavilion(p)]

    term = (search or '').strip().lower()
    if term:
        result = [
            p for p in result
            if term in (p.get('shop_name') or '').lower()
            or term in (p.get('tenant_name') or '').lower()
        ]

    return result
