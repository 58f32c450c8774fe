"""
Discounts embedded in a pavilion's `discounts` JSON array.

Each discount: id, title, description, end_date (YYYY-MM-DD or None),
categories, created_at, updated_at. Writes go through update_pavilion so
ownership checks and cache invalidation apply.
"""

import logging

from models.pavilion import get_pavilion_by_id, update_pavilion
from utils.decorators import can_edit_pavilion
from utils.datetime_helpers import get_today, now_iso
from utils.helpers import generate_discount_id
from utils.messages import MESSAGES
from utils.validators import sanitize_input

logger = logging.getLogger(__name__)

DISCOUNT_FIELDS = ['title', 'description', 'end_date', 'categories']

MAX_LENGTHS = {'title': 120, 'description': 1000}


def _load_for_write(tenant, pavilion_id: str) -> dict:
    pavilion = get_pavilion_by_id(pavilion_id)
    if not pavilion:
        raise ValueError(MESSAGES['pavilion_not_found'])
    if not can_edit_pavilion(tenant, pavilion):
        raise PermissionError(MESSAGES['no_edit_rights'])
    return pavilion


def _save(tenant, pavilion_id: str, discounts: list):
    if not update_pavilion(tenant, pavilion_id, {'discounts': discounts}):
        logger.error('Discounts of pavilion %s were not saved', pavilion_id)
        raise ValueError(MESSAGES['pavilion_not_found'])


def _clean(data: dict) -> dict:
    cleaned = {}
    for field in DISCOUNT_FIELDS:
        if field not in data:
            continue
        value = data[field]
        if field == 'categories':
            value = [c for c in (value or []) if c]
        elif isinstance(value, str):
            value = sanitize_input(value, MAX_LENGTHS.get(field))
        if field == 'end_date' and not value:
            value = None
        cleaned[field] = value
    return cleaned


def is_discount_active(discount: dict, today=None) -> bool:
    """Active when it has no end date or the end date is today or later."""
    end_date = discount.get('end_date')
    if not end_date:
        return True
    today = today or get_today()
    return str(end_date)[:10] >= today.isoformat()


def get_active_discounts(pavilion: dict) -> list:
    return [d for d in (pavilion.get('discounts') or []) if is_discount_active(d)]


def add_discount(tenant, pavilion_id: str, data: dict) -> dict:
    """
    Append a discount to a pavilion.

    Args:
        tenant: Acting tenant (owner of the pavilion or superadmin)
        pavilion_id: Pavilion UUID
        data: title (required), description, end_date, categories

    Returns:
        The new discount dict

    Raises:
        ValueError: Pavilion not found or title missing
        PermissionError: Tenant may not edit the pavilion
    """
    pavilion = _load_for_write(tenant, pavilion_id)

    cleaned = _clean(data)
    if not cleaned.get('title'):
        raise ValueError('Название скидки обязательно')

    timestamp = now_iso()
    discount = {
        'id': generate_discount_id(),
        'title': cleaned['title'],
        'description': cleaned.get('description', ''),
        'end_date': cleaned.get('end_date'),
        'categories': cleaned.get('categories', []),
        'created_at': timestamp,
        'updated_at': timestamp,
    }

    discounts = list(pavilion['discounts']) + [discount]
    _save(tenant, pavilion_id, discounts)

    logger.info('Discount %s added to pavilion %s', discount['id'], pavilion_id)
    return discount


def update_discount(tenant, pavilion_id: str, discount_id: str, data: dict) -> dict:
    """
    Merge data into an existing discount and stamp updated_at.

    Returns:
        The updated discount dict

    Raises:
        ValueError: Pavilion or discount not found
        PermissionError: Tenant may not edit the pavilion
    """
    pavilion = _load_for_write(tenant, pavilion_id)

    discounts = list(pavilion['discounts'])
    for index, discount in enumerate(discounts):
        if discount.get('id') == discount_id:
            updated = {**discount, **_clean(data), 'updated_at': now_iso()}
            discounts[index] = updated
            break
    else:
        raise ValueError(MESSAGES['discount_not_found'])

    _save(tenant, pavilion_id, discounts)
    return updated


def remove_discount(tenant, pavilion_id: str, discount_id: str) -> bool:
    """
    Remove a discount.

    Raises:
        ValueError: Pavilion or discount not found
        PermissionError: Tenant may not edit the pavilion
    """
    pavilion = _load_for_write(tenant, pavilion_id)

    discounts = [d for d in pavilion['discounts'] if d.get('id') != discount_id]
    if len(discounts) == len(pavilion['discounts']):
        raise ValueError(MESSAGES['discount_not_found'])

    _save(tenant, pavilion_id, discounts)
    return True
