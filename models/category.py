"""
Pavilion category catalogue.
Categories drive marker colors, filter chips and the global category list.
"""

import re
import sqlite3

from database import get_db


def get_all_categories(active_only: bool = True) -> list:
    """
    Get categories ordered for display.

    Args:
        active_only: Only return active categories

    Returns:
        List of category dicts
    """
    db = get_db()
    query = 'SELECT * FROM categories'
    if active_only:
        query += ' WHERE active = 1'
    query += ' ORDER BY display_order, name'
    return [dict(row) for row in db.execute(query).fetchall()]


def get_category_by_id(category_id: int) -> dict:
    db = get_db()
    row = db.execute('SELECT * FROM categories WHERE id = ?', (category_id,)).fetchone()
    return dict(row) if row else None


def get_category_by_code(code: str) -> dict:
    db = get_db()
    row = db.execute('SELECT * FROM categories WHERE code = ?', (code,)).fetchone()
    return dict(row) if row else None


def get_category_map() -> dict:
    """Category dicts keyed by code, including inactive ones."""
    return {c['code']: c for c in get_all_categories(active_only=False)}


def category_name(code: str) -> str:
    """Display name for a category code (the code itself when unknown)."""
    category = get_category_by_code(code) if code else None
    return category['name'] if category else (code or '')


def _code_from_name(name: str) -> str:
    from utils.slug import generate_slug
    return re.sub(r'-', '_', generate_slug(name))


def create_category(name: str, icon: str = None, color: str = '#9E9E9E', code: str = None) -> int:
    """
    Create a category.

    Args:
        name: Display name
        icon: Emoji or short icon text
        color: Marker color
        code: Stable code (derived from the name when omitted)

    Returns:
        New category ID

    Raises:
        ValueError: If the name is empty or the code already exists
    """
    name = (name or '').strip()
    if not name:
        raise ValueError('Название категории обязательно')

    code = code or _code_from_name(name)

    with get_db() as conn:
        max_order = conn.execute(
            'SELECT COALESCE(MAX(display_order), 0) FROM categories'
        ).fetchone()[0]
        try:
            cursor = conn.execute('''
                INSERT INTO categories (code, name, color, icon, display_order, active)
                VALUES (?, ?, ?, ?, ?, 1)
            ''', (code, name, color, icon or '', max_order + 1))
        except sqlite3.IntegrityError as e:
            raise ValueError('Такая категория уже существует') from e
        return cursor.lastrowid


def delete_category(category_id: int) -> bool:
    """
    Delete a category.

    Pavilions keep their category code and fall back to the code as name.
    """
    with get_db() as conn:
        cursor = conn.execute('DELETE FROM categories WHERE id = ?', (category_id,))
        return cursor.rowcount > 0
