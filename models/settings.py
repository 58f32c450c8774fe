"""
Project settings stored as key/value rows.
"""

import logging
import sqlite3

from database import get_db

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = {
    'project_name': 'Карта Апрашки',
    'theme_color': '#000000',
    'page_views': '0',
}


def get_setting(key: str, default=None):
    db = get_db()
    row = db.execute('SELECT value FROM project_settings WHERE key = ?', (key,)).fetchone()
    return row['value'] if row else default


def set_setting(key: str, value) -> None:
    with get_db() as conn:
        conn.execute('''
            INSERT INTO project_settings (key, value, updated_at)
            VALUES (?, ?, CURRENT_TIMESTAMP)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP
        ''', (key, str(value)))


def get_project_settings() -> dict:
    """
    All settings merged over the defaults.

    Templates render before the schema exists on a fresh install, so a
    missing table yields the defaults.
    """
    settings = dict(DEFAULT_SETTINGS)
    try:
        rows = get_db().execute('SELECT key, value FROM project_settings').fetchall()
    except sqlite3.OperationalError as e:
        logger.warning('Project settings unavailable: %s', e)
        return settings

    settings.update({row['key']: row['value'] for row in rows})
    return settings


def get_page_views() -> int:
    try:
        return int(get_setting('page_views', 0))
    except (TypeError, ValueError):
        return 0


def increment_page_views() -> int:
    """Bump the public map view counter. Returns the new value."""
    with get_db() as conn:
        conn.execute('''
            INSERT INTO project_settings (key, value) VALUES ('page_views', '1')
            ON CONFLICT(key) DO UPDATE SET value = CAST(value AS INTEGER) + 1
        ''')
    return get_page_views()


def update_project_name(name: str) -> str:
    """
    Rename the project.

    Raises:
        ValueError: If the name is empty
    """
    name = (name or '').strip()
    if not name:
        raise ValueError('Название проекта не может быть пустым')
    set_setting('project_name', name)
    return name


def update_theme_color(color: str) -> str:
    """
    Set the theme color (#RRGGBB, case-insensitive).

    Raises:
        ValueError: If the color is not a 6-digit hex value
    """
    from utils.validators import validate_hex_color

    color = (color or '').strip()
    if not validate_hex_color(color):
        raise ValueError('Цвет должен быть в формате #RRGGBB')
    set_setting('theme_color', color)
    return color


def add_global_category(name: str, icon: str = None) -> dict:
    """Add a category to the global catalogue. Returns the new category."""
    from models.category import create_category, get_category_by_id

    category_id = create_category(name, icon=icon)
    return get_category_by_id(category_id)


def remove_global_category(category_id: int) -> bool:
    """
    Remove a category from the global catalogue.

    Raises:
        ValueError: If the category does not exist
    """
    from models.category import delete_category

    if not delete_category(category_id):
        raise ValueError('Категория не найдена')
    return True
