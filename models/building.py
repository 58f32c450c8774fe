"""
Building (wing) records of the complex.
"""

import sqlite3

from database import get_db
from utils.messages import MESSAGES


def get_all_buildings() -> list:
    db = get_db()
    rows = db.execute('SELECT * FROM buildings ORDER BY building_number').fetchall()
    return [dict(row) for row in rows]


def get_building_by_id(building_id: int) -> dict:
    db = get_db()
    row = db.execute('SELECT * FROM buildings WHERE id = ?', (building_id,)).fetchone()
    return dict(row) if row else None


def _clean_building_data(data: dict) -> dict:
    number = str(data.get('building_number') or '').strip()
    if not number:
        raise ValueError('Номер корпуса обязателен')

    cleaned = {
        'building_number': number,
        'name': (data.get('name') or '').strip() or None,
        'description': (data.get('description') or '').strip() or None,
    }

    try:
        cleaned['total_floors'] = int(data.get('total_floors') or 1)
        for field in ('location_x', 'location_y', 'width', 'height'):
            cleaned[field] = float(data.get(field) or 0)
    except (TypeError, ValueError) as e:
        raise ValueError('Числовые поля корпуса заполнены неверно') from e

    if cleaned['total_floors'] < 1:
        raise ValueError('Количество этажей должно быть не меньше 1')

    return cleaned


def create_building(data: dict) -> int:
    """
    Create a building.

    Args:
        data: building_number, name, total_floors, location_x/y, width, height, description

    Returns:
        New building ID

    Raises:
        ValueError: Missing number, bad numbers, or duplicate building_number
    """
    cleaned = _clean_building_data(data)
    columns = ', '.join(cleaned.keys())
    placeholders = ', '.join('?' for _ in cleaned)

    with get_db() as conn:
        try:
            cursor = conn.execute(
                f'INSERT INTO buildings ({columns}) VALUES ({placeholders})',
                list(cleaned.values())
            )
        except sqlite3.IntegrityError as e:
            raise ValueError(MESSAGES['building_exists']) from e
        return cursor.lastrowid


def update_building(building_id: int, data: dict) -> bool:
    """
    Replace building fields.

    Raises:
        ValueError: Same rules as create_building
    """
    cleaned = _clean_building_data(data)
    assignments = ', '.join(f'{field} = ?' for field in cleaned)

    with get_db() as conn:
        try:
            cursor = conn.execute(
                f'UPDATE buildings SET {assignments}, updated_at = CURRENT_TIMESTAMP WHERE id = ?',
                list(cleaned.values()) + [building_id]
            )
        except sqlite3.IntegrityError as e:
            raise ValueError(MESSAGES['building_exists']) from e
        return cursor.rowcount > 0


def delete_building(building_id: int) -> bool:
    with get_db() as conn:
        cursor = conn.execute('DELETE FROM buildings WHERE id = ?', (building_id,))
        return cursor.rowcount > 0
