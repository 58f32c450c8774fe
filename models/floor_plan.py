"""
Floor plan images per building and floor.
"""

from database import get_db


def get_floor_plan(building: str, floor: int) -> dict:
    """
    Get the plan for one floor.

    Args:
        building: Building number ('33', 'А')
        floor: Floor number

    Returns:
        Floor plan dict or None when the floor has no plan
    """
    if building is None or floor is None:
        return None

    try:
        floor = int(floor)
    except (TypeError, ValueError):
        return None

    db = get_db()
    row = db.execute('''
        SELECT * FROM floor_plans
        WHERE building_number = ? AND floor = ?
    ''', (str(building), floor)).fetchone()
    return dict(row) if row else None


def list_floor_plans(building: str = None) -> list:
    """
    List plans, optionally for one building.

    Returns:
        List of floor plan dicts ordered by building and floor
    """
    db = get_db()
    if building:
        rows = db.execute('''
            SELECT * FROM floor_plans WHERE building_number = ? ORDER BY floor
        ''', (str(building),)).fetchall()
    else:
        rows = db.execute(
            'SELECT * FROM floor_plans ORDER BY building_number, floor'
        ).fetchall()
    return [dict(row) for row in rows]


def has_floor_plan(building: str, floor: int) -> bool:
    return get_floor_plan(building, floor) is not None
