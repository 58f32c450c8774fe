"""
Floor plan geometry for the pavilion picker.

Positions are stored as percentages of the plan image so markers stay in
place at any rendered size.
"""


def to_percent(x_px, y_px, width_px, height_px) -> tuple:
    """
    Convert a click position on the rendered plan to percentages.

    Args:
        x_px, y_px: Click offset from the image's top-left corner
        width_px, height_px: Rendered image size

    Returns:
        (x_pct, y_pct) rounded to 2 decimals

    Raises:
        ValueError: If the image size is not positive
    """
    width = float(width_px)
    height = float(height_px)
    if width <= 0 or height <= 0:
        raise ValueError('Размер плана должен быть положительным')

    x_pct = round(float(x_px) / width * 100, 2)
    y_pct = round(float(y_px) / height * 100, 2)
    return x_pct, y_pct


def find_pavilion_at_point(pavilions: list, x_pct, y_pct, tolerance=5):
    """
    First pavilion whose marker lies within tolerance of the point.

    Both axes must satisfy |marker - point| < tolerance. Pavilions
    without coordinates are skipped.

    Returns:
        Pavilion dict or None
    """
    for pavilion in pavilions:
        px = pavilion.get('location_x')
        py = pavilion.get('location_y')
        if px is None or py is None:
            continue
        if abs(float(px) - float(x_pct)) < tolerance and abs(float(py) - float(y_pct)) < tolerance:
            return pavilion
    return None


def build_markers(pavilions: list, selected_number: str = None, categories: dict = None) -> list:
    """
    Marker dicts for drawing pavilions over a plan.

    Args:
        pavilions: Pavilion dicts
        selected_number: pavilion_number to highlight
        categories: Category dicts keyed by code (for marker color)

    Returns:
        List of {id, pavilion_number, shop_name, building, floor, x, y, color, selected}
    """
    categories = categories or {}
    markers = []
    for pavilion in pavilions:
        if pavilion.get('location_x') is None or pavilion.get('location_y') is None:
            continue
        category = categories.get(pavilion.get('category')) or {}
        markers.append({
            'id': pavilion.get('id'),
            'pavilion_number': pavilion.get('pavilion_number'),
            'shop_name': pavilion.get('shop_name'),
            'building': pavilion.get('building'),
            'floor': pavilion.get('floor'),
            'x': pavilion['location_x'],
            'y': pavilion['location_y'],
            'color': category.get('color', '#9E9E9E'),
            'selected': bool(selected_number) and pavilion.get('pavilion_number') == selected_number,
        })
    return markers
