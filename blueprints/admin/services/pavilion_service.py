"""
Business logic for the tenant console.
Validation, form parsing and image storage for pavilion listings.
"""

from datetime import datetime

from flask import current_app

from utils.datetime_helpers import get_today
from utils.helpers import save_upload
from utils.validators import validate_coordinate, validate_date_format, validate_hex_color


def _end_date_error(end_date) -> str:
    if not end_date:
        return None
    end_date = str(end_date)[:10]
    if not validate_date_format(end_date):
        return 'Дата окончания скидки указана неверно'
    parsed = datetime.strptime(end_date, '%Y-%m-%d').date()
    if parsed < get_today():
        return 'Дата окончания скидки не может быть в прошлом'
    return None


def validate_pavilion_data(data: dict) -> tuple:
    """
    Validate pavilion fields before saving.

    Args:
        data: Parsed pavilion fields

    Returns:
        Tuple of (is_valid, list_of_error_messages)
    """
    errors = []

    shop_name = (data.get('shop_name') or '').strip()
    if len(shop_name) < 2:
        errors.append('Название должно содержать минимум 2 символа')

    if not data.get('category'):
        errors.append('Выберите категорию')

    floor = data.get('floor')
    if floor not in (None, ''):
        try:
            int(floor)
        except (TypeError, ValueError):
            errors.append('Этаж должен быть числом')

    for discount in data.get('discounts') or []:
        error = _end_date_error(discount.get('end_date'))
        if error:
            errors.append(error)
            break

    for field in ('location_x', 'location_y'):
        value = data.get(field)
        if value not in (None, '') and not validate_coordinate(value):
            errors.append('Координаты должны быть в диапазоне от 0 до 100')
            break

    for entrance in data.get('entrances') or []:
        if not validate_coordinate(entrance.get('x')) or not validate_coordinate(entrance.get('y')):
            errors.append('Координаты входа должны быть в диапазоне от 0 до 100')
            break

    brand_color = data.get('brand_color')
    if brand_color and not validate_hex_color(brand_color):
        errors.append('Цвет должен быть в формате #RRGGBB')

    return len(errors) == 0, errors


def validate_discount_data(data: dict, partial: bool = False) -> tuple:
    """
    Validate a discount payload.

    With partial=True (updates) the title is only checked when present.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if (not partial or 'title' in data) and not (data.get('title') or '').strip():
        return False, 'Название скидки обязательно'

    error = _end_date_error(data.get('end_date'))
    if error:
        return False, error

    categories = data.get('categories')
    if categories is not None and not isinstance(categories, list):
        return False, 'Категории скидки должны быть списком'

    return True, ''


def parse_entrances(form) -> list:
    """
    Read entrances from indexed form fields.

    Expects entrances-0-name, entrances-0-x, entrances-0-y, ... and stops
    at the first missing index. Rows without a name are skipped.

    Returns:
        List of {name, x, y}
    """
    entrances = []
    index = 0
    while f'entrances-{index}-name' in form:
        name = (form.get(f'entrances-{index}-name') or '').strip()
        x = form.get(f'entrances-{index}-x')
        y = form.get(f'entrances-{index}-y')
        index += 1
        if not name:
            continue
        try:
            entrances.append({'name': name, 'x': float(x), 'y': float(y)})
        except (TypeError, ValueError):
            entrances.append({'name': name, 'x': x, 'y': y})
    return entrances


def parse_pavilion_form(form, raw_form, allow_additional_categories: bool = False) -> dict:
    """
    Collect pavilion fields from a submitted PavilionForm.

    Args:
        form: PavilionForm instance (validated)
        raw_form: request.form, for the indexed entrance fields
        allow_additional_categories: Premium tenants may set extra categories

    Returns:
        Dict ready for validate_pavilion_data / save_pavilion
    """
    data = {
        'building': (form.building.data or '').strip(),
        'floor': form.floor.data,
        'pavilion_number': (form.pavilion_number.data or '').strip(),
        'shop_name': (form.shop_name.data or '').strip(),
        'category': form.category.data,
        'description': (form.description.data or '').strip(),
        'brand_color': (form.brand_color.data or '').strip() or '#ffffff',
        'location_x': form.location_x.data,
        'location_y': form.location_y.data,
        'entrances': parse_entrances(raw_form),
    }

    if allow_additional_categories:
        data['additional_categories'] = [
            c for c in (form.additional_categories.data or []) if c and c != form.category.data
        ]

    return data


def save_pavilion_image(file_storage, tenant_id: str) -> str:
    """
    Store an uploaded pavilion image.

    Stored as UPLOAD_FOLDER/pavilions/<tenant_id>/<ms>_<name>.

    Returns:
        Public URL of the image

    Raises:
        ValueError: Bad extension or file larger than MAX_IMAGE_SIZE
    """
    return save_upload(
        file_storage,
        subdir=f'pavilions/{tenant_id}',
        max_size=current_app.config['MAX_IMAGE_SIZE']
    )

