"""
Miscellaneous utility helper functions.
Provides common functionality used across the application.
"""

import os
import random
import string
from datetime import datetime
from urllib.parse import quote

from flask import current_app
from werkzeug.utils import secure_filename

from utils.datetime_helpers import now_millis

BASE36_ALPHABET = string.digits + string.ascii_lowercase


def format_date(date_str: str, format_str: str = '%d.%m.%Y') -> str:
    """
    Format date string to Russian format.

    Args:
        date_str: Date string (YYYY-MM-DD, optionally followed by a time part)
        format_str: Output format (default: DD.MM.YYYY)

    Returns:
        Formatted date string or original if invalid
    """
    try:
        date_obj = datetime.strptime(str(date_str)[:10], '%Y-%m-%d')
        return date_obj.strftime(format_str)
    except (ValueError, TypeError):
        return date_str or ''


def generate_discount_id() -> str:
    """
    Generate an id for an embedded discount record.

    Format: <milliseconds>_<9 random base36 chars>.
    """
    suffix = ''.join(random.choices(BASE36_ALPHABET, k=9))
    return f'{now_millis()}_{suffix}'


def get_file_extension(filename: str) -> str:
    """
    Get file extension from filename.

    Args:
        filename: Filename

    Returns:
        Extension without dot (lowercase)
    """
    if not filename:
        return ''

    return os.path.splitext(filename)[1][1:].lower()


def allowed_file(filename: str) -> bool:
    """Check the extension against ALLOWED_IMAGE_EXTENSIONS."""
    allowed = current_app.config.get('ALLOWED_IMAGE_EXTENSIONS', set())
    return get_file_extension(filename) in allowed


def file_size(file_storage) -> int:
    """Size in bytes of an uploaded FileStorage, leaving the stream at 0."""
    stream = file_storage.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


def save_upload(file_storage, subdir: str, max_size: int) -> str:
    """
    Validate and store an uploaded image under UPLOAD_FOLDER.

    Args:
        file_storage: werkzeug FileStorage from request.files
        subdir: Relative directory inside the upload folder
        max_size: Maximum file size in bytes

    Returns:
        Public URL path of the stored file (/static/uploads/...)

    Raises:
        ValueError: Empty file name, bad extension, or file too large
    """
    if not file_storage or not file_storage.filename:
        raise ValueError('Файл не выбран')

    if not allowed_file(file_storage.filename):
        raise ValueError('Недопустимый формат изображения')

    if file_size(file_storage) > max_size:
        raise ValueError(f'Файл слишком большой (максимум {max_size // 1024} КБ)')

    extension = get_file_extension(file_storage.filename)
    name = secure_filename(file_storage.filename)
    # Cyrillic names reduce to the bare extension
    if get_file_extension(name) != extension:
        name = f'image.{extension}'
    filename = f'{now_millis()}_{name}'

    upload_root = current_app.config['UPLOAD_FOLDER']
    if not os.path.isabs(upload_root):
        upload_root = os.path.join(current_app.root_path, upload_root)

    target_dir = os.path.join(upload_root, subdir)
    os.makedirs(target_dir, exist_ok=True)
    file_storage.save(os.path.join(target_dir, filename))

    return '/static/uploads/' + '/'.join([subdir.strip('/'), filename])


def whatsapp_link(phone: str, text: str = '') -> str:
    """Build a wa.me link from any phone format."""
    digits = ''.join(c for c in (phone or '') if c.isdigit())
    link = f'https://wa.me/{digits}'
    if text:
        link += '?text=' + quote(text)
    return link


def route_link(location_x, location_y) -> str:
    """Google Maps directions link, or None when the pavilion is not placed."""
    if location_x is None or location_y is None:
        return None
    return f'https://www.google.com/maps/dir/?api=1&destination={location_y},{location_x}'
