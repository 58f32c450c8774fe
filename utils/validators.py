"""
Input validation helper functions.
Provides validation for phone numbers, colors, coordinates and free text.
"""

import re
from datetime import datetime

PHONE_PATTERN = re.compile(r'^\+7\d{10}$')
HEX_COLOR_PATTERN = re.compile(r'^#[0-9A-F]{6}$', re.IGNORECASE)


def format_phone_number(raw: str) -> str:
    """
    Normalize a Russian phone number to +7XXXXXXXXXX.

    Accepts any punctuation ("8 (921) 954-30-65", "+7 921 954 30 65").
    A leading 8 is the domestic trunk prefix and becomes 7.

    Args:
        raw: Phone number as typed by the user

    Returns:
        Normalized phone string

    Raises:
        ValueError: If the number does not have 11 digits
    """
    digits = re.sub(r'\D', '', raw or '')

    if digits.startswith('8'):
        digits = '7' + digits[1:]

    if len(digits) != 11:
        raise ValueError('Номер должен содержать 11 цифр')

    return '+' + digits


def validate_phone_number(phone: str) -> bool:
    """
    Check that a phone is already in +7XXXXXXXXXX form.

    Args:
        phone: Phone number to validate

    Returns:
        True if valid phone format
    """
    if not phone:
        return False
    return bool(PHONE_PATTERN.match(phone.strip()))


def validate_hex_color(color: str) -> bool:
    """
    Validate a #RRGGBB color (case-insensitive).

    Args:
        color: Color string

    Returns:
        True if valid hex color
    """
    if not color:
        return False
    return bool(HEX_COLOR_PATTERN.match(color))


def validate_coordinate(value) -> bool:
    """True if value is a number in the floor-plan percent range 0..100."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return 0 <= number <= 100


def validate_email(email: str) -> bool:
    """
    Validate email format.

    Args:
        email: Email address to validate

    Returns:
        True if valid email format
    """
    if not email:
        return False

    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return bool(re.match(pattern, email))


def validate_date_format(date_str: str) -> bool:
    """
    Validate date is in YYYY-MM-DD format.

    Args:
        date_str: Date string to validate

    Returns:
        True if valid format
    """
    try:
        datetime.strptime(date_str, '%Y-%m-%d')
        return True
    except (TypeError, ValueError):
        return False


def sanitize_input(text: str, max_length: int = None) -> str:
    """
    Sanitize text input by trimming and limiting length.

    Args:
        text: Text to sanitize
        max_length: Maximum length (optional)

    Returns:
        Sanitized text
    """
    if not text:
        return ''

    sanitized = text.strip()

    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized
