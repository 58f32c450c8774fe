"""
Tests for input validation utilities.
"""

import pytest
from utils.validators import (
    format_phone_number,
    validate_phone_number,
    validate_hex_color,
    validate_coordinate,
    validate_email,
    validate_date_format,
    sanitize_input
)


class TestFormatPhoneNumber:
    """Tests for Russian phone normalization."""

    def test_plus_seven_with_separators(self):
        assert format_phone_number('+7 (964) 396-81-40') == '+79643968140'
        assert format_phone_number('+7 921 954 30 65') == '+79219543065'

    def test_leading_eight_becomes_seven(self):
        assert format_phone_number('8 (911) 755-15-79') == '+79117551579'
        assert format_phone_number('89643968140') == '+79643968140'

    def test_bare_digits(self):
        assert format_phone_number('79643968140') == '+79643968140'

    def test_wrong_length_raises(self):
        with pytest.raises(ValueError, match='11 цифр'):
            format_phone_number('+7 964 396')
        with pytest.raises(ValueError):
            format_phone_number('+7 964 396 81 40 1')

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            format_phone_number('')
        with pytest.raises(ValueError):
            format_phone_number(None)


class TestValidatePhoneNumber:
    """Tests for normalized phone check."""

    def test_valid(self):
        assert validate_phone_number('+79643968140') is True

    def test_invalid(self):
        assert validate_phone_number('') is False
        assert validate_phone_number(None) is False
        assert validate_phone_number('89643968140') is False
        assert validate_phone_number('+7964396814') is False
        assert validate_phone_number('+19643968140') is False


class TestValidateHexColor:
    """Tests for #RRGGBB colors."""

    def test_valid_any_case(self):
        assert validate_hex_color('#000000') is True
        assert validate_hex_color('#FFaa00') is True
        assert validate_hex_color('#e91e63') is True

    def test_invalid(self):
        assert validate_hex_color('') is False
        assert validate_hex_color(None) is False
        assert validate_hex_color('000000') is False
        assert validate_hex_color('#fff') is False
        assert validate_hex_color('#GGGGGG') is False


class TestValidateCoordinate:
    """Tests for percent coordinates."""

    def test_bounds_inclusive(self):
        assert validate_coordinate(0) is True
        assert validate_coordinate(100) is True
        assert validate_coordinate('45.5') is True

    def test_out_of_range_or_garbage(self):
        assert validate_coordinate(-0.1) is False
        assert validate_coordinate(100.01) is False
        assert validate_coordinate('abc') is False
        assert validate_coordinate(None) is False


class TestValidateEmail:
    """Tests for email validation."""

    def test_valid_email(self):
        assert validate_email('shop@example.ru') is True
        assert validate_email('user.name+tag@example.co.uk') is True

    def test_invalid_email(self):
        assert validate_email('') is False
        assert validate_email(None) is False
        assert validate_email('invalid') is False
        assert validate_email('@nodomain.com') is False


class TestValidateDateFormat:
    """Tests for YYYY-MM-DD dates."""

    def test_valid(self):
        assert validate_date_format('2026-12-31') is True

    def test_invalid(self):
        assert validate_date_format('31.12.2026') is False
        assert validate_date_format('2026-13-01') is False
        assert validate_date_format('') is False


class TestSanitizeInput:
    """Tests for free-text cleanup."""

    def test_strips_whitespace(self):
        assert sanitize_input('  Модный Дом  ') == 'Модный Дом'

    def test_none_and_empty(self):
        assert sanitize_input(None) == ''
        assert sanitize_input('') == ''
