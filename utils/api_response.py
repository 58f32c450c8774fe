"""
Standardized API response helpers.

Provides consistent JSON response format across all API endpoints:

    Success:  {"success": true, "data": {...}, "message": "..."}
    Error:    {"success": false, "error": "Russian error message"}

Usage:
    from utils.api_response import api_success, api_error

    return api_success(data={'id': pavilion_id}, message='Павильон сохранён')
    return api_error('Данные обязательны', status=400)
"""

from flask import jsonify
from typing import Any


def api_success(
    data: Any = None,
    message: str | None = None,
    status: int = 200,
    **extra_fields: Any
) -> tuple:
    """
    Build a standardized success JSON response.

    Args:
        data: Optional payload to include as 'data' key.
        message: Optional success message (Russian).
        status: HTTP status code (default 200).
        **extra_fields: Additional top-level fields to include in the response.

    Returns:
        Tuple of (Response, status_code)
    """
    response = {'success': True}

    if data is not None:
        response['data'] = data

    if message:
        response['message'] = message

    if extra_fields:
        response.update(extra_fields)

    return jsonify(response), status


def api_error(error: str, status: int = 400, **extra_fields: Any) -> tuple:
    """
    Build a standardized error JSON response.

    Args:
        error: Error message (Russian).
        status: HTTP status code (default 400).
        **extra_fields: Additional top-level fields (e.g. validation errors).

    Returns:
        Tuple of (Response, status_code)
    """
    response = {'success': False, 'error': error}

    if extra_fields:
        response.update(extra_fields)

    return jsonify(response), status
