"""
Response helpers shared by superadmin route modules.

Console actions are plain form posts that redirect back to a dashboard tab;
the same endpoints answer JSON when the client asks for it.
"""

from flask import request, flash, redirect, url_for

from utils.api_response import api_success, api_error


def wants_json() -> bool:
    return request.is_json or request.accept_mimetypes.best == 'application/json'


def respond_ok(message: str, tab: str, data=None):
    if wants_json():
        return api_success(data=data, message=message)
    flash(message, 'success')
    return redirect(url_for('superadmin.dashboard', tab=tab))


def respond_error(error: str, tab: str, status: int = 400):
    if wants_json():
        return api_error(error, status)
    flash(error, 'error')
    return redirect(url_for('superadmin.dashboard', tab=tab))


def request_data() -> dict:
    """JSON body or form fields as a plain dict."""
    if request.is_json:
        return request.get_json(silent=True) or {}
    return request.form.to_dict()


def form_flag(data: dict, key: str) -> bool:
    value = data.get(key)
    if isinstance(value, bool):
        return value
    return str(value).lower() in ('1', 'true', 'on', 'yes')
