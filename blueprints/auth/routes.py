"""
Authentication routes: phone login and logout.
Tenants log in with a whitelisted phone number; there are no passwords.
"""

import logging
from flask import render_template, redirect, url_for, flash, request, session, Blueprint
from flask_login import login_user, logout_user, current_user
from urllib.parse import urlparse

from blueprints.auth.forms import PhoneLoginForm
from models.tenant import check_phone, Tenant
from utils.messages import MESSAGES
from utils.validators import format_phone_number

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)


def _safe_next_url():
    next_page = request.args.get('next')
    if not next_page or urlparse(next_page).netloc != '' or not next_page.startswith('/'):
        return url_for('admin.dashboard')
    return next_page


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """
    Phone login.

    GET: Display login form
    POST: Normalize the phone and check it against the whitelist
    """
    if current_user.is_authenticated:
        return redirect(url_for('admin.dashboard'))

    form = PhoneLoginForm()
    error = None

    if form.validate_on_submit():
        try:
            phone = format_phone_number(form.phone.data)
            tenant_dict = check_phone(phone)
        except ValueError as e:
            tenant_dict = None
            error = str(e)
        else:
            if tenant_dict is None:
                error = MESSAGES['contact_administration']

        if tenant_dict:
            tenant = Tenant(tenant_dict)
            session.permanent = True
            login_user(tenant)
            logger.info('Tenant %s logged in', tenant.id)
            flash(MESSAGES['login_success'].format(name=tenant.name), 'success')
            return redirect(_safe_next_url())

    status = 400 if error else 200
    return render_template('login.html', form=form, error=error), status


@auth_bp.route('/logout')
def logout():
    """Logout current tenant and return to the public map."""
    if current_user.is_authenticated:
        logout_user()
        flash(MESSAGES['logout_success'], 'success')
    return redirect(url_for('map.index'))
