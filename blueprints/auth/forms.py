"""
Authentication forms using Flask-WTF.
Provides the phone login form with CSRF protection.
"""

from flask_wtf import FlaskForm
from wtforms import StringField
from wtforms.validators import DataRequired, Length


class PhoneLoginForm(FlaskForm):
    """Login by whitelisted phone number (no password)."""

    phone = StringField('Номер телефона', validators=[
        DataRequired(message='Введите номер телефона'),
        Length(max=32)
    ])
