"""
Tenant console forms using Flask-WTF.
"""

from flask_wtf import FlaskForm
from flask_wtf.file import FileField, FileAllowed
from wtforms import StringField, TextAreaField, SelectField, SelectMultipleField, HiddenField
from wtforms.validators import DataRequired, Length, Optional

IMAGE_EXTENSIONS = ['png', 'jpg', 'jpeg', 'gif', 'webp']


class PavilionForm(FlaskForm):
    """Create/edit a pavilion listing. Category choices are set per request."""

    building = StringField('Корпус', validators=[Optional(), Length(max=20)])

    floor = StringField('Этаж', validators=[Optional(), Length(max=5)])

    pavilion_number = StringField('Номер павильона', validators=[Optional(), Length(max=20)])

    shop_name = StringField('Название магазина', validators=[
        DataRequired(message='Название обязательно'),
        Length(max=120)
    ])

    category = SelectField('Категория', choices=[], validators=[
        DataRequired(message='Выберите категорию')
    ])

    additional_categories = SelectMultipleField('Дополнительные категории', choices=[],
                                                validators=[Optional()])

    description = TextAreaField('Описание', validators=[Optional(), Length(max=2000)])

    brand_color = StringField('Цвет бренда', default='#ffffff', validators=[Optional(), Length(max=7)])

    # Filled by the floor plan picker
    location_x = HiddenField('X')
    location_y = HiddenField('Y')

    image = FileField('Фото', validators=[
        FileAllowed(IMAGE_EXTENSIONS, 'Допустимы только изображения')
    ])

    def set_category_choices(self, categories: list):
        choices = [(c['code'], f"{c.get('icon') or ''} {c['name']}".strip()) for c in categories]
        self.category.choices = choices
        self.additional_categories.choices = choices
