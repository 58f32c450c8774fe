"""
Centralized Russian UI messages.
All user-facing text in Russian for consistency.
"""

MESSAGES = {
    # Success messages
    'login_success': 'Добро пожаловать, {name}',
    'logout_success': 'Вы вышли из системы',
    'pavilion_created': 'Павильон создан',
    'pavilion_updated': 'Павильон сохранён',
    'pavilion_deleted': 'Павильон удалён',
    'discount_created': 'Скидка добавлена',
    'discount_updated': 'Скидка обновлена',
    'discount_deleted': 'Скидка удалена',
    'tenant_created': 'Арендатор добавлен',
    'tenant_approved': 'Арендатор одобрен',
    'tenant_rejected': 'Доступ арендатора отозван',
    'tenant_deleted': 'Арендатор удалён',
    'premium_enabled': 'Премиум включён',
    'premium_disabled': 'Премиум отключён',
    'owner_changed': 'Владелец павильона изменён',
    'banner_activated': 'Баннер включён',
    'banner_deactivated': 'Баннер отключён',
    'banner_saved': 'Баннер сохранён',
    'settings_saved': 'Настройки сохранены',
    'category_created': 'Категория добавлена',
    'category_deleted': 'Категория удалена',
    'building_created': 'Корпус добавлен',
    'building_updated': 'Корпус сохранён',
    'building_deleted': 'Корпус удалён',

    # Error messages
    'contact_administration': 'Свяжитесь с Администрацией Апраксиного двора',
    'invalid_phone': 'Неверный формат номера телефона',
    'invalid_email': 'Неверный формат email',
    'phone_exists': 'Арендатор с таким номером уже существует',
    'no_edit_rights': 'Нет прав для редактирования этого павильона',
    'owner_required': 'Доступ только для администрации',
    'pavilion_not_found': 'Павильон не найден',
    'tenant_not_found': 'Арендатор не найден',
    'discount_not_found': 'Скидка не найдена',
    'building_not_found': 'Корпус не найден',
    'building_exists': 'Корпус с таким номером уже существует',
    'category_not_found': 'Категория не найдена',
    'floor_plan_not_found': 'План этажа не найден',
    'cannot_delete_self': 'Нельзя удалить собственную учётную запись',
    'cannot_reject_self': 'Нельзя отозвать собственный доступ',
    'name_required': 'Название обязательно',
    'phone_required': 'Телефон обязателен',
    'invalid_color': 'Цвет должен быть в формате #RRGGBB',
    'data_required': 'Данные обязательны',
    'load_error': 'Ошибка загрузки данных',

    # Empty states
    'no_discounts': 'Нет активных скидок',
    'no_discounts_page': 'Скидок нет',

    # Sharing
    'share_map_text': 'Я нашёл {name} в Апраксином дворе! 📍',
    'share_page_text': 'Посмотрите павильон "{name}" на {app_name}',
    'whatsapp_text': 'Здравствуйте! Пишу по поводу павильона "{name}"',

    # Labels
    'show_on_map': 'Показать на карте',
    'build_route': 'Построить маршрут',
}


def get_message(key: str, **kwargs) -> str:
    """
    Get message with optional formatting.

    Args:
        key: Message key
        **kwargs: Format parameters

    Returns:
        Formatted message or key if not found
    """
    message = MESSAGES.get(key, key)
    if kwargs:
        return message.format(**kwargs)
    return message
