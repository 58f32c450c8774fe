"""
Database seed data.
Initial data population for fresh database installations.
"""

import uuid


# Default category catalogue (code, name, color, icon)
DEFAULT_CATEGORIES = [
    ('clothing', 'Одежда', '#E91E63', '👕'),
    ('shoes', 'Обувь', '#9C27B0', '👞'),
    ('accessories', 'Аксессуары', '#00BCD4', '✨'),
    ('electronics', 'Электроника', '#2196F3', '📱'),
    ('cosmetics', 'Косметика', '#FF9800', '💄'),
    ('sports', 'Спорт', '#4CAF50', '⚽'),
    ('other', 'Прочее', '#9E9E9E', '📦'),
]

# Floor plan images shipped in static/images/floor-plans
FLOOR_PLANS = {
    '33': 5,
    'А': 2,
}

# Whitelisted test tenants (phone, name)
TEST_TENANTS = [
    ('+79643968140', 'Тестовый арендатор 1'),
    ('+79219543065', 'Тестовый арендатор 2'),
    ('+79117551579', 'Тестовый арендатор 3'),
]

OWNER_PHONE = '+79000000001'


def seed_database(db):
    """Insert initial seed data."""

    # 1. Categories
    for order, (code, name, color, icon) in enumerate(DEFAULT_CATEGORIES, start=1):
        db.execute('''
            INSERT INTO categories (code, name, color, icon, display_order, active)
            VALUES (?, ?, ?, ?, ?, 1)
        ''', (code, name, color, icon, order))

    # 2. Floor plans
    for building, floors in FLOOR_PLANS.items():
        slug = 'building_33' if building == '33' else 'building_a'
        for floor in range(1, floors + 1):
            db.execute('''
                INSERT INTO floor_plans (building_number, floor, image_path)
                VALUES (?, ?, ?)
            ''', (building, floor, f'/static/images/floor-plans/{slug}_floor_{floor}.svg'))

    # 3. Buildings
    buildings_data = [
        ('33', 'Корпус 33', 5, 10, 10, 30, 25, 'Основной корпус'),
        ('А', 'Корпус А', 2, 45, 10, 20, 20, 'Северное крыло'),
        ('Б-1', 'Корпус Б-1', 3, 10, 45, 25, 20, 'Западное крыло'),
    ]

    for number, name, floors, x, y, width, height, description in buildings_data:
        db.execute('''
            INSERT INTO buildings (building_number, name, total_floors,
                                   location_x, location_y, width, height, description)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        ''', (number, name, floors, x, y, width, height, description))

    # 4. Ad banner (inactive until configured)
    db.execute('''
        INSERT INTO ad_banners (image_url, html_code, link_url, is_active)
        VALUES (NULL, '', NULL, 0)
    ''')

    # 5. Project settings
    settings_data = [
        ('project_name', 'Карта Апрашки'),
        ('theme_color', '#000000'),
        ('page_views', '0'),
    ]

    for key, value in settings_data:
        db.execute('INSERT INTO project_settings (key, value) VALUES (?, ?)', (key, value))

    # 6. Tenants
    for phone, name in TEST_TENANTS:
        db.execute('''
            INSERT INTO tenants (id, phone, name, approved)
            VALUES (?, ?, ?, 1)
        ''', (str(uuid.uuid4()), phone, name))

    db.execute('''
        INSERT INTO tenants (id, phone, name, approved, is_owner, is_premium)
        VALUES (?, ?, ?, 1, 1, 1)
    ''', (str(uuid.uuid4()), OWNER_PHONE, 'Администрация'))
