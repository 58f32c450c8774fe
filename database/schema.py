"""
Database schema definitions.
Table creation, indexes, and structure management.
"""


def drop_tables(db):
    """Drop all existing tables."""
    # Disable foreign key constraints before dropping
    db.execute('PRAGMA foreign_keys = OFF')

    tables = [
        'audit_log',
        'project_settings',
        'ad_banners',
        'pavilions',
        'categories',
        'floor_plans',
        'buildings',
        'tenants'
    ]

    for table in tables:
        db.execute(f'DROP TABLE IF EXISTS {table}')

    # Re-enable foreign key constraints
    db.execute('PRAGMA foreign_keys = ON')


def create_tables(db):
    """Create all database tables."""

    # 1. Tenants (phone whitelist)
    db.execute('''
        CREATE TABLE tenants (
            id TEXT PRIMARY KEY,
            phone TEXT UNIQUE NOT NULL,
            name TEXT NOT NULL,
            email TEXT,
            approved INTEGER DEFAULT 0,
            is_owner INTEGER DEFAULT 0,
            is_premium INTEGER DEFAULT 0,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            CHECK (phone GLOB '+[0-9][0-9][0-9][0-9][0-9][0-9][0-9][0-9][0-9][0-9]*'
                   AND length(phone) BETWEEN 11 AND 16)
        )
    ''')

    # 2. Buildings (wings of the complex)
    db.execute('''
        CREATE TABLE buildings (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            building_number TEXT UNIQUE NOT NULL,
            name TEXT,
            total_floors INTEGER NOT NULL DEFAULT 1,
            location_x REAL NOT NULL DEFAULT 0,
            location_y REAL NOT NULL DEFAULT 0,
            width REAL NOT NULL DEFAULT 0,
            height REAL NOT NULL DEFAULT 0,
            description TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    # 3. Floor plan images per building/floor
    db.execute('''
        CREATE TABLE floor_plans (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            building_number TEXT NOT NULL,
            floor INTEGER NOT NULL,
            image_path TEXT NOT NULL,
            UNIQUE(building_number, floor)
        )
    ''')

    # 4. Pavilion categories
    db.execute('''
        CREATE TABLE categories (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            code TEXT UNIQUE NOT NULL,
            name TEXT NOT NULL,
            color TEXT DEFAULT '#9E9E9E',
            icon TEXT,
            display_order INTEGER DEFAULT 0,
            active INTEGER DEFAULT 1
        )
    ''')

    # 5. Pavilions
    db.execute('''
        CREATE TABLE pavilions (
            id TEXT PRIMARY KEY,
            tenant_id TEXT NOT NULL REFERENCES tenants(id) ON DELETE CASCADE,
            pavilion_number TEXT NOT NULL DEFAULT '',
            building TEXT,
            floor INTEGER,
            category TEXT NOT NULL,
            additional_categories TEXT DEFAULT '[]',
            shop_name TEXT NOT NULL,
            description TEXT,
            brand_color TEXT DEFAULT '#ffffff',
            discounts TEXT DEFAULT '[]',
            entrances TEXT DEFAULT '[]',
            location_x REAL,
            location_y REAL,
            image_url TEXT,
            slug TEXT UNIQUE,
            is_premium INTEGER DEFAULT 0,
            share_count INTEGER DEFAULT 0,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            CHECK (location_x IS NULL OR (location_x >= 0 AND location_x <= 100)),
            CHECK (location_y IS NULL OR (location_y >= 0 AND location_y <= 100))
        )
    ''')

    # 6. Ad banner (single row in practice)
    db.execute('''
        CREATE TABLE ad_banners (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            image_url TEXT,
            html_code TEXT DEFAULT '',
            link_url TEXT,
            is_active INTEGER DEFAULT 0,
            impressions INTEGER DEFAULT 0,
            clicks INTEGER DEFAULT 0,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    # 7. Project settings (key/value)
    db.execute('''
        CREATE TABLE project_settings (
            key TEXT PRIMARY KEY,
            value TEXT,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    # 8. Audit log
    db.execute('''
        CREATE TABLE audit_log (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            tenant_id TEXT REFERENCES tenants(id) ON DELETE SET NULL,
            action TEXT NOT NULL,
            entity_type TEXT NOT NULL,
            entity_id TEXT,
            changes TEXT,
            ip_address TEXT,
            user_agent TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')


def create_indexes(db):
    """Create database indexes."""
    indexes = [
        'CREATE INDEX IF NOT EXISTS idx_tenants_phone ON tenants(phone)',
        'CREATE INDEX IF NOT EXISTS idx_pavilions_tenant_id ON pavilions(tenant_id)',
        'CREATE INDEX IF NOT EXISTS idx_pavilions_pavilion_number ON pavilions(pavilion_number)',
        'CREATE INDEX IF NOT EXISTS idx_pavilions_building_floor ON pavilions(building, floor)',
        'CREATE INDEX IF NOT EXISTS idx_buildings_building_number ON buildings(building_number)',
        'CREATE INDEX IF NOT EXISTS idx_audit_log_created ON audit_log(created_at)',
        'CREATE INDEX IF NOT EXISTS idx_audit_log_entity ON audit_log(entity_type, entity_id)',
    ]

    for index_sql in indexes:
        db.execute(index_sql)
