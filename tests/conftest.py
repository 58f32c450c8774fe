"""
Pytest configuration and fixtures.
Ensures tests use an isolated test database, not the production database.
"""

import os
import pytest
import tempfile

# Set test database path BEFORE importing app
# This ensures all tests use an isolated database
TEST_DB_PATH = os.path.join(tempfile.gettempdir(), 'aprashka_test.db')
os.environ['DATABASE_PATH'] = TEST_DB_PATH

TENANT_PHONE = '+79643968140'
OTHER_TENANT_PHONE = '+79219543065'
OWNER_PHONE = '+79000000001'


@pytest.fixture(scope='session', autouse=True)
def setup_test_environment():
    """Set up test environment before any tests run."""
    os.environ['DATABASE_PATH'] = TEST_DB_PATH
    os.environ['FLASK_ENV'] = 'test'

    yield

    # Cleanup: remove test database after all tests
    for path in (TEST_DB_PATH, TEST_DB_PATH + '-wal', TEST_DB_PATH + '-shm'):
        if os.path.exists(path):
            try:
                os.remove(path)
            except PermissionError:
                pass  # Windows may have file locked


@pytest.fixture
def app(tmp_path):
    """Create test application with a freshly seeded database."""
    from app import create_app
    from database import init_db

    app = create_app('test')
    app.config['TESTING'] = True
    app.config['WTF_CSRF_ENABLED'] = False
    app.config['DATABASE_PATH'] = TEST_DB_PATH
    app.config['UPLOAD_FOLDER'] = str(tmp_path / 'uploads')

    # Requests push their own app context so flask_login state stays per request
    with app.app_context():
        init_db()

    yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


def login(client, phone):
    return client.post('/login', data={'phone': phone}, follow_redirects=False)


@pytest.fixture
def tenant_client(app):
    """Client logged in as a regular (non-premium) tenant."""
    client = app.test_client()
    login(client, TENANT_PHONE)
    return client


@pytest.fixture
def owner_client(app):
    """Client logged in as the complex administration (superadmin)."""
    client = app.test_client()
    login(client, OWNER_PHONE)
    return client


@pytest.fixture
def tenant(app):
    """Seeded regular tenant as a dict."""
    from models.tenant import get_tenant_by_phone

    with app.app_context():
        return get_tenant_by_phone(TENANT_PHONE)


@pytest.fixture
def other_tenant(app):
    from models.tenant import get_tenant_by_phone

    with app.app_context():
        return get_tenant_by_phone(OTHER_TENANT_PHONE)


@pytest.fixture
def owner(app):
    from models.tenant import get_tenant_by_phone

    with app.app_context():
        return get_tenant_by_phone(OWNER_PHONE)


@pytest.fixture
def make_pavilion(app):
    """Factory creating a pavilion for a tenant dict; returns the pavilion ID."""
    from models.pavilion import create_pavilion

    def _make(tenant, **fields):
        data = {
            'shop_name': 'Модный Дом',
            'category': 'clothing',
            'building': '33',
            'floor': 1,
            'pavilion_number': '101',
            'location_x': 20,
            'location_y': 30,
        }
        data.update(fields)
        with app.app_context():
            return create_pavilion(tenant, data)

    return _make
