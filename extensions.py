"""
Flask extensions initialization.
Extensions are initialized here and then initialized with the app in app.py.
"""

from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect

# Initialize Flask-Login
login_manager = LoginManager()

# Initialize CSRF Protection
csrf = CSRFProtect()

# Configure Login Manager
login_manager.login_view = 'auth.login'
login_manager.login_message = 'Войдите по номеру телефона, чтобы открыть эту страницу'
login_manager.login_message_category = 'warning'


@login_manager.user_loader
def load_user(tenant_id):
    """
    Load tenant by ID for Flask-Login.

    Tenants whose approval was revoked after login are treated as
    logged out.

    Args:
        tenant_id: The tenant UUID as a string

    Returns:
        Tenant object or None if not found or no longer approved
    """
    from models.tenant import get_tenant_by_id, Tenant

    tenant_dict = get_tenant_by_id(tenant_id)
    if tenant_dict and tenant_dict.get('approved'):
        return Tenant(tenant_dict)
    return None
