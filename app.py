"""
Aprashka Map - interactive pavilion map of the Apraksin Dvor shopping complex.
Flask application factory and initialization
"""

import os
import click
import logging
from flask import Flask, render_template, g
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Import configuration
from config import config

# Import extensions
from extensions import login_manager, csrf

# Import database functions
from database import close_db, init_db


def create_app(config_name=None):
    """
    Application factory for Flask app.

    Args:
        config_name: Configuration name ('development', 'production', 'test')

    Returns:
        Flask application instance
    """
    # Determine config
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    # Create Flask app
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config[config_name])

    # Initialize extensions
    initialize_extensions(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    register_cli_commands(app)

    # Register context processors
    register_context_processors(app)

    # Register teardown handlers
    register_teardown_handlers(app)

    # Configure logging
    configure_logging(app)

    return app


def initialize_extensions(app):
    """Initialize Flask extensions."""
    # Initialize Flask-Login
    login_manager.init_app(app)
    # Initialize CSRF Protection
    csrf.init_app(app)


def register_blueprints(app):
    """Register Flask blueprints."""
    # Import blueprints
    from blueprints.auth.routes import auth_bp
    from blueprints.map.routes import map_bp
    from blueprints.pavilion.routes import pavilion_bp
    from blueprints.admin.routes import admin_bp
    from blueprints.superadmin import superadmin_bp
    from blueprints.api.routes import api_bp
    from blueprints.pwa.routes import pwa_bp

    # Public JSON API is called by anonymous visitors (share counter)
    csrf.exempt(api_bp)

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(map_bp)
    app.register_blueprint(pavilion_bp)
    app.register_blueprint(admin_bp, url_prefix='/admin')
    app.register_blueprint(superadmin_bp, url_prefix='/superadmin')
    app.register_blueprint(api_bp, url_prefix='/api')
    app.register_blueprint(pwa_bp)


def _error_message(error):
    """Custom abort() description, or None for the stock HTTP text."""
    description = getattr(error, 'description', None)
    if description and description != type(error).description:
        return description
    return None


def register_error_handlers(app):
    """Register error handlers."""

    @app.errorhandler(404)
    def not_found_error(error):
        """Handle 404 errors."""
        return render_template('errors/404.html', message=_error_message(error)), 404

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        # Rollback database on error
        db = g.get('db')
        if db:
            db.rollback()
        app.logger.error('Unhandled error: %s', error)
        return render_template('errors/500.html'), 500

    @app.errorhandler(403)
    def forbidden_error(error):
        """Handle 403 errors."""
        return render_template('errors/403.html', message=_error_message(error)), 403


def register_cli_commands(app):
    """Register Flask CLI commands."""

    @app.cli.command('init-db')
    def init_db_command():
        """Initialize database with schema and seed data."""
        click.echo('Initializing database...')
        with app.app_context():
            init_db()
        click.echo('Database initialized successfully!')

    @app.cli.command('add-tenant')
    @click.argument('phone')
    @click.argument('name')
    @click.option('--approved/--pending', default=True, help='Whitelist the tenant immediately')
    @click.option('--owner', is_flag=True, help='Grant superadmin access')
    @click.option('--premium', is_flag=True, help='Enable premium features')
    def add_tenant_command(phone, name, approved, owner, premium):
        """Add or update a tenant in the phone whitelist."""
        from models.tenant import upsert_tenant

        with app.app_context():
            try:
                tenant_id = upsert_tenant(
                    phone=phone,
                    name=name,
                    approved=approved,
                    is_owner=owner,
                    is_premium=premium
                )
                click.echo(f'Tenant saved! ID: {tenant_id}')
            except ValueError as e:
                click.echo(f'Error saving tenant: {str(e)}', err=True)


def register_context_processors(app):
    """Register template context processors."""

    @app.context_processor
    def utility_processor():
        """Inject utility values into templates."""
        from datetime import datetime
        from models.settings import get_project_settings

        return {
            'current_year': datetime.now().year,
            'app_name': app.config.get('APP_NAME', 'Карта Апрашки'),
            'app_version': app.config.get('APP_VERSION', '1.0.0'),
            'project_settings': get_project_settings()
        }

    # Add custom template filters
    @app.template_filter('format_date')
    def format_date_filter(date_str, format='%d.%m.%Y'):
        """Format date string."""
        from utils.helpers import format_date
        return format_date(date_str, format)


def register_teardown_handlers(app):
    """Register teardown handlers."""

    @app.teardown_appcontext
    def teardown_db(error):
        """Close database connection at end of request."""
        close_db(error)


def configure_logging(app):
    """Configure application logging."""
    if not app.debug and not app.testing:
        # Production logging
        if not os.path.exists('logs'):
            os.mkdir('logs')

        file_handler = logging.FileHandler('logs/aprashka.log')
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

        app.logger.setLevel(logging.INFO)
        app.logger.info('Aprashka Map startup')
    else:
        # Development logging
        app.logger.setLevel(logging.DEBUG)


# Create application instance for development server
if __name__ == '__main__':
    app = create_app()
    # host='0.0.0.0' allows access from other devices on the network
    app.run(host='0.0.0.0', debug=True)
