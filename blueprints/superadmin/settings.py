"""
Superadmin project settings: name, theme color and global categories.
"""

from flask_login import login_required

from blueprints.superadmin.common import respond_ok, respond_error, request_data
from models.settings import (
    get_project_settings, update_project_name, update_theme_color,
    add_global_category, remove_global_category
)
from utils.audit import log_audit
from utils.decorators import owner_required
from utils.messages import MESSAGES

TAB = 'settings'


def register_routes(bp):
    """Register settings routes on the superadmin blueprint."""

    @bp.route('/settings', methods=['POST'])
    @login_required
    @owner_required
    def settings_save():
        """Update project name and/or theme color."""
        data = request_data()
        before = get_project_settings()
        changes = {}

        try:
            if 'project_name' in data:
                changes['project_name'] = update_project_name(data['project_name'])
            if 'theme_color' in data:
                changes['theme_color'] = update_theme_color(data['theme_color'])
        except ValueError as e:
            return respond_error(str(e), TAB)

        if not changes:
            return respond_error(MESSAGES['data_required'], TAB)

        log_audit('UPDATE', 'settings', None,
                  before={k: before.get(k) for k in changes}, after=changes)
        return respond_ok(MESSAGES['settings_saved'], TAB, data=changes)

    @bp.route('/categories', methods=['POST'])
    @login_required
    @owner_required
    def category_create():
        data = request_data()
        try:
            category = add_global_category(data.get('name'), (data.get('icon') or '').strip() or None)
        except ValueError as e:
            return respond_error(str(e), TAB)

        log_audit('CREATE', 'category', category['id'], after=category)
        return respond_ok(MESSAGES['category_created'], TAB, data=category)

    @bp.route('/categories/<int:category_id>/delete', methods=['POST'])
    @login_required
    @owner_required
    def category_delete(category_id):
        try:
            remove_global_category(category_id)
        except ValueError as e:
            return respond_error(str(e), TAB, 404)

        log_audit('DELETE', 'category', category_id)
        return respond_ok(MESSAGES['category_deleted'], TAB)
