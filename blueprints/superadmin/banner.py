"""
Superadmin ad banner routes: content, image upload, toggle and statistics.
"""

from flask import request, current_app
from flask_login import login_required

from blueprints.superadmin.common import respond_ok, respond_error, request_data
from models.ad_banner import (
    get_ad_banner, update_ad_banner, activate_banner, deactivate_banner, get_banner_stats
)
from utils.api_response import api_success
from utils.audit import log_audit
from utils.decorators import owner_required
from utils.helpers import save_upload
from utils.messages import MESSAGES

TAB = 'banner'


def register_routes(bp):
    """Register banner routes on the superadmin blueprint."""

    @bp.route('/banner', methods=['POST'])
    @login_required
    @owner_required
    def banner_save():
        """Save HTML code, link and optionally a new image (max MAX_BANNER_SIZE)."""
        data = request_data()
        fields = {
            'html_code': data.get('html_code', ''),
            'link_url': (data.get('link_url') or '').strip() or None,
        }

        image = request.files.get('image')
        if image and image.filename:
            try:
                fields['image_url'] = save_upload(
                    image,
                    subdir='banners',
                    max_size=current_app.config['MAX_BANNER_SIZE']
                )
            except ValueError as e:
                return respond_error(str(e), TAB)

        before = get_ad_banner()
        update_ad_banner(**fields)
        log_audit('UPDATE', 'banner', before['id'],
                  before={k: before.get(k) for k in fields}, after=fields)
        return respond_ok(MESSAGES['banner_saved'], TAB, data=get_ad_banner())

    @bp.route('/banner/activate', methods=['POST'])
    @login_required
    @owner_required
    def banner_activate():
        activate_banner()
        log_audit('ACTIVATE', 'banner', get_ad_banner()['id'])
        return respond_ok(MESSAGES['banner_activated'], TAB)

    @bp.route('/banner/deactivate', methods=['POST'])
    @login_required
    @owner_required
    def banner_deactivate():
        deactivate_banner()
        log_audit('DEACTIVATE', 'banner', get_ad_banner()['id'])
        return respond_ok(MESSAGES['banner_deactivated'], TAB)

    @bp.route('/api/banner/stats')
    @login_required
    @owner_required
    def banner_stats():
        """Impressions, clicks and CTR."""
        return api_success(data=get_banner_stats())
