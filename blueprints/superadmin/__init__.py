"""
Superadmin blueprint initialization.
Owner-only console for tenants, pavilions, the ad banner and project settings.

Route logic is split by area:
- pavilions.py - Pavilion filters, owner change, premium toggle, delete
- tenants.py - Whitelist management
- banner.py - Ad banner and its statistics
- settings.py - Project name, theme color, global categories
- buildings.py - Building records
- audit.py - Audit log viewer
- exports.py - Excel exports
"""

from flask import Blueprint, render_template, request
from flask_login import login_required

from utils.decorators import owner_required
from models.ad_banner import get_ad_banner, get_banner_stats
from models.category import get_all_categories
from models.pavilion import get_all_pavilions, get_pavilion_stats, filter_pavilions
from models.settings import get_page_views, get_project_settings
from models.tenant import get_all_tenants, filter_tenants

superadmin_bp = Blueprint('superadmin', __name__)


def get_dashboard_stats() -> dict:
    """Headline numbers for the stats tab."""
    tenants = get_all_tenants()
    stats = get_pavilion_stats()
    stats.update({
        'total_tenants': len(tenants),
        'approved_tenants': len([t for t in tenants if t['approved']]),
        'page_views': get_page_views(),
        # No billing yet
        'monthly_revenue': 0,
    })
    return stats


@superadmin_bp.route('/', strict_slashes=False)
@login_required
@owner_required
def dashboard():
    """
    Tabbed superadmin dashboard.

    Query params:
        tab: stats | pavilions | tenants | banner | settings
        floor, category, premium, search: pavilion filters
        status, tenant_search: tenant filters
    """
    pavilion_filters = {
        'floor': request.args.get('floor', '').strip(),
        'category': request.args.get('category', '').strip(),
        'premium': request.args.get('premium', '').strip(),
        'search': request.args.get('search', '').strip(),
    }
    tenant_filters = {
        'status': request.args.get('status', '').strip(),
        'search': request.args.get('tenant_search', '').strip(),
    }

    all_tenants = get_all_tenants()
    pavilions = filter_pavilions(get_all_pavilions(public_only=False), **pavilion_filters)
    tenants = filter_tenants(all_tenants, tenant_filters['status'], tenant_filters['search'])

    return render_template(
        'superadmin/dashboard.html',
        tab=request.args.get('tab', 'stats'),
        stats=get_dashboard_stats(),
        pavilions=pavilions,
        tenants=tenants,
        all_tenants=all_tenants,
        categories=get_all_categories(active_only=False),
        banner=get_ad_banner(),
        banner_stats=get_banner_stats(),
        settings=get_project_settings(),
        pavilion_filters=pavilion_filters,
        tenant_filters=tenant_filters,
    )


# =============================================================================
# REGISTER ROUTE MODULES
# =============================================================================

from blueprints.superadmin import pavilions, tenants, banner, settings, buildings, audit, exports  # noqa: E402

pavilions.register_routes(superadmin_bp)
tenants.register_routes(superadmin_bp)
banner.register_routes(superadmin_bp)
settings.register_routes(superadmin_bp)
buildings.register_routes(superadmin_bp)
audit.register_routes(superadmin_bp)
exports.register_routes(superadmin_bp)
