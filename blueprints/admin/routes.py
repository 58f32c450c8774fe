"""
Tenant console routes.
Tenants manage their own pavilions, discounts and floor plan placement.
"""

import logging
from flask import render_template, redirect, url_for, flash, request, abort, Blueprint, current_app
from flask_login import login_required, current_user

from blueprints.admin.forms import PavilionForm
from blueprints.admin.services import (
    validate_pavilion_data, validate_discount_data, parse_pavilion_form,
    save_pavilion_image, to_percent, find_pavilion_at_point, build_markers
)
from models.category import get_all_categories, get_category_map
from models.discount import add_discount, update_discount, remove_discount, get_active_discounts
from models.floor_plan import has_floor_plan, list_floor_plans
from models.pavilion import (
    get_all_pavilions, get_pavilion_by_id, get_pavilions_by_tenant,
    save_pavilion, delete_pavilion
)
from utils.api_response import api_success, api_error
from utils.decorators import can_edit_pavilion
from utils.messages import MESSAGES

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__)


def _error_status(error: Exception) -> int:
    if isinstance(error, PermissionError):
        return 403
    if str(error) in (MESSAGES['pavilion_not_found'], MESSAGES['discount_not_found']):
        return 404
    return 400


@admin_bp.route('/', strict_slashes=False)
@login_required
def dashboard():
    """Tenant dashboard with own pavilions."""
    pavilions = get_pavilions_by_tenant(current_user.id)

    stats = {
        'total_pavilions': len(pavilions),
        'with_discounts': len([p for p in pavilions if get_active_discounts(p)]),
    }

    return render_template(
        'admin/dashboard.html',
        pavilions=pavilions,
        stats=stats,
        categories=get_category_map(),
        tenant=current_user
    )


def _render_form(form, pavilion, mode, status=200):
    building = form.building.data or (pavilion or {}).get('building')
    return render_template(
        'admin/pavilion_form.html',
        form=form,
        pavilion=pavilion,
        mode=mode,
        floor_plans=list_floor_plans(building) if building else [],
        premium=current_user.is_premium or bool(pavilion and pavilion.get('premium')),
    ), status


def _handle_form(form, pavilion=None):
    """Validate, store image and save. Returns a response or None on failure."""
    premium = current_user.is_premium or current_user.is_owner or bool(pavilion and pavilion.get('premium'))
    data = parse_pavilion_form(form, request.form, allow_additional_categories=premium)

    is_valid, errors = validate_pavilion_data(data)
    if not is_valid:
        for error in errors:
            flash(error, 'error')
        return None

    if form.image.data and getattr(form.image.data, 'filename', ''):
        owner_id = pavilion['tenant_id'] if pavilion else current_user.id
        try:
            data['image_url'] = save_pavilion_image(form.image.data, owner_id)
        except ValueError as e:
            flash(str(e), 'error')
            return None

    if pavilion:
        data['id'] = pavilion['id']

    try:
        save_pavilion(current_user, data)
    except PermissionError as e:
        abort(403, description=str(e))
    except ValueError as e:
        flash(str(e), 'error')
        return None

    flash(MESSAGES['pavilion_updated' if pavilion else 'pavilion_created'], 'success')
    return redirect(url_for('admin.dashboard'))


@admin_bp.route('/pavilions/new', methods=['GET', 'POST'])
@login_required
def pavilion_create():
    """Create a pavilion owned by the current tenant."""
    form = PavilionForm()
    form.set_category_choices(get_all_categories())

    if form.validate_on_submit():
        response = _handle_form(form)
        if response:
            return response
        return _render_form(form, None, 'create', status=400)

    if request.method == 'POST':
        for errors in form.errors.values():
            for error in errors:
                flash(error, 'error')
        return _render_form(form, None, 'create', status=400)

    return _render_form(form, None, 'create')


@admin_bp.route('/pavilions/<pavilion_id>/edit', methods=['GET', 'POST'])
@login_required
def pavilion_edit(pavilion_id):
    """Edit own pavilion (owners may edit any)."""
    pavilion = get_pavilion_by_id(pavilion_id)
    if not pavilion:
        abort(404)
    if not can_edit_pavilion(current_user, pavilion):
        abort(403)

    form = PavilionForm(data=pavilion if request.method == 'GET' else None)
    form.set_category_choices(get_all_categories())

    if request.method == 'GET':
        form.floor.data = '' if pavilion.get('floor') is None else str(pavilion['floor'])
        form.additional_categories.data = pavilion.get('additional_categories') or []
        return _render_form(form, pavilion, 'edit')

    if form.validate_on_submit():
        response = _handle_form(form, pavilion)
        if response:
            return response
    else:
        for errors in form.errors.values():
            for error in errors:
                flash(error, 'error')

    return _render_form(form, pavilion, 'edit', status=400)


@admin_bp.route('/pavilions/<pavilion_id>/delete', methods=['POST'])
@login_required
def pavilion_delete(pavilion_id):
    """Delete own pavilion."""
    try:
        delete_pavilion(current_user, pavilion_id)
        flash(MESSAGES['pavilion_deleted'], 'success')
    except PermissionError as e:
        abort(403, description=str(e))
    except ValueError as e:
        abort(404, description=str(e))

    return redirect(url_for('admin.dashboard'))


# =============================================================================
# DISCOUNT API
# =============================================================================

@admin_bp.route('/api/pavilions/<pavilion_id>/discounts', methods=['POST'])
@login_required
def discount_create(pavilion_id):
    """Add a discount to a pavilion."""
    data = request.get_json(silent=True)
    if not data:
        return api_error(MESSAGES['data_required'])

    is_valid, error = validate_discount_data(data)
    if not is_valid:
        return api_error(error)

    try:
        discount = add_discount(current_user, pavilion_id, data)
    except (PermissionError, ValueError) as e:
        return api_error(str(e), _error_status(e))

    return api_success(data=discount, message=MESSAGES['discount_created'], status=201)


@admin_bp.route('/api/pavilions/<pavilion_id>/discounts/<discount_id>', methods=['PUT'])
@login_required
def discount_update(pavilion_id, discount_id):
    """Merge changes into an existing discount."""
    data = request.get_json(silent=True)
    if not data:
        return api_error(MESSAGES['data_required'])

    is_valid, error = validate_discount_data(data, partial=True)
    if not is_valid:
        return api_error(error)

    try:
        discount = update_discount(current_user, pavilion_id, discount_id, data)
    except (PermissionError, ValueError) as e:
        return api_error(str(e), _error_status(e))

    return api_success(data=discount, message=MESSAGES['discount_updated'])


@admin_bp.route('/api/pavilions/<pavilion_id>/discounts/<discount_id>', methods=['DELETE'])
@login_required
def discount_delete(pavilion_id, discount_id):
    """Remove a discount."""
    try:
        remove_discount(current_user, pavilion_id, discount_id)
    except (PermissionError, ValueError) as e:
        return api_error(str(e), _error_status(e))

    return api_success(message=MESSAGES['discount_deleted'])


# =============================================================================
# FLOOR PLAN API
# =============================================================================

@admin_bp.route('/api/floor-plans')
@login_required
def floor_plans():
    """Plans for a building plus markers of the tenant's pavilions."""
    building = request.args.get('building', '').strip() or None
    plans = list_floor_plans(building)

    pavilions = get_pavilions_by_tenant(current_user.id)
    if building:
        pavilions = [p for p in pavilions if str(p.get('building')) == building]

    selected = request.args.get('selected', '').strip() or None
    markers = build_markers(pavilions, selected_number=selected, categories=get_category_map())

    return api_success(data={'plans': plans, 'markers': markers})


@admin_bp.route('/floor-plan/hit', methods=['POST'])
@login_required
def floor_plan_hit():
    """
    Resolve a click on a floor plan.

    Body: {building, floor, x, y} in percent, or
          {building, floor, click_x, click_y, width, height} in pixels.
    """
    data = request.get_json(silent=True)
    if not data:
        return api_error(MESSAGES['data_required'])

    building = str(data.get('building') or '').strip()
    floor = data.get('floor')

    if not has_floor_plan(building, floor):
        return api_error(MESSAGES['floor_plan_not_found'], 404)

    try:
        if 'click_x' in data:
            x, y = to_percent(data['click_x'], data['click_y'], data['width'], data['height'])
        else:
            x, y = round(float(data['x']), 2), round(float(data['y']), 2)
    except KeyError:
        return api_error(MESSAGES['data_required'])
    except (TypeError, ValueError):
        return api_error('Неверные координаты')

    same_floor = [
        p for p in get_all_pavilions(public_only=False)
        if str(p.get('building')) == building and str(p.get('floor')) == str(floor)
    ]
    tolerance = current_app.config.get('FLOOR_PLAN_TOLERANCE', 5)
    hit = find_pavilion_at_point(same_floor, x, y, tolerance=tolerance)

    pavilion = None
    if hit:
        pavilion = {
            'id': hit['id'],
            'pavilion_number': hit['pavilion_number'],
            'shop_name': hit['shop_name'],
        }

    return api_success(data={'x': x, 'y': y, 'pavilion': pavilion})
