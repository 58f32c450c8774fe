"""
Superadmin building records.
"""

from flask import render_template, redirect, url_for, flash
from flask_login import login_required

from blueprints.superadmin.common import wants_json, request_data
from models.building import (
    get_all_buildings, get_building_by_id, create_building, update_building, delete_building
)
from utils.api_response import api_success, api_error
from utils.audit import log_audit
from utils.decorators import owner_required
from utils.messages import MESSAGES


def _done(message, data=None):
    if wants_json():
        return api_success(data=data, message=message)
    flash(message, 'success')
    return redirect(url_for('superadmin.buildings'))


def _failed(error, status=400):
    if wants_json():
        return api_error(error, status)
    flash(error, 'error')
    return redirect(url_for('superadmin.buildings'))


def register_routes(bp):
    """Register building routes on the superadmin blueprint."""

    @bp.route('/buildings')
    @login_required
    @owner_required
    def buildings():
        buildings = get_all_buildings()
        if wants_json():
            return api_success(data=buildings)
        return render_template('superadmin/buildings.html', buildings=buildings)

    @bp.route('/buildings', methods=['POST'])
    @login_required
    @owner_required
    def building_create():
        data = request_data()
        try:
            building_id = create_building(data)
        except ValueError as e:
            return _failed(str(e))

        log_audit('CREATE', 'building', building_id, after=get_building_by_id(building_id))
        return _done(MESSAGES['building_created'], {'id': building_id})

    @bp.route('/buildings/<int:building_id>', methods=['POST'])
    @login_required
    @owner_required
    def building_update(building_id):
        before = get_building_by_id(building_id)
        if not before:
            return _failed(MESSAGES['building_not_found'], 404)

        try:
            update_building(building_id, request_data())
        except ValueError as e:
            return _failed(str(e))

        log_audit('UPDATE', 'building', building_id, before=before, after=get_building_by_id(building_id))
        return _done(MESSAGES['building_updated'])

    @bp.route('/buildings/<int:building_id>/delete', methods=['POST'])
    @login_required
    @owner_required
    def building_delete(building_id):
        before = get_building_by_id(building_id)
        if not before:
            return _failed(MESSAGES['building_not_found'], 404)

        delete_building(building_id)
        log_audit('DELETE', 'building', building_id, before=before)
        return _done(MESSAGES['building_deleted'])
