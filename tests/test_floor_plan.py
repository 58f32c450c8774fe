"""
Tests for floor plan lookup, geometry and the tenant floor plan endpoints.
"""

import pytest

from blueprints.admin.services import to_percent, find_pavilion_at_point, build_markers


class TestFloorPlanModel:

    def test_get_floor_plan(self, app):
        from models.floor_plan import get_floor_plan

        with app.app_context():
            plan = get_floor_plan('33', 2)
            assert plan['image_path'] == '/static/images/floor-plans/building_33_floor_2.svg'
            assert get_floor_plan('33', '2') == plan

    def test_missing_or_invalid(self, app):
        from models.floor_plan import get_floor_plan, has_floor_plan

        with app.app_context():
            assert get_floor_plan('33', 9) is None
            assert get_floor_plan('33', 'x') is None
            assert get_floor_plan(None, 1) is None
            assert has_floor_plan('Б-1', 1) is False

    def test_list_floor_plans(self, app):
        from models.floor_plan import list_floor_plans

        with app.app_context():
            assert [p['floor'] for p in list_floor_plans('33')] == [1, 2, 3, 4, 5]
            assert len(list_floor_plans()) == 7


class TestGeometry:

    def test_to_percent(self):
        assert to_percent(50, 25, 200, 100) == (25.0, 25.0)
        assert to_percent(1, 2, 3, 3) == (33.33, 66.67)

    def test_to_percent_rejects_zero_size(self):
        with pytest.raises(ValueError):
            to_percent(10, 10, 0, 100)

    def test_find_pavilion_strict_tolerance(self):
        pavilions = [
            {'id': 'a', 'location_x': None, 'location_y': None},
            {'id': 'b', 'location_x': 10, 'location_y': 10},
            {'id': 'c', 'location_x': 12, 'location_y': 12},
        ]
        assert find_pavilion_at_point(pavilions, 12, 12)['id'] == 'b'
        assert find_pavilion_at_point(pavilions, 15, 10)['id'] == 'c'
        # Exactly 5 away is outside
        assert find_pavilion_at_point(pavilions[:2], 15, 10) is None
        assert find_pavilion_at_point(pavilions, 50, 50) is None

    def test_build_markers(self):
        pavilions = [
            {'id': 'a', 'pavilion_number': '101', 'shop_name': 'A', 'category': 'shoes',
             'location_x': 10, 'location_y': 20},
            {'id': 'b', 'pavilion_number': '102', 'shop_name': 'B', 'category': 'unknown',
             'location_x': 30, 'location_y': 40},
            {'id': 'c', 'pavilion_number': '103', 'location_x': None, 'location_y': None},
        ]
        markers = build_markers(pavilions, selected_number='102',
                                categories={'shoes': {'color': '#9C27B0'}})

        assert [m['id'] for m in markers] == ['a', 'b']
        assert markers[0]['color'] == '#9C27B0'
        assert markers[1]['color'] == '#9E9E9E'
        assert [m['selected'] for m in markers] == [False, True]


class TestFloorPlanEndpoints:
    """Tests for /admin/api/floor-plans and /admin/floor-plan/hit."""

    def test_floor_plans_with_markers(self, tenant, tenant_client, make_pavilion):
        make_pavilion(tenant, building='33', pavilion_number='101')
        make_pavilion(tenant, building='Б-1', pavilion_number='7')

        response = tenant_client.get('/admin/api/floor-plans?building=33&selected=101')
        assert response.status_code == 200
        data = response.get_json()['data']
        assert len(data['plans']) == 5
        assert [m['pavilion_number'] for m in data['markers']] == ['101']
        assert data['markers'][0]['selected'] is True

    def test_hit_in_percent(self, tenant, tenant_client, make_pavilion):
        make_pavilion(tenant, shop_name='Рядом', location_x=20, location_y=30)

        response = tenant_client.post('/admin/floor-plan/hit', json={
            'building': '33', 'floor': 1, 'x': 22, 'y': 31
        })
        assert response.status_code == 200
        data = response.get_json()['data']
        assert data['x'] == 22
        assert data['pavilion']['shop_name'] == 'Рядом'

    def test_hit_in_pixels(self, tenant, tenant_client, make_pavilion):
        make_pavilion(tenant, location_x=20, location_y=30)

        response = tenant_client.post('/admin/floor-plan/hit', json={
            'building': '33', 'floor': 1,
            'click_x': 400, 'click_y': 150, 'width': 800, 'height': 500
        })
        data = response.get_json()['data']
        assert (data['x'], data['y']) == (50.0, 30.0)
        assert data['pavilion'] is None

    def test_hit_other_floor_ignored(self, tenant, tenant_client, make_pavilion):
        make_pavilion(tenant, floor=2, location_x=20, location_y=30)

        response = tenant_client.post('/admin/floor-plan/hit', json={
            'building': '33', 'floor': 1, 'x': 20, 'y': 30
        })
        assert response.get_json()['data']['pavilion'] is None

    def test_hit_without_plan(self, tenant_client):
        response = tenant_client.post('/admin/floor-plan/hit', json={
            'building': '33', 'floor': 9, 'x': 10, 'y': 10
        })
        assert response.status_code == 404

    def test_hit_bad_coordinates(self, tenant_client):
        response = tenant_client.post('/admin/floor-plan/hit', json={
            'building': '33', 'floor': 1, 'x': 'abc', 'y': 10
        })
        assert response.status_code == 400

        response = tenant_client.post('/admin/floor-plan/hit', json={
            'building': '33', 'floor': 1, 'click_x': 1, 'click_y': 1, 'width': 0, 'height': 10
        })
        assert response.status_code == 400
