"""
Tests for the tenant console: dashboard and pavilion forms.
"""

import io


def pavilion_form(**overrides):
    data = {
        'building': '33',
        'floor': '2',
        'pavilion_number': '205',
        'shop_name': 'Кожа и мех',
        'category': 'clothing',
        'description': 'Дублёнки',
        'brand_color': '#112233',
        'location_x': '40.5',
        'location_y': '60',
        'entrances-0-name': 'Главный вход',
        'entrances-0-x': '41',
        'entrances-0-y': '61',
    }
    data.update(overrides)
    return data


class TestDashboard:

    def test_requires_login(self, client):
        response = client.get('/admin/')
        assert response.status_code == 302
        assert '/login' in response.headers['Location']

    def test_lists_own_pavilions_only(self, tenant, other_tenant, tenant_client, make_pavilion):
        make_pavilion(tenant, shop_name='Мой магазин')
        make_pavilion(other_tenant, shop_name='Чужой магазин')

        html = tenant_client.get('/admin/').get_data(as_text=True)
        assert 'Мой магазин' in html
        assert 'Чужой магазин' not in html


class TestPavilionCreate:
    """Tests for /admin/pavilions/new."""

    def test_form_renders(self, tenant_client):
        response = tenant_client.get('/admin/pavilions/new')
        assert response.status_code == 200
        assert 'name="shop_name"' in response.get_data(as_text=True)

    def test_create(self, app, tenant, tenant_client):
        from models.pavilion import get_pavilions_by_tenant

        response = tenant_client.post('/admin/pavilions/new', data=pavilion_form())
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/admin/')

        with app.app_context():
            pavilions = get_pavilions_by_tenant(tenant['id'])

        assert len(pavilions) == 1
        pavilion = pavilions[0]
        assert pavilion['shop_name'] == 'Кожа и мех'
        assert pavilion['floor'] == 2
        assert pavilion['location_x'] == 40.5
        assert pavilion['entrances'] == [{'name': 'Главный вход', 'x': 41.0, 'y': 61.0}]

    def test_create_with_image(self, app, tenant, tenant_client):
        from models.pavilion import get_pavilions_by_tenant

        data = pavilion_form()
        data['image'] = (io.BytesIO(b'\x89PNG fake'), 'витрина.png')
        response = tenant_client.post('/admin/pavilions/new', data=data,
                                      content_type='multipart/form-data')
        assert response.status_code == 302

        with app.app_context():
            pavilion = get_pavilions_by_tenant(tenant['id'])[0]
        assert pavilion['image_url'].startswith(f'/static/uploads/pavilions/{tenant["id"]}/')
        assert pavilion['image_url'].endswith('.png')

    def test_short_name_rejected(self, tenant_client):
        response = tenant_client.post('/admin/pavilions/new', data=pavilion_form(shop_name='К'))
        assert response.status_code == 400
        assert 'минимум 2 символа' in response.get_data(as_text=True)

    def test_bad_coordinates_rejected(self, tenant_client):
        response = tenant_client.post('/admin/pavilions/new', data=pavilion_form(location_x='140'))
        assert response.status_code == 400

    def test_bad_brand_color_rejected(self, tenant_client):
        response = tenant_client.post('/admin/pavilions/new', data=pavilion_form(brand_color='red'))
        assert response.status_code == 400

    def test_regular_tenant_additional_categories_ignored(self, app, tenant, tenant_client):
        from models.pavilion import get_pavilions_by_tenant

        tenant_client.post('/admin/pavilions/new',
                           data=pavilion_form(additional_categories=['shoes']))

        with app.app_context():
            assert get_pavilions_by_tenant(tenant['id'])[0]['additional_categories'] == []


class TestPavilionEdit:
    """Tests for /admin/pavilions/<id>/edit."""

    def test_edit_form_prefilled(self, tenant, tenant_client, make_pavilion):
        pavilion_id = make_pavilion(tenant, shop_name='Модный Дом')

        response = tenant_client.get(f'/admin/pavilions/{pavilion_id}/edit')
        assert response.status_code == 200
        assert 'value="Модный Дом"' in response.get_data(as_text=True)

    def test_edit_saves(self, app, tenant, tenant_client, make_pavilion):
        from models.pavilion import get_pavilion_by_id

        pavilion_id = make_pavilion(tenant)

        response = tenant_client.post(f'/admin/pavilions/{pavilion_id}/edit',
                                      data=pavilion_form(shop_name='Новое имя'))
        assert response.status_code == 302

        with app.app_context():
            assert get_pavilion_by_id(pavilion_id)['shop_name'] == 'Новое имя'

    def test_foreign_pavilion_forbidden(self, other_tenant, tenant_client, make_pavilion):
        pavilion_id = make_pavilion(other_tenant)

        assert tenant_client.get(f'/admin/pavilions/{pavilion_id}/edit').status_code == 403
        response = tenant_client.post(f'/admin/pavilions/{pavilion_id}/edit', data=pavilion_form())
        assert response.status_code == 403

    def test_owner_edits_any(self, tenant, owner_client, make_pavilion):
        pavilion_id = make_pavilion(tenant)
        assert owner_client.get(f'/admin/pavilions/{pavilion_id}/edit').status_code == 200

    def test_unknown_pavilion(self, tenant_client):
        assert tenant_client.get('/admin/pavilions/missing/edit').status_code == 404


class TestPavilionDelete:

    def test_delete_own(self, app, tenant, tenant_client, make_pavilion):
        from models.pavilion import get_pavilion_by_id

        pavilion_id = make_pavilion(tenant)

        response = tenant_client.post(f'/admin/pavilions/{pavilion_id}/delete')
        assert response.status_code == 302

        with app.app_context():
            assert get_pavilion_by_id(pavilion_id) is None

    def test_delete_foreign(self, other_tenant, tenant_client, make_pavilion):
        pavilion_id = make_pavilion(other_tenant)
        assert tenant_client.post(f'/admin/pavilions/{pavilion_id}/delete').status_code == 403

    def test_delete_unknown(self, tenant_client):
        assert tenant_client.post('/admin/pavilions/missing/delete').status_code == 404
