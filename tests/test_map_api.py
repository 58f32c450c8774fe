"""
Tests for the public map page and its JSON API.
"""


class TestMapPage:

    def test_index_renders_map(self, client):
        response = client.get('/')
        assert response.status_code == 200
        html = response.get_data(as_text=True)
        assert '<svg id="map"' in html
        assert 'id="category-chips"' in html
        assert 'Одежда' in html
        assert 'Корпус 33' in html

    def test_index_counts_page_views(self, app, client):
        from models.settings import get_page_views

        client.get('/')
        client.get('/')

        with app.app_context():
            assert get_page_views() == 2

    def test_preselected_pavilion(self, client):
        response = client.get('/?pavilion=abc-123')
        assert '"abc-123"' in response.get_data(as_text=True)


class TestMapPavilionsApi:
    """Tests for /api/map/pavilions."""

    def test_lists_public_pavilions_with_stats(self, client, tenant, other_tenant, make_pavilion):
        make_pavilion(tenant, shop_name='Модный Дом', category='clothing')
        make_pavilion(other_tenant, shop_name='Кроссовки', category='shoes')

        response = client.get('/api/map/pavilions')
        assert response.status_code == 200
        data = response.get_json()['data']
        assert data['stats'] == {'visible': 2, 'total': 2}
        assert {p['shop_name'] for p in data['pavilions']} == {'Модный Дом', 'Кроссовки'}
        assert any(c['code'] == 'clothing' for c in data['categories'])

    def test_marker_fields(self, client, tenant, make_pavilion):
        make_pavilion(tenant, location_x=20, location_y=30)

        marker = client.get('/api/map/pavilions').get_json()['data']['pavilions'][0]
        assert (marker['x'], marker['y']) == (20, 30)
        assert marker['color'] == '#E91E63'
        assert marker['category_name'] == 'Одежда'
        assert 'tenant_phone' not in marker

    def test_category_and_search_filters(self, client, tenant, other_tenant, make_pavilion):
        make_pavilion(tenant, shop_name='Модный Дом', category='clothing')
        make_pavilion(other_tenant, shop_name='Кроссовки', category='shoes')

        data = client.get('/api/map/pavilions?category=shoes').get_json()['data']
        assert [p['shop_name'] for p in data['pavilions']] == ['Кроссовки']
        assert data['stats'] == {'visible': 1, 'total': 2}

        data = client.get('/api/map/pavilions?q=модный').get_json()['data']
        assert [p['shop_name'] for p in data['pavilions']] == ['Модный Дом']

    def test_unapproved_tenants_hidden(self, app, client, tenant, make_pavilion):
        from models.tenant import update_tenant

        make_pavilion(tenant)
        with app.app_context():
            update_tenant(tenant['id'], approved=False)

        data = client.get('/api/map/pavilions').get_json()['data']
        assert data['pavilions'] == []


class TestInfoPanelApi:
    """Tests for /api/map/pavilions/<id>."""

    def test_standard_pavilion_hides_phone(self, client, tenant, make_pavilion):
        pavilion_id = make_pavilion(tenant, shop_name='Модный Дом')

        data = client.get(f'/api/map/pavilions/{pavilion_id}').get_json()['data']
        assert data['shop_name'] == 'Модный Дом'
        assert data['owner_name'] == 'Тестовый арендатор 1'
        assert data['phone'] is None
        assert data['discounts'] == []
        assert data['discounts_empty_text'] == 'Нет активных скидок'
        assert data['opening_hours']
        assert data['share']['text'] == 'Я нашёл Модный Дом в Апраксином дворе! 📍'
        assert f'/pavilion?id={pavilion_id}' in data['share']['url']

    def test_premium_pavilion_shows_phone(self, client, owner, make_pavilion):
        pavilion_id = make_pavilion(owner)

        data = client.get(f'/api/map/pavilions/{pavilion_id}').get_json()['data']
        assert data['premium'] is True
        assert data['phone'] == owner['phone']

    def test_unknown_pavilion(self, client):
        response = client.get('/api/map/pavilions/missing')
        assert response.status_code == 404
        assert response.get_json()['error'] == 'Павильон не найден'


class TestCatalogueApi:

    def test_categories(self, client):
        data = client.get('/api/categories').get_json()['data']
        assert [c['code'] for c in data][:2] == ['clothing', 'shoes']
        assert all({'name', 'color', 'icon'} <= set(c) for c in data)

    def test_health(self, client):
        response = client.get('/api/health')
        assert response.status_code == 200
        assert response.get_json()['status'] == 'ok'


class TestBannerClick:

    def test_inactive_banner_404(self, client):
        assert client.get('/banner/click').status_code == 404

    def test_click_counts_and_redirects(self, app, client):
        from models.ad_banner import update_ad_banner, get_banner_stats

        with app.app_context():
            update_ad_banner(link_url='https://example.ru/promo', is_active=True)

        response = client.get('/banner/click')
        assert response.status_code == 302
        assert response.headers['Location'] == 'https://example.ru/promo'

        with app.app_context():
            assert get_banner_stats()['clicks'] == 1
