"""
Tests for the public pavilion page (by id and by slug).
"""


class TestPavilionById:
    """Tests for /pavilion?id=..."""

    def test_standard_pavilion_renders(self, client, tenant, make_pavilion):
        pavilion_id = make_pavilion(tenant, shop_name='Модный Дом', description='Пальто и куртки')

        response = client.get(f'/pavilion?id={pavilion_id}')
        assert response.status_code == 200
        html = response.get_data(as_text=True)
        assert 'Модный Дом' in html
        assert 'Пальто и куртки' in html
        assert 'Показать на карте' in html
        assert 'Поделиться' in html
        # Premium-only sections
        assert 'Контакты' not in html
        assert 'Скидки' not in html

    def test_premium_pavilion_redirects_to_slug(self, app, client, owner, make_pavilion):
        from models.pavilion import get_pavilion_by_id

        pavilion_id = make_pavilion(owner, shop_name='Модный Дом')

        response = client.get(f'/pavilion?id={pavilion_id}')
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/pavilion/modnyy-dom')

        with app.app_context():
            assert get_pavilion_by_id(pavilion_id)['slug'] == 'modnyy-dom'

    def test_premium_renders_when_no_slug_is_free(self, app, client, owner, make_pavilion, monkeypatch):
        import blueprints.pavilion.services
        from models.pavilion import get_pavilion_by_id

        def taken(base_slug, pavilion_id=None):
            raise ValueError(f'No free slug for {base_slug}')

        monkeypatch.setattr(blueprints.pavilion.services, 'ensure_unique_slug', taken)
        pavilion_id = make_pavilion(owner, shop_name='Модный Дом')

        response = client.get(f'/pavilion?id={pavilion_id}')
        assert response.status_code == 200
        assert 'Модный Дом' in response.get_data(as_text=True)

        with app.app_context():
            assert get_pavilion_by_id(pavilion_id)['slug'] is None

    def test_missing_id(self, client):
        assert client.get('/pavilion').status_code == 404

    def test_unknown_id(self, client):
        response = client.get('/pavilion?id=missing')
        assert response.status_code == 404
        assert 'Павильон не найден' in response.get_data(as_text=True)

    def test_unapproved_owner_hidden(self, app, client, tenant, make_pavilion):
        from models.tenant import update_tenant

        pavilion_id = make_pavilion(tenant)
        with app.app_context():
            update_tenant(tenant['id'], approved=False)

        assert client.get(f'/pavilion?id={pavilion_id}').status_code == 404


class TestPavilionBySlug:
    """Tests for /pavilion/<slug>."""

    def test_premium_sections(self, app, client, owner, make_pavilion):
        from models.discount import add_discount

        pavilion_id = make_pavilion(owner, shop_name='Модный Дом', additional_categories=['shoes'])
        with app.app_context():
            add_discount(owner, pavilion_id, {'title': 'Минус 30% на пальто'})

        response = client.get(f'/pavilion?id={pavilion_id}', follow_redirects=True)
        assert response.status_code == 200
        html = response.get_data(as_text=True)
        assert 'Премиум' in html
        assert 'Обувь' in html
        assert 'Минус 30% на пальто' in html
        assert f'tel:{owner["phone"]}' in html
        assert 'https://wa.me/' in html

    def test_premium_without_discounts(self, client, owner, make_pavilion):
        pavilion_id = make_pavilion(owner, shop_name='Пустой')

        response = client.get(f'/pavilion?id={pavilion_id}', follow_redirects=True)
        assert 'Скидок нет' in response.get_data(as_text=True)

    def test_unknown_slug(self, client):
        assert client.get('/pavilion/no-such-shop').status_code == 404


class TestBannerImpressions:

    def test_active_banner_counts_impression(self, app, client, tenant, make_pavilion):
        from models.ad_banner import update_ad_banner, get_banner_stats

        pavilion_id = make_pavilion(tenant)
        with app.app_context():
            update_ad_banner(html_code='<b>Распродажа</b>', link_url='https://example.ru', is_active=True)

        html = client.get(f'/pavilion?id={pavilion_id}').get_data(as_text=True)
        assert '<b>Распродажа</b>' in html
        assert '/banner/click' in html

        with app.app_context():
            assert get_banner_stats()['impressions'] == 1

    def test_inactive_banner_not_shown(self, app, client, tenant, make_pavilion):
        from models.ad_banner import update_ad_banner, get_banner_stats

        pavilion_id = make_pavilion(tenant)
        with app.app_context():
            update_ad_banner(html_code='<b>Распродажа</b>', is_active=False)

        html = client.get(f'/pavilion?id={pavilion_id}').get_data(as_text=True)
        assert 'Распродажа' not in html

        with app.app_context():
            assert get_banner_stats()['impressions'] == 0


class TestShareApi:
    """Tests for /api/pavilions/<id>/share."""

    def test_standard_pavilion_not_counted(self, client, tenant, make_pavilion):
        pavilion_id = make_pavilion(tenant)

        response = client.post(f'/api/pavilions/{pavilion_id}/share')
        assert response.status_code == 200
        data = response.get_json()['data']
        assert data['share_count'] == 0
        assert f'/pavilion?id={pavilion_id}' in data['url']

    def test_premium_pavilion_counted(self, client, owner, make_pavilion):
        pavilion_id = make_pavilion(owner, shop_name='Модный Дом')

        client.post(f'/api/pavilions/{pavilion_id}/share')
        data = client.post(f'/api/pavilions/{pavilion_id}/share').get_json()['data']
        assert data['share_count'] == 2
        assert f'/pavilion?id={pavilion_id}' in data['url']
        assert 'Модный Дом' in data['text']

    def test_unknown_pavilion(self, client):
        assert client.post('/api/pavilions/missing/share').status_code == 404
