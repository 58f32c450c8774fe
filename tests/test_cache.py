"""
Tests for the in-process TTL cache and the cached pavilion listing.
"""

import sqlite3
from unittest.mock import patch

from utils.cache import TTLCache


class TestTTLCache:
    """Tests for TTLCache outside an app context."""

    def test_miss_returns_none(self):
        cache = TTLCache(prefix='t_', timeout=60)
        assert cache.get('missing') is None

    def test_set_then_get(self):
        cache = TTLCache(prefix='t_', timeout=60)
        cache.set('pavilions', [{'id': 'a'}])
        assert cache.get('pavilions') == [{'id': 'a'}]

    def test_expired_entry_is_evicted_but_stale_kept(self):
        cache = TTLCache(prefix='t_', timeout=10)
        with patch('utils.cache.time.monotonic', return_value=1000.0):
            cache.set('pavilions', ['old'])
        with patch('utils.cache.time.monotonic', return_value=1011.0):
            assert cache.get('pavilions') is None
        assert cache.get_stale('pavilions') == ['old']

    def test_clear_removes_stale_too(self):
        cache = TTLCache(prefix='t_', timeout=60)
        cache.set('pavilions', ['x'])
        cache.clear('pavilions')
        assert cache.get('pavilions') is None
        assert cache.get_stale('pavilions') is None

    def test_prefix_isolates_instances(self):
        first = TTLCache(prefix='a_', timeout=60)
        second = TTLCache(prefix='b_', timeout=60)
        first.set('key', 1)
        assert second.get('key') is None

    def test_defaults_read_app_config(self, app):
        cache = TTLCache()
        with app.app_context():
            assert cache.prefix == app.config['CACHE_PREFIX']
            assert cache.timeout == app.config['CACHE_TIMEOUT']


class TestPavilionListCache:
    """Tests for the cached public pavilion list."""

    def test_list_is_cached_until_write(self, app, tenant, make_pavilion):
        from models.pavilion import get_all_pavilions
        from utils.cache import pavilion_cache

        make_pavilion(tenant, shop_name='Первый')

        with app.app_context():
            assert len(get_all_pavilions()) == 1
            assert pavilion_cache.get('pavilions') is not None

        make_pavilion(tenant, shop_name='Второй')

        with app.app_context():
            assert len(get_all_pavilions()) == 2

    def test_returned_items_are_copies(self, app, tenant, make_pavilion):
        from models.pavilion import get_all_pavilions

        make_pavilion(tenant)

        with app.app_context():
            get_all_pavilions()[0]['shop_name'] = 'Изменено'
            assert get_all_pavilions()[0]['shop_name'] == 'Модный Дом'

    def test_falls_back_to_stale_on_db_error(self, app, tenant, make_pavilion):
        from models import pavilion as pavilion_model
        from utils.cache import pavilion_cache

        make_pavilion(tenant)

        with app.app_context():
            pavilion_model.get_all_pavilions()
            # Force expiry while keeping the stale copy
            pavilion_cache._entries.clear()

            with patch.object(pavilion_model, '_load_pavilions',
                              side_effect=sqlite3.OperationalError('database is locked')):
                pavilions = pavilion_model.get_all_pavilions()

            assert [p['shop_name'] for p in pavilions] == ['Модный Дом']

    def test_init_db_clears_cache(self, app, tenant, make_pavilion):
        from database import init_db
        from models.pavilion import get_all_pavilions

        make_pavilion(tenant)

        with app.app_context():
            assert len(get_all_pavilions()) == 1
            init_db()
            assert get_all_pavilions() == []
