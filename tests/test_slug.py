"""
Tests for slug generation and uniqueness.
"""

import re
from unittest.mock import patch

import pytest
from utils.slug import generate_slug, transliterate, ensure_unique_slug


class TestGenerateSlug:
    """Tests for generate_slug."""

    def test_transliterates_cyrillic(self):
        assert generate_slug('Модный Дом') == 'modnyy-dom'

    def test_special_letters(self):
        assert transliterate('ёжхцщъьюя') == 'ezhkhtsshchyuya'
        assert generate_slug('Щука и Ёж') == 'shchuka-i-ezh'

    def test_whitespace_and_punctuation(self):
        assert generate_slug('  Обувь   №1!  ') == 'obuv-1'
        assert generate_slug('Sport & Style') == 'sport-style'

    def test_collapses_and_trims_dashes(self):
        assert generate_slug('--Кожа -- и мех--') == 'kozha-i-mekh'

    def test_empty_falls_back_to_timestamp(self):
        assert re.fullmatch(r'p\d{13,}', generate_slug('!!!'))
        assert re.fullmatch(r'p\d{13,}', generate_slug(''))


class TestEnsureUniqueSlug:
    """Tests for ensure_unique_slug against the pavilions table."""

    def test_free_slug_is_kept(self, app):
        with app.app_context():
            assert ensure_unique_slug('modnyy-dom') == 'modnyy-dom'

    def test_taken_slug_gets_suffix(self, app, owner, make_pavilion):
        from models.pavilion import set_pavilion_slug

        first = make_pavilion(owner)
        second = make_pavilion(owner)

        with app.app_context():
            set_pavilion_slug(first, 'modnyy-dom')
            assert ensure_unique_slug('modnyy-dom', second) == 'modnyy-dom-1'
            set_pavilion_slug(second, 'modnyy-dom-1')
            assert ensure_unique_slug('modnyy-dom') == 'modnyy-dom-2'

    def test_own_slug_counts_as_free(self, app, owner, make_pavilion):
        from models.pavilion import set_pavilion_slug

        pavilion_id = make_pavilion(owner)

        with app.app_context():
            set_pavilion_slug(pavilion_id, 'modnyy-dom')
            assert ensure_unique_slug('modnyy-dom', pavilion_id) == 'modnyy-dom'

    def test_gives_up_after_max_suffix(self, app):
        with app.app_context():
            with patch('models.pavilion.get_slug_owner', return_value='someone-else'):
                with pytest.raises(ValueError):
                    ensure_unique_slug('busy')
