"""
Tests for helper functions: dates, ids, links and uploads.
"""

import io
import re

import pytest
from werkzeug.datastructures import FileStorage

from utils.helpers import (
    format_date, generate_discount_id, get_file_extension,
    whatsapp_link, route_link, save_upload
)


class TestFormatDate:

    def test_iso_date(self):
        assert format_date('2026-03-08') == '08.03.2026'

    def test_datetime_string(self):
        assert format_date('2026-03-08T12:30:00+03:00') == '08.03.2026'

    def test_invalid_returned_as_is(self):
        assert format_date('завтра') == 'завтра'
        assert format_date(None) == ''


class TestGenerateDiscountId:

    def test_format(self):
        assert re.fullmatch(r'\d{13,}_[0-9a-z]{9}', generate_discount_id())

    def test_unique(self):
        assert len({generate_discount_id() for _ in range(50)}) == 50


class TestLinks:

    def test_whatsapp_link_uses_digits_only(self):
        assert whatsapp_link('+7 (964) 396-81-40') == 'https://wa.me/79643968140'

    def test_whatsapp_link_encodes_text(self):
        link = whatsapp_link('+79643968140', 'Привет мир')
        assert link.startswith('https://wa.me/79643968140?text=')
        assert ' ' not in link

    def test_route_link_puts_y_first(self):
        assert route_link(20.5, 30) == 'https://www.google.com/maps/dir/?api=1&destination=30,20.5'

    def test_route_link_without_coordinates(self):
        assert route_link(None, 30) is None
        assert route_link(20, None) is None


class TestSaveUpload:
    """Tests for save_upload (UPLOAD_FOLDER points at tmp_path in tests)."""

    def _file(self, name, size):
        return FileStorage(stream=io.BytesIO(b'x' * size), filename=name)

    def test_saves_file_and_returns_public_url(self, app):
        with app.test_request_context():
            url = save_upload(self._file('logo.png', 100), 'banners', 1024)

        assert re.fullmatch(r'/static/uploads/banners/\d+_logo\.png', url)
        stored = url.rsplit('/', 1)[1]
        with open(f"{app.config['UPLOAD_FOLDER']}/banners/{stored}", 'rb') as f:
            assert len(f.read()) == 100

    def test_cyrillic_name_keeps_extension(self, app):
        with app.test_request_context():
            url = save_upload(self._file('фото.jpg', 10), 'pavilions/t1', 1024)
        assert url.endswith('_image.jpg')

    def test_rejects_bad_extension(self, app):
        with app.test_request_context():
            with pytest.raises(ValueError, match='формат'):
                save_upload(self._file('script.exe', 10), 'banners', 1024)

    def test_rejects_too_large(self, app):
        with app.test_request_context():
            with pytest.raises(ValueError, match='большой'):
                save_upload(self._file('big.png', 2048), 'banners', 1024)

    def test_rejects_missing_file(self, app):
        with app.test_request_context():
            with pytest.raises(ValueError):
                save_upload(self._file('', 10), 'banners', 1024)

    def test_file_extension(self):
        assert get_file_extension('Photo.JPEG') == 'jpeg'
        assert get_file_extension('noext') == ''
