"""
In-process TTL cache for public read paths.

The pavilion list is read on every map request and changes rarely, so it is
kept in memory for CACHE_TIMEOUT seconds. Writes clear the key explicitly.

Usage:
    from utils.cache import pavilion_cache

    cached = pavilion_cache.get('pavilions')
    if cached is None:
        cached = load_pavilions()
        pavilion_cache.set('pavilions', cached)
"""

import logging
import threading
import time

from flask import current_app, has_app_context

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = 'aprashka_cache_'
DEFAULT_TIMEOUT = 60 * 60


class TTLCache:
    """Thread-safe key/value store whose entries expire after a fixed TTL."""

    def __init__(self, prefix: str = None, timeout: int = None):
        self._prefix = prefix
        self._timeout = timeout
        self._entries = {}
        # Last value per key, kept after expiry for fallback reads
        self._stale = {}
        self._lock = threading.Lock()

    @property
    def prefix(self) -> str:
        if self._prefix is not None:
            return self._prefix
        if has_app_context():
            return current_app.config.get('CACHE_PREFIX', DEFAULT_PREFIX)
        return DEFAULT_PREFIX

    @property
    def timeout(self) -> int:
        if self._timeout is not None:
            return self._timeout
        if has_app_context():
            return current_app.config.get('CACHE_TIMEOUT', DEFAULT_TIMEOUT)
        return DEFAULT_TIMEOUT

    def _key(self, key: str) -> str:
        return f'{self.prefix}{key}'

    def get(self, key: str):
        """
        Return the cached value, or None when missing or expired.

        Expired entries are evicted on read.
        """
        full_key = self._key(key)
        with self._lock:
            entry = self._entries.get(full_key)
            if entry is None:
                logger.debug('Cache miss: %s', full_key)
                return None
            if time.monotonic() - entry['ts'] > self.timeout:
                del self._entries[full_key]
                logger.debug('Cache expired: %s', full_key)
                return None
            logger.debug('Cache hit: %s', full_key)
            return entry['data']

    def get_stale(self, key: str):
        """Return the last stored value regardless of age (None if never set)."""
        with self._lock:
            return self._stale.get(self._key(key))

    def set(self, key: str, value) -> None:
        full_key = self._key(key)
        with self._lock:
            self._entries[full_key] = {'ts': time.monotonic(), 'data': value}
            self._stale[full_key] = value

    def clear(self, key: str) -> None:
        full_key = self._key(key)
        with self._lock:
            self._entries.pop(full_key, None)
            self._stale.pop(full_key, None)

    def clear_all(self) -> None:
        with self._lock:
            self._entries.clear()
            self._stale.clear()


# Shared instance for pavilion listings
pavilion_cache = TTLCache()
