"""Timezone-aware date/time helpers for the Aprashka map."""

import time
from datetime import date, datetime
from zoneinfo import ZoneInfo

from flask import current_app


def get_timezone() -> ZoneInfo:
    """Get the configured timezone."""
    tz_name = current_app.config.get('TIMEZONE', 'Europe/Moscow')
    return ZoneInfo(tz_name)


def get_today() -> date:
    """Get today's date in the configured timezone."""
    return datetime.now(get_timezone()).date()


def get_now() -> datetime:
    """Get current datetime in the configured timezone."""
    return datetime.now(get_timezone())


def now_iso() -> str:
    """Current datetime as an ISO-8601 string (stored in JSON sub-records)."""
    return get_now().isoformat(timespec='seconds')


def now_millis() -> int:
    """Milliseconds since the epoch, used for ids and upload file names."""
    return int(time.time() * 1000)
