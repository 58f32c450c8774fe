"""
Advertising banner shown on pavilion pages.
A single row is used; the superadmin edits and toggles it.
"""

import logging

from database import get_db

logger = logging.getLogger(__name__)


def get_ad_banner() -> dict:
    """
    Get the banner row, creating an inactive one if the table is empty.

    Returns:
        Banner dict
    """
    db = get_db()
    row = db.execute('SELECT * FROM ad_banners ORDER BY id LIMIT 1').fetchone()
    if row:
        return dict(row)

    with db:
        db.execute("INSERT INTO ad_banners (html_code, is_active) VALUES ('', 0)")
    row = db.execute('SELECT * FROM ad_banners ORDER BY id LIMIT 1').fetchone()
    return dict(row)


def get_active_banner() -> dict:
    """The banner if it is active and has something to show, else None."""
    banner = get_ad_banner()
    if banner['is_active'] and (banner['image_url'] or banner['html_code']):
        return banner
    return None


def update_ad_banner(**kwargs) -> bool:
    """
    Update banner fields.

    Args:
        **kwargs: image_url, html_code, link_url, is_active

    Returns:
        True if updated
    """
    allowed_fields = ['image_url', 'html_code', 'link_url', 'is_active']
    updates = []
    values = []

    for field in allowed_fields:
        if field in kwargs:
            value = kwargs[field]
            if field == 'is_active':
                value = 1 if value else 0
            updates.append(f'{field} = ?')
            values.append(value)

    if not updates:
        return False

    banner = get_ad_banner()
    values.append(banner['id'])

    with get_db() as conn:
        cursor = conn.execute(
            f'UPDATE ad_banners SET {", ".join(updates)}, updated_at = CURRENT_TIMESTAMP WHERE id = ?',
            values
        )
        return cursor.rowcount > 0


def activate_banner() -> bool:
    return update_ad_banner(is_active=True)


def deactivate_banner() -> bool:
    return update_ad_banner(is_active=False)


def record_impression(banner_id: int) -> None:
    with get_db() as conn:
        conn.execute('UPDATE ad_banners SET impressions = impressions + 1 WHERE id = ?', (banner_id,))


def record_click(banner_id: int) -> None:
    with get_db() as conn:
        conn.execute('UPDATE ad_banners SET clicks = clicks + 1 WHERE id = ?', (banner_id,))


def calculate_ctr(impressions: int, clicks: int) -> str:
    """Click-through rate as '1.23%', or '0%' without impressions."""
    if not impressions:
        return '0%'
    return '%.2f%%' % (clicks / impressions * 100)


def get_banner_stats() -> dict:
    """
    Banner performance counters.

    Returns:
        Dict with impressions, clicks and ctr
    """
    banner = get_ad_banner()
    impressions = banner['impressions'] or 0
    clicks = banner['clicks'] or 0
    return {
        'impressions': impressions,
        'clicks': clicks,
        'ctr': calculate_ctr(impressions, clicks),
    }
