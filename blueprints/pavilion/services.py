"""
Presentation logic shared by the public map, the pavilion page and the API.
Premium gating, slugs and share payloads live here.
"""

import logging
from flask import current_app, url_for

from models.discount import get_active_discounts
from models.pavilion import set_pavilion_slug
from utils.helpers import whatsapp_link, route_link
from utils.messages import MESSAGES, get_message
from utils.slug import generate_slug, ensure_unique_slug

logger = logging.getLogger(__name__)


def ensure_pavilion_slug(pavilion: dict) -> str:
    """
    Give a premium pavilion a persistent slug on first display.

    Returns:
        The slug, or None for standard pavilions, nameless shops and
        names whose slug variants are all taken
    """
    if pavilion.get('slug'):
        return pavilion['slug']

    if not pavilion.get('premium') or not (pavilion.get('shop_name') or '').strip():
        return None

    try:
        slug = ensure_unique_slug(generate_slug(pavilion['shop_name']), pavilion['id'])
    except ValueError as e:
        logger.warning('No slug for pavilion %s: %s', pavilion['id'], e)
        return None

    set_pavilion_slug(pavilion['id'], slug)
    pavilion['slug'] = slug
    logger.info('Pavilion %s got slug %s', pavilion['id'], slug)
    return slug


def pavilion_url(pavilion: dict, external: bool = True) -> str:
    """Slug URL for premium pavilions that have one, id URL otherwise."""
    if pavilion.get('premium') and pavilion.get('slug'):
        return url_for('pavilion.by_slug', slug=pavilion['slug'], _external=external)
    return url_for('pavilion.by_id', id=pavilion['id'], _external=external)


def map_marker(pavilion: dict, categories: dict) -> dict:
    """Public fields for a map marker."""
    category = categories.get(pavilion.get('category')) or {}
    return {
        'id': pavilion['id'],
        'shop_name': pavilion.get('shop_name'),
        'pavilion_number': pavilion.get('pavilion_number'),
        'building': pavilion.get('building'),
        'floor': pavilion.get('floor'),
        'category': pavilion.get('category'),
        'category_name': category.get('name', pavilion.get('category')),
        'color': category.get('color', '#9E9E9E'),
        'icon': category.get('icon', ''),
        'brand_color': pavilion.get('brand_color'),
        'x': pavilion.get('location_x'),
        'y': pavilion.get('location_y'),
        'premium': bool(pavilion.get('premium')),
        'slug': pavilion.get('slug'),
        'tenant_name': pavilion.get('tenant_name'),
    }


def info_panel(pavilion: dict, categories: dict) -> dict:
    """
    Info panel payload for a map click.

    The phone is only exposed for premium pavilions.
    """
    category = categories.get(pavilion.get('category')) or {}
    discounts = get_active_discounts(pavilion)
    shop_name = pavilion.get('shop_name') or ''

    return {
        'id': pavilion['id'],
        'shop_name': shop_name,
        'pavilion_number': pavilion.get('pavilion_number'),
        'building': pavilion.get('building'),
        'floor': pavilion.get('floor'),
        'category': pavilion.get('category'),
        'category_name': category.get('name', pavilion.get('category')),
        'owner_name': pavilion.get('tenant_name'),
        'phone': pavilion.get('tenant_phone') if pavilion.get('premium') else None,
        'premium': bool(pavilion.get('premium')),
        'discounts': discounts,
        'discounts_empty_text': None if discounts else MESSAGES['no_discounts'],
        'opening_hours': current_app.config.get('COMPLEX_OPENING_HOURS'),
        'page_url': pavilion_url(pavilion),
        'share': {
            'text': get_message('share_map_text', name=shop_name),
            'url': pavilion_url(pavilion),
        },
    }


def page_context(pavilion: dict, categories: dict) -> dict:
    """Template context for the pavilion page, with premium-only sections."""
    premium = bool(pavilion.get('premium'))
    category = categories.get(pavilion.get('category')) or {}

    context = {
        'pavilion': pavilion,
        'premium': premium,
        'category': category,
        'additional_categories': [],
        'discounts': [],
        'contacts': None,
        'map_url': url_for('map.index', pavilion=pavilion['id']),
        'route_url': route_link(pavilion.get('location_x'), pavilion.get('location_y')),
        'share_url': pavilion_url(pavilion),
    }

    if premium:
        context['additional_categories'] = [
            categories[code] for code in pavilion.get('additional_categories') or []
            if code in categories
        ]
        context['discounts'] = get_active_discounts(pavilion)
        phone = pavilion.get('tenant_phone')
        if phone:
            context['contacts'] = {
                'phone': phone,
                'tel_url': f'tel:{phone}',
                'whatsapp_url': whatsapp_link(
                    phone, get_message('whatsapp_text', name=pavilion.get('shop_name') or '')
                ),
            }

    return context


def share_payload(pavilion: dict) -> dict:
    """Text and URL for the share button on the pavilion page."""
    return {
        'url': pavilion_url(pavilion),
        'text': get_message(
            'share_page_text',
            name=pavilion.get('shop_name') or '',
            app_name=current_app.config.get('APP_NAME', 'Карта Апрашки')
        ),
    }
