"""
Human-readable URL slugs for pavilion pages.
Russian shop names are transliterated to Latin.
"""

import re

from utils.datetime_helpers import now_millis

TRANSLIT_TABLE = {
    'а': 'a', 'б': 'b', 'в': 'v', 'г': 'g', 'д': 'd', 'е': 'e', 'ё': 'e',
    'ж': 'zh', 'з': 'z', 'и': 'i', 'й': 'y', 'к': 'k', 'л': 'l', 'м': 'm',
    'н': 'n', 'о': 'o', 'п': 'p', 'р': 'r', 'с': 's', 'т': 't', 'у': 'u',
    'ф': 'f', 'х': 'kh', 'ц': 'ts', 'ч': 'ch', 'ш': 'sh', 'щ': 'shch',
    'ъ': '', 'ы': 'y', 'ь': '', 'э': 'e', 'ю': 'yu', 'я': 'ya',
}

MAX_SLUG_SUFFIX = 9999


def transliterate(text: str) -> str:
    return ''.join(TRANSLIT_TABLE.get(char, char) for char in text)


def generate_slug(shop_name: str) -> str:
    """
    Build a slug from a shop name.

    "Модный Дом  Ёлка" -> "modnyy-dom-elka". Names with no usable
    characters fall back to 'p' + millisecond timestamp.
    """
    slug = (shop_name or '').strip().lower()
    slug = re.sub(r'\s+', '-', slug)
    slug = transliterate(slug)
    slug = re.sub(r'[^a-z0-9-]', '', slug)
    slug = re.sub(r'-+', '-', slug).strip('-')

    if not slug:
        slug = f'p{now_millis()}'

    return slug


def ensure_unique_slug(base_slug: str, pavilion_id: str = None) -> str:
    """
    Return base_slug or the first free base_slug-N.

    A slug already held by pavilion_id itself is considered free.

    Raises:
        ValueError: If base_slug-1 .. base_slug-9999 are all taken
    """
    from models.pavilion import get_slug_owner

    candidate = base_slug
    for suffix in range(0, MAX_SLUG_SUFFIX + 1):
        if suffix:
            candidate = f'{base_slug}-{suffix}'
        owner_id = get_slug_owner(candidate)
        if owner_id is None or owner_id == pavilion_id:
            return candidate

    raise ValueError('Не удалось подобрать уникальный адрес страницы')
