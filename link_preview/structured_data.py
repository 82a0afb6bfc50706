"""
JSON-LD structured data extraction.

Only the first application/ld+json block of a page is read. The block is
interpreted by its schema.org @type, and only articles, videos, products and
web pages produce fields.
"""

import json
import logging
import re
from typing import Any, Optional, Union

from bs4 import BeautifulSoup

from .html_meta import parse_html
from .url_utils import resolve_image_url

logger = logging.getLogger(__name__)

LD_JSON_TYPE_RE = re.compile(r'application/ld\+json', re.I)
COMMENT_MARKERS_RE = re.compile(r'<!--|-->|<!\[CDATA\[|\]\]>')

ARTICLE_TYPES = ('article', 'blogposting', 'newsarticle')


def _text(value: Any) -> Optional[str]:
    """Non-empty stripped string, or None for anything else."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return None


def _first_text(node: dict, *keys: str) -> Optional[str]:
    for key in keys:
        value = _text(node.get(key))
        if value:
            return value
    return None


def _image_value(value: Any) -> Optional[str]:
    """
    Pull an image URL out of the shapes schema.org allows.

    Handles a plain string, an ImageObject with a url, and a list of either
    (first element wins).
    """
    if isinstance(value, list):
        return _image_value(value[0]) if value else None
    if isinstance(value, dict):
        return _text(value.get('url')) or _text(value.get('contentUrl'))
    return _text(value)


def _schema_type(node: dict) -> str:
    declared = node.get('@type', '')
    if isinstance(declared, list):
        declared = ' '.join(str(t) for t in declared)
    return str(declared).lower()


def _offer_price(offers: Any) -> Optional[str]:
    """Format the first offer price as 'Precio: {price} {currency}'."""
    if isinstance(offers, list):
        offers = offers[0] if offers else None
    if not isinstance(offers, dict):
        return None

    price = offers.get('price')
    if price in (None, ''):
        price = offers.get('lowPrice')
    if price in (None, ''):
        return None

    currency = offers.get('priceCurrency') or ''
    return f"Precio: {price} {currency}".strip()


def interpret_node(node: Any) -> dict:
    """
    Map one JSON-LD object to title/description/image by its @type.

    Unrecognized types (and non-objects) produce an empty dict.
    """
    if not isinstance(node, dict):
        return {}

    schema_type = _schema_type(node)
    result = {}

    if any(t in schema_type for t in ARTICLE_TYPES):
        result['title'] = _first_text(node, 'headline', 'name')
        result['description'] = _first_text(node, 'description', 'abstract')
        result['image'] = _image_value(node.get('image')) or _image_value(node.get('thumbnailUrl'))

    elif 'video' in schema_type:
        result['title'] = _first_text(node, 'name')
        result['description'] = _first_text(node, 'description')
        result['image'] = _image_value(node.get('thumbnailUrl')) or _image_value(node.get('image'))

    elif 'product' in schema_type:
        result['title'] = _first_text(node, 'name')
        result['description'] = _first_text(node, 'description') or _offer_price(node.get('offers'))
        result['image'] = _image_value(node.get('image'))

    elif 'webpage' in schema_type:
        result['title'] = _first_text(node, 'name')
        result['description'] = _first_text(node, 'description')

    return {key: value for key, value in result.items() if value}


def load_structured_data(soup: BeautifulSoup) -> Any:
    """Parse the first ld+json block of the page, or None if absent/invalid."""
    script = soup.find('script', attrs={'type': LD_JSON_TYPE_RE})
    if not script:
        return None

    raw = COMMENT_MARKERS_RE.sub('', script.string or script.get_text() or '').strip()
    if not raw:
        return None

    try:
        return json.loads(raw)
    except ValueError as e:
        logger.debug("Discarding malformed structured data: %s", e)
        return None


def extract_structured_data(html: Union[str, BeautifulSoup, None], url: str) -> dict:
    """
    Extract title, description and image from the page's JSON-LD.

    A list (or an @graph container) is scanned in order and the first
    candidate that yields any field wins.

    Returns:
        Dict holding only non-empty fields. Never raises.
    """
    soup = parse_html(html)
    if not soup:
        return {}

    data = load_structured_data(soup)
    if data is None:
        return {}

    if isinstance(data, dict) and isinstance(data.get('@graph'), list) and '@type' not in data:
        data = data['@graph']

    candidates = data if isinstance(data, list) else [data]

    for candidate in candidates:
        result = interpret_node(candidate)
        if result:
            if result.get('image'):
                result['image'] = resolve_image_url(result['image'], url)
            return result

    return {}
