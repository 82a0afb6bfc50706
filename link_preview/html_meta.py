"""
HTML metadata extraction.

Reads Open Graph, Twitter card and standard meta tags from a page. Each field
takes the first source, in precedence order, that has a non-empty value.
"""

import logging
from typing import Optional, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from .url_utils import resolve_image_url

logger = logging.getLogger(__name__)

ICON_RELS = ('icon', 'apple-touch-icon')


def parse_html(html: Union[str, BeautifulSoup, None]) -> Optional[BeautifulSoup]:
    """Parse raw HTML, passing an already-parsed soup through."""
    if html is None:
        return None
    if isinstance(html, BeautifulSoup):
        return html
    try:
        return BeautifulSoup(html, 'html.parser')
    except Exception as e:
        logger.debug("HTML parse failed: %s", e)
        return None


def _meta_content(soup: BeautifulSoup, **attrs) -> Optional[str]:
    """Content of the first matching <meta> tag with a non-empty value."""
    for tag in soup.find_all('meta', attrs=attrs):
        content = (tag.get('content') or '').strip()
        if content:
            return content
    return None


def _title_text(soup: BeautifulSoup) -> Optional[str]:
    title_tag = soup.find('title')
    if not title_tag:
        return None
    return title_tag.get_text(strip=True) or None


def _icon_href(soup: BeautifulSoup, page_url: str) -> Optional[str]:
    """First declared page icon, made absolute against the page URL."""
    for wanted in ICON_RELS:
        for link in soup.find_all('link', href=True):
            rels = [r.lower() for r in (link.get('rel') or [])]
            if wanted in rels:
                href = link['href'].strip()
                if href:
                    return urljoin(page_url, href)
    return None


def extract_html_metadata(html: Union[str, BeautifulSoup, None], url: str) -> dict:
    """
    Extract title, description, image and favicon from page meta tags.

    Precedence:
        title:       og:title, twitter:title, <title>
        description: og:description, twitter:description,
                     meta name=description, meta property=description
        image:       og:image, twitter:image (name or property)

    Returns:
        Dict holding only the fields that were found. Never raises.
    """
    metadata = {}

    soup = parse_html(html)
    if not soup:
        return metadata

    title = (
        _meta_content(soup, property='og:title') or
        _meta_content(soup, name='twitter:title') or
        _title_text(soup)
    )
    if title:
        metadata['title'] = title

    description = (
        _meta_content(soup, property='og:description') or
        _meta_content(soup, name='twitter:description') or
        _meta_content(soup, name='description') or
        _meta_content(soup, property='description')
    )
    if description:
        metadata['description'] = description

    image = (
        _meta_content(soup, property='og:image') or
        _meta_content(soup, name='twitter:image') or
        _meta_content(soup, property='twitter:image')
    )
    if image:
        metadata['image'] = resolve_image_url(image, url)

    favicon = _icon_href(soup, url)
    if favicon:
        metadata['favicon'] = favicon

    return metadata
