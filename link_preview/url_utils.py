"""
URL classification and helpers.

Everything here is pure string work on the URL: no network access, so the
type and domain of a link are known even when the page cannot be fetched.
"""

import re
from typing import List, Optional
from urllib.parse import urlparse

from .config import FAVICON_SERVICE_URL, UNKNOWN_DOMAIN

# Hostname substring rules, evaluated in order
TWEET_PATTERNS = ['twitter.com', 'x.com']
VIDEO_PATTERNS = ['youtube.com', 'youtu.be']
ARTICLE_PATTERNS = ['medium.com', 'substack.com', 'blog', 'news']

LINK_TYPES = ('link', 'tweet', 'video', 'article')

URL_IN_TEXT_RE = re.compile(r'https?://[^\s]+')


def _hostname(url: str) -> Optional[str]:
    """Return the lowercase hostname, or None if the URL cannot be parsed."""
    if not isinstance(url, str) or not url:
        return None
    try:
        parsed = urlparse(url.strip())
        hostname = parsed.hostname
    except ValueError:
        return None
    if not parsed.scheme or not hostname:
        return None
    return hostname


def is_valid_url(url: str) -> bool:
    """Check that the URL is absolute http(s) with a hostname."""
    if not isinstance(url, str) or not url.strip():
        return False
    try:
        parsed = urlparse(url.strip())
        hostname = parsed.hostname
    except ValueError:
        return False
    return parsed.scheme in ('http', 'https') and bool(hostname)


def get_domain(url: str) -> str:
    """
    Extract the display domain from a URL.

    Examples:
        >>> get_domain("https://www.example.com/page")
        'example.com'

        >>> get_domain("not a url")
        'Unknown'
    """
    hostname = _hostname(url)
    if not hostname:
        return UNKNOWN_DOMAIN
    if hostname.startswith('www.'):
        hostname = hostname[len('www.'):]
    return hostname


def get_link_type(url: str) -> str:
    """Map a URL to link/tweet/video/article from its hostname."""
    hostname = _hostname(url)
    if not hostname:
        return 'link'

    for pattern in TWEET_PATTERNS:
        if pattern in hostname:
            return 'tweet'

    for pattern in VIDEO_PATTERNS:
        if pattern in hostname:
            return 'video'

    for pattern in ARTICLE_PATTERNS:
        if pattern in hostname:
            return 'article'

    return 'link'


def classify_url(url: str) -> dict:
    """Return both the link type and display domain for a URL."""
    return {'type': get_link_type(url), 'domain': get_domain(url)}


def favicon_url(domain: str) -> str:
    """Favicon service URL for a display domain."""
    return FAVICON_SERVICE_URL.format(domain=domain)


def resolve_image_url(image_url: str, page_url: str) -> str:
    """
    Make a root-relative or protocol-relative image URL absolute.

    Any other value is returned unchanged.

    Examples:
        >>> resolve_image_url("/img/a.png", "https://example.com/page")
        'https://example.com/img/a.png'

        >>> resolve_image_url("//cdn.example.com/a.png", "https://example.com/page")
        'https://cdn.example.com/a.png'
    """
    if not image_url:
        return image_url

    image_url = image_url.strip()
    if not image_url.startswith('/'):
        return image_url

    base = urlparse(page_url)
    if not base.scheme or not base.netloc:
        return image_url

    if image_url.startswith('//'):
        return f"{base.scheme}:{image_url}"
    return f"{base.scheme}://{base.netloc}{image_url}"


def extract_links_from_text(text: str) -> List[str]:
    """Find all http(s) URLs in free text, in order of appearance."""
    if not text:
        return []
    return URL_IN_TEXT_RE.findall(text)
