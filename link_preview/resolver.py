"""
Link preview pipeline.

resolve_link() turns a URL into a fully populated LinkMetadata record:

1. Validate the URL
2. Fetch the page
3. Read HTML meta tags, then let non-empty JSON-LD fields override them
4. Ask oEmbed when no image was found
5. Fill domain, type, favicon and a readable description

Does NOT:
- Raise to the caller (every failure becomes a fallback record)
- Persist anything (callers own the returned record)
"""

import asyncio
import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Iterable, List, Optional, Tuple

import requests
from bs4.dammit import EncodingDetector

from .config import (
    ACCEPT_LANGUAGE,
    FETCH_TIMEOUT,
    NO_DESCRIPTION,
    PREVIEW_UNAVAILABLE,
    USER_AGENT,
)
from .description_utils import humanize_description
from .html_meta import extract_html_metadata, parse_html
from .oembed import async_fetch_oembed
from .structured_data import extract_structured_data
from .url_utils import favicon_url, get_domain, get_link_type, is_valid_url

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class LinkMetadata:
    """Display-ready preview of a link."""
    url: str
    title: str
    description: str
    favicon: str
    type: str
    domain: str
    image: Optional[str] = None
    timestamp: int = field(default_factory=_now_ms)

    def to_dict(self) -> dict:
        """JSON shape of the record; 'image' is left out when absent."""
        data = asdict(self)
        if data['image'] is None:
            del data['image']
        return data


def build_fallback_metadata(url: str) -> LinkMetadata:
    """Degraded record used whenever the page cannot be resolved."""
    domain = get_domain(url)
    return LinkMetadata(
        url=url,
        title=domain,
        description=PREVIEW_UNAVAILABLE,
        favicon=favicon_url(domain),
        type=get_link_type(url),
        domain=domain,
    )


def _declared_encoding(content: bytes) -> Optional[str]:
    """Charset from the page's own <meta> or XML declaration, if any."""
    return EncodingDetector.find_declared_encoding(content, is_html=True)


def fetch_webpage(url: str) -> Tuple[Optional[str], Optional[str]]:
    """Fetch webpage content. Returns (html, error)."""
    try:
        headers = {
            'User-Agent': USER_AGENT,
            'Accept-Language': ACCEPT_LANGUAGE,
        }

        response = requests.get(url, headers=headers, timeout=FETCH_TIMEOUT, allow_redirects=True)
        if not 200 <= response.status_code < 300:
            return None, f'HTTP error: {response.status_code}'

        if 'charset' not in response.headers.get('Content-Type', '').lower():
            response.encoding = _declared_encoding(response.content) or response.apparent_encoding

        return response.text, None

    except requests.exceptions.Timeout:
        return None, 'Request timed out'
    except requests.exceptions.RequestException as e:
        return None, f'Request failed: {str(e)}'


def merge_metadata(html_meta: dict, structured: dict) -> dict:
    """Overlay structured-data fields on HTML meta, non-empty values only."""
    merged = dict(html_meta)
    for key, value in structured.items():
        if value:
            merged[key] = value
    return merged


def build_metadata(url: str, extracted: dict) -> LinkMetadata:
    """Fill defaults around the extracted fields and freeze the record."""
    domain = get_domain(url)
    raw_description = extracted.get('description')
    description = humanize_description(raw_description) or raw_description or NO_DESCRIPTION

    return LinkMetadata(
        url=url,
        title=extracted.get('title') or domain,
        description=description,
        image=extracted.get('image') or None,
        favicon=extracted.get('favicon') or favicon_url(domain),
        type=get_link_type(url),
        domain=domain,
    )


async def _resolve(url: str) -> LinkMetadata:
    html, fetch_error = await asyncio.to_thread(fetch_webpage, url)
    if fetch_error:
        logger.warning("Fetch failed for %s: %s", url, fetch_error)
        return build_fallback_metadata(url)

    soup = parse_html(html)
    extracted = merge_metadata(
        extract_html_metadata(soup, url),
        extract_structured_data(soup, url)
    )

    if not extracted.get('image'):
        oembed = await async_fetch_oembed(url)
        if oembed.get('image'):
            extracted['image'] = oembed['image']
        if oembed.get('title') and not extracted.get('title'):
            extracted['title'] = oembed['title']

    return build_metadata(url, extracted)


async def resolve_link(url: str) -> LinkMetadata:
    """
    Resolve a URL into preview metadata.

    Never raises: invalid URLs, fetch failures and unexpected errors all
    produce the fallback record, which still carries the correct type,
    domain and favicon.
    """
    if not is_valid_url(url):
        logger.info("Invalid URL, using fallback preview: %r", url)
        return build_fallback_metadata(url)

    try:
        return await _resolve(url)
    except Exception:
        logger.exception("Link resolution failed for %s", url)
        return build_fallback_metadata(url)


async def resolve_links(urls: Iterable[str]) -> List[LinkMetadata]:
    """Resolve many URLs concurrently. Results follow the input order."""
    return list(await asyncio.gather(*(resolve_link(url) for url in urls)))
