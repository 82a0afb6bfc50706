"""
oEmbed fallback for platforms whose pages block generic scraping.

Add platforms by appending to OEMBED_PROVIDERS.
"""

import asyncio
import logging
from typing import Optional
from urllib.parse import urlparse

import requests

from .config import OEMBED_TIMEOUT, USER_AGENT

logger = logging.getLogger(__name__)

# (hostname patterns, endpoint)
OEMBED_PROVIDERS = [
    (('youtube.com', 'youtu.be'), 'https://www.youtube.com/oembed'),
]


def get_oembed_endpoint(url: str) -> Optional[str]:
    """Return the oEmbed endpoint for a URL's platform, or None if unsupported."""
    try:
        hostname = (urlparse(url).hostname or '').lower()
    except ValueError:
        return None

    for patterns, endpoint in OEMBED_PROVIDERS:
        if any(pattern in hostname for pattern in patterns):
            return endpoint
    return None


def fetch_oembed(url: str) -> dict:
    """
    Fetch title and thumbnail from the platform oEmbed endpoint.

    Returns:
        Dict with 'title' and/or 'image' when available. Unsupported
        platforms, HTTP errors, network errors and bad JSON all give {}.
    """
    endpoint = get_oembed_endpoint(url)
    if not endpoint:
        return {}

    try:
        response = requests.get(
            endpoint,
            params={'url': url, 'format': 'json'},
            headers={'User-Agent': USER_AGENT},
            timeout=OEMBED_TIMEOUT
        )
        if not 200 <= response.status_code < 300:
            logger.warning("oEmbed returned HTTP %s for %s", response.status_code, url)
            return {}
        data = response.json()
    except requests.exceptions.RequestException as e:
        logger.warning("oEmbed request failed for %s: %s", url, e)
        return {}
    except ValueError as e:
        logger.warning("oEmbed returned invalid JSON for %s: %s", url, e)
        return {}

    if not isinstance(data, dict):
        return {}

    result = {}
    title = data.get('title')
    if isinstance(title, str) and title.strip():
        result['title'] = title.strip()
    thumbnail = data.get('thumbnail_url')
    if isinstance(thumbnail, str) and thumbnail.strip():
        result['image'] = thumbnail.strip()
    return result


async def async_fetch_oembed(url: str) -> dict:
    """fetch_oembed() run in a worker thread."""
    return await asyncio.to_thread(fetch_oembed, url)
