"""Link preview resolution: URL in, display-ready metadata out."""

from .url_utils import (
    LINK_TYPES,
    classify_url,
    extract_links_from_text,
    favicon_url,
    get_domain,
    get_link_type,
    is_valid_url,
    resolve_image_url,
)

from .html_meta import extract_html_metadata
from .structured_data import extract_structured_data
from .oembed import fetch_oembed, async_fetch_oembed
from .description_utils import humanize_description

from .resolver import (
    LinkMetadata,
    build_fallback_metadata,
    fetch_webpage,
    resolve_link,
    resolve_links,
)

__all__ = [
    # URL classification
    'LINK_TYPES',
    'classify_url',
    'extract_links_from_text',
    'favicon_url',
    'get_domain',
    'get_link_type',
    'is_valid_url',
    'resolve_image_url',
    # Extractors
    'extract_html_metadata',
    'extract_structured_data',
    'fetch_oembed',
    'async_fetch_oembed',
    'humanize_description',
    # Pipeline
    'LinkMetadata',
    'build_fallback_metadata',
    'fetch_webpage',
    'resolve_link',
    'resolve_links',
]
