"""
Description cleanup for link previews.

Scraped descriptions are often not prose: serialized JSON, CSS selectors or
code fragments leak in from the page. humanize_description() turns what it
can into readable text and rejects the rest.

The selector heuristic is deliberately loose and its thresholds are kept as
they are for compatibility with stored previews.
"""

import json
from typing import Optional

from .config import DESCRIPTION_MAX_LENGTH, SELECTOR_NOISE_MAX_LENGTH

# Fields tried, in order, when the description is a JSON document
HUMAN_FIELDS = ('description', 'summary', 'text', 'abstract', 'title', 'name')

SELECTOR_CHARS = ('.', '#', '[', ']', '>')


def collapse_whitespace(text: str) -> str:
    return ' '.join(text.split())


def truncate_description(text: str, max_length: int = DESCRIPTION_MAX_LENGTH) -> str:
    """
    Cap text at max_length characters, marking the cut with '...'.

    Examples:
        >>> truncate_description("short")
        'short'

        >>> len(truncate_description("x" * 300))
        220
    """
    if len(text) <= max_length:
        return text
    return text[:max_length - 3].rstrip() + '...'


def _looks_like_json(text: str) -> bool:
    return text[:1] in ('{', '[') and text[-1:] in ('}', ']')


def _human_field_from_json(text: str) -> Optional[str]:
    """Pick the first readable field out of a JSON object or list."""
    try:
        data = json.loads(text)
    except ValueError:
        return None

    if isinstance(data, list):
        data = data[0] if data else None
    if not isinstance(data, dict):
        return None

    for key in HUMAN_FIELDS:
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


def looks_like_selector_noise(text: str) -> bool:
    """Short text containing selector punctuation is treated as leaked markup."""
    return len(text) < SELECTOR_NOISE_MAX_LENGTH and any(c in text for c in SELECTOR_CHARS)


def humanize_description(text: Optional[str]) -> Optional[str]:
    """
    Turn a scraped description into display text.

    Returns:
        The cleaned description, or None when the text looks unusable.

    Examples:
        >>> humanize_description('{"description":"Hola mundo"}')
        'Hola mundo'

        >>> humanize_description('.class > div[data-x]') is None
        True
    """
    if not text or not text.strip():
        return None

    trimmed = text.strip()

    if _looks_like_json(trimmed):
        field = _human_field_from_json(trimmed)
        if field:
            return truncate_description(collapse_whitespace(field))

    if looks_like_selector_noise(trimmed):
        return None

    return truncate_description(collapse_whitespace(trimmed))
