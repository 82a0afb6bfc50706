"""
Title processing utilities for link previews.

Generated headlines are limited to 80 characters. Titles exceeding the
limit are truncated at word boundaries (not mid-word) and marked with an
ellipsis.
"""

import re
from typing import Tuple

MAX_HEADLINE_LENGTH = 80

URL_RE = re.compile(r'https?://\S+', re.I)
HASHTAG_RE = re.compile(r'#\S+')
MENTION_RE = re.compile(r'@\S+')
EMOJI_RE = re.compile(
    '[\U0001F300-\U0001FAFF\U0001F900-\U0001F9FF\u2600-\u26FF\u2700-\u27BF]'
)


def truncate_title(title: str, max_length: int = MAX_HEADLINE_LENGTH) -> Tuple[str, bool]:
    """
    Fit a headline into max_length characters without splitting a word.

    sanitize_headline() calls this with one character to spare, then
    appends an ellipsis, so marked headlines stay within the 80-character
    display limit. A single word longer than the limit is hard-cut one
    character short.

    Returns:
        (headline, was_cut)

    Examples:
        >>> truncate_title("Nueva ley de vivienda", 80)
        ('Nueva ley de vivienda', False)

        >>> truncate_title("El congreso aprueba la nueva ley de vivienda", 20)
        ('El congreso aprueba', True)
    """
    headline = ' '.join((title or '').split())
    if len(headline) <= max_length:
        return (headline, False)

    head = headline[:max_length]
    last_space = head.rfind(' ')

    # Single long word
    if last_space == -1:
        return (headline[:max_length - 1], True)

    return (head[:last_space].rstrip(), True)


def sanitize_headline(raw: str, max_length: int = MAX_HEADLINE_LENGTH) -> str:
    """
    Clean a generated headline for display.

    - Keeps only the first non-empty line
    - Removes URLs, hashtags, mentions and emoji
    - Normalizes curly quotes and whitespace
    - Drops a trailing period
    - Truncates with an ellipsis, then sentence-cases
    """
    if not raw:
        return ''

    first_line = next((line.strip() for line in raw.splitlines() if line.strip()), '')

    title = URL_RE.sub('', first_line)
    title = HASHTAG_RE.sub('', title)
    title = MENTION_RE.sub('', title)
    title = EMOJI_RE.sub('', title)
    title = title.replace('\u201c', '"').replace('\u201d', '"')
    title = title.replace('\u2018', "'").replace('\u2019', "'")
    title = ' '.join(title.split())

    if title.endswith('.'):
        title = title[:-1]

    title, was_truncated = truncate_title(title, max_length - 1)
    if was_truncated:
        title = f"{title}…"

    if not title:
        return ''

    return title[0].upper() + title[1:]
