"""
AI headline generation for tweets.

Tweets have no real title, so the preview title can optionally be replaced by
a short Gemini-written headline. This sits outside the resolve pipeline:
callers decide when to ask for it.
"""

import logging
from typing import Dict, Optional

import google.generativeai as genai

from . import config
from .title_utils import MAX_HEADLINE_LENGTH, sanitize_headline

logger = logging.getLogger(__name__)

# In-process cache keyed by "url|text"
_title_cache: Dict[str, str] = {}


def clear_title_cache() -> None:
    _title_cache.clear()


def build_prompt(text: str, author: Optional[str] = None) -> str:
    return f"""Write a single concise headline (max {MAX_HEADLINE_LENGTH} characters) for the following X/Twitter post.

Requirements:
- Keep the original language of the post.
- Do not repeat hashtags, mentions, emoji or URLs.
- Use a clear journalistic style, in one sentence.
- If there is an author, use it only as context.
- Capture the main idea or news of the post.

Author: {author or 'unknown'}
Post: {text}

Respond with the headline only."""


def generate_tweet_title(text: str, author: Optional[str] = None, url: Optional[str] = None) -> Optional[str]:
    """
    Generate a headline for tweet text using Gemini.

    Returns:
        The sanitized headline, or None when there is no text, no API key,
        or the model call fails.
    """
    trimmed = (text or '').strip()
    if not trimmed:
        return None

    cache_key = f"{url or ''}|{trimmed}"
    if cache_key in _title_cache:
        return _title_cache[cache_key]

    if not config.GEMINI_API_KEY:
        logger.debug("GEMINI_API_KEY not configured, skipping AI title")
        return None

    try:
        genai.configure(api_key=config.GEMINI_API_KEY)
        model = genai.GenerativeModel(config.GEMINI_MODEL)
        response = model.generate_content(build_prompt(trimmed, author))
        headline = sanitize_headline(response.text)
    except Exception as e:
        logger.warning("AI title generation failed for %s: %s", url or 'tweet', e)
        return None

    if not headline:
        return None

    _title_cache[cache_key] = headline
    return headline
