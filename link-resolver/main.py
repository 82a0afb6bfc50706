"""
Link Resolver Cloud Function

Resolves URLs into link preview metadata for saved-link lists.

Responsibilities:
- Validate and fetch each URL
- Extract title, description, image and favicon
- Classify the link (link, tweet, video, article)
- Optionally write an AI headline for tweets

Does NOT:
- Persist previews (the caller's job)
- Report per-URL failures as errors (failed URLs get a placeholder preview)
"""

import functions_framework
import asyncio
import json
import logging
import os
import sys

# Add shared module to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from link_preview.config import LOG_LEVEL, NO_DESCRIPTION, PREVIEW_UNAVAILABLE
from link_preview.resolver import resolve_link, resolve_links
from link_preview.ai_title import generate_tweet_title

logging.basicConfig(level=LOG_LEVEL, format='%(levelname)s %(name)s: %(message)s')
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'POST',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Max-Age': '3600'
}


def apply_ai_title(record) -> dict:
    """Preview dict for a record, with an AI headline for tweets when one is produced."""
    data = record.to_dict()
    if record.type != 'tweet':
        return data

    # Placeholder descriptions carry no tweet text to summarize
    if record.description in (PREVIEW_UNAVAILABLE, NO_DESCRIPTION):
        return data

    headline = generate_tweet_title(record.description, url=record.url)
    if headline:
        data['title'] = headline
    return data


@functions_framework.http
def resolve_link_preview(request):
    """
    Main Cloud Function entry point.

    Expected JSON input (single):
    {
        "url": "https://example.com/article",
        "options": {"ai_title": false}
    }

    or (batch):
    {
        "urls": ["https://example.com/a", "https://youtu.be/abc123"]
    }
    """
    if request.method == 'OPTIONS':
        return ('', 204, CORS_HEADERS)

    headers = {'Access-Control-Allow-Origin': '*'}

    try:
        request_json = request.get_json(silent=True) or {}
        options = request_json.get('options') or {}
        ai_title = bool(options.get('ai_title', False))

        if 'urls' in request_json and request_json['urls']:
            urls = request_json['urls']
            if not isinstance(urls, list):
                return (json.dumps({
                    'error': 'Field urls must be a list'
                }), 400, headers)

            records = asyncio.run(resolve_links(urls))
            results = [apply_ai_title(r) if ai_title else r.to_dict() for r in records]
            return (json.dumps({'results': results}), 200, headers)

        url = request_json.get('url')
        if not url:
            return (json.dumps({
                'error': 'Missing required field: url'
            }), 400, headers)

        record = asyncio.run(resolve_link(url))
        data = apply_ai_title(record) if ai_title else record.to_dict()
        return (json.dumps(data), 200, headers)

    except Exception as e:
        logger.exception("Link resolver request failed")
        return (json.dumps({
            'error': {
                'stage': 'processing',
                'message': str(e),
                'recoverable': False
            }
        }), 500, headers)
