"""
Shared pytest fixtures for link preview tests.
"""

import pytest
import sys
import importlib.util
from pathlib import Path

# Project root for finding Cloud Function modules
PROJECT_ROOT = Path(__file__).parent.parent


def _load_module_from_path(module_name: str, file_path: Path):
    """Load a module from a specific file path."""
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


# Load the Cloud Function module under an importable name
_link_resolver_module = _load_module_from_path(
    'link_resolver_main',
    PROJECT_ROOT / 'link-resolver' / 'main.py'
)


# ============================================================================
# Cloud Function Fixtures
# ============================================================================

@pytest.fixture
def link_resolver_module():
    """Returns the loaded link-resolver module (for patching its globals)."""
    return _link_resolver_module


@pytest.fixture
def resolve_link_preview():
    """Returns main entry point from link-resolver."""
    return _link_resolver_module.resolve_link_preview


@pytest.fixture
def apply_ai_title():
    """Returns apply_ai_title function from link-resolver."""
    return _link_resolver_module.apply_ai_title


@pytest.fixture
def mock_flask_request():
    """Factory for creating mock Flask request objects."""
    class MockRequest:
        def __init__(self, json_data=None, method='POST'):
            self._json = json_data
            self.method = method
            self.data = b''

        def get_json(self, force=False, silent=False):
            return self._json

    return MockRequest


# ============================================================================
# Sample Pages
# ============================================================================

@pytest.fixture
def sample_article_html():
    """A blog article with Open Graph tags and a relative image."""
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>10 Python Tips | Example Blog</title>
        <meta property="og:title" content="10 Python Tips You Should Know">
        <meta name="twitter:title" content="Python Tips (Twitter)">
        <meta property="og:description" content="Learn essential Python tips">
        <meta name="description" content="Plain meta description">
        <meta property="og:image" content="/img/a.png">
        <link rel="shortcut icon" href="/static/favicon.ico">
    </head>
    <body>
        <article><h1>10 Python Tips You Should Know</h1></article>
    </body>
    </html>
    """


@pytest.fixture
def sample_twitter_card_html():
    """A page with only Twitter card tags and a <title>."""
    return """
    <html>
    <head>
        <title>Fallback Title</title>
        <meta name="twitter:title" content="Card Title">
        <meta name="twitter:description" content="Card description">
        <meta property="twitter:image" content="https://cdn.example.com/card.jpg">
    </head>
    <body></body>
    </html>
    """


@pytest.fixture
def sample_structured_article_html():
    """Open Graph tags plus a JSON-LD NewsArticle without a description."""
    return """
    <html>
    <head>
        <meta property="og:title" content="HTML Title">
        <meta property="og:description" content="HTML description">
        <meta property="og:image" content="https://example.com/og.jpg">
        <script type="application/ld+json">
        <!--
        {
            "@context": "https://schema.org",
            "@type": "NewsArticle",
            "headline": "Structured Headline",
            "image": {"@type": "ImageObject", "url": "https://example.com/ld.jpg"}
        }
        -->
        </script>
    </head>
    <body></body>
    </html>
    """


@pytest.fixture
def sample_product_html():
    """A product page described only by JSON-LD."""
    return """
    <html>
    <head>
        <title>Widget Pro - Best Widgets</title>
        <script type="application/ld+json">
        {
            "@context": "https://schema.org",
            "@type": "Product",
            "name": "Widget Pro",
            "image": ["https://shop.example.com/widget-1.jpg", "https://shop.example.com/widget-2.jpg"],
            "offers": {"@type": "Offer", "price": "29.99", "priceCurrency": "EUR"}
        }
        </script>
    </head>
    <body></body>
    </html>
    """


@pytest.fixture
def sample_youtube_html():
    """A YouTube page that blocks scraping: no Open Graph image."""
    return """
    <html>
    <head><meta name="robots" content="noindex"></head>
    <body>Sign in to confirm you're not a bot</body>
    </html>
    """


@pytest.fixture
def empty_html():
    return ""
