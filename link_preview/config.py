"""
Configuration for the link preview resolver.

Values that vary per deployment come from the environment; everything else
is a fixed constant shared by the extractors and the HTTP function.
"""

import os

# Outbound HTTP
USER_AGENT = os.environ.get(
    'LINK_PREVIEW_USER_AGENT',
    'Mozilla/5.0 (compatible; LinkPreview/1.0)'
)
ACCEPT_LANGUAGE = 'es-ES,es;q=0.9,en;q=0.8'
FETCH_TIMEOUT = float(os.environ.get('LINK_PREVIEW_FETCH_TIMEOUT', '10'))
OEMBED_TIMEOUT = float(os.environ.get('LINK_PREVIEW_OEMBED_TIMEOUT', '5'))

# Gemini (optional AI tweet titles)
GEMINI_API_KEY = os.environ.get('GEMINI_API_KEY')
GEMINI_MODEL = os.environ.get('GEMINI_MODEL', 'gemini-2.0-flash')

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

# Display placeholders
FAVICON_SERVICE_URL = 'https://icons.duckduckgo.com/ip3/{domain}.ico'
UNKNOWN_DOMAIN = 'Unknown'
NO_DESCRIPTION = 'Sin descripción disponible'
PREVIEW_UNAVAILABLE = 'Vista previa no disponible'

# Description humanizer limits
DESCRIPTION_MAX_LENGTH = 220
SELECTOR_NOISE_MAX_LENGTH = 240
