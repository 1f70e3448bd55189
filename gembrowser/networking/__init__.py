"""
Networking package

Subpackages:
- protocols: URL protocol implementations (gemini)
"""
from .protocols import URL, GeminiURL, GeminiResponse, URLFactory, parse_header
from .cache_manager import CacheManager
from .fetcher import GeminiFetcher, parse_mediatype

__all__ = [
    'URL',
    'GeminiURL',
    'GeminiResponse',
    'URLFactory',
    'parse_header',
    'CacheManager',
    'GeminiFetcher',
    'parse_mediatype',
]
