"""URL protocol implementations"""
from .base_url import URL
from .gemini_url import GeminiURL, GeminiResponse, parse_header
from .url_factory import URLFactory

__all__ = [
    'URL',
    'GeminiURL',
    'GeminiResponse',
    'parse_header',
    'URLFactory',
]
