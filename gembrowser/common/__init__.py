# Common utilities and constants shared across packages
from .constants import *
from .errors import (
    BrowserError,
    URLError,
    InvalidIndex,
    NoHistory,
    EmptyHistory,
    InvalidInternalURL,
    FetchError,
)

__all__ = [
    'ABOUT_PREFIX', 'NEWTAB_URL', 'BOOKMARKS_URL', 'HELP_URL', 'INTERNAL_URLS',
    'GEMINI_SCHEME', 'GEMINI_PORT', 'MAX_RESPONSE_HEADER',
    'TERM_WIDTH', 'TERM_HEIGHT', 'FORCE_RENDER', 'CHROME_ROWS',
    'BrowserError', 'URLError', 'InvalidIndex', 'NoHistory', 'EmptyHistory',
    'InvalidInternalURL', 'FetchError',
]
