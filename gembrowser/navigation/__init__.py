from .commands import Command, CommandKind, NOOP, classify, is_search
from .links import (
    host_of,
    normalize_url,
    parent_url,
    parse_url,
    query_escape,
    resolve_link,
    search_url,
)

__all__ = [
    'Command', 'CommandKind', 'NOOP', 'classify', 'is_search',
    'host_of', 'normalize_url', 'parent_url', 'parse_url', 'query_escape',
    'resolve_link', 'search_url',
]
