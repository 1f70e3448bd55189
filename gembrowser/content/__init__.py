# Content layer - Page, History, Tab 상태
from .page import Page, PageMode, Mediatype
from .history import History
from .tab import Tab, TabMode, SingleFlight
from .bookmarks import Bookmarks
from .downloads import download_page
from .internal_pages import newtab_page, help_page, bookmarks_page, error_page

__all__ = [
    'Page', 'PageMode', 'Mediatype', 'History', 'Tab', 'TabMode', 'SingleFlight',
    'Bookmarks', 'download_page', 'newtab_page', 'help_page', 'bookmarks_page', 'error_page',
]
