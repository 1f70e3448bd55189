"""
about: 내부 페이지 원문
"""
from .page import Mediatype, Page
from ..common.constants import BOOKMARKS_URL, HELP_URL, NEWTAB_URL

NEWTAB_CONTENT = """# New Tab

You've opened a new tab. Use the bar at the bottom to browse around. You can start typing in it by pressing the space key.

Press the ? key at any time to bring up the help, and see other keybindings. Most are what you expect.

Happy browsing!

=> about:bookmarks Bookmarks
=> about:help Help

=> //gemini.circumlunar.space Project Gemini
"""

HELP_CONTENT = """# Help

## Keys

```
?           Help
space       Open the bottom bar to type a URL, link number, or search
1-9, 0      Follow link 1-9, 0 is link 10
b, Alt-Left Go back in history
f, Alt-Right Go forward in history
R, Ctrl-R   Reload the page (skips the cache)
u, PgUp     Page up
d, PgDn     Page down
Ctrl-H      Go home
Ctrl-T      New tab, or open the selected link in a new tab
Ctrl-W      Close the tab (only the rightmost tab)
Shift-NUM   Switch to tab NUM, Shift-0 is the last tab
Ctrl-B      Bookmarks
Ctrl-D      Bookmark the current page
Ctrl-S      Save the current page to the downloads directory
q, Ctrl-Q   Quit
```

## Bottom bar

Type a link number to follow it, new:NUM to open it in a new tab, .. to go up a directory. Anything with a space, or without a dot, is searched.
"""


def make_internal_page(url: str, content: str) -> Page:
    return Page(raw=content.encode("utf-8"), url=url, mediatype=Mediatype.GEMINI)


def newtab_page() -> Page:
    return make_internal_page(NEWTAB_URL, NEWTAB_CONTENT)


def help_page() -> Page:
    return make_internal_page(HELP_URL, HELP_CONTENT)


def bookmarks_page(bookmarks) -> Page:
    return make_internal_page(BOOKMARKS_URL, bookmarks.to_gemtext())


def error_page(url: str, error) -> Page:
    """fetch 실패를 탭 안에 페이지로 표시"""
    content = f"# Error\n\nThe page could not be loaded.\n\n{error}\n"
    return Page(raw=content.encode("utf-8"), url=url, mediatype=Mediatype.GEMINI, is_error=True)
