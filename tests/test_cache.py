from gembrowser.content.page import Page
from gembrowser.networking import CacheManager


def page(url, raw=b"content"):
    return Page(raw=raw, url=url)


def test_set_and_get():
    cache = CacheManager()
    cache.set(page("gemini://a/"))
    assert cache.get("gemini://a/").raw == b"content"
    assert cache.get("gemini://b/") is None


def test_max_pages_evicts_least_recently_used():
    cache = CacheManager(max_pages=2)
    cache.set(page("gemini://a/"))
    cache.set(page("gemini://b/"))
    cache.get("gemini://a/")
    cache.set(page("gemini://c/"))

    assert cache.get("gemini://b/") is None
    assert cache.get("gemini://a/") is not None
    assert cache.get("gemini://c/") is not None
    assert len(cache) == 2


def test_max_size():
    cache = CacheManager(max_pages=0, max_size=10)
    cache.set(page("gemini://big/", b"x" * 11))
    assert cache.get("gemini://big/") is None

    cache.set(page("gemini://a/", b"x" * 6))
    cache.set(page("gemini://b/", b"x" * 6))
    assert cache.get("gemini://a/") is None
    assert cache.size == 6


def test_timeout(monkeypatch):
    now = [1000.0]
    monkeypatch.setattr("gembrowser.networking.cache_manager.time.time", lambda: now[0])
    cache = CacheManager(timeout=60)
    cache.set(page("gemini://a/"))

    now[0] += 59
    assert cache.get("gemini://a/") is not None
    now[0] += 1
    assert cache.get("gemini://a/") is None
    assert cache.size == 0


def test_replacing_page_keeps_size_right():
    cache = CacheManager()
    cache.set(page("gemini://a/", b"12345"))
    cache.set(page("gemini://a/", b"12"))
    assert cache.size == 2


def test_remove_page():
    cache = CacheManager()
    cache.set(page("gemini://a/"))
    cache.remove_page("gemini://a/")
    cache.remove_page("gemini://never-cached/")
    assert cache.get("gemini://a/") is None
    assert cache.size == 0


def test_favicons():
    cache = CacheManager()
    assert cache.get_favicon("example.org") is None

    cache.set_favicon("example.org", "")
    assert cache.get_favicon("example.org") == ""

    cache.set_favicon("example.org", "*")
    cache.remove_favicon("example.org")
    assert cache.get_favicon("example.org") is None


def test_clear():
    cache = CacheManager()
    cache.set(page("gemini://a/"))
    cache.set_favicon("a", "*")
    cache.clear()
    assert len(cache) == 0
    assert cache.get_favicon("a") is None
