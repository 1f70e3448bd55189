import io

import pytest

from gembrowser.common.errors import FetchError
from gembrowser.content.bookmarks import Bookmarks
from gembrowser.content.page import Mediatype, Page
from gembrowser.core.session import Session
from gembrowser.networking import CacheManager
from gembrowser.rendering import GemtextRenderer
from gembrowser.threads import TaskRunner
from gembrowser.ui import TextSurface

BASE_URL = "gemini://example.org/dir/page.gmi"
SEARCH = "gemini://search.example/search"

FIVE_LINKS = (
    b"# Test page\n"
    b"\n"
    b"Some text.\n"
    b"=> /one One\n"
    b"=> two Two\n"
    b"=> gemini://other.example/three Three\n"
    b"=> ../four Four\n"
    b"=> sub/five Five\n"
)

TWO_LINKS = (
    b"# Small page\n"
    b"=> /one One\n"
    b"=> two Two\n"
)


class ManualPool:
    """작업을 바로 실행하지 않고 테스트가 직접 돌리는 워커 풀"""

    def __init__(self):
        self.jobs = []

    def submit(self, name, fn, *args):
        self.jobs.append((name, fn, args))

    def pending(self, name=None):
        return [job for job in self.jobs if name is None or job[0] == name]

    def run_next(self, name=None):
        for i, job in enumerate(self.jobs):
            if name is None or job[0] == name:
                self.jobs.pop(i)
                job[1](*job[2])
                return True
        return False

    def run_all(self, name=None):
        while self.run_next(name):
            pass

    def shutdown(self, wait=False):
        self.jobs.clear()


class ScriptedFetcher:
    """url -> bytes 또는 예외"""

    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.requests = []
        self.favicon_requests = []

    def fetch(self, url):
        self.requests.append(url)
        value = self.pages.get(url)
        if value is None:
            raise FetchError("Not found", status=51)
        if isinstance(value, Exception):
            raise value
        return Page(raw=value, url=url, mediatype=Mediatype.GEMINI)

    def fetch_favicon(self, host):
        self.favicon_requests.append(host)
        return ""


@pytest.fixture
def fetcher():
    return ScriptedFetcher({BASE_URL: FIVE_LINKS})


@pytest.fixture
def pool():
    return ManualPool()


@pytest.fixture
def runner():
    return TaskRunner()


@pytest.fixture
def cache():
    return CacheManager(max_pages=10)


@pytest.fixture
def surface():
    return TextSurface(stream=io.StringIO(), width=80, height=24)


@pytest.fixture
def quit_calls():
    return []


@pytest.fixture
def session(fetcher, pool, runner, cache, surface, tmp_path, quit_calls):
    return Session(
        fetcher=fetcher,
        renderer=GemtextRenderer(),
        surface=surface,
        runner=runner,
        pool=pool,
        cache=cache,
        search=SEARCH,
        home="gemini://home.example/",
        downloads_dir=tmp_path / "downloads",
        bookmarks=Bookmarks(tmp_path / "bookmarks.yaml"),
        on_quit=lambda: quit_calls.append(True),
    )


def settle(session, pool):
    """워커 작업과 UI 태스크가 모두 끝날 때까지"""
    while pool.jobs or session.runner.pending():
        pool.run_all()
        session.process_tasks()


@pytest.fixture
def loaded(session, pool):
    """BASE_URL을 연 탭 하나"""
    tab = session.new_tab()
    session.navigate(BASE_URL)
    settle(session, pool)
    return tab
