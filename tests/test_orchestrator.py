import threading

from gembrowser.common.errors import FetchError
from gembrowser.content.page import Mediatype, Page
from gembrowser.content.tab import SingleFlight, TabMode
from gembrowser.rendering import GemtextRenderer
from gembrowser.ui.chrome import LOADING_LABEL

from conftest import BASE_URL, FIVE_LINKS, settle

OTHER_URL = "gemini://other.example/"


def test_navigation_lifecycle(session, pool, surface):
    tab = session.new_tab()
    session.navigate(BASE_URL)

    assert tab.mode == TabMode.LOADING
    assert tab.pending_url == BASE_URL
    assert session.bar.label == LOADING_LABEL
    # 완료 전에는 아무것도 기록하지 않는다
    assert tab.history.entries == []

    settle(session, pool)
    assert tab.mode == TabMode.DONE
    assert tab.pending_url is None
    assert tab.page.url == BASE_URL
    assert len(tab.page.links) == 5
    assert tab.history.entries == [BASE_URL]
    assert session.bar.label == ""
    assert session.bar.text == BASE_URL
    assert surface.views[tab.id].text == tab.page.rendered


def test_fetch_error_becomes_error_page(session, fetcher, pool):
    fetcher.pages[OTHER_URL] = FetchError("Gone", status=52)
    tab = session.new_tab()
    session.navigate(OTHER_URL)
    settle(session, pool)

    assert tab.mode == TabMode.DONE
    assert tab.page.url == OTHER_URL
    assert "Error" in tab.page.rendered
    assert "Gone" in tab.page.rendered
    assert tab.history.entries == [OTHER_URL]


def test_connection_error_becomes_error_page(session, fetcher, pool):
    fetcher.pages[OTHER_URL] = ConnectionRefusedError("refused")
    tab = session.new_tab()
    session.navigate(OTHER_URL)
    settle(session, pool)

    assert tab.mode == TabMode.DONE
    assert "refused" in tab.page.rendered


def test_unexpected_fetch_exception_becomes_error_page(session, fetcher, pool):
    # 잘못된 호스트 이름의 IDNA 인코딩 실패는 OSError가 아니다
    fetcher.pages[OTHER_URL] = UnicodeError("label empty or too long")
    tab = session.new_tab()
    session.navigate(OTHER_URL)
    settle(session, pool)

    assert tab.mode == TabMode.DONE
    assert tab.pending_url is None
    assert tab.page.is_error
    assert "label empty or too long" in tab.page.rendered


def test_render_failure_becomes_error_page(session, fetcher, pool):
    class BrokenRenderer(GemtextRenderer):
        def render(self, raw, width, mediatype=Mediatype.GEMINI):
            if raw == FIVE_LINKS:
                raise ValueError("cannot render")
            return super().render(raw, width, mediatype)

    session.renderer = BrokenRenderer()
    tab = session.new_tab()
    session.navigate(BASE_URL)
    settle(session, pool)

    assert tab.mode == TabMode.DONE
    assert tab.page.is_error
    assert "cannot render" in tab.page.rendered
    assert tab.history.entries == [BASE_URL]


def test_internal_page_supersedes_pending_fetch(session, fetcher, pool):
    tab = session.new_tab()
    session.navigate(BASE_URL)
    session.navigate("about:help")
    assert tab.mode == TabMode.DONE

    settle(session, pool)
    assert fetcher.requests == [BASE_URL]
    assert tab.page.url == "about:help"
    assert tab.history.entries == ["about:help"]
    assert tab.mode == TabMode.DONE


def test_completion_after_switching_away(session, fetcher, pool, surface):
    tab_a = session.new_tab()
    session.navigate(BASE_URL)
    tab_b = session.new_tab()
    assert session.bar.text == ""

    settle(session, pool)

    # A의 상태는 갱신된다
    assert tab_a.page.url == BASE_URL
    assert tab_a.history.entries == [BASE_URL]
    assert tab_a.mode == TabMode.DONE
    assert tab_a.saved_bar.text == BASE_URL
    # B가 보이는 화면 상태는 그대로
    assert session.current_tab is tab_b
    assert surface.current == tab_b.id
    assert session.bar.label == ""
    assert session.bar.text == ""

    session.switch_tab(tab_a.id)
    assert session.bar.text == BASE_URL
    assert surface.views[tab_a.id].text == tab_a.page.rendered


def test_superseded_fetch_is_discarded(session, fetcher, pool):
    fetcher.pages[OTHER_URL] = b"# Other\n"
    tab = session.new_tab()
    session.navigate(BASE_URL)
    session.navigate(OTHER_URL)

    pool.run_next("fetch")
    session.process_tasks()
    assert tab.mode == TabMode.LOADING
    assert tab.page.url != BASE_URL
    assert tab.history.entries == []

    settle(session, pool)
    assert tab.page.url == OTHER_URL
    assert tab.history.entries == [OTHER_URL]


def test_fetch_current_predicate(session, pool):
    tab_a = session.new_tab()
    session.navigate(BASE_URL)
    assert session.is_fetch_current(tab_a, BASE_URL)
    assert not session.is_fetch_current(tab_a, OTHER_URL)

    session.new_tab()
    assert not session.is_fetch_current(tab_a, BASE_URL)


def test_closed_tab_result_is_discarded(session, pool):
    session.new_tab()
    tab = session.new_tab()
    session.navigate(BASE_URL)
    session.close_tab()

    settle(session, pool)
    assert tab.history.entries == []
    assert session.num_tabs() == 1
    assert session.current_tab.page.url == "about:newtab"


def test_reload_evicts_cache_without_history(session, loaded, cache, fetcher, pool):
    cache.set(Page(raw=FIVE_LINKS, url=BASE_URL))
    cache.set_favicon("example.org", "*")

    session.reload()
    assert cache.get(BASE_URL) is None
    assert cache.get_favicon("example.org") is None
    assert loaded.mode == TabMode.LOADING

    settle(session, pool)
    assert fetcher.requests == [BASE_URL, BASE_URL]
    assert loaded.history.entries == [BASE_URL]
    assert loaded.history.position == 0


def test_reload_of_internal_page_does_nothing(session, pool):
    session.new_tab()
    session.reload()
    assert pool.jobs == []


def test_back_and_forward(session, loaded, fetcher, pool):
    fetcher.pages[OTHER_URL] = b"# Other\n"
    session.navigate(OTHER_URL)
    settle(session, pool)
    assert loaded.history.entries == [BASE_URL, OTHER_URL]

    session.back()
    settle(session, pool)
    assert loaded.page.url == BASE_URL
    assert loaded.history.entries == [BASE_URL, OTHER_URL]
    assert loaded.history.position == 0

    session.forward()
    settle(session, pool)
    assert loaded.page.url == OTHER_URL
    assert loaded.history.position == 1


def test_back_at_boundary_is_ignored(session, loaded, pool):
    session.back()
    session.forward()
    assert pool.jobs == []
    assert session.surface.notice is None


def test_back_to_internal_page(session, pool):
    tab = session.new_tab()
    session.navigate("about:bookmarks")
    session.navigate(BASE_URL)
    settle(session, pool)

    session.back()
    assert tab.page.url == "about:bookmarks"
    assert pool.jobs == []


def test_favicon_is_shown_in_tab_row(session, fetcher, pool, surface):
    fetcher.fetch_favicon = lambda host: "*"
    tab = session.new_tab()
    session.navigate(BASE_URL)
    settle(session, pool)

    assert tab.favicon == "*"
    assert surface.tab_row.favicons[tab.id] == "*"


# --- Reformat ---

def test_resize_reformats_current_tab(session, loaded, pool, surface):
    session.resize(40, 24)
    assert [job[0] for job in pool.jobs] == ["reformat"]

    settle(session, pool)
    assert loaded.page.render_width == 40
    assert all(len(line) <= 40 for line in loaded.page.rendered.split("\n"))
    assert surface.views[loaded.id].text == loaded.page.rendered


def test_reformats_apply_in_order(session, loaded, pool):
    session.resize(40, 24)
    session.resize(60, 24)
    session.resize(80, 24)
    settle(session, pool)
    assert loaded.page.render_width == 80


def test_reformat_keeps_link_selection(session, loaded, pool):
    session.select_link(3)
    session.resize(50, 24)
    settle(session, pool)
    assert loaded.page.selected == 2
    assert loaded.page.render_width == 50


def test_reformat_after_navigation_is_dropped(session, loaded, pool):
    session.resize(40, 24)
    pool.run_next("reformat")
    # 렌더 결과가 반영되기 전에 다른 페이지로 이동
    session.navigate("about:help")
    session.process_tasks()

    assert loaded.page.url == "about:help"
    assert "Help" in loaded.page.rendered
    assert "Test page" not in loaded.page.rendered


def test_hidden_tab_reflows_when_shown(session, loaded, pool):
    other = session.new_tab()
    session.resize(60, 24)
    settle(session, pool)
    assert other.page.render_width == 60
    assert loaded.page.render_width == 80

    session.switch_tab(loaded.id)
    assert loaded.page.render_width == 60


def test_single_flight_blocks_second_job():
    guard = SingleFlight("reformat-0")
    entered = threading.Event()

    def second_job():
        with guard:
            entered.set()

    with guard:
        worker = threading.Thread(target=second_job)
        worker.start()
        assert not entered.wait(0.1)
        assert guard.locked()

    worker.join(timeout=2)
    assert entered.is_set()
    assert not guard.locked()
