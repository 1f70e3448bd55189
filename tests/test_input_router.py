import pytest

from gembrowser.ui import InputRouter

from conftest import BASE_URL, settle


@pytest.fixture
def router(session):
    return InputRouter(session)


def type_keys(router, keys):
    for key in keys:
        router.handle_key(key)


def test_history_keys_ignored_while_loading(session, loaded, router, pool):
    session.navigate("gemini://example.org/elsewhere")
    assert loaded.is_loading()

    assert router.handle_key("b") is False
    assert loaded.pending_url == "gemini://example.org/elsewhere"


def test_digits_ignored_while_loading(session, loaded, router, fetcher):
    session.navigate("gemini://example.org/elsewhere")
    router.handle_key("1")
    assert loaded.pending_url == "gemini://example.org/elsewhere"


def test_new_tab_works_while_loading(session, loaded, router):
    session.navigate("gemini://example.org/elsewhere")
    assert router.handle_key("ctrl-t") is True
    assert session.num_tabs() == 2
    assert session.current == 1


def test_digit_follows_link(session, loaded, router):
    router.handle_key("2")
    assert loaded.pending_url == "gemini://example.org/dir/two"


def test_zero_is_link_ten(session, loaded, router):
    # 링크가 다섯 개뿐이라 무시된다
    assert router.handle_key("0") is True
    assert not loaded.is_loading()
    assert loaded.page.url == BASE_URL


def test_back_key(session, loaded, router, pool, fetcher):
    fetcher.pages["gemini://example.org/one"] = b"# One\n"
    router.handle_key("1")
    settle(session, pool)

    router.handle_key("b")
    settle(session, pool)
    assert loaded.page.url == BASE_URL


def test_shift_numbers_switch_tabs(session, loaded, router):
    session.new_tab()
    session.new_tab()
    assert session.current == 2

    router.handle_key("!")
    assert session.current == 0
    router.handle_key(")")
    assert session.current == 2
    # 범위를 넘으면 마지막 탭
    router.handle_key("(")
    assert session.current == 2


def test_bar_input_submits_command(session, loaded, router):
    router.handle_key("space")
    assert session.bar.focused

    type_keys(router, ["3"])
    # 바가 포커스를 가진 동안 숫자는 링크가 아니라 입력
    assert not loaded.is_loading()

    router.handle_key("enter")
    assert not session.bar.focused
    assert loaded.pending_url == "gemini://other.example/three"


def test_bar_backspace_and_escape(session, loaded, router):
    router.handle_key("space")
    type_keys(router, ["a", "b", "backspace"])
    assert session.bar.text == "a"

    router.handle_key("esc")
    assert not session.bar.focused
    assert session.bar.text == BASE_URL


def test_any_key_dismisses_notice(session, router, quit_calls):
    session.new_tab()
    router.handle_key("ctrl-s")
    assert session.surface.notice is not None

    router.handle_key("q")
    assert session.surface.notice is None
    assert quit_calls == []

    router.handle_key("q")
    assert quit_calls == [True]


def test_help_key(session, loaded, router):
    router.handle_key("?")
    assert loaded.page.url == "about:help"


def test_enter_selects_then_follows(session, loaded, router):
    router.handle_key("enter")
    assert loaded.page.selected == 0

    router.handle_key("tab")
    assert loaded.page.selected == 1

    router.handle_key("enter")
    assert loaded.pending_url == "gemini://example.org/dir/two"


def test_handle_text(session, loaded, router):
    router.handle_text("gemini://x.example/")
    assert loaded.pending_url == "gemini://x.example/"


def test_help_during_load_replaces_pending_fetch(session, loaded, router, pool):
    session.navigate("gemini://example.org/dir/two")
    router.handle_key("?")
    settle(session, pool)

    assert loaded.page.url == "about:help"
    assert loaded.history.entries == [BASE_URL, "about:help"]
    assert not loaded.is_loading()
