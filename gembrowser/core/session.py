"""
Session - 탭 목록과 현재 탭 인덱스를 소유

모든 탭 상태 변경은 이 클래스의 메서드를 거치며 UI 스레드에서만 호출된다.
입력 라우팅 계층에 노출하는 연산:
navigate, reload, back, forward, new_tab, close_tab, switch_tab,
activate_link_by_index, submit_command, page_up, page_down, num_tabs
"""
from pathlib import Path
from typing import Callable, List, Optional

import structlog

from ..common.constants import (
    ABOUT_PREFIX,
    BOOKMARKS_URL,
    FORCE_RENDER,
    HELP_URL,
    INTERNAL_URLS,
    NEWTAB_URL,
)
from ..common.errors import InvalidIndex, InvalidInternalURL, NoHistory, URLError
from ..content.bookmarks import Bookmarks
from ..content.downloads import download_page
from ..content.internal_pages import bookmarks_page, help_page, newtab_page
from ..content.page import Page
from ..content.tab import Tab
from ..navigation.commands import CommandKind, classify
from ..navigation.links import host_of, normalize_url, resolve_link
from ..threads import TaskRunner, WorkerPool
from ..ui.chrome import BarState, BottomBar
from ..ui.surface import TextSurface
from .orchestrator import FetchOrchestrator

logger = structlog.get_logger(__name__)

DEFAULT_SEARCH = "gemini://geminispace.info/search"
DEFAULT_HOME = "gemini://gemini.circumlunar.space/"


class Session:
    def __init__(
        self,
        fetcher,
        renderer,
        surface: TextSurface,
        runner: TaskRunner,
        pool: WorkerPool,
        cache=None,
        search: str = DEFAULT_SEARCH,
        home: str = DEFAULT_HOME,
        max_width: int = 100,
        downloads_dir: Optional[Path] = None,
        bookmarks: Optional[Bookmarks] = None,
        on_quit: Optional[Callable[[], None]] = None,
    ):
        self.renderer = renderer
        self.surface = surface
        self.runner = runner
        self.cache = cache
        self.search = search
        self.home = home
        self.max_width = max_width
        self.downloads_dir = downloads_dir or Path("~/Downloads").expanduser()
        self.bookmarks = bookmarks if bookmarks is not None else Bookmarks()
        self.on_quit = on_quit

        self.orchestrator = FetchOrchestrator(self, fetcher, runner, pool)

        self.tabs: List[Tab] = []
        self.current = -1
        self.running = True

        # 새 탭 페이지는 시작할 때 한 번만 렌더링해 두고 값으로 공유한다.
        # 첫 표시 때 다시 렌더링되도록 폭은 센티널로 둔다.
        template = self.render_page(newtab_page(), surface.width)
        self.newtab_template = template.with_render(template.rendered, template.links, FORCE_RENDER)

    # === 상태 조회 ===

    @property
    def bar(self) -> BottomBar:
        return self.surface.bar

    @property
    def current_tab(self) -> Optional[Tab]:
        if 0 <= self.current < len(self.tabs):
            return self.tabs[self.current]
        return None

    def num_tabs(self) -> int:
        return len(self.tabs)

    def owns(self, tab: Tab) -> bool:
        return 0 <= tab.id < len(self.tabs) and self.tabs[tab.id] is tab

    def is_visible(self, tab: Tab) -> bool:
        return self.current_tab is tab

    def is_fetch_current(self, tab: Tab, url: str) -> bool:
        """fetch 결과가 지금 화면에 보이는 탭의 진행 중인 네비게이션인지"""
        current = self.current_tab
        return (current is not None and current.id == tab.id and current is tab
                and tab.pending_url == url)

    # === 렌더링 / 표시 ===

    def text_width(self, width: int) -> int:
        return max(1, min(width, self.max_width))

    def render_page(self, page: Page, width: int, force: bool = False) -> Page:
        """폭이 맞지 않을 때만 다시 렌더링 - 순수 함수라 워커 스레드에서도 호출 가능"""
        if not force and not page.needs_render(width):
            return page
        rendered, links = self.renderer.render(page.raw, self.text_width(width), page.mediatype)
        return page.with_render(rendered, links, width)

    def reformat_page_and_set_view(self, tab: Tab):
        with tab.reformat_guard:
            tab.page = self.render_page(tab.page, self.surface.width)
        self.surface.set_content(tab.id, tab.page.rendered, tab.page.selected)

    def show_tab(self, tab: Tab):
        """탭의 페이지와 저장된 UI 상태를 화면에 반영"""
        self.reformat_page_and_set_view(tab)
        tab.apply_all(self.bar, self.surface)
        self.surface.set_focus("view")
        self.draw()

    def draw(self):
        self.surface.draw()

    def notice(self, title: str, message: str):
        """사용자에게 보이는 모든 에러/정보는 이 알림 하나로"""
        logger.info("notice", title=title, message=message)
        self.surface.show_notice(title, message)
        self.draw()

    def dismiss_notice(self):
        self.surface.dismiss_notice()
        self.draw()

    def _set_page(self, tab: Tab, page: Page):
        tab.page = page
        tab.scroll = 0
        tab.saved_bar = BarState("", page.url)
        if self.is_visible(tab):
            self.show_tab(tab)

    # === 탭 수명 주기 ===

    def _save_current(self):
        tab = self.current_tab
        if tab is None:
            return
        tab.save_bar(self.bar)
        tab.save_scroll(self.surface)

    def new_tab(self) -> Tab:
        """빈 새 탭을 열고 전환"""
        outgoing = self.current_tab
        if outgoing is not None:
            # 링크 선택 모드 해제
            outgoing.clear_selection()
            self._save_current()

        tab = Tab(len(self.tabs), self.newtab_template)
        # 뒤로 갈 곳은 없지만 이 페이지가 첫 항목도 아니다 - 다음 방문이 첫 항목
        tab.history.reset_position()
        self.tabs.append(tab)
        self.current = tab.id

        self.surface.add_view(tab.id)
        self.surface.switch_to(tab.id)
        self.bar.clear()
        tab.save_bar(self.bar)
        logger.info("tab_opened", tab=tab.id, tabs=len(self.tabs))
        self.show_tab(tab)
        return tab

    def close_tab(self) -> bool:
        """가장 오른쪽 탭만 닫을 수 있다 - 마지막 탭이면 세션 종료"""
        # TODO: 중간 탭 닫기 - 오른쪽 탭들의 id와 뷰 키를 다시 매겨야 한다
        if self.current != len(self.tabs) - 1:
            return False

        if len(self.tabs) <= 1:
            self.stop()
            return True

        tab = self.tabs.pop()
        tab.pending_url = None  # 진행 중인 fetch 결과는 버려진다
        self.surface.remove_view(tab.id)
        logger.info("tab_closed", tab=tab.id, tabs=len(self.tabs))

        self.current = max(0, self.current - 1)
        incoming = self.tabs[self.current]
        self.surface.switch_to(incoming.id)
        self.show_tab(incoming)
        return True

    def switch_tab(self, n: int) -> Tab:
        """n을 [0, 탭 수 - 1]로 잘라서 전환 - switch_tab(cur ± 1)은 항상 유효"""
        if not self.tabs:
            raise InvalidIndex("no tabs to switch to")
        n = max(0, min(n, len(self.tabs) - 1))

        self._save_current()
        self.current = n % len(self.tabs)

        tab = self.tabs[self.current]
        self.surface.switch_to(tab.id)
        self.show_tab(tab)
        return tab

    def stop(self):
        """세션 종료 - 유일한 치명적 경로"""
        if not self.running:
            return
        self.running = False
        logger.info("session_stopped")
        if self.on_quit:
            self.on_quit()

    # === 네비게이션 ===

    def navigate(self, url: str, tab: Optional[Tab] = None, add_history: bool = True):
        """절대 URL 로드 - about: URL은 Fetcher에 가기 전에 가로챈다"""
        tab = tab or self.current_tab
        if tab is None:
            return
        self.bar.blur()

        if url.startswith(ABOUT_PREFIX):
            try:
                self._load_internal(tab, url, add_history)
            except InvalidInternalURL as e:
                self.notice("Error", str(e))
            return

        self.orchestrator.load(tab, normalize_url(url), add_history)

    def _load_internal(self, tab: Tab, url: str, add_history: bool):
        if url not in INTERNAL_URLS:
            raise InvalidInternalURL("Not a valid 'about:' URL.")
        if tab.is_loading():
            # 진행 중인 fetch 결과는 버려진다
            logger.info("fetch_superseded", tab=tab.id, url=tab.pending_url, by=url)
            tab.finish_loading()

        if url == NEWTAB_URL:
            self._set_page(tab, self.newtab_template)
            return
        if url == BOOKMARKS_URL:
            page = bookmarks_page(self.bookmarks)
        else:
            page = help_page()
        if add_history:
            tab.add_to_history(url)
        self._set_page(tab, page)

    def follow_link(self, tab: Tab, base_url: str, link: str):
        """링크 이동 - 캐시는 그대로 사용"""
        try:
            url = resolve_link(base_url, link)
        except URLError as e:
            self.notice("URL Error", str(e))
            return
        self.navigate(url, tab)

    def activate_link_by_index(self, number: int):
        """링크 번호(1부터) 활성화 - 범위 밖이면 무시"""
        tab = self.current_tab
        if tab is None:
            return
        try:
            link = self._link(tab, number)
        except InvalidIndex:
            return
        self.follow_link(tab, tab.page.url, link)

    @staticmethod
    def _link(tab: Tab, number: int) -> str:
        if not 0 < number <= len(tab.page.links):
            raise InvalidIndex(f"no link number {number}")
        return tab.page.links[number - 1]

    def reload(self):
        """캐시를 지우고 현재 URL을 다시 로드 - 히스토리는 추가하지 않는다"""
        tab = self.current_tab
        if tab is None or not tab.has_content():
            return
        url = tab.page.url
        if self.cache is not None:
            self.cache.remove_page(url)
            self.cache.remove_favicon(host_of(url))
        self.orchestrator.load(tab, url, add_history=False)

    def back(self):
        tab = self.current_tab
        if tab is None:
            return
        try:
            url = tab.history.back()
        except NoHistory:
            return
        self.navigate(url, tab, add_history=False)

    def forward(self):
        tab = self.current_tab
        if tab is None:
            return
        try:
            url = tab.history.forward()
        except NoHistory:
            return
        self.navigate(url, tab, add_history=False)

    def go_home(self):
        self.navigate(self.home)

    # === 하단 바 ===

    def focus_bar(self):
        self.bar.start_input()
        self.surface.set_focus("bar")
        self.draw()

    def reset_bar(self):
        """입력 취소 - 탭에 저장된 상태로 되돌린다"""
        tab = self.current_tab
        self.bar.blur()
        self.bar.clear()
        if tab is not None:
            tab.apply_all(self.bar, self.surface)
        self.surface.set_focus("view")
        self.draw()

    def submit_command(self, text: str):
        """하단 바 입력 처리"""
        tab = self.current_tab
        if tab is None:
            return
        tab.save_scroll(self.surface)
        self.bar.blur()

        try:
            command = classify(text, tab.page, self.search)
        except URLError as e:
            self.notice("URL Error", f"link URL could not be parsed: {e}")
            self.reset_bar()
            return

        logger.debug("command", text=text, kind=command.kind.name, url=command.url)
        if command.kind == CommandKind.NOOP:
            self.reset_bar()
        elif command.kind == CommandKind.ACTIVATE_LINK:
            self.activate_link_by_index(command.number)
        elif command.kind == CommandKind.OPEN_IN_NEW_TAB:
            self.new_tab()
            self.navigate(command.url)
        elif command.kind == CommandKind.NAVIGATE:
            url = command.url
            if command.bypass_cache and self.cache is not None:
                # 직접 입력한 URL과 검색은 항상 캐시를 건너뛴다
                self.cache.remove_page(normalize_url(url))
            self.navigate(url)

    # === 스크롤 ===

    def page_up(self):
        tab = self.current_tab
        if tab is None:
            return
        tab.save_scroll(self.surface)
        tab.page_up(self.surface.content_height)
        tab.apply_scroll(self.surface)
        self.draw()

    def page_down(self):
        tab = self.current_tab
        if tab is None:
            return
        tab.save_scroll(self.surface)
        tab.page_down(self.surface.content_height)
        tab.apply_scroll(self.surface)
        self.draw()

    def resize(self, width: int, height: int):
        """터미널 크기 변경 - 현재 탭만 다시 렌더링, 나머지는 보일 때"""
        self.surface.resize(width, height)
        tab = self.current_tab
        if tab is not None:
            self.orchestrator.reformat(tab)

    # === 링크 선택 모드 ===

    def select_link(self, number: Optional[int] = None):
        """링크 하이라이트 - 번호가 없으면 첫 링크"""
        tab = self.current_tab
        if tab is None or not tab.page.links:
            return
        number = number or 1
        if not 0 < number <= len(tab.page.links):
            return
        tab.select_link(number - 1)
        self.surface.set_content(tab.id, tab.page.rendered, tab.page.selected)
        self.draw()

    def cycle_link(self, step: int = 1):
        tab = self.current_tab
        if tab is None or not tab.page.links:
            return
        if tab.page.selected is None:
            index = 0 if step > 0 else len(tab.page.links) - 1
        else:
            index = (tab.page.selected + step) % len(tab.page.links)
        self.select_link(index + 1)

    def clear_selection(self):
        tab = self.current_tab
        if tab is None:
            return
        tab.clear_selection()
        self.surface.set_content(tab.id, tab.page.rendered, None)
        self.draw()

    def activate_selected(self):
        tab = self.current_tab
        if tab is None or tab.page.selected is None:
            return
        self.activate_link_by_index(tab.page.selected + 1)

    def open_selected_in_new_tab(self):
        """선택된 링크를 새 탭에서 - 선택이 없으면 빈 새 탭"""
        tab = self.current_tab
        if tab is None or tab.page.selected is None:
            self.new_tab()
            return
        try:
            url = resolve_link(tab.page.url, tab.page.links[tab.page.selected])
        except URLError as e:
            self.notice("URL Error", str(e))
            return
        self.new_tab()
        self.navigate(url)

    # === 북마크 / 저장 ===

    def show_bookmarks(self):
        self.navigate(BOOKMARKS_URL)

    def add_bookmark(self, name: str = ""):
        tab = self.current_tab
        if tab is None or not tab.has_content() or tab.page.is_error:
            self.notice("Info", "This page can't be bookmarked.")
            return
        self.bookmarks.add(tab.page.url, name)
        self.notice("Info", f"Bookmarked {tab.page.url}")

    def save_page(self) -> Optional[Path]:
        tab = self.current_tab
        if tab is None or not tab.has_content() or tab.page.is_error:
            self.notice("Info", "The current page has no content, so it couldn't be downloaded.")
            return None
        try:
            path = download_page(tab.page, self.downloads_dir)
        except OSError as e:
            self.notice("Download Error", f"Error saving page content: {e}")
            return None
        self.notice("Info", f"Page content saved to {path}.")
        return path

    # === UI 스레드 ===

    def process_tasks(self) -> int:
        """워커가 넘긴 태스크 실행"""
        return self.runner.run_all()
