"""
FetchOrchestrator - 탭별 로드 수명 주기 (DONE -> LOADING -> DONE)

- fetch와 렌더링은 WorkerPool에서 실행
- 결과 반영은 TaskRunner를 통해 UI 스레드에서만
- 취소 토큰은 없다: 완료 시점에 탭의 pending_url과 비교해
  더 새로운 네비게이션에 밀린 결과는 버린다
"""
from typing import TYPE_CHECKING

import structlog

from ..common.errors import FetchError, URLError
from ..content.internal_pages import error_page
from ..content.page import Page
from ..content.tab import Tab
from ..navigation.links import host_of
from ..threads import Task, TaskRunner, WorkerPool
from ..ui.chrome import BarState, LOADING_LABEL

if TYPE_CHECKING:
    from .session import Session

logger = structlog.get_logger(__name__)


class FetchOrchestrator:
    def __init__(self, session: "Session", fetcher, runner: TaskRunner, pool: WorkerPool):
        self.session = session
        self.fetcher = fetcher
        self.runner = runner
        self.pool = pool

    # === 로드 ===

    def load(self, tab: Tab, url: str, add_history: bool = True):
        """비동기 로드 시작 (UI 스레드)"""
        tab.start_loading(url)
        tab.clear_selection()
        tab.saved_bar = BarState(LOADING_LABEL, url)
        if self.session.is_visible(tab):
            tab.apply_bar(self.session.bar)
            self.session.draw()

        logger.info("fetch_started", tab=tab.id, url=url, add_history=add_history)
        width = self.session.surface.width
        self.pool.submit("fetch", self._fetch_job, tab, url, add_history, width)

    def _fetch_job(self, tab: Tab, url: str, add_history: bool, width: int):
        """워커 스레드 - 탭 상태는 건드리지 않는다"""
        # 어떤 실패든 에러 페이지로 끝나야 탭이 LOADING에 남지 않는다
        try:
            page = self.session.render_page(self.fetcher.fetch(url), width)
        except (FetchError, URLError, OSError) as e:
            logger.warning("fetch_failed", tab=tab.id, url=url, error=str(e))
            page = self.session.render_page(error_page(url, e), width)
        except Exception as e:
            logger.exception("fetch_crashed", tab=tab.id, url=url)
            page = self.session.render_page(error_page(url, e), width)
        self.runner.schedule_task(Task(self._complete, tab, url, page, add_history))

    def _complete(self, tab: Tab, url: str, page: Page, add_history: bool):
        """UI 스레드 - fetch 결과 반영"""
        if tab.pending_url != url:
            logger.info("fetch_superseded", tab=tab.id, url=url, pending=tab.pending_url)
            return

        visible = self.session.is_fetch_current(tab, url)

        tab.finish_loading()
        if add_history:
            tab.add_to_history(page.url)
        tab.page = page
        tab.scroll = 0
        tab.saved_bar = BarState("", page.url)
        logger.info("fetch_done", tab=tab.id, url=page.url, visible=visible)

        if visible:
            # 사용자가 그 사이 탭을 바꿨다면 화면 상태는 건드리지 않는다
            self.session.show_tab(tab)

        if page.has_content():
            self._load_favicon(tab, host_of(page.url))

    # === 파비콘 ===

    def _load_favicon(self, tab: Tab, host: str):
        if host:
            self.pool.submit("favicon", self._favicon_job, tab, host)

    def _favicon_job(self, tab: Tab, host: str):
        favicon = self.fetcher.fetch_favicon(host)
        self.runner.schedule_task(Task(self._apply_favicon, tab, host, favicon))

    def _apply_favicon(self, tab: Tab, host: str, favicon: str):
        if host_of(tab.url) != host or not self.session.owns(tab):
            return
        tab.favicon = favicon
        self.session.surface.tab_row.set_favicon(tab.id, favicon)
        self.session.draw()

    # === 리사이즈 ===

    def reformat(self, tab: Tab):
        """현재 탭을 새 터미널 폭으로 다시 렌더링 (UI 스레드에서 호출)"""
        width = self.session.surface.width
        self.pool.submit("reformat", self._reformat_job, tab, width)

    def _reformat_job(self, tab: Tab, width: int):
        # 탭당 reformat 하나만 - 뒤 이벤트는 앞의 작업이 끝날 때까지 기다린다.
        # 태스크를 가드 안에서 넣어야 적용 순서가 이벤트 순서와 같다.
        with tab.reformat_guard:
            page = tab.page
            rendered = self.session.render_page(page, width, force=True)
            self.runner.schedule_task(Task(self._apply_reformat, tab, rendered))

    def _apply_reformat(self, tab: Tab, rendered: Page):
        if not rendered.same_document(tab.page):
            # 그 사이 다른 페이지로 이동함
            return
        tab.page = tab.page.with_render(rendered.rendered, rendered.links, rendered.render_width)
        if self.session.is_visible(tab):
            self.session.surface.set_content(tab.id, tab.page.rendered, tab.page.selected)
            self.session.draw()
