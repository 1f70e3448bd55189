"""
Tab - 독립적인 브라우징 컨텍스트

Tab은 다음을 소유합니다:
- History 하나와 현재 Page
- 로딩 상태 (LOADING / DONE)와 진행 중인 URL (pending_url)
- 저장된 스크롤 위치와 하단 바 상태
- 탭별 single-flight 가드 (reformat 등 탭당 동시에 하나만 돌아야 하는 작업용)
"""
import threading
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional

from .history import History
from .page import Page
from ..ui.chrome import BarState

if TYPE_CHECKING:
    from ..ui.chrome import BottomBar
    from ..ui.surface import TextSurface


class TabMode(Enum):
    DONE = auto()
    LOADING = auto()


class SingleFlight:
    """탭당 한 번에 하나의 작업만 허용하는 가드

    두 번째 호출자는 버려지지 않고 앞선 작업이 끝날 때까지 기다린다.
    """

    def __init__(self, name: str):
        self.name = name
        self._lock = threading.Lock()

    def __enter__(self):
        self._lock.acquire()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._lock.release()
        return False

    def locked(self) -> bool:
        return self._lock.locked()


class Tab:
    def __init__(self, tab_id: int, page: Page):
        self.id = tab_id
        self.page = page
        self.history = History()
        self.mode = TabMode.DONE
        self.pending_url: Optional[str] = None

        self.scroll = 0
        self.saved_bar = BarState()
        self.favicon = ""

        self.reformat_guard = SingleFlight(f"reformat-{tab_id}")

    def __repr__(self):
        return f"Tab(id={self.id}, url={self.page.url!r}, mode={self.mode.name})"

    @property
    def url(self) -> str:
        return self.page.url

    def has_content(self) -> bool:
        return self.page.has_content()

    def is_loading(self) -> bool:
        return self.mode == TabMode.LOADING

    def start_loading(self, url: str):
        self.mode = TabMode.LOADING
        self.pending_url = url

    def finish_loading(self):
        self.mode = TabMode.DONE
        self.pending_url = None

    def add_to_history(self, url: str):
        self.history.append(url)

    # === 스크롤 ===

    def line_count(self) -> int:
        return self.page.rendered.count("\n") + 1 if self.page.rendered else 0

    def page_up(self, height: int):
        self.scroll = max(0, self.scroll - height)

    def page_down(self, height: int):
        max_scroll = max(0, self.line_count() - height)
        self.scroll = min(self.scroll + height, max_scroll)

    def save_scroll(self, surface: "TextSurface"):
        self.scroll = surface.get_scroll(self.id)

    def apply_scroll(self, surface: "TextSurface"):
        surface.scroll_to(self.id, self.scroll)

    # === 하단 바 ===

    def save_bar(self, bar: "BottomBar"):
        self.saved_bar = bar.state()

    def apply_bar(self, bar: "BottomBar"):
        bar.restore(self.saved_bar)

    def apply_all(self, bar: "BottomBar", surface: "TextSurface"):
        """탭 전환 후 저장해 둔 UI 상태 복원"""
        self.apply_scroll(surface)
        self.apply_bar(bar)

    # === 링크 선택 ===

    def select_link(self, index: Optional[int]):
        self.page = self.page.with_selection(index)

    def clear_selection(self):
        if self.page.selected is not None:
            self.page = self.page.with_selection(None)
