"""
Page - 한 번의 fetch로 얻은 문서 스냅샷

Tab은 네비게이션마다 Page를 통째로 교체한다.
터미널 크기가 바뀌면 rendered/render_width만 새 값으로 바뀐 사본을 만든다.
"""
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Optional, Tuple

from ..common.constants import ABOUT_PREFIX, FORCE_RENDER


class Mediatype(Enum):
    GEMINI = auto()  # text/gemini
    PLAIN = auto()   # 그 밖의 text/*


class PageMode(Enum):
    NORMAL = auto()
    LINK_SELECT = auto()  # 링크 하나가 하이라이트된 상태


@dataclass(frozen=True)
class Page:
    raw: bytes
    url: str
    mediatype: Mediatype = Mediatype.GEMINI
    rendered: str = ""
    links: Tuple[str, ...] = ()
    render_width: int = FORCE_RENDER
    mode: PageMode = PageMode.NORMAL
    selected: Optional[int] = None  # 0-indexed, LINK_SELECT 모드에서만 사용
    is_error: bool = False  # fetch 실패를 대신 보여주는 페이지

    def has_content(self) -> bool:
        """내부(about:) 페이지가 아닌 실제 문서인지"""
        return bool(self.url) and not self.url.startswith(ABOUT_PREFIX)

    def needs_render(self, width: int) -> bool:
        return self.render_width == FORCE_RENDER or self.render_width != width

    def with_render(self, rendered: str, links, width: int) -> "Page":
        """새 폭으로 렌더링된 사본"""
        return replace(self, rendered=rendered, links=tuple(links), render_width=width)

    def with_selection(self, index: Optional[int]) -> "Page":
        if index is None:
            return replace(self, mode=PageMode.NORMAL, selected=None)
        return replace(self, mode=PageMode.LINK_SELECT, selected=index)

    def same_document(self, other: Optional["Page"]) -> bool:
        """렌더 결과와 무관하게 같은 fetch 결과인지"""
        return other is not None and other.url == self.url and other.raw is self.raw
