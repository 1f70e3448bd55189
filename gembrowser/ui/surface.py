"""
TextSurface - 탭 id로 주소 지정되는 텍스트 뷰 모음

뷰마다 렌더링된 텍스트, 선택된 링크, 스크롤 행을 가진다.
draw()는 현재 뷰의 보이는 부분을 텍스트 스트림에 쓴다.
"""
import sys
import threading
from dataclasses import dataclass
from typing import Dict, Optional, TextIO, Tuple

from ..common.constants import CHROME_ROWS, TERM_HEIGHT, TERM_WIDTH
from .chrome import BottomBar, TabRow


@dataclass
class View:
    text: str = ""
    selected: Optional[int] = None
    scroll: int = 0


class TextSurface:
    def __init__(self, stream: Optional[TextIO] = None,
                 width: int = TERM_WIDTH, height: int = TERM_HEIGHT):
        self.stream = stream or sys.stdout
        self.width = width
        self.height = height

        self.tab_row = TabRow()
        self.bar = BottomBar()
        self.views: Dict[int, View] = {}
        self.current: Optional[int] = None
        self.notice: Optional[Tuple[str, str]] = None
        self.focus = "view"

        self._draw_lock = threading.Lock()

    @property
    def content_height(self) -> int:
        return max(1, self.height - CHROME_ROWS)

    def resize(self, width: int, height: int):
        self.width = width
        self.height = height

    # === 뷰 ===

    def add_view(self, tab_id: int):
        self.views[tab_id] = View()
        self.tab_row.add(tab_id)

    def remove_view(self, tab_id: int):
        self.views.pop(tab_id, None)
        self.tab_row.remove(tab_id)

    def switch_to(self, tab_id: int):
        self.current = tab_id
        self.tab_row.highlight(tab_id)

    def set_content(self, tab_id: int, text: str, selected: Optional[int] = None):
        view = self.views.get(tab_id)
        if view is None:
            return
        view.text = text
        view.selected = selected

    def get_scroll(self, tab_id: int) -> int:
        view = self.views.get(tab_id)
        return view.scroll if view else 0

    def scroll_to(self, tab_id: int, row: int):
        view = self.views.get(tab_id)
        if view:
            view.scroll = max(0, row)

    def set_focus(self, target: str):
        """'view' 또는 'bar'"""
        self.focus = target

    # === 알림 ===

    def show_notice(self, title: str, message: str):
        self.notice = (title, message)

    def dismiss_notice(self):
        self.notice = None

    # === 그리기 ===

    def _visible_lines(self, view: View):
        lines = view.text.split("\n") if view.text else []
        if view.selected is not None:
            marker = f"[{view.selected + 1}]"
            lines = [("> " + line) if line.lstrip().startswith(marker) else line
                     for line in lines]
        return lines[view.scroll:view.scroll + self.content_height]

    def draw(self):
        with self._draw_lock:
            out = [self.tab_row.render(), ""]
            view = self.views.get(self.current) if self.current is not None else None
            lines = self._visible_lines(view) if view else []
            lines += [""] * (self.content_height - len(lines))
            out.extend(lines)
            out.append("")
            if self.notice:
                title, message = self.notice
                out.append(f"** {title}: {message} **")
            else:
                out.append(self.bar.render())
            self.stream.write("\n".join(out) + "\n")
            self.stream.flush()
