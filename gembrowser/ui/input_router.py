"""
InputRouter - 키 이름을 Session 연산으로 연결

현재 탭이 로딩 중이면 로드된 문서가 필요한 명령(히스토리, 저장, 스크롤, 링크 번호)은 막고
새 탭/탭 닫기/종료/탭 전환/도움말만 받는다.
"""
from typing import TYPE_CHECKING, Callable, Dict

from ..common.constants import HELP_URL

if TYPE_CHECKING:
    from ..core.session import Session

# Shift+1..9, Shift+0 (마지막 탭)
SHIFT_NUMBERS = "!@#$%^&*()"


class InputRouter:
    def __init__(self, session: "Session"):
        self.session = session

        # 로딩 중이 아닐 때만 동작
        self.done_keys: Dict[str, Callable[[], None]] = {
            "b": session.back,
            "alt-left": session.back,
            "f": session.forward,
            "alt-right": session.forward,
            "R": session.reload,
            "ctrl-r": session.reload,
            "ctrl-h": session.go_home,
            "ctrl-b": session.show_bookmarks,
            "ctrl-d": session.add_bookmark,
            "ctrl-s": session.save_page,
            "u": session.page_up,
            "pgup": session.page_up,
            "d": session.page_down,
            "pgdn": session.page_down,
            "space": session.focus_bar,
            " ": session.focus_bar,
            "enter": self._enter,
            "tab": lambda: session.cycle_link(1),
            "backtab": lambda: session.cycle_link(-1),
            "esc": session.clear_selection,
        }

        # 로딩 중에도 동작
        self.global_keys: Dict[str, Callable[[], None]] = {
            "ctrl-t": session.open_selected_in_new_tab,
            "ctrl-w": session.close_tab,
            "ctrl-q": session.stop,
            "ctrl-c": session.stop,
            "q": session.stop,
            "?": lambda: session.navigate(HELP_URL),
        }

    def _enter(self):
        """링크 선택 모드 진입, 이미 선택돼 있으면 따라가기"""
        tab = self.session.current_tab
        if tab is not None and tab.page.selected is not None:
            self.session.activate_selected()
        else:
            self.session.select_link()

    def _bar_key(self, key: str) -> bool:
        bar = self.session.bar
        if key == "enter":
            self.session.submit_command(bar.enter())
        elif key == "esc":
            self.session.reset_bar()
        elif key == "backspace":
            if bar.backspace():
                self.session.draw()
        elif key == "space":
            bar.keypress(" ")
        elif len(key) == 1:
            bar.keypress(key)
        # tab, backtab 등은 무시
        return True

    def handle_key(self, key: str) -> bool:
        """처리했으면 True"""
        session = self.session
        if session.surface.notice is not None:
            # 알림은 아무 키로나 닫는다
            session.dismiss_notice()
            return True

        if session.bar.focused:
            return self._bar_key(key)

        tab = session.current_tab
        if tab is None:
            return False

        if not tab.is_loading():
            action = self.done_keys.get(key)
            if action is not None:
                action()
                return True
            if len(key) == 1 and key.isdigit():
                number = int(key) or 10  # 0은 10번 링크
                session.activate_link_by_index(number)
                return True

        action = self.global_keys.get(key)
        if action is not None:
            action()
            return True

        if len(key) == 1 and key in SHIFT_NUMBERS:
            num = (SHIFT_NUMBERS.index(key) + 1) % 10
            if num == 0:
                session.switch_tab(session.num_tabs() - 1)
            else:
                session.switch_tab(num - 1)
            return True

        return False

    def handle_text(self, text: str):
        """하단 바에 한 번에 입력된 텍스트 제출"""
        self.session.submit_command(text)
