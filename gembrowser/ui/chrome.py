"""
Chrome - 탭 줄과 하단 입력 바

하단 바는 URL/링크 번호/검색어 입력과 현재 URL 표시를 겸한다.
탭을 떠날 때 상태를 BarState로 저장하고 돌아오면 복원한다.
"""
from dataclasses import dataclass
from typing import Dict, List

INPUT_LABEL = "URL/Num./Search: "
LOADING_LABEL = "Loading..."


@dataclass(frozen=True)
class BarState:
    label: str = ""
    text: str = ""


class BottomBar:
    def __init__(self):
        self.label = ""
        self.text = ""
        self.focused = False

    def state(self) -> BarState:
        return BarState(self.label, self.text)

    def restore(self, state: BarState):
        self.label = state.label
        self.text = state.text

    def set(self, label: str, text: str):
        self.label = label
        self.text = text

    def clear(self):
        self.set("", "")

    def start_input(self):
        """입력 모드 진입 - 저장하지 않으므로 탭을 바꾸면 풀린다"""
        self.set(INPUT_LABEL, "")
        self.focused = True

    def keypress(self, char: str) -> bool:
        if self.focused:
            self.text += char
            return True
        return False

    def backspace(self) -> bool:
        if self.focused and len(self.text) > 0:
            self.text = self.text[:-1]
            return True
        return False

    def enter(self) -> str:
        """입력 종료 - 입력된 텍스트 반환"""
        self.focused = False
        return self.text

    def blur(self):
        self.focused = False

    def render(self) -> str:
        return f"{self.label}{self.text}"


class TabRow:
    """화면 상단 탭 번호 줄 (화면 표시는 1부터)"""

    def __init__(self):
        self.tab_ids: List[int] = []
        self.favicons: Dict[int, str] = {}
        self.highlighted = -1

    def add(self, tab_id: int):
        self.tab_ids.append(tab_id)

    def remove(self, tab_id: int):
        self.tab_ids.remove(tab_id)
        self.favicons.pop(tab_id, None)

    def highlight(self, tab_id: int):
        self.highlighted = tab_id

    def set_favicon(self, tab_id: int, favicon: str):
        self.favicons[tab_id] = favicon

    def render(self) -> str:
        cells = []
        for tab_id in self.tab_ids:
            label = f"{self.favicons[tab_id]} {tab_id + 1}" if self.favicons.get(tab_id) else str(tab_id + 1)
            if tab_id == self.highlighted:
                cells.append(f"[{label}]")
            else:
                cells.append(f" {label} ")
        return "|".join(cells) + "|"
