"""
History - 탭별 방문 URL 목록과 커서

position == -1 은 "아직 뒤로 갈 항목 없음" (빈 새 탭 직후).
"""
from typing import List

from ..common.errors import EmptyHistory, NoHistory


class History:
    def __init__(self):
        self.entries: List[str] = []
        self.position = -1

    def __len__(self):
        return len(self.entries)

    def __repr__(self):
        return f"History(entries={self.entries!r}, position={self.position})"

    def append(self, url: str):
        """새 URL 추가 - 커서 뒤의 forward 분기는 버린다"""
        if self.position < len(self.entries) - 1:
            del self.entries[self.position + 1:]
        self.entries.append(url)
        self.position = len(self.entries) - 1

    def back(self) -> str:
        if self.position <= 0:
            raise NoHistory("already at the start of history")
        self.position -= 1
        return self.entries[self.position]

    def forward(self) -> str:
        if self.position >= len(self.entries) - 1:
            raise NoHistory("already at the end of history")
        self.position += 1
        return self.entries[self.position]

    def current(self) -> str:
        if self.position == -1:
            raise EmptyHistory("no page has been visited yet")
        return self.entries[self.position]

    def reset_position(self):
        """뒤로 갈 수 없는 상태로 - 다음 방문이 첫 항목이 된다"""
        self.position = -1
