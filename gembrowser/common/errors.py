"""
브라우저 세션 에러 계층

- URLError, InvalidInternalURL: 사용자에게 알림(notice)으로 표시
- InvalidIndex, NoHistory, EmptyHistory: 조용히 무시
- FetchError: 에러 페이지로 렌더링
"""
from typing import Optional


class BrowserError(Exception):
    """모든 브라우저 에러의 기반 클래스"""


class URLError(BrowserError):
    """URL 또는 링크 참조를 파싱할 수 없음"""


class InvalidIndex(BrowserError):
    """범위를 벗어난 링크/탭 번호"""


class NoHistory(BrowserError):
    """히스토리 경계에서 뒤로/앞으로 이동"""


class EmptyHistory(BrowserError):
    """아직 방문한 URL이 없음 (position == -1)"""


class InvalidInternalURL(BrowserError):
    """허용되지 않은 about: URL"""


class FetchError(BrowserError):
    """Fetcher가 문서를 가져오지 못함"""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status

    def __str__(self):
        message = super().__str__()
        if self.status is None:
            return message
        return f"{message} (status {self.status})"
