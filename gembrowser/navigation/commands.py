"""
하단 바 입력 해석

입력 문자열을 현재 페이지 기준으로 다음 중 하나로 분류한다:
NAVIGATE(url), ACTIVATE_LINK(number), OPEN_IN_NEW_TAB(url), NOOP

UI와 무관한 순수 함수라서 단독으로 테스트할 수 있다.
"""
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from ..common.constants import ABOUT_PREFIX
from ..content.page import Page
from .links import normalize_url, parent_url, resolve_link, search_url

NEW_TAB_PREFIX = "new:"
_INTEGER = re.compile(r"\A[+-]?[0-9]+\Z")


class CommandKind(Enum):
    NOOP = auto()
    NAVIGATE = auto()
    ACTIVATE_LINK = auto()
    OPEN_IN_NEW_TAB = auto()


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    url: Optional[str] = None
    number: Optional[int] = None  # 링크 번호 (1부터)
    bypass_cache: bool = False


NOOP = Command(CommandKind.NOOP)


def _parse_int(text: str) -> Optional[int]:
    if _INTEGER.match(text):
        return int(text)
    return None


def is_search(query: str) -> bool:
    """공백이 있거나, '//'도 '.'도 없는 (about: 이 아닌) 입력은 검색어"""
    if " " in query:
        return True
    return "//" not in query and "." not in query and not query.startswith(ABOUT_PREFIX)


def classify(query: str, page: Page, search_endpoint: str) -> Command:
    """입력 해석 - 링크 해석 실패 시 URLError"""
    if query.strip() == "":
        return NOOP

    if query == ".." and page.has_content():
        parent = parent_url(page.url)
        if parent is None:
            # 더 이상 올라갈 수 없음
            return NOOP
        return Command(CommandKind.NAVIGATE, url=parent)

    number = _parse_int(query)
    if number is None:
        if query.startswith(NEW_TAB_PREFIX) and len(query) > len(NEW_TAB_PREFIX):
            number = _parse_int(query[len(NEW_TAB_PREFIX):])
            if number is not None and 0 < number <= len(page.links):
                url = resolve_link(page.url, page.links[number - 1])
                return Command(CommandKind.OPEN_IN_NEW_TAB, url=url)
            return NOOP

        if is_search(query):
            return Command(CommandKind.NAVIGATE, url=search_url(search_endpoint, query),
                           bypass_cache=True)
        return Command(CommandKind.NAVIGATE, url=normalize_url(query), bypass_cache=True)

    if 0 < number <= len(page.links):
        return Command(CommandKind.ACTIVATE_LINK, number=number)
    # 잘못된 링크 번호는 무시
    return NOOP
