"""
URL 유틸리티 - 링크 해석, 디렉터리 위로 이동, 검색 쿼리 이스케이프
"""
import posixpath
import re
import urllib.parse
from typing import Optional

from ..common.constants import ABOUT_PREFIX, GEMINI_SCHEME
from ..common.errors import URLError

# urljoin이 gemini:// 상대 경로를 해석하도록 등록
for _registry in (urllib.parse.uses_relative, urllib.parse.uses_netloc):
    if GEMINI_SCHEME not in _registry:
        _registry.append(GEMINI_SCHEME)

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def parse_url(url: str) -> urllib.parse.SplitResult:
    """URL 파싱 - 잘못된 퍼센트 인코딩, 제어 문자, 잘못된 포트는 URLError"""
    if _CONTROL_CHARS.search(url):
        raise URLError(f"invalid control character in URL: {url!r}")
    if _BAD_ESCAPE.search(url):
        raise URLError(f"invalid URL escape in: {url!r}")
    try:
        parsed = urllib.parse.urlsplit(url)
        parsed.port  # 포트 검증
    except ValueError as e:
        raise URLError(f"could not parse URL {url!r}: {e}") from e
    return parsed


def resolve_link(base_url: str, link: str) -> str:
    """페이지 URL을 기준으로 (상대) 링크를 절대 URL로 변환"""
    parse_url(base_url)
    parse_url(link)
    return urllib.parse.urljoin(base_url, link)


def parent_url(url: str) -> Optional[str]:
    """디렉터리 위로 한 단계 - 이미 루트면 None

    /test/foo/ -> /test/foo//.. -> /test -> /test/
    """
    parsed = parse_url(url)
    if parsed.path == "/":
        return None

    path = posixpath.normpath(parsed.path + "/..") + "/"
    if path == "//":
        # 도메인 루트에서 생기는 이중 슬래시
        path = "/"
    return urllib.parse.urlunsplit(parsed._replace(path=path, query=""))


def query_escape(query: str) -> str:
    return urllib.parse.quote(query, safe="")


def search_url(endpoint: str, query: str) -> str:
    return f"{endpoint}?{query_escape(query)}"


def normalize_url(url: str) -> str:
    """스킴이 없는 입력은 gemini:// 로 간주"""
    url = url.strip()
    if url.startswith(ABOUT_PREFIX) or "://" in url:
        return url
    if url.startswith("//"):
        return f"{GEMINI_SCHEME}:{url}"
    return f"{GEMINI_SCHEME}://{url}"


def host_of(url: str) -> str:
    try:
        return parse_url(url).hostname or ""
    except URLError:
        return ""
