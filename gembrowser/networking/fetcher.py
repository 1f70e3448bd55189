"""
GeminiFetcher - 새 원문의 유일한 출처

fetch(url) -> Page (아직 렌더링 전, render_width == -1)
실패는 FetchError로 알린다.
"""
from typing import Optional

import structlog

from .cache_manager import CacheManager
from .protocols import URLFactory
from ..common.errors import FetchError, URLError
from ..content.page import Mediatype, Page
from ..navigation.links import resolve_link
from ..profiling import MeasureTime

logger = structlog.get_logger(__name__)

DEFAULT_MEDIATYPE = "text/gemini"
MAX_FAVICON_LENGTH = 2


def parse_mediatype(meta: str):
    """'text/gemini; charset=utf-8' -> ('text/gemini', 'utf-8')"""
    parts = [part.strip() for part in (meta or DEFAULT_MEDIATYPE).split(";")]
    mimetype = parts[0].lower() or DEFAULT_MEDIATYPE
    charset = "utf-8"
    for param in parts[1:]:
        key, _, value = param.partition("=")
        if key.strip().lower() == "charset" and value.strip():
            charset = value.strip().strip('"').lower()
    return mimetype, charset


class GeminiFetcher:
    def __init__(self, cache: Optional[CacheManager] = None, timeout: float = 15,
                 max_redirects: int = 5):
        self.cache = cache
        self.timeout = timeout
        self.max_redirects = max_redirects

    def _request(self, url: str):
        with MeasureTime("gemini_request", "network", url=url):
            return URLFactory.parse(url).request(timeout=self.timeout)

    def fetch(self, url: str) -> Page:
        if self.cache is not None:
            cached = self.cache.get(url)
            if cached is not None:
                logger.debug("cache_hit", url=url)
                return cached

        current = url
        for _ in range(self.max_redirects + 1):
            try:
                response = self._request(current)
            except OSError as e:
                raise FetchError(f"Connection error: {e}") from e
            except ValueError as e:
                # IDNA 인코딩 실패 등 (UnicodeError)
                raise FetchError(f"Invalid host: {e}") from e

            if response.category == 3:
                try:
                    current = resolve_link(current, response.meta)
                except URLError as e:
                    raise FetchError(f"Invalid redirect target: {response.meta}") from e
                logger.info("redirect", url=url, target=current, status=response.status)
                continue

            if response.category == 2:
                page = self._make_page(current, response.meta, response.body)
                if self.cache is not None:
                    self.cache.set(page)
                return page

            raise self._failure(response.status, response.meta)

        raise FetchError(f"Too many redirects (more than {self.max_redirects})")

    def _make_page(self, url: str, meta: str, body: bytes) -> Page:
        mimetype, charset = parse_mediatype(meta)
        if mimetype == "text/gemini":
            mediatype = Mediatype.GEMINI
        elif mimetype.startswith("text/"):
            mediatype = Mediatype.PLAIN
        else:
            raise FetchError(f"Unsupported media type: {mimetype}", status=20)

        if charset not in ("utf-8", "utf8"):
            # base64 처럼 lookup은 되지만 텍스트 인코딩이 아닌 codec도 거른다
            try:
                body = body.decode(charset, errors="replace").encode("utf-8")
            except (LookupError, ValueError) as e:
                raise FetchError(f"Unsupported charset: {charset}", status=20) from e
        return Page(raw=body, url=url, mediatype=mediatype)

    @staticmethod
    def _failure(status: int, meta: str) -> FetchError:
        category = status // 10
        if category == 1:
            return FetchError(f"Input requested: {meta}", status=status)
        if category == 6:
            return FetchError(f"Client certificate required: {meta}", status=status)
        if category in (4, 5):
            return FetchError(meta or "Request failed", status=status)
        return FetchError(f"Unknown response status: {meta}", status=status)

    def fetch_favicon(self, host: str) -> str:
        """gemini://host/favicon.txt - 없거나 잘못됐으면 ''"""
        if self.cache is not None:
            cached = self.cache.get_favicon(host)
            if cached is not None:
                return cached

        favicon = ""
        try:
            response = self._request(f"gemini://{host}/favicon.txt")
            if response.status == 20 and parse_mediatype(response.meta)[0] == "text/plain":
                text = response.body.decode("utf-8", errors="replace").strip()
                if 0 < len(text) <= MAX_FAVICON_LENGTH and not any(c.isspace() for c in text):
                    favicon = text
        except (OSError, FetchError, URLError) as e:
            logger.debug("favicon_failed", host=host, error=str(e))

        if self.cache is not None:
            self.cache.set_favicon(host, favicon)
        return favicon
