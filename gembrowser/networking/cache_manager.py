"""
응답 캐시 - 모든 탭이 공유

페이지는 URL 키로, 파비콘은 호스트 키로 저장한다.
내부 락으로 보호되므로 호출자는 따로 잠글 필요가 없다.
"""
import threading
import time
from collections import OrderedDict
from typing import Dict, Optional, Tuple

import structlog

from ..content.page import Page

logger = structlog.get_logger(__name__)


class CacheManager:
    def __init__(self, max_pages: int = 30, max_size: int = 0, timeout: float = 0):
        self.max_pages = max_pages    # 0 = 무제한
        self.max_size = max_size      # raw 바이트 합계, 0 = 무제한
        self.timeout = timeout        # 초, 0 = 만료 없음

        self._pages: "OrderedDict[str, Tuple[Page, float]]" = OrderedDict()
        self._favicons: Dict[str, str] = {}
        self._size = 0
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._pages)

    @property
    def size(self) -> int:
        return self._size

    def get(self, url: str) -> Optional[Page]:
        """캐시에서 조회 - 만료된 항목은 지운다"""
        with self._lock:
            entry = self._pages.get(url)
            if entry is None:
                return None
            page, stored_at = entry
            if self.timeout and time.time() - stored_at >= self.timeout:
                self._remove(url)
                return None
            self._pages.move_to_end(url)
            return page

    def set(self, page: Page):
        """캐시 저장 - 너무 큰 페이지는 저장하지 않는다"""
        if self.max_size and len(page.raw) > self.max_size:
            return
        with self._lock:
            self._remove(page.url)
            self._pages[page.url] = (page, time.time())
            self._size += len(page.raw)
            self._evict()

    def _evict(self):
        while self._pages and (
            (self.max_pages and len(self._pages) > self.max_pages)
            or (self.max_size and self._size > self.max_size)
        ):
            url, _ = next(iter(self._pages.items()))
            self._remove(url)

    def _remove(self, url: str):
        entry = self._pages.pop(url, None)
        if entry is not None:
            self._size -= len(entry[0].raw)

    def remove_page(self, url: str):
        with self._lock:
            self._remove(url)
        logger.debug("cache_page_removed", url=url)

    def clear(self):
        with self._lock:
            self._pages.clear()
            self._favicons.clear()
            self._size = 0

    # === 파비콘 ===

    def get_favicon(self, host: str) -> Optional[str]:
        """없으면 None, 파비콘이 없는 호스트로 확인됐으면 ''"""
        with self._lock:
            return self._favicons.get(host)

    def set_favicon(self, host: str, favicon: str):
        with self._lock:
            self._favicons[host] = favicon

    def remove_favicon(self, host: str):
        with self._lock:
            self._favicons.pop(host, None)
