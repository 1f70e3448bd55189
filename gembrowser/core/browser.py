"""
Browser - 설정과 협력 객체를 묶고 UI 이벤트 루프를 돌린다

UI 스레드:
- 입력 이벤트 처리 (입력은 리더 스레드가 큐에 넣는다)
- 워커가 넘긴 태스크 실행
"""
import sys
import threading
from queue import Empty, Queue
from typing import Optional, TextIO

import structlog

from ..config import Config
from ..content.bookmarks import Bookmarks
from ..networking import CacheManager, GeminiFetcher
from ..profiling import Tracer, configure_logging, set_thread_name
from ..rendering import GemtextRenderer
from ..threads import TaskRunner, WorkerPool
from ..ui import InputRouter, TextSurface
from .session import Session

logger = structlog.get_logger(__name__)

KEY_PREFIX = ":"


class Browser:
    def __init__(self, config: Optional[Config] = None,
                 stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.config = config or Config()
        configure_logging(self.config.get("logging", "level", default="WARNING"),
                          self.config.get("logging", "file"))
        tracer = Tracer.get()
        tracer.slow_threshold = float(self.config.get("profiling", "slow_threshold", default=2.0))
        if self.config.get("profiling", "enabled", default=False):
            tracer.enable(self.config.get("profiling", "trace_file", default="trace.json"))

        self.stdin = stdin or sys.stdin
        self.input_queue: "Queue[Optional[str]]" = Queue()

        self.cache = CacheManager(
            max_pages=int(self.config.get("cache", "max_pages", default=30)),
            max_size=int(self.config.get("cache", "max_size", default=0)),
            timeout=float(self.config.get("cache", "timeout", default=0)),
        )
        self.fetcher = GeminiFetcher(
            cache=self.cache,
            timeout=float(self.config.get("network", "timeout", default=15)),
            max_redirects=int(self.config.get("network", "max_redirects", default=5)),
        )
        self.runner = TaskRunner()
        self.pool = WorkerPool(max_workers=int(self.config.get("network", "workers", default=4)))
        self.surface = TextSurface(stream=stdout)

        self.session = Session(
            fetcher=self.fetcher,
            renderer=GemtextRenderer(),
            surface=self.surface,
            runner=self.runner,
            pool=self.pool,
            cache=self.cache,
            search=self.config.search,
            home=self.config.home,
            max_width=self.config.max_width,
            downloads_dir=self.config.path("general", "downloads"),
            bookmarks=Bookmarks(self.config.path("general", "bookmarks")),
        )
        self.router = InputRouter(self.session)

        set_thread_name("UIThread")

    def new_tab(self, url: Optional[str] = None):
        self.session.new_tab()
        if url:
            self.session.navigate(url)

    # === 입력 ===

    def _read_input(self):
        """리더 스레드 - 줄 단위 입력을 큐로"""
        set_thread_name("InputReader")
        for line in self.stdin:
            self.input_queue.put(line.rstrip("\n"))
        self.input_queue.put(None)  # EOF

    def handle_line(self, line: str):
        """':key' 는 키 입력, ':resize W H' 는 터미널 크기 변경, 나머지는 하단 바 명령"""
        if line.startswith(KEY_PREFIX) and len(line) > len(KEY_PREFIX):
            parts = line[len(KEY_PREFIX):].split()
            if parts[0] == "resize" and len(parts) == 3:
                try:
                    self.session.resize(int(parts[1]), int(parts[2]))
                except ValueError:
                    self.session.notice("Error", f"Invalid size: {' '.join(parts[1:])}")
                return
            if not self.router.handle_key(parts[0]):
                logger.debug("unhandled_key", key=parts[0])
            return
        self.router.handle_text(line)

    # === 이벤트 루프 ===

    def run(self):
        reader = threading.Thread(target=self._read_input, daemon=True)
        reader.start()

        while self.session.running:
            try:
                line = self.input_queue.get(timeout=0.05)
            except Empty:
                pass
            else:
                if line is None:
                    self.session.stop()
                    break
                self.handle_line(line)

            # 워커가 보낸 fetch/reformat 결과 반영
            self.session.process_tasks()

        self.cleanup()

    def cleanup(self):
        self.pool.shutdown(wait=False)
        Tracer.get().finish()
