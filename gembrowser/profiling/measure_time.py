"""
작업 시간 측정 - fetch, 렌더링, 워커 작업

    with MeasureTime("fetch", "network", url=url):
        fetcher.fetch(url)

profiling.enabled 가 켜져 있으면 구간을 모아 종료 시 Chrome Tracing
JSON ("ph": "X" 완료 이벤트)으로 저장한다. 꺼져 있어도 slow_threshold 를
넘는 구간은 로그로 남긴다.
"""
import json
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import structlog

logger = structlog.get_logger(__name__)

SLOW_THRESHOLD = 2.0  # 초


@dataclass
class Span:
    name: str
    category: str
    start: float      # Tracer 기준 시각부터의 초
    duration: float   # 초
    thread_id: int
    args: Dict[str, Any] = field(default_factory=dict)

    def to_event(self, pid: int) -> Dict[str, Any]:
        event = {
            "name": self.name,
            "cat": self.category,
            "ph": "X",
            "ts": self.start * 1_000_000,
            "dur": self.duration * 1_000_000,
            "pid": pid,
            "tid": self.thread_id,
        }
        if self.args:
            event["args"] = {k: str(v) for k, v in self.args.items()}
        return event


class Tracer:
    """프로세스 전체에서 하나 - Tracer.get()"""

    _instance: Optional["Tracer"] = None
    _instance_lock = threading.Lock()

    def __init__(self):
        self.enabled = False
        self.output_file: Optional[str] = None
        self.slow_threshold = SLOW_THRESHOLD
        self.origin = time.perf_counter()
        self.spans: List[Span] = []
        self.thread_names: Dict[int, str] = {}
        self._lock = threading.Lock()

    @classmethod
    def get(cls) -> "Tracer":
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = Tracer()
            return cls._instance

    def enable(self, output_file: str):
        self.output_file = output_file
        self.enabled = True
        logger.info("tracing_enabled", path=output_file)

    def now(self) -> float:
        return time.perf_counter() - self.origin

    def name_thread(self, name: str):
        with self._lock:
            self.thread_names[threading.get_ident()] = name

    def record(self, span: Span):
        if span.duration >= self.slow_threshold:
            logger.warning("slow_operation", operation=span.name, category=span.category,
                           seconds=round(span.duration, 3), **span.args)
        if not self.enabled:
            return
        with self._lock:
            self.spans.append(span)

    def finish(self):
        """모은 구간을 파일로 쓰고 기록을 멈춘다"""
        if not self.enabled or not self.output_file:
            return
        self.enabled = False

        with self._lock:
            events = [
                {"name": "thread_name", "ph": "M", "pid": 1, "tid": tid, "args": {"name": name}}
                for tid, name in self.thread_names.items()
            ]
            events.extend(span.to_event(pid=1) for span in self.spans)
            count = len(self.spans)

        with open(self.output_file, "w") as f:
            json.dump({"traceEvents": events, "displayTimeUnit": "ms"}, f)
        logger.info("trace_saved", path=self.output_file, spans=count)


class MeasureTime:
    def __init__(self, name: str, category: str = "function", **args):
        self.name = name
        self.category = category
        self.args = args
        self.tracer = Tracer.get()
        self._start = 0.0

    def __enter__(self):
        self._start = self.tracer.now()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = self.tracer.now() - self._start
        self.tracer.record(Span(self.name, self.category, self._start, duration,
                                threading.get_ident(), self.args))
        return False


def set_thread_name(name: str):
    Tracer.get().name_thread(name)
