"""
WorkerPool - fetch/reformat 같은 블로킹 작업을 별도 스레드에서 처리

UI 스레드를 막지 않도록 작업을 ThreadPoolExecutor로 보낸다.
작업 결과는 작업 스스로 TaskRunner에 태스크로 넘긴다.
"""
import itertools
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable

import structlog

from ..profiling import MeasureTime, set_thread_name

logger = structlog.get_logger(__name__)


class WorkerPool:
    def __init__(self, max_workers: int = 4):
        self.executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="Worker")
        self._job_ids = itertools.count(1)
        self._lock = threading.Lock()

    def submit(self, name: str, fn: Callable, *args) -> Future:
        with self._lock:
            job_id = next(self._job_ids)
        return self.executor.submit(self._run_job, job_id, name, fn, *args)

    def _run_job(self, job_id: int, name: str, fn: Callable, *args):
        set_thread_name(threading.current_thread().name)
        try:
            with MeasureTime(name, "worker"):
                return fn(*args)
        except Exception:
            logger.exception("job_failed", job=name, job_id=job_id)
            raise

    def shutdown(self, wait: bool = False):
        self.executor.shutdown(wait=wait)
