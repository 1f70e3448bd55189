"""Thread management - UI 스레드 태스크 큐와 워커 풀"""
from .task import Task, TaskRunner
from .worker_pool import WorkerPool

__all__ = [
    "Task",
    "TaskRunner",
    "WorkerPool",
]
