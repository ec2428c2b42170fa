"""Background task queue factory.

Provides get_task_queue() / set_task_queue() to swap implementations:
- ThreadPoolTaskQueue for the running service (BACKGROUND_WORKERS threads)
- DeferredTaskQueue for tests that control when background work runs
"""

import os

from shared.background.port import BackgroundTask, TaskQueue
from shared.background.thread_pool import ThreadPoolTaskQueue

_current_queue: TaskQueue | None = None


def get_task_queue() -> TaskQueue:
    """Return the current task queue. Defaults to a thread pool."""
    global _current_queue
    if _current_queue is None:
        _current_queue = ThreadPoolTaskQueue(max_workers=int(os.getenv("BACKGROUND_WORKERS", "4")))
    return _current_queue


def set_task_queue(queue: TaskQueue) -> None:
    """Override the active task queue (useful for tests)."""
    global _current_queue
    _current_queue = queue


def reset_task_queue() -> None:
    """Shut down and forget the active task queue."""
    global _current_queue
    if _current_queue is not None:
        _current_queue.shutdown(wait=False)
    _current_queue = None


def submit(name: str, func, **kwargs) -> None:
    """Submit ``func(**kwargs)`` to the active queue under ``name``."""
    get_task_queue().submit(BackgroundTask(name=name, func=func, kwargs=kwargs))


__all__ = ["BackgroundTask", "TaskQueue", "get_task_queue", "reset_task_queue", "set_task_queue", "submit"]
