"""Thread-pool task queue — production executor for background work.

Tasks are fire-and-forget: a failing task is logged with its name and
never retried or surfaced to the submitting request.
"""

from concurrent.futures import Future, ThreadPoolExecutor

import structlog

from shared.background.port import BackgroundTask, TaskQueue

logger = structlog.get_logger(__name__)


class ThreadPoolTaskQueue(TaskQueue):
    def __init__(self, max_workers: int = 4) -> None:
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="bazaar-bg")

    def submit(self, task: BackgroundTask) -> None:
        future = self._executor.submit(task.run)
        future.add_done_callback(lambda f: _log_outcome(task, f))
        logger.debug("Background task submitted", task=task.name)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)


def _log_outcome(task: BackgroundTask, future: Future) -> None:
    exc = future.exception()
    if exc is not None:
        logger.error(
            "Background task failed",
            task=task.name,
            error=str(exc),
            exc_info=exc,
        )
    else:
        logger.debug("Background task finished", task=task.name)
