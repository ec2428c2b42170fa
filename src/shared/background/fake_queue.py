"""Deferred task queue — holds submitted tasks until a test runs them."""

import structlog

from shared.background.port import BackgroundTask, TaskQueue

logger = structlog.get_logger(__name__)


class DeferredTaskQueue(TaskQueue):
    """Task queue that records submissions in memory for test assertions.

    Nothing runs until ``run_pending()`` is called, which lets a test
    observe the state a request leaves behind before its background work.
    """

    def __init__(self):
        self.pending: list[BackgroundTask] = []
        self.completed: list[str] = []
        self.failed: list[tuple[str, str]] = []

    def submit(self, task: BackgroundTask) -> None:
        self.pending.append(task)

    @property
    def pending_names(self) -> list[str]:
        return [task.name for task in self.pending]

    def run_pending(self) -> int:
        """Run queued tasks (including ones they enqueue) and return how many ran."""
        ran = 0
        while self.pending:
            task = self.pending.pop(0)
            try:
                task.run()
            except Exception as exc:
                logger.error("Background task failed", task=task.name, error=str(exc))
                self.failed.append((task.name, str(exc)))
            else:
                self.completed.append(task.name)
            ran += 1
        return ran

    def reset(self):
        self.pending.clear()
        self.completed.clear()
        self.failed.clear()
