"""Background task queue port — where post-admission work is handed off."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


@dataclass
class BackgroundTask:
    """A named unit of work that runs after the request has been answered."""

    name: str
    func: Callable[..., Any]
    kwargs: dict = field(default_factory=dict)

    def run(self) -> Any:
        return self.func(**self.kwargs)


class TaskQueue(ABC):
    """Abstract interface for background work execution."""

    @abstractmethod
    def submit(self, task: BackgroundTask) -> None:
        """Hand off a task. Must not block on the task's completion."""
        ...

    def shutdown(self, wait: bool = True) -> None:  # noqa: B027
        """Release worker resources. No-op by default."""
