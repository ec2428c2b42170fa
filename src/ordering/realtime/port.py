"""Real-time bus port — pushes live events to connected users."""

from abc import ABC, abstractmethod


class RealtimeBus(ABC):
    @abstractmethod
    def emit(self, event: str, recipient_ids: list[str], payload: dict | None = None) -> None:
        ...
