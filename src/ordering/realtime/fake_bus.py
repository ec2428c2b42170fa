"""Fake real-time bus — records emitted events for testing."""

from ordering.realtime.port import RealtimeBus


class FakeRealtimeBus(RealtimeBus):
    def __init__(self):
        self.emitted: list[dict] = []

    def emit(self, event: str, recipient_ids: list[str], payload: dict | None = None) -> None:
        self.emitted.append({"event": event, "rooms": list(recipient_ids), "payload": payload or {}})

    def reset(self):
        self.emitted.clear()
