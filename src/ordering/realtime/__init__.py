"""Real-time bus factory.

Uses InstantIO when INSTANT_IO_URL is set, else the fake bus.
"""

import os

from ordering.realtime.fake_bus import FakeRealtimeBus
from ordering.realtime.port import RealtimeBus

_current_bus: RealtimeBus | None = None


def get_realtime_bus() -> RealtimeBus:
    global _current_bus
    if _current_bus is None:
        url = os.getenv("INSTANT_IO_URL")
        if url:
            from ordering.realtime.instant_io import InstantIoBus

            _current_bus = InstantIoBus(url, timeout=float(os.getenv("HTTP_TIMEOUT_SECONDS", "5")))
        else:
            _current_bus = FakeRealtimeBus()
    return _current_bus


def set_realtime_bus(bus: RealtimeBus) -> None:
    global _current_bus
    _current_bus = bus


def reset_realtime_bus() -> None:
    global _current_bus
    _current_bus = None
