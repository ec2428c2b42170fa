"""InstantIO adapter — socket room broadcast over HTTP.

    POST INSTANT_IO_URL {"event": <name>, "rooms": [<user id>...], "payload": {...}}
"""

import requests

from ordering.realtime.port import RealtimeBus

DEFAULT_INSTANT_IO_URL = "http://localhost:3000/instantio/emit"


class InstantIoBus(RealtimeBus):
    def __init__(self, url: str = DEFAULT_INSTANT_IO_URL, timeout: float = 5.0) -> None:
        self.url = url
        self.timeout = timeout

    def emit(self, event: str, recipient_ids: list[str], payload: dict | None = None) -> None:
        response = requests.post(
            self.url,
            json={"event": event, "rooms": [str(r) for r in recipient_ids], "payload": payload or {}},
            timeout=self.timeout,
        )
        response.raise_for_status()
