"""In-memory push channel used by tests and local runs."""

from itertools import count

from notifications.channel.push_port import PushPort


class FakePushAdapter(PushPort):
    """Keeps delivered pushes in ``sent_pushes``.

    Tokens listed in ``failing_tokens`` get a failed result; with
    ``unreachable`` set every send raises ``ConnectionError``.
    """

    def __init__(self):
        self._sequence = count(1)
        self.sent_pushes: list[dict] = []
        self.failing_tokens: set[str] = set()
        self.unreachable = False

    def configure(self, failing_tokens=None, unreachable: bool = False):
        self.failing_tokens = set(failing_tokens or ())
        self.unreachable = unreachable

    def send(
        self,
        device_token: str,
        title: str,
        body: str,
        data: dict | None = None,
    ) -> dict:
        if self.unreachable:
            raise ConnectionError("push channel unreachable")
        if device_token in self.failing_tokens:
            return {"message_id": None, "status": "failed", "error": "Device token rejected"}

        message_id = f"push-{next(self._sequence)}"
        self.sent_pushes.append(
            {
                "message_id": message_id,
                "device_token": device_token,
                "title": title,
                "body": body,
                "data": data,
            }
        )
        return {"message_id": message_id, "status": "sent"}

    def reset(self):
        self.sent_pushes.clear()
        self.failing_tokens.clear()
        self.unreachable = False
