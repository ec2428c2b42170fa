"""Push channel port — delivers one message to one registered device."""

from abc import ABC, abstractmethod


class PushPort(ABC):
    @abstractmethod
    def send(
        self,
        device_token: str,
        title: str,
        body: str,
        data: dict | None = None,
    ) -> dict:
        """Deliver a push to a single device token.

        Adapters report delivery problems in the result rather than raising,
        but callers must still tolerate transport exceptions.

        Returns:
            ``{"message_id": str, "status": "sent"}`` on delivery, or
            ``{"message_id": None, "status": "failed", "error": str}``.
        """
