"""Firebase Cloud Messaging adapter (legacy HTTP API).

Posts one message per device token::

    POST FIREBASE_FCM_URL
    Authorization: key=<FIREBASE_FCM_AUTH>
    {"notification": {"title", "body"}, "to": <token>, "data": {...}}
"""

import requests
import structlog

from notifications.channel.push_port import PushPort

logger = structlog.get_logger(__name__)


class FcmPushAdapter(PushPort):
    def __init__(self, url: str, server_key: str, timeout: float = 5.0) -> None:
        self.url = url
        self.server_key = server_key
        self.timeout = timeout

    def send(
        self,
        device_token: str,
        title: str,
        body: str,
        data: dict | None = None,
    ) -> dict:
        response = requests.post(
            self.url,
            json={
                "notification": {"title": title, "body": body},
                "to": device_token,
                "data": data or {},
            },
            headers={"Authorization": f"key={self.server_key}"},
            timeout=self.timeout,
        )
        if response.status_code >= 400:
            logger.warning("FCM rejected push", status_code=response.status_code)
            return {"message_id": None, "status": "failed", "error": f"FCM returned {response.status_code}"}

        result = response.json()
        if result.get("failure"):
            error = (result.get("results") or [{}])[0].get("error", "Unknown FCM error")
            return {"message_id": None, "status": "failed", "error": error}

        message_id = (result.get("results") or [{}])[0].get("message_id")
        return {"message_id": message_id, "status": "sent"}
