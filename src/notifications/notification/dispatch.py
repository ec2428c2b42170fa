"""Notification fan-out — one notice to many recipients and their devices.

For every recipient a Notification is stored first, then a push is sent
to each device token the recipient has registered. A failed push or a
failed recipient is logged and skipped; the remaining recipients and
devices are still served. Nothing is retried.

Must be called inside the notifications domain context.
"""

import structlog
from notifications.channel import get_push_channel
from notifications.device.push_token import PushToken
from notifications.notification.notification import Notification
from notifications.notification.recipients import get_recipient_resolver
from protean.utils.globals import current_domain

logger = structlog.get_logger(__name__)


class NotificationDispatcher:
    def __init__(self, push_channel=None, recipient_resolver=None):
        self.push_channel = push_channel or get_push_channel()
        self.recipient_resolver = recipient_resolver or get_recipient_resolver()

    def notify(self, recipients, title: str, message: str, payload: dict | None = None) -> list[str]:
        """Store and push a notice for each distinct recipient.

        Returns:
            IDs of the notifications that were stored.
        """
        notification_ids = []
        seen = set()
        for recipient_id in recipients:
            recipient_id = str(recipient_id)
            if recipient_id in seen:
                continue
            seen.add(recipient_id)

            try:
                notification = Notification.create(
                    recipient_id=recipient_id,
                    title=title,
                    message=message,
                    payload=payload,
                )
                current_domain.repository_for(Notification).add(notification)
            except Exception as e:
                logger.error(
                    "Failed to store notification",
                    recipient_id=recipient_id,
                    title=title,
                    error=str(e),
                )
                continue

            notification_ids.append(str(notification.id))
            self._push(recipient_id, title, message, payload)

        return notification_ids

    def notify_user(self, user_id, title: str, message: str, payload: dict | None = None) -> list[str]:
        return self.notify([user_id], title, message, payload)

    def notify_role(self, role: str, title: str, message: str, payload: dict | None = None) -> list[str]:
        try:
            recipients = self.recipient_resolver.user_ids_for_role(role)
        except Exception as e:
            logger.error("Failed to resolve role recipients", role=role, error=str(e))
            return []
        return self.notify(recipients, title, message, payload)

    def _push(self, recipient_id: str, title: str, message: str, payload: dict | None) -> None:
        try:
            tokens = current_domain.repository_for(PushToken).for_user(recipient_id)
        except Exception as e:
            logger.error("Failed to load push tokens", recipient_id=recipient_id, error=str(e))
            return

        data = {key: str(value) for key, value in (payload or {}).items()}
        for push_token in tokens:
            try:
                result = self.push_channel.send(
                    device_token=push_token.token,
                    title=title,
                    body=message,
                    data=data,
                )
            except Exception as e:
                logger.error(
                    "Push dispatch raised",
                    recipient_id=recipient_id,
                    device_type=push_token.device_type,
                    error=str(e),
                )
                continue

            if result.get("status") != "sent":
                logger.warning(
                    "Push dispatch failed",
                    recipient_id=recipient_id,
                    device_type=push_token.device_type,
                    error=result.get("error", "Unknown dispatch error"),
                )
