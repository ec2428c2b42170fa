"""Notification aggregate (CQRS) — one in-app message for one recipient.

Notifications are created by the fan-out dispatcher and then moved along
by their recipient as they read and act on them.

State Machine (5 states):
    UNREAD → READ → ACTED → ARCHIVED
    UNREAD → ACTED | DISMISSED | ARCHIVED
    READ → DISMISSED → ARCHIVED
"""

import json
from datetime import UTC, datetime
from enum import Enum

from notifications.domain import notifications
from notifications.exceptions import InvalidNotificationStatus
from notifications.notification.events import NotificationCreated, NotificationStatusChanged
from protean.fields import DateTime, Identifier, String, Text


class NotificationStatus(Enum):
    UNREAD = "Unread"
    READ = "Read"
    ACTED = "Acted"
    DISMISSED = "Dismissed"
    ARCHIVED = "Archived"


_VALID_TRANSITIONS = {
    NotificationStatus.UNREAD: {
        NotificationStatus.READ,
        NotificationStatus.ACTED,
        NotificationStatus.DISMISSED,
        NotificationStatus.ARCHIVED,
    },
    NotificationStatus.READ: {
        NotificationStatus.ACTED,
        NotificationStatus.DISMISSED,
        NotificationStatus.ARCHIVED,
    },
    NotificationStatus.ACTED: {NotificationStatus.ARCHIVED},
    NotificationStatus.DISMISSED: {NotificationStatus.ARCHIVED},
    NotificationStatus.ARCHIVED: set(),  # Terminal
}


@notifications.aggregate
class Notification:
    """A message addressed to a single user, with an optional deep-link payload."""

    recipient_id: Identifier(required=True)
    title: String(required=True, max_length=255)
    message: Text(required=True)
    payload: Text()  # JSON, e.g. {"redirect": "order-detail", "id": "..."}
    status: String(choices=NotificationStatus, default=NotificationStatus.UNREAD.value)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(cls, recipient_id, title, message, payload=None):
        now = datetime.now(UTC)
        notification = cls(
            recipient_id=recipient_id,
            title=title,
            message=message,
            payload=json.dumps(payload) if payload is not None else None,
            status=NotificationStatus.UNREAD.value,
            created_at=now,
            updated_at=now,
        )
        notification.raise_(
            NotificationCreated(
                notification_id=str(notification.id),
                recipient_id=str(recipient_id),
                title=title,
                created_at=now,
            )
        )
        return notification

    @property
    def payload_data(self) -> dict | None:
        return json.loads(self.payload) if self.payload else None

    def mark(self, status):
        try:
            target = NotificationStatus(status)
        except ValueError as exc:
            raise InvalidNotificationStatus(f"Invalid notification status: {status}") from exc

        current = NotificationStatus(self.status)
        if target not in _VALID_TRANSITIONS.get(current, set()):
            raise InvalidNotificationStatus(f"Cannot transition from {current.value} to {target.value}")

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now
        self.raise_(
            NotificationStatusChanged(
                notification_id=str(self.id),
                recipient_id=str(self.recipient_id),
                previous_status=current.value,
                new_status=target.value,
                changed_at=now,
            )
        )


@notifications.repository(part_of=Notification)
class NotificationRepository:
    def inbox(self, recipient_id, status: str | None = None, limit: int | None = None) -> list[Notification]:
        """A recipient's notifications, newest first. ``limit=None`` returns all of them."""
        filters = {"recipient_id": str(recipient_id)}
        if status:
            filters["status"] = status
        return self._dao.query.filter(**filters).order_by("-created_at").limit(limit).all().items

    def count_for(self, recipient_id, status: str) -> int:
        return self._dao.query.filter(recipient_id=str(recipient_id), status=status).count()
