"""Read side of a user's notification inbox."""

from notifications.notification.notification import Notification, NotificationStatus
from protean.utils.globals import current_domain


def list_notifications(recipient_id, status: str | None = None, limit: int | None = None) -> list[Notification]:
    """A recipient's notifications, newest first, optionally filtered by status."""
    return current_domain.repository_for(Notification).inbox(recipient_id, status=status, limit=limit)


def unread_count(recipient_id) -> int:
    return current_domain.repository_for(Notification).count_for(recipient_id, NotificationStatus.UNREAD.value)
