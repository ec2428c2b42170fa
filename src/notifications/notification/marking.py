"""Recipient-side notification commands."""

from notifications.domain import notifications
from notifications.exceptions import NotificationNotFound
from notifications.notification.notification import Notification
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.errors import Unauthorized


@notifications.command(part_of="Notification")
class MarkNotification:
    notification_id = Identifier(required=True)
    recipient_id = Identifier(required=True)
    status = String(required=True, max_length=20)


@notifications.command_handler(part_of=Notification)
class MarkNotificationHandler:
    @handle(MarkNotification)
    def mark_notification(self, command):
        repo = current_domain.repository_for(Notification)
        try:
            notification = repo.get(command.notification_id)
        except ObjectNotFoundError as exc:
            raise NotificationNotFound(str(command.notification_id)) from exc

        if str(notification.recipient_id) != str(command.recipient_id):
            raise Unauthorized("Unauthorized!")

        notification.mark(command.status)
        repo.add(notification)
