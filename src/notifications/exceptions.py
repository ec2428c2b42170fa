"""Errors raised by the notifications context."""

from shared.errors import MarketplaceError, NotFound


class InvalidNotificationStatus(MarketplaceError):
    pass


class NotificationNotFound(NotFound):
    def __init__(self, notification_id: str) -> None:
        super().__init__("Notification not found!")
        self.notification_id = notification_id


class InvalidDeviceType(MarketplaceError):
    pass
