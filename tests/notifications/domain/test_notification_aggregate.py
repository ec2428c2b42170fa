"""Tests for the Notification aggregate — creation and the read/act lifecycle."""

import pytest

from notifications.exceptions import InvalidNotificationStatus
from notifications.notification.events import NotificationCreated, NotificationStatusChanged
from notifications.notification.notification import Notification, NotificationStatus


def _make_notification(**overrides):
    fields = {
        "recipient_id": "buyer-1",
        "title": "Order Shipped",
        "message": "Good news! Your order #o-1 has been shipped.",
        "payload": {"redirect": "order-detail", "id": "o-1"},
    }
    fields.update(overrides)
    notification = Notification.create(**fields)
    notification._events.clear()
    return notification


class TestNotificationCreation:
    def test_new_notification_is_unread(self):
        notification = Notification.create(recipient_id="buyer-1", title="Hi", message="Hello")

        assert notification.status == NotificationStatus.UNREAD.value
        assert notification.created_at is not None
        assert isinstance(notification._events[-1], NotificationCreated)

    def test_payload_round_trips_as_json(self):
        notification = _make_notification()

        assert notification.payload_data == {"redirect": "order-detail", "id": "o-1"}

    def test_payload_is_optional(self):
        assert _make_notification(payload=None).payload_data is None


class TestNotificationLifecycle:
    def test_read_then_acted_then_archived(self):
        notification = _make_notification()

        for status in ("Read", "Acted", "Archived"):
            notification.mark(status)
            assert notification.status == status

    def test_unread_can_be_dismissed(self):
        notification = _make_notification()

        notification.mark("Dismissed")

        assert notification.status == NotificationStatus.DISMISSED.value

    def test_mark_raises_status_changed(self):
        notification = _make_notification()

        notification.mark("Read")

        event = notification._events[-1]
        assert isinstance(event, NotificationStatusChanged)
        assert event.previous_status == "Unread"
        assert event.new_status == "Read"

    def test_archived_is_terminal(self):
        notification = _make_notification()
        notification.mark("Archived")

        with pytest.raises(InvalidNotificationStatus):
            notification.mark("Read")

    def test_read_cannot_return_to_unread(self):
        notification = _make_notification()
        notification.mark("Read")

        with pytest.raises(InvalidNotificationStatus):
            notification.mark("Unread")

    def test_unknown_status(self):
        with pytest.raises(InvalidNotificationStatus):
            _make_notification().mark("Snoozed")
