"""Application tests for recipients marking their notifications."""

import pytest
from protean import current_domain

from notifications.exceptions import InvalidNotificationStatus, NotificationNotFound
from notifications.notification.inbox import list_notifications, unread_count
from notifications.notification.marking import MarkNotification
from notifications.notification.notification import Notification
from shared.errors import Unauthorized


def _stored_notification(recipient_id="u-1", title="Order Shipped"):
    notification = Notification.create(recipient_id=recipient_id, title=title, message="...")
    current_domain.repository_for(Notification).add(notification)
    return notification


def _mark(notification_id, recipient_id, status):
    current_domain.process(
        MarkNotification(notification_id=notification_id, recipient_id=recipient_id, status=status),
        asynchronous=False,
    )


class TestMarkNotification:
    def test_recipient_marks_read(self):
        notification = _stored_notification()

        _mark(notification.id, "u-1", "Read")

        assert current_domain.repository_for(Notification).get(notification.id).status == "Read"

    def test_someone_else_cannot_mark(self):
        notification = _stored_notification()

        with pytest.raises(Unauthorized):
            _mark(notification.id, "u-2", "Read")

        assert current_domain.repository_for(Notification).get(notification.id).status == "Unread"

    def test_missing_notification(self):
        with pytest.raises(NotificationNotFound):
            _mark("missing", "u-1", "Read")

    def test_invalid_transition(self):
        notification = _stored_notification()
        _mark(notification.id, "u-1", "Archived")

        with pytest.raises(InvalidNotificationStatus):
            _mark(notification.id, "u-1", "Read")


class TestInbox:
    def test_inbox_is_filtered_and_counted(self):
        first = _stored_notification(title="First")
        _stored_notification(title="Second")
        _stored_notification(recipient_id="u-2", title="Elsewhere")

        _mark(first.id, "u-1", "Read")

        assert sorted(n.title for n in list_notifications("u-1")) == ["First", "Second"]
        assert [n.title for n in list_notifications("u-1", status="Unread")] == ["Second"]
        assert unread_count("u-1") == 1
        assert unread_count("u-3") == 0
