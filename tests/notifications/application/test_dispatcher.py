"""Application tests for notification fan-out — storage first, then device pushes."""

from protean import current_domain

from notifications.device.push_token import RegisterPushToken
from notifications.notification.dispatch import NotificationDispatcher
from notifications.notification.inbox import list_notifications
from notifications.notification.notification import Notification

PAYLOAD = {"redirect": "order-detail", "id": "o-1"}


def _register_device(user_id, device_type, token):
    current_domain.process(
        RegisterPushToken(user_id=user_id, device_type=device_type, token=token),
        asynchronous=False,
    )


class TestNotify:
    def test_each_recipient_gets_a_stored_notification(self):
        ids = NotificationDispatcher().notify(["u-1", "u-2"], "Title", "Message", PAYLOAD)

        assert len(ids) == 2
        stored = current_domain.repository_for(Notification).get(ids[0])
        assert stored.recipient_id == "u-1"
        assert stored.payload_data == PAYLOAD

    def test_duplicate_recipients_are_notified_once(self):
        ids = NotificationDispatcher().notify(["u-1", "u-1", "u-2"], "Title", "Message")

        assert len(ids) == 2
        assert len(list_notifications("u-1")) == 1

    def test_push_goes_to_every_device(self, push_channel):
        _register_device("u-1", "android", "tok-android")
        _register_device("u-1", "ios", "tok-ios")

        NotificationDispatcher().notify(["u-1"], "Title", "Message", {"redirect": "order-detail", "id": 42})

        assert {push["device_token"] for push in push_channel.sent_pushes} == {"tok-android", "tok-ios"}
        # Push data values are sent as strings
        assert push_channel.sent_pushes[0]["data"] == {"redirect": "order-detail", "id": "42"}

    def test_recipient_without_devices_is_still_stored(self, push_channel):
        ids = NotificationDispatcher().notify(["u-1"], "Title", "Message")

        assert len(ids) == 1
        assert push_channel.sent_pushes == []

    def test_failed_push_does_not_stop_other_devices(self, push_channel):
        _register_device("u-1", "android", "tok-bad")
        _register_device("u-2", "android", "tok-good")
        push_channel.configure(failing_tokens={"tok-bad"})

        ids = NotificationDispatcher().notify(["u-1", "u-2"], "Title", "Message")

        assert len(ids) == 2
        assert [push["device_token"] for push in push_channel.sent_pushes] == ["tok-good"]

    def test_raising_channel_does_not_stop_dispatch(self, push_channel):
        _register_device("u-1", "web", "tok-web")
        _register_device("u-2", "web", "tok-web-2")
        push_channel.configure(unreachable=True)

        ids = NotificationDispatcher().notify(["u-1", "u-2"], "Title", "Message")

        assert len(ids) == 2
        assert len(list_notifications("u-2")) == 1


class TestNotifyRole:
    def test_all_admins_are_notified(self, directory):
        directory.register("admin-1", "admin")
        directory.register("admin-2", "admin")
        directory.register("buyer-1", "user")

        ids = NotificationDispatcher().notify_role("admin", "Title", "Message")

        assert len(ids) == 2
        assert list_notifications("buyer-1") == []

    def test_resolver_failure_notifies_nobody(self):
        class BrokenResolver:
            def user_ids_for_role(self, role):
                raise ConnectionError("identity service down")

        assert NotificationDispatcher(recipient_resolver=BrokenResolver()).notify_role("admin", "T", "M") == []


class TestNotifyUser:
    def test_single_user(self):
        ids = NotificationDispatcher().notify_user("u-9", "Title", "Message")

        assert [n.id for n in list_notifications("u-9")] == ids
