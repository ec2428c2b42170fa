"""Push channel factory.

Uses the fake adapter by default; FCM is used when FIREBASE_FCM_URL and
FIREBASE_FCM_AUTH are both set.
"""

import os

from notifications.channel.fake_push import FakePushAdapter
from notifications.channel.push_port import PushPort

_current_push: PushPort | None = None


def get_push_channel() -> PushPort:
    """Return the configured push adapter (singleton)."""
    global _current_push
    if _current_push is None:
        url = os.getenv("FIREBASE_FCM_URL")
        key = os.getenv("FIREBASE_FCM_AUTH")
        if url and key:
            from notifications.channel.fcm_push import FcmPushAdapter

            _current_push = FcmPushAdapter(url, key, timeout=float(os.getenv("HTTP_TIMEOUT_SECONDS", "5")))
        else:
            _current_push = FakePushAdapter()
    return _current_push


def set_push_channel(adapter: PushPort) -> None:
    global _current_push
    _current_push = adapter


def reset_push_channel():
    """Reset the push singleton (useful for testing)."""
    global _current_push
    _current_push = None
