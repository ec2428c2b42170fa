"""Identity directory factory.

Uses the in-memory directory unless IDENTITY_SERVICE_URL points at a
running identity service.
"""

import os

from identity.directory.fake_directory import FakeIdentityDirectory
from identity.directory.port import IdentityDirectory, UserProfile

_current_directory: IdentityDirectory | None = None


def get_directory() -> IdentityDirectory:
    global _current_directory
    if _current_directory is None:
        base_url = os.getenv("IDENTITY_SERVICE_URL")
        if base_url:
            from identity.directory.http_directory import HttpIdentityDirectory

            _current_directory = HttpIdentityDirectory(base_url, timeout=float(os.getenv("HTTP_TIMEOUT_SECONDS", "5")))
        else:
            _current_directory = FakeIdentityDirectory()
    return _current_directory


def set_directory(directory: IdentityDirectory) -> None:
    global _current_directory
    _current_directory = directory


def reset_directory() -> None:
    global _current_directory
    _current_directory = None


__all__ = ["IdentityDirectory", "UserProfile", "get_directory", "reset_directory", "set_directory"]
