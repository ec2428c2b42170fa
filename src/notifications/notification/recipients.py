"""Role recipient resolution — who "all admins" means at dispatch time."""

from abc import ABC, abstractmethod

from identity.directory import get_directory


class RoleRecipientResolver(ABC):
    @abstractmethod
    def user_ids_for_role(self, role: str) -> list[str]:
        ...


class DirectoryRecipientResolver(RoleRecipientResolver):
    """Resolves roles through the identity directory on every call."""

    def user_ids_for_role(self, role: str) -> list[str]:
        return get_directory().user_ids_for_role(role)


_current_resolver: RoleRecipientResolver | None = None


def get_recipient_resolver() -> RoleRecipientResolver:
    global _current_resolver
    if _current_resolver is None:
        _current_resolver = DirectoryRecipientResolver()
    return _current_resolver


def set_recipient_resolver(resolver: RoleRecipientResolver) -> None:
    global _current_resolver
    _current_resolver = resolver


def reset_recipient_resolver() -> None:
    global _current_resolver
    _current_resolver = None
