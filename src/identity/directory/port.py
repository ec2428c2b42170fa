"""Identity directory port — credentials, roles and profiles.

Authentication and user management live outside this service; the
ordering core only needs to resolve a bearer credential to a principal,
list the members of a role, and read a display profile.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from identity.principal import Principal


@dataclass(frozen=True)
class UserProfile:
    user_id: str
    name: str
    phone: str | None = None


class IdentityDirectory(ABC):
    @abstractmethod
    def authenticate(self, token: str) -> Principal | None:
        """Return the principal for a bearer credential, or None if invalid."""
        ...

    @abstractmethod
    def user_ids_for_role(self, role: str) -> list[str]:
        ...

    @abstractmethod
    def get_user_profile(self, user_id: str) -> UserProfile | None:
        ...
