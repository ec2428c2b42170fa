"""In-memory identity directory for development and tests."""

from identity.directory.port import IdentityDirectory, UserProfile
from identity.principal import Principal


class FakeIdentityDirectory(IdentityDirectory):
    """Directory backed by dicts. Tokens are registered explicitly."""

    def __init__(self):
        self.tokens: dict[str, Principal] = {}
        self.profiles: dict[str, UserProfile] = {}
        self.roles: dict[str, str] = {}

    def register(
        self,
        user_id: str,
        role: str,
        token: str | None = None,
        name: str | None = None,
        phone: str | None = None,
        can_modify_order_status: bool = False,
    ) -> Principal:
        """Add a user and return their principal. The token defaults to ``token-<user_id>``."""
        principal = Principal(
            user_id=str(user_id),
            role=role,
            can_modify_order_status=can_modify_order_status,
        )
        self.tokens[token or f"token-{user_id}"] = principal
        self.roles[str(user_id)] = role
        self.profiles[str(user_id)] = UserProfile(user_id=str(user_id), name=name or f"User {user_id}", phone=phone)
        return principal

    def authenticate(self, token: str) -> Principal | None:
        return self.tokens.get(token)

    def user_ids_for_role(self, role: str) -> list[str]:
        return sorted(uid for uid, r in self.roles.items() if r == role)

    def get_user_profile(self, user_id: str) -> UserProfile | None:
        return self.profiles.get(str(user_id))

    def reset(self):
        self.tokens.clear()
        self.profiles.clear()
        self.roles.clear()
