"""Authenticated caller as seen by the ordering core."""

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    USER = "user"
    AGENT = "agent"
    ADMIN = "admin"


@dataclass(frozen=True)
class Principal:
    user_id: str
    role: str
    can_modify_order_status: bool = False

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value
