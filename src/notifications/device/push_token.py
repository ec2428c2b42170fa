"""PushToken aggregate (CQRS) — a user's push address on one device type.

A user holds at most one token per device type; registering again for the
same device type replaces the stored token.
"""

from datetime import UTC, datetime
from enum import Enum

from notifications.domain import notifications
from notifications.exceptions import InvalidDeviceType
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle


class DeviceType(Enum):
    ANDROID = "android"
    IOS = "ios"
    WEB = "web"


@notifications.aggregate
class PushToken:
    user_id: Identifier(required=True)
    device_type: String(choices=DeviceType, required=True)
    token: String(required=True, max_length=500)
    created_at: DateTime()
    updated_at: DateTime()

    def replace_token(self, token):
        self.token = token
        self.updated_at = datetime.now(UTC)


@notifications.repository(part_of=PushToken)
class PushTokenRepository:
    def for_user(self, user_id) -> list[PushToken]:
        return self._dao.query.filter(user_id=str(user_id)).limit(None).all().items


@notifications.command(part_of="PushToken")
class RegisterPushToken:
    user_id = Identifier(required=True)
    device_type = String(required=True)
    token = String(required=True, max_length=500)


@notifications.command_handler(part_of=PushToken)
class PushTokenCommandHandler:
    @handle(RegisterPushToken)
    def register(self, command):
        if command.device_type not in {dt.value for dt in DeviceType}:
            raise InvalidDeviceType(f"Unsupported device type: {command.device_type}")

        repo = current_domain.repository_for(PushToken)
        existing = [t for t in repo.for_user(command.user_id) if t.device_type == command.device_type]
        if existing:
            push_token = existing[0]
            push_token.replace_token(command.token)
        else:
            now = datetime.now(UTC)
            push_token = PushToken(
                user_id=command.user_id,
                device_type=command.device_type,
                token=command.token,
                created_at=now,
                updated_at=now,
            )
        repo.add(push_token)
        return str(push_token.id)
