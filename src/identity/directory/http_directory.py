"""Identity service adapter over HTTP.

Expects the identity service to expose::

    GET {base}/auth/introspect          (Authorization: Bearer <token>)
        -> {"user_id": "...", "role": "...", "can_modify_order_status": bool}
    GET {base}/users?role=<role>        -> {"data": [{"id": "..."}]}
    GET {base}/users/<id>               -> {"data": {"id", "name", "phone"}}
"""

import requests
import structlog

from identity.directory.port import IdentityDirectory, UserProfile
from identity.principal import Principal

logger = structlog.get_logger(__name__)


class HttpIdentityDirectory(IdentityDirectory):
    def __init__(self, base_url: str, timeout: float = 5.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def authenticate(self, token: str) -> Principal | None:
        response = requests.get(
            f"{self.base_url}/auth/introspect",
            headers={"Authorization": f"Bearer {token}"},
            timeout=self.timeout,
        )
        if response.status_code in (401, 403):
            return None
        response.raise_for_status()
        body = response.json()
        return Principal(
            user_id=str(body["user_id"]),
            role=body["role"],
            can_modify_order_status=bool(body.get("can_modify_order_status", False)),
        )

    def user_ids_for_role(self, role: str) -> list[str]:
        response = requests.get(f"{self.base_url}/users", params={"role": role}, timeout=self.timeout)
        response.raise_for_status()
        return [str(user["id"]) for user in response.json().get("data", [])]

    def get_user_profile(self, user_id: str) -> UserProfile | None:
        response = requests.get(f"{self.base_url}/users/{user_id}", timeout=self.timeout)
        if response.status_code == 404:
            logger.info("User profile not found", user_id=user_id)
            return None
        response.raise_for_status()
        data = response.json()["data"]
        return UserProfile(user_id=str(data["id"]), name=data.get("name") or "", phone=data.get("phone"))
