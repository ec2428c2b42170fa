"""Tests for bearer authentication and the identity directory adapters."""

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from identity.authentication import current_principal
from identity.directory import http_directory
from identity.directory.http_directory import HttpIdentityDirectory
from identity.principal import Principal
from shared.error_handlers import register_error_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/whoami")
    async def whoami(principal: Principal = Depends(current_principal)):
        return {"user_id": principal.user_id, "role": principal.role}

    return TestClient(app)


class TestBearerAuthentication:
    def test_known_token(self, client, directory):
        directory.register("agent-1", "agent", token="abc")

        response = client.get("/whoami", headers={"Authorization": "Bearer abc"})

        assert response.json() == {"user_id": "agent-1", "role": "agent"}

    def test_scheme_is_case_insensitive(self, client, directory):
        directory.register("u-1", "user", token="abc")

        assert client.get("/whoami", headers={"Authorization": "bearer abc"}).status_code == 200

    @pytest.mark.parametrize(
        "header, error",
        [
            (None, "Authorization header missing"),
            ("Token abc", "Invalid Authorization header format"),
            ("Bearer ", "Invalid Authorization header format"),
            ("Bearer unknown", "Invalid token"),
        ],
    )
    def test_rejected_credentials(self, client, header, error):
        headers = {"Authorization": header} if header is not None else {}

        response = client.get("/whoami", headers=headers)

        assert response.status_code == 401
        assert response.json() == {"error": error, "code": "Unauthenticated"}


class TestFakeDirectory:
    def test_roles_and_profiles(self, directory):
        directory.register("admin-2", "admin", name="Second")
        directory.register("admin-1", "admin")
        directory.register("u-1", "user", phone="09-1")

        assert directory.user_ids_for_role("admin") == ["admin-1", "admin-2"]
        assert directory.get_user_profile("admin-1").name == "User admin-1"
        assert directory.get_user_profile("u-1").phone == "09-1"
        assert directory.get_user_profile("ghost") is None


class _Response:
    def __init__(self, status_code, body=None):
        self.status_code = status_code
        self._body = body or {}

    def json(self):
        return self._body

    def raise_for_status(self):
        if self.status_code >= 400:
            raise RuntimeError(f"HTTP {self.status_code}")


class TestHttpDirectory:
    def test_authenticate(self, monkeypatch):
        calls = []

        def fake_get(url, headers=None, params=None, timeout=None):
            calls.append((url, headers))
            return _Response(200, {"user_id": 7, "role": "agent", "can_modify_order_status": True})

        monkeypatch.setattr(http_directory.requests, "get", fake_get)

        principal = HttpIdentityDirectory("http://identity/").authenticate("abc")

        assert principal == Principal(user_id="7", role="agent", can_modify_order_status=True)
        assert calls == [("http://identity/auth/introspect", {"Authorization": "Bearer abc"})]

    def test_rejected_token(self, monkeypatch):
        monkeypatch.setattr(
            http_directory.requests,
            "get",
            lambda url, **kwargs: _Response(401),
        )

        assert HttpIdentityDirectory("http://identity").authenticate("abc") is None

    def test_role_members(self, monkeypatch):
        monkeypatch.setattr(
            http_directory.requests,
            "get",
            lambda url, **kwargs: _Response(200, {"data": [{"id": 1}, {"id": 2}]}),
        )

        assert HttpIdentityDirectory("http://identity").user_ids_for_role("admin") == ["1", "2"]

    def test_missing_profile(self, monkeypatch):
        monkeypatch.setattr(
            http_directory.requests,
            "get",
            lambda url, **kwargs: _Response(404),
        )

        assert HttpIdentityDirectory("http://identity").get_user_profile("9") is None
