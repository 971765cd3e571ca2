"""Tests for AuthRepository -- login/logout wiring to client credentials."""

import json

import httpx
import pytest

from tenant_client.auth.repository import AuthRepository
from tenant_client.auth.schemas import LoginCredentials, SignUpData
from tenant_client.errors import ErrorCode, TransportError
from tenant_client.http.session import SessionCredentials

_USER = {"id": "u1", "email": "a@example.com", "firstName": "Ann", "tenantId": "default"}
_LOGIN = {
    "user": _USER,
    "tokens": {"accessToken": "A1", "refreshToken": "R1", "expiresIn": 3600},
}


def _reply(status: int, payload: object = None):
    return lambda request: httpx.Response(status, json=payload)


class TestLogin:
    async def test_login_stores_tokens(self, client, backend) -> None:
        backend.on("POST", "/auth/login", _reply(200, _LOGIN))
        repo = AuthRepository(client)

        result = await repo.login(LoginCredentials(email="a@example.com", password="pw"))

        assert result.user.first_name == "Ann"
        assert client.credentials == SessionCredentials("A1", "R1")
        assert json.loads(backend.requests[0].content) == {
            "email": "a@example.com",
            "password": "pw",
        }

    async def test_sign_up_sends_camel_case(self, client, backend) -> None:
        backend.on("POST", "/auth/signup", _reply(201, _LOGIN))
        repo = AuthRepository(client)

        await repo.sign_up(
            SignUpData(email="a@example.com", password="pw", first_name="Ann", last_name="Lee")
        )

        body = json.loads(backend.requests[0].content)
        assert body["firstName"] == "Ann"
        assert body["lastName"] == "Lee"
        assert client.is_authenticated is True

    async def test_bad_credentials_leave_session_empty(self, client, backend) -> None:
        backend.on("POST", "/auth/login", _reply(400, {"message": "Bad credentials"}))
        repo = AuthRepository(client)

        with pytest.raises(TransportError) as exc_info:
            await repo.login(LoginCredentials(email="a@example.com", password="x"))

        assert exc_info.value.message == "Bad credentials"
        assert client.is_authenticated is False

    async def test_malformed_login_payload(self, client, backend) -> None:
        backend.on("POST", "/auth/login", _reply(200, {"user": _USER}))
        repo = AuthRepository(client)

        with pytest.raises(TransportError) as exc_info:
            await repo.login(LoginCredentials(email="a@example.com", password="pw"))

        assert exc_info.value.code == ErrorCode.INVALID_RESPONSE
        assert client.is_authenticated is False


class TestLogout:
    async def test_logout_clears_tokens(self, client, backend) -> None:
        backend.on("POST", "/auth/logout", _reply(204))
        client.set_tokens("A1", "R1")

        await AuthRepository(client).logout()

        assert backend.requests[0].headers["Authorization"] == "Bearer A1"
        assert client.credentials == SessionCredentials()

    async def test_logout_clears_tokens_when_backend_fails(self, client, backend) -> None:
        backend.on("POST", "/auth/logout", _reply(500))
        client.set_tokens("A1", "R1")

        with pytest.raises(TransportError):
            await AuthRepository(client).logout()

        assert client.credentials == SessionCredentials()


class TestCurrentUser:
    async def test_get_current_user(self, client, backend) -> None:
        backend.on("GET", "/auth/me", _reply(200, _USER))
        client.set_tokens("A1", "R1")

        user = await AuthRepository(client).get_current_user()

        assert user.id == "u1"
        assert user.tenant_id == "default"
