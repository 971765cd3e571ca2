"""Authentication repository: login/logout on top of ``ApiClient``."""

from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from tenant_client.auth.schemas import LoginCredentials, LoginResponse, SignUpData, User
from tenant_client.errors import ErrorCode, TransportError
from tenant_client.http.client import ApiClient

logger = structlog.get_logger()

_M = TypeVar("_M", bound=BaseModel)


class AuthRepository:
    """Session operations that read or write the client's credentials.

    The client does no schema validation; responses are validated here.
    """

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def login(self, credentials: LoginCredentials) -> LoginResponse:
        response = await self._client.post(
            "/auth/login", credentials.model_dump(by_alias=True)
        )
        result = _parse(LoginResponse, response.data)
        self._client.set_tokens(result.tokens.access_token, result.tokens.refresh_token)
        logger.info("login_succeeded", user_id=result.user.id)
        return result

    async def sign_up(self, data: SignUpData) -> LoginResponse:
        response = await self._client.post("/auth/signup", data.model_dump(by_alias=True))
        result = _parse(LoginResponse, response.data)
        self._client.set_tokens(result.tokens.access_token, result.tokens.refresh_token)
        logger.info("sign_up_succeeded", user_id=result.user.id)
        return result

    async def logout(self) -> None:
        """Notify the backend, then drop credentials even if that fails."""
        try:
            await self._client.post("/auth/logout")
        finally:
            self._client.clear_tokens()
            logger.info("logged_out")

    async def get_current_user(self) -> User:
        response = await self._client.get("/auth/me")
        return _parse(User, response.data)


def _parse(model: type[_M], data: Any) -> _M:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise TransportError(
            f"Unexpected {model.__name__} payload",
            code=ErrorCode.INVALID_RESPONSE,
            errors=[err["msg"] for err in exc.errors()],
        ) from exc
