"""Authentication repository and wire schemas."""

from tenant_client.auth.repository import AuthRepository
from tenant_client.auth.schemas import (
    AuthTokens,
    LoginCredentials,
    LoginResponse,
    SignUpData,
    User,
)

__all__ = [
    "AuthRepository",
    "AuthTokens",
    "LoginCredentials",
    "LoginResponse",
    "SignUpData",
    "User",
]
