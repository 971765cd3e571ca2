"""Wire schemas for the authentication endpoints (camelCase on the wire)."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoginCredentials(_CamelModel):
    email: str
    password: str


class SignUpData(_CamelModel):
    email: str
    password: str
    first_name: str
    last_name: str


class AuthTokens(_CamelModel):
    access_token: str
    refresh_token: str
    expires_in: int | None = None


class User(_CamelModel):
    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    avatar: str | None = None
    tenant_id: str | None = None


class LoginResponse(_CamelModel):
    user: User
    tokens: AuthTokens
