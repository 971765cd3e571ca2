"""Centralized client configuration via environment variables."""

from enum import StrEnum
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(StrEnum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """Client settings loaded from environment variables.

    ``tenant_id`` selects the tenant used when no explicit tenant is
    loaded. Unknown ids are not an error: the resolver falls back to
    the catalog's ``default`` entry.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- App ---
    environment: Environment = Environment.DEVELOPMENT
    log_level: str = "DEBUG"

    # --- Tenancy ---
    tenant_id: str = "default"
    tenant_catalog_path: Path | None = None
    # Base URL of the built-in ``default`` tenant.
    default_api_url: str = "https://api-dev.example.com"

    # --- HTTP client ---
    enable_request_logging: bool = True
    tenant_header: str = "X-Tenant-ID"
    refresh_path: str = "/auth/refresh"

    # --- Convenience properties ---
    @property
    def is_dev(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_prod(self) -> bool:
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        return self.environment == Environment.TESTING


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings singleton.

    Usage::

        from tenant_client.config import get_settings
        settings = get_settings()
    """
    return Settings()
