"""Tenant descriptors: per-tenant API, feature flag and permission config."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TenantApiConfig(BaseModel):
    """Transport tuning for one tenant's backend."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    timeout_ms: int = Field(default=30_000, gt=0)
    retry_attempts: int = Field(default=3, ge=0)
    caching_enabled: bool = True
    cache_ttl_ms: int = Field(default=300_000, ge=0)


class TenantLimits(BaseModel):
    """Non-boolean tenant settings."""

    model_config = ConfigDict(frozen=True)

    max_file_upload_size: int = 10_485_760
    allowed_file_types: tuple[str, ...] = ("image/jpeg", "image/png")
    max_users: int = 100


class TenantDescriptor(BaseModel):
    """Runtime configuration of a single tenant.

    Immutable: switching tenant replaces the descriptor reference held
    by the resolver, it never edits one in place.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str = ""
    display_name: str = ""
    api: TenantApiConfig
    feature_flags: dict[str, bool] = {}
    permissions: dict[str, bool] = {}
    limits: TenantLimits = TenantLimits()
    custom_settings: dict[str, Any] = {}

    @property
    def endpoint(self) -> str:
        return self.api.base_url.rstrip("/")

    @property
    def timeout_seconds(self) -> float:
        return self.api.timeout_ms / 1000

    @property
    def caching_enabled(self) -> bool:
        return self.api.caching_enabled and self.api.cache_ttl_ms > 0


class TenantCatalog(BaseModel):
    """Read-only ``id -> TenantDescriptor`` table.

    Validates that:
    - A ``default`` tenant exists (the resolver's last-resort fallback)
    - Every key matches its descriptor's ``id``
    """

    model_config = ConfigDict(frozen=True)

    tenants: dict[str, TenantDescriptor]

    @model_validator(mode="after")
    def validate_tenants(self) -> "TenantCatalog":
        errors: list[str] = []

        if "default" not in self.tenants:
            errors.append("Catalog must define a 'default' tenant")

        for key, tenant in self.tenants.items():
            if key != tenant.id:
                errors.append(f"Tenant key '{key}' does not match id '{tenant.id}'")

        if errors:
            raise ValueError(
                "Tenant catalog validation failed:\n"
                + "\n".join(f"  - {e}" for e in errors)
            )
        return self

    @property
    def default(self) -> TenantDescriptor:
        return self.tenants["default"]

    def get(self, tenant_id: str) -> TenantDescriptor | None:
        return self.tenants.get(tenant_id)

    def __contains__(self, tenant_id: object) -> bool:
        return tenant_id in self.tenants
