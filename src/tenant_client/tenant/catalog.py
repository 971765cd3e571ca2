"""Tenant catalog sources: the built-in table and YAML files.

YAML layout mirrors the built-in table::

    tenants:
      default:
        id: default
        api:
          base_url: https://api.example.com
          timeout_ms: 30000
        feature_flags:
          enable_dark_mode: true
"""

from pathlib import Path
from typing import Any

import yaml

from tenant_client.tenant.models import TenantCatalog

_ALL_FILE_TYPES = ("image/jpeg", "image/png", "application/pdf")


def _builtin_tenants(default_api_url: str) -> dict[str, dict[str, Any]]:
    return {
        "default": {
            "id": "default",
            "name": "default",
            "display_name": "Default Tenant",
            "api": {
                "base_url": default_api_url,
                "timeout_ms": 30_000,
                "retry_attempts": 3,
                "caching_enabled": True,
                "cache_ttl_ms": 300_000,
            },
            "feature_flags": {
                "enable_push_notifications": True,
                "enable_biometric_auth": True,
                "enable_dark_mode": True,
                "enable_offline_mode": True,
                "enable_analytics": True,
                "enable_chat_support": True,
                "enable_payment_gateway": True,
            },
            "permissions": {
                "can_create_content": True,
                "can_delete_content": True,
                "can_share_content": True,
                "can_export_data": True,
                "can_invite_users": True,
            },
            "limits": {
                "max_file_upload_size": 10_485_760,
                "allowed_file_types": _ALL_FILE_TYPES,
                "max_users": 100,
            },
        },
        "tenant-1": {
            "id": "tenant-1",
            "name": "tenant-1",
            "display_name": "Tenant One",
            "api": {
                "base_url": "https://api-tenant1.example.com",
                "timeout_ms": 30_000,
                "retry_attempts": 3,
                "caching_enabled": True,
                "cache_ttl_ms": 300_000,
            },
            "feature_flags": {
                "enable_push_notifications": True,
                "enable_biometric_auth": False,
                "enable_dark_mode": True,
                "enable_offline_mode": False,
                "enable_analytics": True,
                "enable_chat_support": False,
                "enable_payment_gateway": True,
            },
            "permissions": {
                "can_create_content": True,
                "can_delete_content": False,
                "can_share_content": True,
                "can_export_data": False,
                "can_invite_users": False,
            },
            "limits": {
                "max_file_upload_size": 5_242_880,
                "allowed_file_types": ("image/jpeg", "image/png"),
                "max_users": 50,
            },
        },
        "tenant-2": {
            "id": "tenant-2",
            "name": "tenant-2",
            "display_name": "Tenant Two",
            "api": {
                "base_url": "https://api-tenant2.example.com",
                "timeout_ms": 30_000,
                "retry_attempts": 5,
                "caching_enabled": True,
                "cache_ttl_ms": 600_000,
            },
            "feature_flags": {
                "enable_push_notifications": True,
                "enable_biometric_auth": True,
                "enable_dark_mode": True,
                "enable_offline_mode": True,
                "enable_analytics": True,
                "enable_chat_support": True,
                "enable_payment_gateway": False,
            },
            "permissions": {
                "can_create_content": True,
                "can_delete_content": True,
                "can_share_content": True,
                "can_export_data": True,
                "can_invite_users": True,
            },
            "limits": {
                "max_file_upload_size": 20_971_520,
                "allowed_file_types": (*_ALL_FILE_TYPES, "video/mp4"),
                "max_users": 500,
            },
        },
        "tenant-3": {
            "id": "tenant-3",
            "name": "tenant-3",
            "display_name": "Tenant Three",
            "api": {
                "base_url": "https://api-tenant3.example.com",
                "timeout_ms": 20_000,
                "retry_attempts": 2,
                "caching_enabled": False,
                "cache_ttl_ms": 0,
            },
            "feature_flags": {
                "enable_push_notifications": False,
                "enable_biometric_auth": False,
                "enable_dark_mode": False,
                "enable_offline_mode": False,
                "enable_analytics": False,
                "enable_chat_support": False,
                "enable_payment_gateway": False,
            },
            "permissions": {
                "can_create_content": False,
                "can_delete_content": False,
                "can_share_content": False,
                "can_export_data": False,
                "can_invite_users": False,
            },
            "limits": {
                "max_file_upload_size": 1_048_576,
                "allowed_file_types": ("image/jpeg",),
                "max_users": 10,
            },
        },
    }


def builtin_catalog(
    default_api_url: str = "https://api-dev.example.com",
) -> TenantCatalog:
    """Catalog shipped with the client: ``default`` plus three tenants."""
    return TenantCatalog.model_validate(
        {"tenants": _builtin_tenants(default_api_url)}
    )


def load_catalog(config_path: Path) -> TenantCatalog:
    """Load and validate a tenant catalog from YAML.

    Raises:
        FileNotFoundError: if YAML file doesn't exist.
        ValueError: if YAML parsing or validation fails.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Tenant catalog not found: {config_path}")

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse tenant catalog '{config_path}': {e}") from e
    return TenantCatalog.model_validate(raw)
