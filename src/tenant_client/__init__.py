"""Tenant-aware HTTP client with authenticated-session management.

Quick start::

    from tenant_client import create_api_client, get_settings

    async with create_api_client(get_settings()) as client:
        client.set_tokens(access_token, refresh_token)
        response = await client.get("/users/me")
"""

from tenant_client.config import Settings, get_settings
from tenant_client.errors import ErrorCode, TransportError, user_message
from tenant_client.http.client import ApiClient, ApiResponse, RequestOptions
from tenant_client.setup import create_api_client, create_tenant_resolver
from tenant_client.tenant.models import TenantDescriptor
from tenant_client.tenant.resolver import TenantResolver

__all__ = [
    "ApiClient",
    "ApiResponse",
    "ErrorCode",
    "RequestOptions",
    "Settings",
    "TenantDescriptor",
    "TenantResolver",
    "TransportError",
    "create_api_client",
    "create_tenant_resolver",
    "get_settings",
    "user_message",
]
