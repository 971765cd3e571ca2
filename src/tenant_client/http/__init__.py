"""Tenant-aware HTTP client, credentials, and token refresh."""

from tenant_client.http.client import (
    ApiClient,
    ApiResponse,
    OutboundRequest,
    RequestOptions,
    should_refresh,
)
from tenant_client.http.reporter import Reporter
from tenant_client.http.session import CredentialStore, SessionCredentials

__all__ = [
    "ApiClient",
    "ApiResponse",
    "CredentialStore",
    "OutboundRequest",
    "Reporter",
    "RequestOptions",
    "SessionCredentials",
    "should_refresh",
]
