"""One-stop factories for assembling resolver and client from settings.

Usage::

    from tenant_client.config import get_settings
    from tenant_client.setup import create_api_client

    settings = get_settings()
    async with create_api_client(settings) as client:
        response = await client.get("/users/me")
"""

import httpx
import structlog

from tenant_client.config import Settings
from tenant_client.http.client import ApiClient
from tenant_client.http.reporter import Reporter
from tenant_client.tenant.catalog import builtin_catalog, load_catalog
from tenant_client.tenant.resolver import TenantResolver

logger = structlog.get_logger()


def create_tenant_resolver(settings: Settings) -> TenantResolver:
    """Resolver over the YAML catalog if configured, else the built-in one."""
    if settings.tenant_catalog_path is not None:
        catalog = load_catalog(settings.tenant_catalog_path)
    else:
        catalog = builtin_catalog(settings.default_api_url)
    return TenantResolver(catalog, default_tenant_id=settings.tenant_id)


def create_api_client(
    settings: Settings,
    *,
    resolver: TenantResolver | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    reporter: Reporter | None = None,
) -> ApiClient:
    """Assemble an ApiClient bound to a tenant resolver.

    Args:
        settings: Client settings (header name, refresh path, logging).
        resolver: Existing resolver to share; built from settings if None.
        transport: Custom httpx transport, mainly for tests.
        reporter: Optional error-reporting capability.

    Returns:
        Configured ApiClient; the caller owns it and must ``aclose()`` it.
    """
    resolver = resolver or create_tenant_resolver(settings)
    client = ApiClient.create(
        resolver,
        transport=transport,
        tenant_header=settings.tenant_header,
        refresh_path=settings.refresh_path,
        reporter=reporter,
        log_requests=settings.enable_request_logging,
    )
    logger.info(
        "api_client_created",
        tenant_header=settings.tenant_header,
        request_logging=settings.enable_request_logging,
        reporter=reporter is not None,
    )
    return client
