"""Tenant configuration: descriptors, catalog sources, and the resolver."""

from tenant_client.tenant.catalog import builtin_catalog, load_catalog
from tenant_client.tenant.models import (
    TenantApiConfig,
    TenantCatalog,
    TenantDescriptor,
    TenantLimits,
)
from tenant_client.tenant.resolver import TenantResolver

__all__ = [
    "TenantApiConfig",
    "TenantCatalog",
    "TenantDescriptor",
    "TenantLimits",
    "TenantResolver",
    "builtin_catalog",
    "load_catalog",
]
