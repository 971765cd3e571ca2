"""Tenant context resolver: which tenant is current for this process."""

import structlog

from tenant_client.tenant.models import TenantCatalog, TenantDescriptor

logger = structlog.get_logger()


class TenantResolver:
    """Holds the current tenant descriptor.

    Starts unresolved; the first ``load_tenant()`` or
    ``get_current_tenant()`` call resolves it and it stays resolved.
    Lookups are local dict reads, no I/O.

    Unknown tenant ids never raise: they fall back to the configured
    default id, then to the catalog's ``default`` entry, so the app is
    always bootable.
    """

    def __init__(
        self,
        catalog: TenantCatalog,
        default_tenant_id: str = "default",
    ) -> None:
        self._catalog = catalog
        self._default_tenant_id = default_tenant_id
        self._current: TenantDescriptor | None = None

    @property
    def catalog(self) -> TenantCatalog:
        return self._catalog

    @property
    def is_resolved(self) -> bool:
        return self._current is not None

    def load_tenant(self, tenant_id: str | None = None) -> TenantDescriptor:
        """Make ``tenant_id`` current, or the default when it is unknown."""
        if tenant_id is not None:
            tenant = self._catalog.get(tenant_id)
            if tenant is not None:
                self._current = tenant
                logger.info("tenant_loaded", tenant_id=tenant.id)
                return tenant
            logger.warning(
                "tenant_fallback",
                requested_tenant_id=tenant_id,
                default_tenant_id=self._default_tenant_id,
            )

        self._current = self._resolve_default()
        return self._current

    def get_current_tenant(self) -> TenantDescriptor:
        if self._current is None:
            self._current = self._resolve_default()
        return self._current

    def is_feature_enabled(self, flag: str) -> bool:
        return self.get_current_tenant().feature_flags.get(flag, False)

    def has_permission(self, permission: str) -> bool:
        return self.get_current_tenant().permissions.get(permission, False)

    def _resolve_default(self) -> TenantDescriptor:
        tenant = self._catalog.get(self._default_tenant_id)
        if tenant is None:
            logger.warning(
                "tenant_fallback",
                requested_tenant_id=self._default_tenant_id,
                default_tenant_id="default",
            )
            return self._catalog.default
        return tenant
