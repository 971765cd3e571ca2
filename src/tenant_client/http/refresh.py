"""Access token refresh, coalesced across concurrent callers."""

from __future__ import annotations

import asyncio

import httpx
import structlog

from tenant_client.http.session import CredentialStore
from tenant_client.tenant.models import TenantDescriptor

logger = structlog.get_logger()


class TokenRefresher:
    """Exchanges the stored refresh token for a new access token.

    Talks to the transport directly, never through ``ApiClient``'s
    request pipeline, so a 401 from the refresh endpoint cannot
    trigger another refresh.

    Concurrent callers share one in-flight refresh: the first caller
    starts it as a task, the others await the same task.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        store: CredentialStore,
        *,
        refresh_path: str = "/auth/refresh",
        tenant_header: str = "X-Tenant-ID",
    ) -> None:
        self._http = http
        self._store = store
        self._refresh_path = refresh_path
        self._tenant_header = tenant_header
        self._inflight: asyncio.Task[str | None] | None = None

    @property
    def in_progress(self) -> bool:
        return self._inflight is not None

    async def refresh(
        self,
        tenant: TenantDescriptor,
        stale_access_token: str | None,
    ) -> str | None:
        """Return a usable access token, or None if none can be obtained.

        Args:
            tenant: Tenant whose endpoint serves the refresh call.
            stale_access_token: Token the rejected request was sent with.
                If the store already holds a different token, another
                caller refreshed in the meantime and that token is
                returned without a new refresh call.

        Never raises for transport or protocol failures.
        """
        current = self._store.snapshot()
        if current.access_token is not None and current.access_token != stale_access_token:
            return current.access_token

        if self._inflight is None:
            if not current.refresh_token:
                logger.info("token_refresh_skipped", reason="no_refresh_token")
                return None
            self._inflight = asyncio.create_task(
                self._run(tenant, current.refresh_token)
            )

        # Shielded: a cancelled waiter must not cancel the shared refresh.
        return await asyncio.shield(self._inflight)

    async def _run(self, tenant: TenantDescriptor, refresh_token: str) -> str | None:
        try:
            token = await self._request_token(tenant, refresh_token)
            if token is None:
                return None
            if not self._store.replace_access_token(token, refresh_token=refresh_token):
                # Logout or re-login happened meanwhile; the current
                # session (possibly none) wins over the stale result.
                logger.info("token_refresh_discarded", tenant_id=tenant.id)
                return self._store.snapshot().access_token
            return token
        finally:
            self._inflight = None

    async def _request_token(
        self, tenant: TenantDescriptor, refresh_token: str
    ) -> str | None:
        log = logger.bind(tenant_id=tenant.id)
        url = f"{tenant.endpoint}{self._refresh_path}"

        try:
            response = await self._http.post(
                url,
                json={"refreshToken": refresh_token},
                headers={self._tenant_header: tenant.id},
                timeout=tenant.timeout_seconds,
            )
        except httpx.HTTPError as exc:
            log.warning("token_refresh_failed", reason=type(exc).__name__)
            return None

        if response.is_error:
            log.warning("token_refresh_failed", status_code=response.status_code)
            return None

        try:
            payload = response.json()
        except ValueError:
            log.warning("token_refresh_failed", reason="invalid_json")
            return None

        token = payload.get("accessToken") if isinstance(payload, dict) else None
        if not isinstance(token, str) or not token:
            log.warning("token_refresh_failed", reason="missing_access_token")
            return None

        log.info("token_refreshed")
        return token
