"""Tenant-aware HTTP client with authenticated-session management.

Pipeline for every call:

1. Build the request against the tenant current *now*: endpoint,
   timeout, ``X-Tenant-ID`` header and cache policy are all read per
   call, so ``TenantResolver.load_tenant()`` takes effect on the next
   request.
2. Attach ``Authorization: Bearer <token>`` when a token is held.
3. On 401 (first attempt only) refresh the access token once and
   resubmit. If the refresh yields nothing, drop all credentials and
   raise ``REFRESH_FAILED``.
4. Any other failure becomes a ``TransportError``; no other retries.
"""

from __future__ import annotations

import hashlib
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

import httpx
import structlog

from tenant_client.errors import ErrorCode, TransportError
from tenant_client.http.cache import ResponseCache
from tenant_client.http.refresh import TokenRefresher
from tenant_client.http.reporter import Reporter
from tenant_client.http.session import CredentialStore, SessionCredentials
from tenant_client.tenant.models import TenantDescriptor
from tenant_client.tenant.resolver import TenantResolver

logger = structlog.get_logger()

T = TypeVar("T")

DEFAULT_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


@dataclass(frozen=True)
class ApiResponse(Generic[T]):
    """Successful call result. Failures raise ``TransportError`` instead."""

    data: T
    status_code: int = 200
    success: bool = True


@dataclass(frozen=True)
class RequestOptions:
    """Per-call overrides."""

    headers: Mapping[str, str] | None = None
    timeout_ms: int | None = None
    params: Mapping[str, Any] | None = None


@dataclass(frozen=True)
class OutboundRequest:
    method: str
    path: str
    body: Any = None
    options: RequestOptions = field(default_factory=RequestOptions)


def should_refresh(response: httpx.Response, attempt: int) -> bool:
    """Retry policy: refresh only on 401, only on the first attempt."""
    return response.status_code == httpx.codes.UNAUTHORIZED and attempt == 0


class ApiClient:
    """Single façade for all outbound calls of one session.

    Owns the session credentials. Construct with ``ApiClient.create()``
    once a tenant context exists and close with ``aclose()``; there is
    no shared module-level instance.
    """

    def __init__(
        self,
        resolver: TenantResolver,
        *,
        http: httpx.AsyncClient,
        tenant_header: str = "X-Tenant-ID",
        refresh_path: str = "/auth/refresh",
        reporter: Reporter | None = None,
        log_requests: bool = True,
    ) -> None:
        self._resolver = resolver
        self._http = http
        self._tenant_header = tenant_header
        self._reporter = reporter
        self._log_requests = log_requests
        self._credentials = CredentialStore()
        self._cache = ResponseCache()
        self._refresher = TokenRefresher(
            http,
            self._credentials,
            refresh_path=refresh_path,
            tenant_header=tenant_header,
        )

    @classmethod
    def create(
        cls,
        resolver: TenantResolver,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        tenant_header: str = "X-Tenant-ID",
        refresh_path: str = "/auth/refresh",
        reporter: Reporter | None = None,
        log_requests: bool = True,
    ) -> ApiClient:
        """Build a client with its own connection pool.

        Args:
            resolver: Source of the current tenant, read on every call.
            transport: Custom httpx transport (e.g. ``MockTransport``
                in tests). Defaults to httpx's network transport.
        """
        http = httpx.AsyncClient(transport=transport, headers=DEFAULT_HEADERS)
        return cls(
            resolver,
            http=http,
            tenant_header=tenant_header,
            refresh_path=refresh_path,
            reporter=reporter,
            log_requests=log_requests,
        )

    async def aclose(self) -> None:
        """Drop credentials and cached responses, close the connection pool."""
        self._credentials.clear()
        self._cache.clear()
        await self._http.aclose()

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    # -- credentials ----------------------------------------------------

    @property
    def credentials(self) -> SessionCredentials:
        return self._credentials.snapshot()

    @property
    def is_authenticated(self) -> bool:
        return self._credentials.snapshot().access_token is not None

    def set_tokens(self, access_token: str, refresh_token: str | None = None) -> None:
        """Store a new credential pair (login)."""
        self._credentials.set(access_token, refresh_token)
        self._cache.clear()

    def clear_tokens(self) -> None:
        """Drop both credentials (logout or unrecoverable refresh failure)."""
        self._credentials.clear()
        self._cache.clear()

    # -- verbs ----------------------------------------------------------

    async def get(
        self, path: str, options: RequestOptions | None = None
    ) -> ApiResponse[Any]:
        return await self.request("GET", path, options=options)

    async def post(
        self, path: str, body: Any = None, options: RequestOptions | None = None
    ) -> ApiResponse[Any]:
        return await self.request("POST", path, body=body, options=options)

    async def put(
        self, path: str, body: Any = None, options: RequestOptions | None = None
    ) -> ApiResponse[Any]:
        return await self.request("PUT", path, body=body, options=options)

    async def patch(
        self, path: str, body: Any = None, options: RequestOptions | None = None
    ) -> ApiResponse[Any]:
        return await self.request("PATCH", path, body=body, options=options)

    async def delete(
        self, path: str, options: RequestOptions | None = None
    ) -> ApiResponse[Any]:
        return await self.request("DELETE", path, options=options)

    async def request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[Any]:
        """Run one logical request through the pipeline.

        Raises:
            TransportError: network failure, timeout, undecodable body,
                HTTP status >= 400 after the 401 policy, or a failed
                token refresh.
        """
        request = OutboundRequest(
            method=method.upper(),
            path=path if path.startswith("/") else f"/{path}",
            body=body,
            options=options or RequestOptions(),
        )
        return await self._execute(request)

    # -- internal: pipeline ---------------------------------------------

    async def _execute(self, request: OutboundRequest) -> ApiResponse[Any]:
        attempt = 0
        tenant = self._resolver.get_current_tenant()
        try:
            while True:
                tenant = self._resolver.get_current_tenant()
                # Captured once: a concurrent clear_tokens() does not
                # change what this attempt sends.
                credentials = self._credentials.snapshot()

                cache_key = self._cache_key(tenant, request, credentials)
                if cache_key is not None:
                    hit, cached = self._cache.get(cache_key)
                    if hit:
                        logger.debug(
                            "api_cache_hit", path=request.path, tenant_id=tenant.id
                        )
                        return cached

                response = await self._send(tenant, request, credentials)

                if not response.is_error:
                    result = ApiResponse(
                        data=self._decode(response), status_code=response.status_code
                    )
                    if cache_key is not None and _is_storable(response):
                        self._cache.set(cache_key, result, tenant.api.cache_ttl_ms)
                    return result

                if should_refresh(response, attempt):
                    attempt += 1
                    new_token = await self._refresher.refresh(
                        tenant, credentials.access_token
                    )
                    if new_token is None:
                        self._drop_session(credentials)
                        raise TransportError(
                            "Session expired and the access token could not be refreshed",
                            code=ErrorCode.REFRESH_FAILED,
                        )
                    continue

                raise self._classify(response)
        except TransportError as exc:
            logger.warning(
                "api_error",
                method=request.method,
                path=request.path,
                tenant_id=tenant.id,
                **exc.to_dict(),
            )
            self._report(exc, request, tenant)
            raise

    def _drop_session(self, rejected: SessionCredentials) -> None:
        """Clear credentials unless a new login replaced the rejected pair."""
        if self._credentials.snapshot().refresh_token != rejected.refresh_token:
            logger.info("session_replaced_during_refresh")
            return
        self.clear_tokens()

    async def _send(
        self,
        tenant: TenantDescriptor,
        request: OutboundRequest,
        credentials: SessionCredentials,
    ) -> httpx.Response:
        headers = self._build_headers(tenant, credentials, request.options)
        timeout = (
            request.options.timeout_ms / 1000
            if request.options.timeout_ms is not None
            else tenant.timeout_seconds
        )
        log = logger.bind(
            method=request.method, path=request.path, tenant_id=tenant.id
        )
        if self._log_requests:
            log.debug("api_request", authenticated=credentials.access_token is not None)

        started = time.perf_counter()
        try:
            response = await self._http.request(
                request.method,
                f"{tenant.endpoint}{request.path}",
                json=request.body,
                params=request.options.params,
                headers=headers,
                timeout=timeout,
            )
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"Request timed out after {timeout:g}s",
                code=ErrorCode.TIMEOUT,
            ) from exc
        except httpx.RequestError as exc:
            raise TransportError(
                str(exc) or "Network error",
                code=ErrorCode.NETWORK_ERROR,
            ) from exc

        if self._log_requests:
            log.debug(
                "api_response",
                status_code=response.status_code,
                latency_ms=int((time.perf_counter() - started) * 1000),
            )
        return response

    def _build_headers(
        self,
        tenant: TenantDescriptor,
        credentials: SessionCredentials,
        options: RequestOptions,
    ) -> dict[str, str]:
        headers = {self._tenant_header: tenant.id}
        if credentials.authorization is not None:
            headers["Authorization"] = credentials.authorization
        if options.headers:
            headers.update(options.headers)
        return headers

    def _cache_key(
        self,
        tenant: TenantDescriptor,
        request: OutboundRequest,
        credentials: SessionCredentials,
    ) -> str | None:
        if request.method != "GET" or not tenant.caching_enabled:
            return None
        params = sorted((request.options.params or {}).items())
        token = credentials.access_token or ""
        raw = f"{tenant.id}|{tenant.endpoint}{request.path}|{params}|{token}"
        return hashlib.sha256(raw.encode()).hexdigest()

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        content_type = response.headers.get("content-type", "")
        if content_type and "json" not in content_type:
            return response.text
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                "Response body is not valid JSON",
                code=ErrorCode.INVALID_RESPONSE,
                http_status=response.status_code,
            ) from exc

    @staticmethod
    def _classify(response: httpx.Response) -> TransportError:
        message = f"HTTP {response.status_code}"
        errors: list[str] | None = None

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict):
            if isinstance(payload.get("message"), str) and payload["message"]:
                message = payload["message"]
            if isinstance(payload.get("errors"), list):
                errors = [str(e) for e in payload["errors"]]

        return TransportError(
            message,
            code=ErrorCode.HTTP_ERROR,
            http_status=response.status_code,
            errors=errors,
        )

    def _report(
        self,
        error: TransportError,
        request: OutboundRequest,
        tenant: TenantDescriptor,
    ) -> None:
        if self._reporter is None:
            return
        try:
            self._reporter.capture_error(
                error,
                {
                    "method": request.method,
                    "path": request.path,
                    "tenant_id": tenant.id,
                },
            )
        except Exception:
            logger.warning("error_report_failed", exc_info=True)


def _is_storable(response: httpx.Response) -> bool:
    return "no-store" not in response.headers.get("cache-control", "").lower()
