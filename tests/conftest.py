"""Shared pytest fixtures."""

from collections.abc import AsyncIterator, Callable

import httpx
import pytest

from tenant_client.http.client import ApiClient
from tenant_client.tenant.catalog import builtin_catalog
from tenant_client.tenant.models import TenantCatalog
from tenant_client.tenant.resolver import TenantResolver

ResponseFactory = Callable[[httpx.Request], httpx.Response]


class Backend:
    """Scripted backend for ``httpx.MockTransport``.

    Routes by (method, path). Each route plays its responses in order
    and repeats the last one. Every request is recorded.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], list[ResponseFactory]] = {}

    def on(self, method: str, path: str, *responses: ResponseFactory) -> None:
        self._routes[(method, path)] = list(responses)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self._routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json={"message": "no route"})
        factory = queue.pop(0) if len(queue) > 1 else queue[0]
        return factory(request)

    def calls(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]


@pytest.fixture
def catalog() -> TenantCatalog:
    return builtin_catalog("https://api-dev.example.com")


@pytest.fixture
def resolver(catalog: TenantCatalog) -> TenantResolver:
    return TenantResolver(catalog)


@pytest.fixture
def backend() -> Backend:
    return Backend()


@pytest.fixture
async def client(resolver: TenantResolver, backend: Backend) -> AsyncIterator[ApiClient]:
    api = ApiClient.create(resolver, transport=httpx.MockTransport(backend.handler))
    yield api
    await api.aclose()
