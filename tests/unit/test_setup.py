"""Tests for resolver/client assembly from settings."""

from pathlib import Path

import httpx
import yaml

from tenant_client.config import Settings
from tenant_client.setup import create_api_client, create_tenant_resolver


class TestCreateTenantResolver:
    def test_builtin_catalog(self) -> None:
        settings = Settings(
            tenant_id="tenant-2",
            default_api_url="https://dev.example.com",
            _env_file=None,
        )
        resolver = create_tenant_resolver(settings)
        assert resolver.get_current_tenant().id == "tenant-2"
        assert resolver.catalog.default.endpoint == "https://dev.example.com"

    def test_yaml_catalog(self, tmp_path: Path) -> None:
        path = tmp_path / "tenants.yaml"
        path.write_text(
            yaml.safe_dump(
                {
                    "tenants": {
                        "default": {"id": "default", "api": {"base_url": "https://d"}},
                        "acme": {"id": "acme", "api": {"base_url": "https://acme"}},
                    }
                }
            ),
            encoding="utf-8",
        )
        settings = Settings(tenant_catalog_path=path, tenant_id="acme", _env_file=None)

        resolver = create_tenant_resolver(settings)

        assert resolver.get_current_tenant().endpoint == "https://acme"


class TestCreateApiClient:
    async def test_uses_configured_header(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        settings = Settings(tenant_header="X-Org", tenant_id="tenant-1", _env_file=None)
        async with create_api_client(
            settings, transport=httpx.MockTransport(handler)
        ) as client:
            await client.get("/x")

        assert seen[0].headers["X-Org"] == "tenant-1"
        assert "X-Tenant-ID" not in seen[0].headers

    async def test_shares_given_resolver(self) -> None:
        settings = Settings(_env_file=None)
        resolver = create_tenant_resolver(settings)
        resolver.load_tenant("tenant-3")

        async with create_api_client(settings, resolver=resolver) as client:
            assert client.credentials.access_token is None
        assert resolver.get_current_tenant().id == "tenant-3"
