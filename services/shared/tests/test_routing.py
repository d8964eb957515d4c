"""Testes do middleware de roteamento por domínio."""

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from shared.routing import (
    TENANT_ID_HEADER,
    TENANT_SLUG_HEADER,
    TenantRoutingMiddleware,
    is_excluded_path,
    reserved_slugs,
    tenant_path,
)
from shared.tenant_cache import TenantResolutionCache


async def _loader():
    return [{"id": "t-1", "slug": "clinica-sorriso", "domain": "clinicasorriso.com.br"}]


@pytest.fixture
def client():
    app = FastAPI()
    app.add_middleware(TenantRoutingMiddleware, cache=TenantResolutionCache(_loader))

    @app.get("/api/ping")
    def ping():
        return {"ok": True}

    @app.get("/favicon.ico")
    def favicon():
        return {"file": True}

    @app.get("/{full_path:path}")
    def echo(full_path: str, request: Request):
        if request.query_params.get("raw"):
            return {"raw_path": request.scope["raw_path"].decode("ascii")}
        return {"path": f"/{full_path}"}

    return TestClient(app)


class TestPathHelpers:
    @pytest.mark.parametrize(
        "path",
        ["/api", "/api/tenants", "/_next/static/app.js", "/health", "/openapi.json", "/logo.png"],
    )
    def test_excluded_paths(self, path):
        assert is_excluded_path(path) is True

    @pytest.mark.parametrize("path", ["/", "/sobre", "/apiario", "/servicos/limpeza"])
    def test_public_paths(self, path):
        assert is_excluded_path(path) is False

    def test_tenant_path_trims_trailing_slash(self):
        assert tenant_path("clinica", "/") == "/clinica"
        assert tenant_path("clinica", "/sobre/") == "/clinica/sobre"
        assert tenant_path("clinica", "/sobre") == "/clinica/sobre"


class TestTenantRoutingMiddleware:
    def test_rewrites_known_host(self, client):
        response = client.get("/sobre", headers={"host": "clinicasorriso.com.br"})

        assert response.status_code == 200
        assert response.json() == {"path": "/clinica-sorriso/sobre"}
        assert response.headers[TENANT_ID_HEADER] == "t-1"
        assert response.headers[TENANT_SLUG_HEADER] == "clinica-sorriso"

    def test_rewrites_root_for_www_host_with_port(self, client):
        response = client.get("/", headers={"host": "www.ClinicaSorriso.com.br:8080"})

        assert response.json() == {"path": "/clinica-sorriso"}

    def test_unknown_host_passes_through(self, client):
        response = client.get("/sobre", headers={"host": "outro.com"})

        assert response.json() == {"path": "/sobre"}
        assert TENANT_ID_HEADER not in response.headers

    def test_excluded_prefix_is_not_rewritten(self, client):
        response = client.get("/api/ping", headers={"host": "clinicasorriso.com.br"})

        assert response.json() == {"ok": True}
        assert TENANT_SLUG_HEADER not in response.headers

    def test_static_file_is_not_rewritten(self, client):
        response = client.get("/favicon.ico", headers={"host": "clinicasorriso.com.br"})

        assert response.json() == {"file": True}

    def test_raw_path_is_percent_encoded(self, client):
        response = client.get("/sobre nós", params={"raw": "1"}, headers={"host": "clinicasorriso.com.br"})

        assert response.json() == {"raw_path": "/clinica-sorriso/sobre%20n%C3%B3s"}


def test_reserved_slugs_come_from_first_segment():
    assert reserved_slugs(["/api", "/health", "/_next/static", "/openapi.json", "/"]) == {
        "api",
        "health",
        "_next",
        "openapi.json",
    }
    assert "docs" in reserved_slugs()
