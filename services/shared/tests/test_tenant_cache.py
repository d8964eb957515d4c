"""Testes do cache hostname → tenant usado pelo roteamento."""

import pytest

from shared.tenant_cache import (
    CachedTenant,
    TenantResolutionCache,
    normalize_domain,
    normalize_hostname,
)


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeStore:
    """Loader assíncrono que conta consultas e pode falhar sob demanda."""

    def __init__(self, records):
        self.records = list(records)
        self.calls = 0
        self.fail = False

    async def __call__(self):
        self.calls += 1
        if self.fail:
            raise ConnectionError("tenant store offline")
        return list(self.records)


CLINICA = {"id": "t-1", "slug": "clinica-sorriso", "domain": "clinicasorriso.com.br"}
ESTUDIO = {"id": "t-2", "slug": "estudio-zen", "domain": "www.estudiozen.com"}
SEM_DOMINIO = {"id": "t-3", "slug": "sem-dominio", "domain": None}


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return FakeStore([CLINICA, ESTUDIO, SEM_DOMINIO])


@pytest.fixture
def cache(store, clock):
    return TenantResolutionCache(store, ttl_seconds=300, clock=clock)


class TestHostnameNormalization:
    def test_strips_port_and_lowercases(self):
        assert normalize_hostname("ClinicaSorriso.com.br:8080") == "clinicasorriso.com.br"

    def test_keeps_ipv6_literal(self):
        assert normalize_hostname("[::1]:8000") == "[::1]"

    def test_domain_drops_www_prefix(self):
        assert normalize_domain("WWW.EstudioZen.com") == "estudiozen.com"


class TestTenantResolutionCache:
    @pytest.mark.asyncio
    async def test_refresh_maps_bare_and_www_hosts(self, cache):
        """Testa que cada domínio gera as entradas com e sem www."""
        mapping = await cache.refresh()

        esperado = CachedTenant(slug="clinica-sorriso", id="t-1")
        assert mapping["clinicasorriso.com.br"] == esperado
        assert mapping["www.clinicasorriso.com.br"] == esperado
        assert mapping["estudiozen.com"].slug == "estudio-zen"
        assert mapping["www.estudiozen.com"].slug == "estudio-zen"
        assert len(cache) == 4

    @pytest.mark.asyncio
    async def test_tenants_without_domain_are_skipped(self, store, clock):
        store.records.append({"id": "t-4", "slug": "espacos", "domain": "   "})
        cache = TenantResolutionCache(store, clock=clock)

        mapping = await cache.refresh()

        assert all(entry.slug not in ("sem-dominio", "espacos") for entry in mapping.values())

    @pytest.mark.asyncio
    async def test_get_resolves_host_with_port_and_case(self, cache):
        tenant = await cache.get("WWW.ClinicaSorriso.com.br:443")
        assert tenant == CachedTenant(slug="clinica-sorriso", id="t-1")

    @pytest.mark.asyncio
    async def test_unknown_host_is_a_miss(self, cache):
        assert await cache.get("desconhecido.com") is None
        assert await cache.get(None) is None

    @pytest.mark.asyncio
    async def test_store_is_queried_once_within_ttl(self, cache, store, clock):
        await cache.get("clinicasorriso.com.br")
        clock.advance(300)
        await cache.get("estudiozen.com")

        assert store.calls == 1

    @pytest.mark.asyncio
    async def test_refreshes_after_ttl_elapses(self, cache, store, clock):
        await cache.get("clinicasorriso.com.br")
        store.records = [{"id": "t-1", "slug": "clinica-sorriso", "domain": "novaclinica.com.br"}]

        clock.advance(301)
        tenant = await cache.get("novaclinica.com.br")

        assert store.calls == 2
        assert tenant.slug == "clinica-sorriso"
        assert cache.resolve("clinicasorriso.com.br") is None

    @pytest.mark.asyncio
    async def test_failed_refresh_keeps_previous_mapping(self, cache, store, clock):
        """Testa que uma falha do banco mantém o último mapeamento válido."""
        await cache.refresh()
        store.fail = True
        clock.advance(301)

        assert await cache.refresh() is None
        tenant = await cache.get("clinicasorriso.com.br")

        assert tenant.slug == "clinica-sorriso"
        assert cache.is_stale() is True

    @pytest.mark.asyncio
    async def test_failed_first_refresh_leaves_cache_empty(self, store, clock):
        store.fail = True
        cache = TenantResolutionCache(store, clock=clock)

        assert await cache.get("clinicasorriso.com.br") is None
        assert len(cache) == 0
        assert cache.last_refreshed_at is None

    @pytest.mark.asyncio
    async def test_empty_cache_is_always_stale(self, clock):
        cache = TenantResolutionCache(FakeStore([SEM_DOMINIO]), clock=clock)
        await cache.refresh()

        assert len(cache) == 0
        assert cache.is_stale() is True

    @pytest.mark.asyncio
    async def test_invalidate_forces_next_lookup_to_reload(self, cache, store):
        await cache.get("clinicasorriso.com.br")
        cache.invalidate()
        await cache.get("clinicasorriso.com.br")

        assert store.calls == 2

    @pytest.mark.asyncio
    async def test_loader_may_return_objects(self, clock):
        class Registro:
            id = "t-9"
            slug = "pilates"
            domain = "Pilates.com"

        cache = TenantResolutionCache(FakeStore([Registro()]), clock=clock)

        assert (await cache.get("pilates.com")).slug == "pilates"

    @pytest.mark.asyncio
    async def test_snapshot_is_a_copy(self, cache):
        await cache.refresh()
        snapshot = cache.snapshot()
        snapshot.clear()

        assert len(cache) == 4
