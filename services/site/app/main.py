# app/main.py
import os

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from app.blocks.registry import build_default_registry
from app.blocks.versioning import VersionManager
from app.core.database import Base, SessionLocal, engine
from app.models import content as content_models, page as page_models, tenant as tenant_models  # noqa: F401
from app.routers import blocks, content, endpoints as tenants, pages, rendering
from app.services.tenant_source import build_tenant_loader
from shared import (
    RequestContextLogMiddleware,
    TenantResolutionCache,
    TenantRoutingMiddleware,
    configure_logging,
    create_event_publisher,
    create_health_router,
    database_lifespan_factory,
    load_service_config,
)

tags_metadata = [
    {
        "name": "Tenants",
        "description": "Administração dos sites (tenants): domínio, tema, recursos e contato.",
    },
    {
        "name": "Pages",
        "description": "Páginas de cada site montadas a partir de blocos versionados.",
    },
    {
        "name": "Services",
        "description": "Serviços oferecidos por cada tenant.",
    },
    {
        "name": "Team",
        "description": "Membros da equipe exibidos no site.",
    },
    {
        "name": "Testimonials",
        "description": "Depoimentos de clientes.",
    },
    {
        "name": "FAQs",
        "description": "Perguntas frequentes.",
    },
    {
        "name": "Blocks",
        "description": "Catálogo de blocos disponíveis no editor de páginas.",
    },
    {
        "name": "Sites",
        "description": "Renderização pública das páginas publicadas.",
    },
]

_CONFIG = load_service_config("site")
_ROOT_PATH = os.getenv("APP_ROOT_PATH") or ""
_LOGGER = configure_logging("site")

block_registry = build_default_registry()
version_manager = VersionManager(block_registry)
tenant_cache = TenantResolutionCache(
    build_tenant_loader(SessionLocal),
    ttl_seconds=_CONFIG.routing.cache_ttl_seconds,
)

lifespan = database_lifespan_factory(
    service_name="Site Service",
    metadata=Base.metadata,
    engine=engine,
    tenant_cache=tenant_cache,
)

app = FastAPI(
    title="Site Service",
    version="0.1.0",
    description="Plataforma multi-tenant de sites: roteamento por domínio, páginas e blocos versionados.",
    openapi_tags=tags_metadata,
    root_path=_ROOT_PATH,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.state.config = _CONFIG
app.state.block_registry = block_registry
app.state.version_manager = version_manager
app.state.tenant_cache = tenant_cache
app.state.event_publisher = create_event_publisher(_CONFIG.redis.url, _CONFIG.redis.stream)

# a última adicionada é a mais externa: o log envolve o roteamento por domínio
app.add_middleware(
    TenantRoutingMiddleware,
    cache=tenant_cache,
    excluded_prefixes=_CONFIG.routing.excluded_prefixes,
)
app.add_middleware(RequestContextLogMiddleware, logger=_LOGGER)


def custom_openapi_schema():
    if app.openapi_schema:
        return app.openapi_schema
    schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )
    schema["openapi"] = "3.0.3"
    app.openapi_schema = schema
    return app.openapi_schema


app.openapi = custom_openapi_schema

app.include_router(
    create_health_router(
        service_name="site",
        database_engine=engine,
        redis_url=_CONFIG.redis.url or None,
        tenant_cache=tenant_cache,
    )
)

app.include_router(tenants.router, prefix="/api/tenants")
app.include_router(pages.router, prefix="/api/tenants")
for content_router in content.routers:
    app.include_router(content_router, prefix="/api/tenants")
app.include_router(blocks.router, prefix="/api/blocks")


@app.get("/")
def root():
    return {
        "service": "site",
        "status": "ok",
        "docs_url": "/docs",
        "config": {
            "redis_stream": _CONFIG.redis.stream,
            "tenant_cache_ttl": _CONFIG.routing.cache_ttl_seconds,
        },
    }


# rotas públicas por último: /{tenant_slug} casa com qualquer caminho de um segmento
app.include_router(rendering.router)
