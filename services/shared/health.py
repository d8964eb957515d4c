"""Health check utilities for FastAPI services.

Provides endpoints /health and /ready for Docker/Kubernetes monitoring.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Optional

import redis.asyncio as aioredis
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.engine import Engine

from .tenant_cache import TenantResolutionCache


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def check_database_health(engine: Optional[Engine]) -> bool:
    """Verifica se o banco de dados responde a ``SELECT 1``."""
    if engine is None:
        return False

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
        return True
    except Exception:
        return False


async def check_redis_health(redis_url: Optional[str], timeout: float = 1.0) -> Optional[bool]:
    """Ping Redis.

    Returns:
        True se Redis está disponível,
        False se Redis está configurado mas indisponível,
        None se Redis não está configurado
    """
    if not redis_url:
        return None

    client = aioredis.from_url(redis_url)
    try:
        await asyncio.wait_for(client.ping(), timeout=timeout)
        return True
    except Exception:
        return False
    finally:
        await client.aclose()


def describe_tenant_cache(cache: Optional[TenantResolutionCache]) -> Optional[dict]:
    if cache is None:
        return None
    return {
        "hosts": len(cache),
        "stale": cache.is_stale(),
        "ttl_seconds": cache.ttl,
    }


def create_health_router(
    service_name: str,
    database_engine: Optional[Engine] = None,
    redis_url: Optional[str] = None,
    tenant_cache: Optional[TenantResolutionCache] = None,
) -> APIRouter:
    """Cria router FastAPI com endpoints /health e /ready.

    The tenant cache is reported on /ready for visibility only; an empty or
    stale cache never makes the service unready, requests are still served.
    """
    router = APIRouter(tags=["Health"])

    @router.get("/health", status_code=status.HTTP_200_OK)
    def health():
        return {
            "status": "ok",
            "service": service_name,
            "timestamp": _now(),
        }

    @router.get("/ready", status_code=status.HTTP_200_OK)
    async def ready():
        checks = {}

        db_healthy = check_database_health(database_engine)
        checks["database"] = db_healthy

        redis_healthy = await check_redis_health(redis_url)
        checks["redis"] = redis_healthy

        all_healthy = db_healthy and redis_healthy is not False

        response_data = {
            "status": "ready" if all_healthy else "not_ready",
            "service": service_name,
            "timestamp": _now(),
            "checks": checks,
            "tenant_cache": describe_tenant_cache(tenant_cache),
        }

        return JSONResponse(
            content=response_data,
            status_code=status.HTTP_200_OK if all_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    return router
