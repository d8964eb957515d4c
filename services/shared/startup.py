"""Async lifespan helpers shared by FastAPI services."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from sqlalchemy.exc import OperationalError
from sqlalchemy.sql.schema import MetaData

from .tenant_cache import TenantResolutionCache

logger = logging.getLogger(__name__)


async def create_tables(
    *,
    service_name: str,
    metadata: MetaData,
    engine,
    retries: int = 10,
    wait_seconds: float = 2.0,
) -> None:
    """Create missing tables, retrying while the database is still coming up."""
    for attempt in range(retries):
        try:
            await asyncio.to_thread(metadata.create_all, bind=engine)
            return
        except OperationalError as exc:
            if attempt == retries - 1:
                logger.error("[%s] Banco indisponível após %d tentativas", service_name, retries)
                raise
            logger.warning(
                "[%s] Banco indisponível, aguardando %ss... tentativa %d: %s",
                service_name,
                wait_seconds,
                attempt + 1,
                exc,
            )
            await asyncio.sleep(wait_seconds)


def database_lifespan_factory(
    *,
    service_name: str,
    metadata: MetaData,
    engine,
    tenant_cache: Optional[TenantResolutionCache] = None,
    retries: int = 10,
    wait_seconds: float = 2.0,
):
    """Return a FastAPI lifespan that prepares the schema and warms the tenant cache.

    A failed warm-up is not fatal: the first routed request retries it.
    """

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        logger.info("Starting %s...", service_name)
        await create_tables(
            service_name=service_name,
            metadata=metadata,
            engine=engine,
            retries=retries,
            wait_seconds=wait_seconds,
        )
        if tenant_cache is not None:
            mapping = await tenant_cache.refresh()
            if mapping is None:
                logger.warning("[%s] Tenant cache warm-up failed", service_name)
            else:
                logger.info("[%s] Tenant cache warmed with %d hosts", service_name, len(mapping))
        yield
        logger.info("%s stopped", service_name)

    return _lifespan
