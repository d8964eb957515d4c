"""Tenant store queries feeding the hostname resolution cache."""

import asyncio
from typing import Callable, Dict, List

from sqlalchemy.orm import Session

from app.routers import crud


def carregar_tenants_com_dominio(session_factory: Callable[[], Session]) -> List[Dict[str, str]]:
    db = session_factory()
    try:
        return [
            {"id": str(tenant.id), "slug": tenant.slug, "domain": tenant.domain}
            for tenant in crud.listar_tenants_com_dominio(db)
        ]
    finally:
        db.close()


def build_tenant_loader(session_factory: Callable[[], Session]):
    """Async loader for :class:`shared.tenant_cache.TenantResolutionCache`.

    The synchronous query runs in a worker thread so it does not block the
    event loop of the request being routed.
    """

    async def _load() -> List[Dict[str, str]]:
        return await asyncio.to_thread(carregar_tenants_com_dominio, session_factory)

    return _load
