"""Public site pages.

Requests reach these routes after the tenant routing middleware has rewritten
``https://<tenant domain>/<page>`` to ``/<tenant slug>/<page>``; the slug form
can also be requested directly.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.blocks.versioning import VersionManager
from app.core.database import get_db
from app.core.dependencies import get_version_manager
from app.schemas.page_schema import PageRenderOut
from app.schemas.tenant_schema import TenantSummary
from . import crud


HOME_SLUG = "home"

router = APIRouter(tags=["Sites"])


def renderizar_pagina(db: Session, tenant_slug: str, page_slug: str, version_manager: VersionManager) -> dict:
    tenant = crud.buscar_tenant_por_slug(db, tenant_slug)
    if not tenant:
        raise HTTPException(status_code=404, detail="Site não encontrado")

    pagina = crud.buscar_pagina_publicada(db, tenant.id, page_slug)
    if not pagina:
        raise HTTPException(status_code=404, detail="Página não encontrada")

    blocks = version_manager.migrate_layout(pagina.layout)
    navegacao = [
        {
            "label": (p.navigation or {}).get("nav_label") or p.title,
            "slug": p.slug,
            "order": (p.navigation or {}).get("nav_order"),
        }
        for p in crud.listar_navegacao(db, tenant.id)
    ]

    return {
        "tenant": TenantSummary.model_validate(tenant),
        "page": {
            "title": pagina.title,
            "slug": pagina.slug,
            "page_type": pagina.page_type,
            "meta": pagina.meta or {},
        },
        "blocks": blocks,
        "navigation": navegacao,
    }


@router.get("/{tenant_slug}", response_model=PageRenderOut)
def pagina_inicial(
    tenant_slug: str,
    db: Session = Depends(get_db),
    version_manager: VersionManager = Depends(get_version_manager),
):
    return renderizar_pagina(db, tenant_slug, HOME_SLUG, version_manager)


@router.get("/{tenant_slug}/{page_slug}", response_model=PageRenderOut)
def pagina(
    tenant_slug: str,
    page_slug: str,
    db: Session = Depends(get_db),
    version_manager: VersionManager = Depends(get_version_manager),
):
    return renderizar_pagina(db, tenant_slug, page_slug, version_manager)
