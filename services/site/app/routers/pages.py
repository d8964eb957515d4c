from uuid import UUID
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.blocks.versioning import VersionManager
from app.core.auth_dependencies import TokenPayload, garantir_admin_do_tenant, get_current_token
from app.core.database import get_db
from app.core.dependencies import get_version_manager
from app.models.tenant import Tenant
from app.schemas.page_schema import PageCreate, PageOut, PageStatus, PageUpdate
from . import crud, validators

router = APIRouter(tags=["Pages"])


def _tenant_gerenciavel(db: Session, tenant_id: UUID, token: TokenPayload) -> Tenant:
    garantir_admin_do_tenant(token, tenant_id)
    tenant = crud.buscar_tenant(db, tenant_id)
    if not tenant:
        raise HTTPException(status_code=404, detail="Tenant não encontrado")
    return tenant


@router.post("/{tenant_id}/pages", response_model=PageOut, status_code=status.HTTP_201_CREATED)
def criar_pagina(
    tenant_id: UUID,
    page: PageCreate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(get_current_token),
    version_manager: VersionManager = Depends(get_version_manager),
):
    tenant = _tenant_gerenciavel(db, tenant_id, current_token)
    validators.validar_slug_pagina_unico(db, tenant_id, page.slug)
    layout = validators.validar_layout(tenant, page.layout, version_manager)
    return crud.criar_pagina(db, tenant_id, page, layout)


@router.get("/{tenant_id}/pages", response_model=List[PageOut])
def listar_paginas(
    tenant_id: UUID,
    status_filter: Optional[PageStatus] = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(get_current_token),
):
    _tenant_gerenciavel(db, tenant_id, current_token)
    return crud.listar_paginas(db, tenant_id, status_filter)


@router.get("/{tenant_id}/pages/{page_id}", response_model=PageOut)
def buscar_pagina(
    tenant_id: UUID,
    page_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(get_current_token),
):
    _tenant_gerenciavel(db, tenant_id, current_token)
    pagina = crud.buscar_pagina(db, tenant_id, page_id)
    if not pagina:
        raise HTTPException(status_code=404, detail="Página não encontrada")
    return pagina


@router.put("/{tenant_id}/pages/{page_id}", response_model=PageOut)
def atualizar_pagina(
    tenant_id: UUID,
    page_id: UUID,
    page_update: PageUpdate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(get_current_token),
    version_manager: VersionManager = Depends(get_version_manager),
):
    tenant = _tenant_gerenciavel(db, tenant_id, current_token)
    pagina = crud.buscar_pagina(db, tenant_id, page_id)
    if not pagina:
        raise HTTPException(status_code=404, detail="Página não encontrada")

    if page_update.slug:
        validators.validar_slug_pagina_unico(db, tenant_id, page_update.slug, page_id)

    layout = None
    if page_update.layout is not None:
        layout = validators.validar_layout(tenant, page_update.layout, version_manager)

    return crud.atualizar_pagina(db, pagina, page_update, layout)


@router.delete("/{tenant_id}/pages/{page_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_pagina(
    tenant_id: UUID,
    page_id: UUID,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(get_current_token),
):
    _tenant_gerenciavel(db, tenant_id, current_token)
    pagina = crud.buscar_pagina(db, tenant_id, page_id)
    if not pagina:
        raise HTTPException(status_code=404, detail="Página não encontrada")
    crud.deletar_pagina(db, pagina)
    return None
