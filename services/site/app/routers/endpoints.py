from uuid import UUID
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.auth_dependencies import (
    TokenPayload,
    garantir_admin_do_tenant,
    get_current_token,
    require_super_admin,
)
from app.core.database import get_db
from app.core.dependencies import get_event_publisher, get_tenant_cache
from app.schemas.tenant_schema import TenantCreate, TenantOut, TenantUpdate
from shared.messaging import EventPublisher
from shared.tenant_cache import TenantResolutionCache
from . import crud, validators

router = APIRouter(tags=["Tenants"])


@router.post("/", response_model=TenantOut)
def criar_tenant(
    tenant: TenantCreate,
    db: Session = Depends(get_db),
    _: TokenPayload = Depends(require_super_admin),
    cache: TenantResolutionCache = Depends(get_tenant_cache),
    publisher: Optional[EventPublisher] = Depends(get_event_publisher),
):
    validators.validar_slug_unico(db, tenant.slug)
    validators.validar_dominio_unico(db, tenant.domain)
    novo = crud.criar_tenant(db, tenant, publisher)
    if novo.domain:
        cache.invalidate()
    return novo


@router.get("/", response_model=List[TenantOut])
def listar_tenants(
    incluir_inativos: bool = False,
    db: Session = Depends(get_db),
    _: TokenPayload = Depends(get_current_token),
):
    return crud.listar_tenants(db, incluir_inativos)


@router.get("/{tenant_id}", response_model=TenantOut)
def buscar_tenant(
    tenant_id: UUID,
    db: Session = Depends(get_db),
    _: TokenPayload = Depends(get_current_token),
):
    tenant = crud.buscar_tenant(db, tenant_id)
    if not tenant:
        raise HTTPException(status_code=404, detail="Tenant não encontrado")
    return tenant


@router.put("/{tenant_id}", response_model=TenantOut)
def atualizar_tenant(
    tenant_id: UUID,
    tenant_update: TenantUpdate,
    db: Session = Depends(get_db),
    current_token: TokenPayload = Depends(get_current_token),
    cache: TenantResolutionCache = Depends(get_tenant_cache),
    publisher: Optional[EventPublisher] = Depends(get_event_publisher),
):
    garantir_admin_do_tenant(current_token, tenant_id)

    # apenas super-admin reativa/desativa ou troca o slug
    campos_restritos = {"is_active", "slug"} & tenant_update.model_fields_set
    if campos_restritos and not current_token.is_super_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Apenas super administradores podem alterar slug ou status do tenant.",
        )

    if tenant_update.slug:
        validators.validar_slug_unico(db, tenant_update.slug, tenant_id)
    if tenant_update.domain:
        validators.validar_dominio_unico(db, tenant_update.domain, tenant_id)

    tenant = crud.atualizar_tenant(db, tenant_id, tenant_update, publisher)
    if not tenant:
        raise HTTPException(status_code=404, detail="Tenant não encontrado")

    if {"domain", "slug", "is_active"} & tenant_update.model_fields_set:
        cache.invalidate()
    return tenant


@router.delete("/{tenant_id}", status_code=status.HTTP_204_NO_CONTENT)
def desativar_tenant(
    tenant_id: UUID,
    db: Session = Depends(get_db),
    _: TokenPayload = Depends(require_super_admin),
    cache: TenantResolutionCache = Depends(get_tenant_cache),
    publisher: Optional[EventPublisher] = Depends(get_event_publisher),
):
    tenant = crud.desativar_tenant(db, tenant_id, publisher)
    if not tenant:
        raise HTTPException(status_code=404, detail="Tenant não encontrado")
    cache.invalidate()
    return None
