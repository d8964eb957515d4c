from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.page import Page
from app.models.tenant import Tenant
from app.schemas.page_schema import PageCreate, PageUpdate
from app.schemas.tenant_schema import TenantCreate, TenantUpdate
from shared.messaging import (
    TENANT_CREATED,
    TENANT_DEACTIVATED,
    TENANT_UPDATED,
    EventPublisher,
    tenant_event_payload,
)


def _publicar(publisher: Optional[EventPublisher], event_type: str, tenant: Tenant) -> None:
    if publisher:
        publisher.publish(event_type, tenant_event_payload(tenant))


def criar_tenant(db: Session, tenant_data: TenantCreate, publisher: Optional[EventPublisher] = None) -> Tenant:
    novo_tenant = Tenant(
        name=tenant_data.name,
        slug=tenant_data.slug,
        domain=tenant_data.domain,
        business_type=tenant_data.business_type,
        features=tenant_data.features.model_dump(),
        theme=tenant_data.theme.model_dump(),
        contact=tenant_data.contact.model_dump(mode="json"),
        allow_public_read=tenant_data.allow_public_read,
        is_active=True,
    )

    db.add(novo_tenant)
    db.commit()
    db.refresh(novo_tenant)
    _publicar(publisher, TENANT_CREATED, novo_tenant)
    return novo_tenant


def listar_tenants(db: Session, incluir_inativos: bool = False) -> List[Tenant]:
    query = db.query(Tenant)
    if not incluir_inativos:
        query = query.filter(Tenant.is_active.is_(True))
    return query.order_by(Tenant.name).all()


def listar_tenants_com_dominio(db: Session) -> List[Tenant]:
    return (
        db.query(Tenant)
        .filter(Tenant.is_active.is_(True), Tenant.domain.is_not(None), Tenant.domain != "")
        .all()
    )


def buscar_tenant(db: Session, tenant_id: UUID) -> Optional[Tenant]:
    return db.query(Tenant).filter(Tenant.id == tenant_id).first()


def buscar_tenant_por_slug(db: Session, slug: str) -> Optional[Tenant]:
    return (
        db.query(Tenant)
        .filter(Tenant.slug == slug, Tenant.is_active.is_(True))
        .first()
    )


def atualizar_tenant(
    db: Session,
    tenant_id: UUID,
    tenant_update: TenantUpdate,
    publisher: Optional[EventPublisher] = None,
) -> Optional[Tenant]:
    tenant = buscar_tenant(db, tenant_id)
    if not tenant:
        return None

    update_data = tenant_update.model_dump(exclude_unset=True, mode="json")
    for field, value in update_data.items():
        # apenas o domínio pode ser removido
        if value is None and field != "domain":
            continue
        setattr(tenant, field, value)

    db.commit()
    db.refresh(tenant)
    _publicar(publisher, TENANT_UPDATED, tenant)
    return tenant


def desativar_tenant(db: Session, tenant_id: UUID, publisher: Optional[EventPublisher] = None) -> Optional[Tenant]:
    """Tenants nunca são removidos, apenas desativados."""
    tenant = buscar_tenant(db, tenant_id)
    if not tenant:
        return None

    tenant.is_active = False
    db.commit()
    db.refresh(tenant)
    _publicar(publisher, TENANT_DEACTIVATED, tenant)
    return tenant


def criar_pagina(db: Session, tenant_id: UUID, page_data: PageCreate, layout: List[Dict[str, Any]]) -> Page:
    pagina = Page(
        tenant_id=tenant_id,
        title=page_data.title,
        slug=page_data.slug,
        page_type=page_data.page_type,
        status=page_data.status,
        layout=layout,
        meta=page_data.meta.model_dump(),
        navigation=page_data.navigation.model_dump(),
    )
    db.add(pagina)
    db.commit()
    db.refresh(pagina)
    return pagina


def listar_paginas(db: Session, tenant_id: UUID, status: Optional[str] = None) -> List[Page]:
    query = db.query(Page).filter(Page.tenant_id == tenant_id)
    if status:
        query = query.filter(Page.status == status)
    return query.order_by(Page.title).all()


def buscar_pagina(db: Session, tenant_id: UUID, page_id: UUID) -> Optional[Page]:
    return (
        db.query(Page)
        .filter(Page.tenant_id == tenant_id, Page.id == page_id)
        .first()
    )


def buscar_pagina_publicada(db: Session, tenant_id: UUID, slug: str) -> Optional[Page]:
    return (
        db.query(Page)
        .filter(Page.tenant_id == tenant_id, Page.slug == slug, Page.status == "published")
        .first()
    )


def listar_navegacao(db: Session, tenant_id: UUID) -> List[Page]:
    paginas = (
        db.query(Page)
        .filter(Page.tenant_id == tenant_id, Page.status == "published")
        .all()
    )
    no_menu = [p for p in paginas if (p.navigation or {}).get("show_in_main_nav")]
    # páginas sem nav_order vão para o fim
    return sorted(
        no_menu,
        key=lambda p: ((p.navigation or {}).get("nav_order") is None, (p.navigation or {}).get("nav_order") or 0, p.title),
    )


def atualizar_pagina(
    db: Session,
    pagina: Page,
    page_update: PageUpdate,
    layout: Optional[List[Dict[str, Any]]] = None,
) -> Page:
    update_data = page_update.model_dump(exclude_unset=True, exclude={"layout"})
    for field, value in update_data.items():
        if value is None:
            continue
        setattr(pagina, field, value)
    if layout is not None:
        pagina.layout = layout

    db.commit()
    db.refresh(pagina)
    return pagina


def deletar_pagina(db: Session, pagina: Page) -> None:
    db.delete(pagina)
    db.commit()


# Coleções de conteúdo (serviços, equipe, depoimentos, FAQs): mesmas operações
# para todos os modelos, sempre restritas ao tenant.
def criar_conteudo(db: Session, model, tenant_id: UUID, dados) -> Any:
    item = model(tenant_id=tenant_id, **dados.model_dump(mode="json"))
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def listar_conteudo(db: Session, model, tenant_id: UUID, campo_titulo: str) -> List[Any]:
    itens = db.query(model).filter(model.tenant_id == tenant_id).all()
    # itens sem order vão para o fim
    return sorted(itens, key=lambda i: (i.order is None, i.order or 0, getattr(i, campo_titulo)))


def buscar_conteudo(db: Session, model, tenant_id: UUID, item_id: UUID) -> Optional[Any]:
    return (
        db.query(model)
        .filter(model.tenant_id == tenant_id, model.id == item_id)
        .first()
    )


def atualizar_conteudo(db: Session, item, dados) -> Any:
    for field, value in dados.model_dump(exclude_unset=True, mode="json").items():
        if value is None:
            continue
        setattr(item, field, value)
    db.commit()
    db.refresh(item)
    return item


def deletar_conteudo(db: Session, item) -> None:
    db.delete(item)
    db.commit()
