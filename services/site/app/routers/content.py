"""Coleções de conteúdo de cada tenant sob ``/api/tenants/{tenant_id}/...``.

Leitura é pública; escrita exige super-admin ou o admin do próprio tenant.
"""

from uuid import UUID
from typing import List, Type

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.core.auth_dependencies import TokenPayload, garantir_admin_do_tenant, get_current_token
from app.core.database import Base, get_db
from app.models.content import FAQ, Service, TeamMember, Testimonial
from app.schemas import content_schema as schemas
from . import crud


def _buscar_tenant(db: Session, tenant_id: UUID):
    tenant = crud.buscar_tenant(db, tenant_id)
    if not tenant:
        raise HTTPException(status_code=404, detail="Tenant não encontrado")
    return tenant


def criar_router_conteudo(
    *,
    path: str,
    tag: str,
    model: Type[Base],
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    out_schema: Type[BaseModel],
    campo_titulo: str,
    nao_encontrado: str,
) -> APIRouter:
    router = APIRouter(tags=[tag])
    colecao = f"/{{tenant_id}}/{path}"
    item_path = f"{colecao}/{{item_id}}"

    def _buscar_item(db: Session, tenant_id: UUID, item_id: UUID):
        item = crud.buscar_conteudo(db, model, tenant_id, item_id)
        if not item:
            raise HTTPException(status_code=404, detail=nao_encontrado)
        return item

    @router.post(colecao, response_model=out_schema, status_code=status.HTTP_201_CREATED)
    def criar(
        tenant_id: UUID,
        dados: create_schema,
        db: Session = Depends(get_db),
        current_token: TokenPayload = Depends(get_current_token),
    ):
        garantir_admin_do_tenant(current_token, tenant_id)
        _buscar_tenant(db, tenant_id)
        return crud.criar_conteudo(db, model, tenant_id, dados)

    @router.get(colecao, response_model=List[out_schema])
    def listar(tenant_id: UUID, db: Session = Depends(get_db)):
        _buscar_tenant(db, tenant_id)
        return crud.listar_conteudo(db, model, tenant_id, campo_titulo)

    @router.get(item_path, response_model=out_schema)
    def buscar(tenant_id: UUID, item_id: UUID, db: Session = Depends(get_db)):
        return _buscar_item(db, tenant_id, item_id)

    @router.put(item_path, response_model=out_schema)
    def atualizar(
        tenant_id: UUID,
        item_id: UUID,
        dados: update_schema,
        db: Session = Depends(get_db),
        current_token: TokenPayload = Depends(get_current_token),
    ):
        garantir_admin_do_tenant(current_token, tenant_id)
        return crud.atualizar_conteudo(db, _buscar_item(db, tenant_id, item_id), dados)

    @router.delete(item_path, status_code=status.HTTP_204_NO_CONTENT)
    def deletar(
        tenant_id: UUID,
        item_id: UUID,
        db: Session = Depends(get_db),
        current_token: TokenPayload = Depends(get_current_token),
    ):
        garantir_admin_do_tenant(current_token, tenant_id)
        crud.deletar_conteudo(db, _buscar_item(db, tenant_id, item_id))
        return None

    return router


services_router = criar_router_conteudo(
    path="services",
    tag="Services",
    model=Service,
    create_schema=schemas.ServiceCreate,
    update_schema=schemas.ServiceUpdate,
    out_schema=schemas.ServiceOut,
    campo_titulo="title",
    nao_encontrado="Serviço não encontrado",
)

team_router = criar_router_conteudo(
    path="team",
    tag="Team",
    model=TeamMember,
    create_schema=schemas.TeamMemberCreate,
    update_schema=schemas.TeamMemberUpdate,
    out_schema=schemas.TeamMemberOut,
    campo_titulo="name",
    nao_encontrado="Membro da equipe não encontrado",
)

testimonials_router = criar_router_conteudo(
    path="testimonials",
    tag="Testimonials",
    model=Testimonial,
    create_schema=schemas.TestimonialCreate,
    update_schema=schemas.TestimonialUpdate,
    out_schema=schemas.TestimonialOut,
    campo_titulo="author",
    nao_encontrado="Depoimento não encontrado",
)

faqs_router = criar_router_conteudo(
    path="faqs",
    tag="FAQs",
    model=FAQ,
    create_schema=schemas.FAQCreate,
    update_schema=schemas.FAQUpdate,
    out_schema=schemas.FAQOut,
    campo_titulo="question",
    nao_encontrado="Pergunta não encontrada",
)

routers = (services_router, team_router, testimonials_router, faqs_router)
