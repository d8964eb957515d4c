from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.blocks.versioning import VersionManager
from app.models.page import Page
from app.models.tenant import Tenant
from shared.config import DEFAULT_EXCLUDED_PREFIXES, get_excluded_prefixes
from shared.routing import reserved_slugs


def validar_dominio_unico(db: Session, dominio: Optional[str], tenant_id: UUID | None = None):
    if not dominio:
        return
    query = db.query(Tenant).filter(Tenant.domain == dominio)
    if tenant_id:
        query = query.filter(Tenant.id != tenant_id)

    if query.first():
        raise HTTPException(status_code=400, detail="Domínio já cadastrado.")


def validar_slug_unico(db: Session, slug: str, tenant_id: UUID | None = None):
    # o slug vira o primeiro segmento do caminho; não pode colidir com as rotas do serviço
    if slug.lower() in reserved_slugs((*DEFAULT_EXCLUDED_PREFIXES, *get_excluded_prefixes())):
        raise HTTPException(status_code=400, detail="Slug reservado pelo sistema.")

    query = db.query(Tenant).filter(Tenant.slug == slug)
    if tenant_id:
        query = query.filter(Tenant.id != tenant_id)

    if query.first():
        raise HTTPException(status_code=400, detail="Slug já cadastrado.")


def validar_slug_pagina_unico(db: Session, tenant_id: UUID, slug: str, page_id: UUID | None = None):
    query = db.query(Page).filter(Page.tenant_id == tenant_id, Page.slug == slug)
    if page_id:
        query = query.filter(Page.id != page_id)

    if query.first():
        raise HTTPException(status_code=400, detail="Já existe uma página com este slug.")


def validar_layout(
    tenant: Tenant,
    layout: List[Dict[str, Any]],
    version_manager: VersionManager,
) -> List[Dict[str, Any]]:
    """Valida os blocos de uma página e devolve o layout pronto para salvar.

    Blocos sem ``version`` recebem a versão atual do tipo. Todos os erros são
    reunidos e devolvidos de uma vez com status 422.
    """
    registry = version_manager.registry
    erros: List[Dict[str, Any]] = []
    normalizado: List[Dict[str, Any]] = []

    for index, block in enumerate(layout):
        block_type = block.get("blockType")
        definition = registry.find(block_type)
        if definition is None:
            erros.append({"index": index, "field": "blockType", "message": f"Tipo de bloco desconhecido: {block_type}"})
            continue

        block = dict(block)
        if block.get("version") in (None, ""):
            block["version"] = definition.version

        if not version_manager.validate_block(block):
            erros.append({"index": index, "field": "version", "message": "Versão deve seguir o formato semântico, ex: 1.0.0"})
            continue

        validation = registry.validate_block_data(block_type, block)
        for erro in validation.errors:
            erros.append({"index": index, **erro})

        feature = definition.required_feature
        if feature and not tenant.feature_enabled(feature):
            erros.append(
                {
                    "index": index,
                    "field": "blockType",
                    "message": f"O bloco {block_type} exige o recurso '{feature}', desabilitado para este tenant",
                }
            )

        normalizado.append(block)

    if erros:
        raise HTTPException(status_code=422, detail=erros)
    return normalizado
