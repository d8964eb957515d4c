from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException

from app.blocks.registry import BlockRegistry
from app.core.dependencies import get_block_registry
from app.schemas.block_schema import BlockDetailOut, BlockMetadataOut

router = APIRouter(tags=["Blocks"])


def _definicao(registry: BlockRegistry, name: str):
    if name not in registry:
        raise HTTPException(status_code=404, detail="Bloco não encontrado")
    return registry.get(name)


@router.get("/", response_model=List[BlockMetadataOut])
def listar_blocos(
    category: Optional[str] = None,
    feature: Optional[str] = None,
    registry: BlockRegistry = Depends(get_block_registry),
):
    blocos = registry.by_category(category) if category else registry.all_blocks()
    if feature:
        blocos = [b for b in blocos if b.required_feature == feature]
    return [registry.metadata(b.slug) for b in blocos]


@router.get("/categories", response_model=List[str])
def listar_categorias(registry: BlockRegistry = Depends(get_block_registry)):
    return registry.categories()


@router.get("/{name}", response_model=BlockDetailOut)
def detalhar_bloco(name: str, registry: BlockRegistry = Depends(get_block_registry)):
    _definicao(registry, name)
    return {
        **registry.metadata(name),
        "versions": [
            {"version": h.version, "changes": list(h.changes), "date": h.date, "breaking": h.breaking}
            for h in registry.version_history(name)
        ],
    }


@router.get("/{name}/defaults", response_model=Dict[str, Any])
def dados_padrao(name: str, registry: BlockRegistry = Depends(get_block_registry)):
    _definicao(registry, name)
    return registry.default_block_data(name)
