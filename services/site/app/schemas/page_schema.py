from datetime import datetime
from uuid import UUID
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.tenant_schema import TenantSummary

PageType = Literal["standard", "landing", "blog", "service", "contact"]
PageStatus = Literal["draft", "published", "archived"]

_SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class PageMeta(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    keywords: Optional[str] = None


class PageNavigation(BaseModel):
    show_in_main_nav: bool = False
    nav_order: Optional[int] = None
    nav_label: Optional[str] = None


class PageBase(BaseModel):
    title: str = Field(..., min_length=1, examples=["Sobre nós"])
    slug: str = Field(..., pattern=_SLUG_PATTERN, examples=["sobre-nos"])
    page_type: PageType = "standard"
    status: PageStatus = "draft"
    # blocos no formato {"blockType": "hero", "version": "1.0.0", ...}
    layout: List[Dict[str, Any]] = Field(default_factory=list)
    meta: PageMeta = Field(default_factory=PageMeta)
    navigation: PageNavigation = Field(default_factory=PageNavigation)


class PageCreate(PageBase):
    pass


class PageUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    slug: Optional[str] = Field(default=None, pattern=_SLUG_PATTERN)
    page_type: Optional[PageType] = None
    status: Optional[PageStatus] = None
    layout: Optional[List[Dict[str, Any]]] = None
    meta: Optional[PageMeta] = None
    navigation: Optional[PageNavigation] = None


class PageOut(PageBase):
    id: UUID
    tenant_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NavigationItem(BaseModel):
    label: str
    slug: str
    order: Optional[int] = None


class RenderedPage(BaseModel):
    title: str
    slug: str
    page_type: PageType
    meta: PageMeta


class PageRenderOut(BaseModel):
    tenant: TenantSummary
    page: RenderedPage
    blocks: List[Dict[str, Any]]
    navigation: List[NavigationItem]
