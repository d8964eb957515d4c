# app/models/page.py
import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class Page(Base):
    __tablename__ = "pages"
    __table_args__ = (UniqueConstraint("tenant_id", "slug", name="uq_pages_tenant_slug"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(UUID(as_uuid=True), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    slug = Column(String, nullable=False)
    page_type = Column(String, nullable=False, default="standard")
    status = Column(String, nullable=False, default="draft")
    # lista de blocos: {"blockType": ..., "version": ..., ...campos}
    layout = Column(JSONB().with_variant(JSON, "sqlite"), nullable=False, default=list)
    meta = Column(JSONB().with_variant(JSON, "sqlite"), nullable=False, default=dict)
    navigation = Column(JSONB().with_variant(JSON, "sqlite"), nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    tenant = relationship("Tenant", back_populates="pages")
