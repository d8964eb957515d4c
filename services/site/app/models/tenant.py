# app/models/tenant.py
import uuid
from sqlalchemy import Column, String, Boolean, DateTime, JSON
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    slug = Column(String, unique=True, nullable=False, index=True)
    # sempre normalizado: minúsculo e sem "www."
    domain = Column(String, unique=True, nullable=True, index=True)
    business_type = Column(String, nullable=False)
    features = Column(JSONB().with_variant(JSON, "sqlite"), nullable=False, default=dict)
    theme = Column(JSONB().with_variant(JSON, "sqlite"), nullable=False, default=dict)
    contact = Column(JSONB().with_variant(JSON, "sqlite"), nullable=False, default=dict)
    allow_public_read = Column(Boolean, nullable=False, default=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    pages = relationship("Page", back_populates="tenant", cascade="all, delete-orphan")

    def feature_enabled(self, feature: str) -> bool:
        return bool((self.features or {}).get(feature, False))
