# app/models/content.py
"""Coleções de conteúdo de cada tenant, usadas pelos blocos de serviços,
equipe, depoimentos e perguntas frequentes."""
import uuid
from sqlalchemy import Column, String, Text, Integer, DateTime, ForeignKey, JSON
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.sql import func
from app.core.database import Base


def _tenant_fk():
    return Column(UUID(as_uuid=True), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)


class Service(Base):
    __tablename__ = "services"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = _tenant_fk()
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    icon = Column(String, nullable=False)
    order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class TeamMember(Base):
    __tablename__ = "team_members"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = _tenant_fk()
    name = Column(String, nullable=False)
    role = Column(String, nullable=False)
    specialization = Column(String, nullable=False)
    image_url = Column(String, nullable=False)
    bio = Column(Text, nullable=False)
    # listas de {degree, institution, year}, {title, issuer, year} e {language, level}
    education = Column(JSONB().with_variant(JSON, "sqlite"), nullable=False, default=list)
    certifications = Column(JSONB().with_variant(JSON, "sqlite"), nullable=False, default=list)
    languages = Column(JSONB().with_variant(JSON, "sqlite"), nullable=False, default=list)
    order = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class Testimonial(Base):
    __tablename__ = "testimonials"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = _tenant_fk()
    author = Column(String, nullable=False)
    role = Column(String, nullable=True)
    content = Column(Text, nullable=False)
    rating = Column(String(1), nullable=False, default="5")
    image_url = Column(String, nullable=True)
    order = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class FAQ(Base):
    __tablename__ = "faqs"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = _tenant_fk()
    question = Column(String, nullable=False)
    answer = Column(Text, nullable=False)
    category = Column(String, nullable=True)
    order = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
