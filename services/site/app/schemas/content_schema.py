from datetime import datetime
from uuid import UUID
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

LanguageLevel = Literal["native", "fluent", "professional", "basic"]
Rating = Literal["1", "2", "3", "4", "5"]


class _ContentOut(BaseModel):
    id: UUID
    tenant_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# Serviços
class ServiceBase(BaseModel):
    title: str = Field(..., min_length=1, examples=["Limpeza dental"])
    description: str = Field(..., min_length=1)
    icon: str = Field(..., min_length=1, examples=["tooth"])
    order: int = Field(..., ge=0)


class ServiceCreate(ServiceBase):
    pass


class ServiceUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    icon: Optional[str] = Field(default=None, min_length=1)
    order: Optional[int] = Field(default=None, ge=0)


class ServiceOut(ServiceBase, _ContentOut):
    pass


# Equipe
class Education(BaseModel):
    degree: str
    institution: str
    year: str


class Certification(BaseModel):
    title: str
    issuer: str
    year: str


class Language(BaseModel):
    language: str
    level: LanguageLevel


class TeamMemberBase(BaseModel):
    name: str = Field(..., min_length=1, examples=["Dra. Ana Souza"])
    role: str = Field(..., min_length=1, examples=["Dentista"])
    specialization: str = Field(..., min_length=1, examples=["Ortodontia"])
    image_url: str = Field(..., min_length=1)
    bio: str = Field(..., min_length=1)
    education: List[Education] = Field(default_factory=list)
    certifications: List[Certification] = Field(default_factory=list)
    languages: List[Language] = Field(default_factory=list)
    order: Optional[int] = None


class TeamMemberCreate(TeamMemberBase):
    pass


class TeamMemberUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    role: Optional[str] = Field(default=None, min_length=1)
    specialization: Optional[str] = Field(default=None, min_length=1)
    image_url: Optional[str] = Field(default=None, min_length=1)
    bio: Optional[str] = Field(default=None, min_length=1)
    education: Optional[List[Education]] = None
    certifications: Optional[List[Certification]] = None
    languages: Optional[List[Language]] = None
    order: Optional[int] = None


class TeamMemberOut(TeamMemberBase, _ContentOut):
    pass


# Depoimentos
class TestimonialBase(BaseModel):
    author: str = Field(..., min_length=1, examples=["Carlos Lima"])
    role: Optional[str] = None
    content: str = Field(..., min_length=1)
    rating: Rating = "5"
    image_url: Optional[str] = None
    order: Optional[int] = None


class TestimonialCreate(TestimonialBase):
    pass


class TestimonialUpdate(BaseModel):
    author: Optional[str] = Field(default=None, min_length=1)
    role: Optional[str] = None
    content: Optional[str] = Field(default=None, min_length=1)
    rating: Optional[Rating] = None
    image_url: Optional[str] = None
    order: Optional[int] = None


class TestimonialOut(TestimonialBase, _ContentOut):
    pass


# Perguntas frequentes
class FAQBase(BaseModel):
    question: str = Field(..., min_length=1, examples=["Aceitam convênio?"])
    answer: str = Field(..., min_length=1)
    category: Optional[str] = None
    order: Optional[int] = None


class FAQCreate(FAQBase):
    pass


class FAQUpdate(BaseModel):
    question: Optional[str] = Field(default=None, min_length=1)
    answer: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = None
    order: Optional[int] = None


class FAQOut(FAQBase, _ContentOut):
    pass
