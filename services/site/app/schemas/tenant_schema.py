from datetime import datetime
from uuid import UUID
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from shared.tenant_cache import normalize_domain

BusinessType = Literal["healthcare", "legal", "non-profit", "professional", "education", "other"]
FontFamily = Literal["inter", "montserrat", "roboto", "open-sans"]
SocialPlatform = Literal["facebook", "twitter", "instagram", "linkedin", "youtube"]

_SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


def _validar_hex_color(value: Optional[str]) -> Optional[str]:
    if value is not None and (not value.startswith("#") or len(value) not in {4, 7}):
        raise ValueError("Cor deve estar no formato hexadecimal, ex: #RRGGBB")
    return value


def _normalizar_dominio(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if "://" in value or "/" in value.strip():
        raise ValueError("Informe apenas o domínio, sem protocolo ou caminho, ex: clinica.com.br")
    normalized = normalize_domain(value)
    return normalized or None


class FeatureFlags(BaseModel):
    blog: bool = False
    team: bool = True
    services: bool = True
    testimonials: bool = True
    appointments: bool = False


class ThemeSettings(BaseModel):
    primary_color: str = Field(default="#007bff", examples=["#007bff"])
    secondary_color: str = Field(default="#6c757d", examples=["#6c757d"])
    font_family: FontFamily = "inter"

    @field_validator("primary_color", "secondary_color")
    @classmethod
    def validar_cores(cls, value: str) -> str:
        return _validar_hex_color(value)


class SocialLink(BaseModel):
    platform: SocialPlatform
    url: str


class ContactInfo(BaseModel):
    email: EmailStr = Field(..., examples=["contato@clinica.com.br"])
    phone: Optional[str] = Field(default=None, examples=["+55 11 99999-0000"])
    address: Optional[str] = None
    social_media: List[SocialLink] = Field(default_factory=list)


class TenantBase(BaseModel):
    name: str = Field(..., min_length=1, examples=["Clínica Saúde Total"])
    slug: str = Field(..., pattern=_SLUG_PATTERN, examples=["saude-total"])
    domain: Optional[str] = Field(default=None, examples=["saudetotal.com.br"])
    business_type: BusinessType = Field(..., examples=["healthcare"])
    features: FeatureFlags = Field(default_factory=FeatureFlags)
    theme: ThemeSettings = Field(default_factory=ThemeSettings)
    contact: ContactInfo
    allow_public_read: bool = False

    @field_validator("domain")
    @classmethod
    def normalizar_dominio(cls, value: Optional[str]) -> Optional[str]:
        return _normalizar_dominio(value)


class TenantCreate(TenantBase):
    pass


class TenantUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    slug: Optional[str] = Field(default=None, pattern=_SLUG_PATTERN)
    domain: Optional[str] = None
    business_type: Optional[BusinessType] = None
    features: Optional[FeatureFlags] = None
    theme: Optional[ThemeSettings] = None
    contact: Optional[ContactInfo] = None
    allow_public_read: Optional[bool] = None
    is_active: Optional[bool] = None

    @field_validator("domain")
    @classmethod
    def normalizar_dominio(cls, value: Optional[str]) -> Optional[str]:
        return _normalizar_dominio(value)


class TenantOut(TenantBase):
    id: UUID
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TenantSummary(BaseModel):
    id: UUID
    slug: str
    name: str
    theme: ThemeSettings
    features: FeatureFlags

    model_config = ConfigDict(from_attributes=True)
