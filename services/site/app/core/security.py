import os
from datetime import datetime, timedelta, timezone
from uuid import UUID
from typing import Optional

from jose import jwt

# lidas tanto em CI quanto em "prod"
SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS512")
ACCESS_TOKEN_EXPIRE_HOURS = int(os.getenv("ACCESS_TOKEN_EXPIRE_HOURS", "24"))

ROLE_SUPER_ADMIN = "super-admin"
ROLE_TENANT_ADMIN = "tenant-admin"
ROLE_USER = "user"


def criar_token_jwt(user_id: UUID, tenant_id: Optional[UUID], role: str) -> str:
    expire = datetime.now(timezone.utc) + timedelta(hours=ACCESS_TOKEN_EXPIRE_HOURS)
    to_encode = {
        "exp": expire,
        "sub": str(user_id),
        "tenant_id": str(tenant_id) if tenant_id else None,  # super-admin não pertence a um tenant
        "role": role,
    }
    return jwt.encode(to_encode, SECRET_KEY, algorithm=JWT_ALGORITHM)
