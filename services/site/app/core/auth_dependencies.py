from typing import Literal, Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from pydantic import BaseModel, ValidationError

from app.core.security import SECRET_KEY, JWT_ALGORITHM, ROLE_SUPER_ADMIN, ROLE_TENANT_ADMIN

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/users/login")


class TokenPayload(BaseModel):
    sub: UUID
    tenant_id: Optional[UUID] = None
    role: Literal["super-admin", "tenant-admin", "user"]

    @property
    def is_super_admin(self) -> bool:
        return self.role == ROLE_SUPER_ADMIN


def get_current_token(
    token: str = Depends(oauth2_scheme),
) -> TokenPayload:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[JWT_ALGORITHM])
        return TokenPayload(**payload)
    except (JWTError, ValidationError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciais inválidas",
        )


def require_super_admin(token: TokenPayload = Depends(get_current_token)) -> TokenPayload:
    if not token.is_super_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Apenas super administradores podem executar esta operação.",
        )
    return token


def garantir_admin_do_tenant(token: TokenPayload, tenant_id: UUID) -> None:
    """Super-admin gerencia qualquer tenant; tenant-admin apenas o próprio."""
    if token.is_super_admin:
        return
    if token.role != ROLE_TENANT_ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Apenas administradores podem alterar o tenant.",
        )
    if token.tenant_id != tenant_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Você não tem permissão para alterar este tenant.",
        )
