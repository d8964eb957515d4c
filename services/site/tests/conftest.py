import os
import sys
from pathlib import Path
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from jose import jwt

SECRET_KEY = os.getenv("SECRET_KEY", "ci-test-secret")
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS512")


def make_auth_headers(role: str = "super-admin", tenant_id: Optional[str] = None, user_id: Optional[str] = None) -> dict:
    """
    Gera um JWT compatível com o TokenPayload do serviço de sites,
    para ser usado nos headers dos testes.
    """
    exp = datetime.now(timezone.utc) + timedelta(hours=1)
    payload = {
        "sub": user_id or str(uuid4()),
        "tenant_id": str(tenant_id) if tenant_id else None,
        "role": role,
        "exp": int(exp.timestamp()),
    }
    token = jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)
    return {"Authorization": f"Bearer {token}"}


SERVICE_DIR = Path(__file__).resolve().parents[1]
ROOT_DIR = SERVICE_DIR.parent.parent

service_path = str(SERVICE_DIR)
shared_path = str(ROOT_DIR / "services")
for path in (service_path, shared_path):
    if path in sys.path:
        sys.path.remove(path)
    sys.path.insert(0, path)

for module_name in list(sys.modules):
    if module_name == "app" or module_name.startswith("app."):
        sys.modules.pop(module_name)

# Garante que o app e os testes usem o mesmo segredo/algoritmo
os.environ.setdefault("SECRET_KEY", SECRET_KEY)
os.environ.setdefault("JWT_ALGORITHM", ALGORITHM)

os.environ.setdefault("SITE_DATABASE_URL", f"sqlite:///{SERVICE_DIR / 'test_site.db'}")
os.environ["REDIS_URL"] = ""  # sem publicação de eventos nos testes

from app.main import app, tenant_cache  # noqa: E402
from app.core.database import Base, engine  # noqa: E402


@pytest.fixture(autouse=True)
def prepare_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    tenant_cache.invalidate()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def super_admin_headers():
    return make_auth_headers("super-admin")


def tenant_payload(**overrides) -> dict:
    payload = {
        "name": "Clínica Sorriso",
        "slug": "clinica-sorriso",
        "domain": "clinicasorriso.com.br",
        "business_type": "healthcare",
        "contact": {"email": "contato@clinicasorriso.com.br", "phone": "+55 11 99999-0000"},
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def create_tenant(client, super_admin_headers):
    def _create(**overrides) -> dict:
        response = client.post("/api/tenants/", json=tenant_payload(**overrides), headers=super_admin_headers)
        assert response.status_code == 200, response.text
        return response.json()

    return _create
