from uuid import uuid4

import pytest
from fastapi import status
from conftest import make_auth_headers


def _service(**overrides):
    payload = {"title": "Limpeza dental", "description": "Profilaxia completa", "icon": "tooth", "order": 2}
    payload.update(overrides)
    return payload


def _team_member(**overrides):
    payload = {
        "name": "Dra. Ana Souza",
        "role": "Dentista",
        "specialization": "Ortodontia",
        "image_url": "https://cdn.clinicasorriso.com.br/ana.jpg",
        "bio": "Quinze anos de experiência.",
        "education": [{"degree": "Odontologia", "institution": "USP", "year": "2008"}],
        "languages": [{"language": "Português", "level": "native"}],
    }
    payload.update(overrides)
    return payload


def _testimonial(**overrides):
    payload = {"author": "Carlos Lima", "content": "Atendimento excelente."}
    payload.update(overrides)
    return payload


def _faq(**overrides):
    payload = {"question": "Aceitam convênio?", "answer": "Sim, os principais.", "category": "Pagamento"}
    payload.update(overrides)
    return payload


COLLECTIONS = [
    ("services", _service, "title"),
    ("team", _team_member, "name"),
    ("testimonials", _testimonial, "author"),
    ("faqs", _faq, "question"),
]


@pytest.mark.parametrize("path, factory, title_field", COLLECTIONS)
def test_content_crud_flow(client, super_admin_headers, create_tenant, path, factory, title_field):
    tenant = create_tenant()
    base = f"/api/tenants/{tenant['id']}/{path}"

    create_resp = client.post(base, json=factory(), headers=super_admin_headers)
    assert create_resp.status_code == status.HTTP_201_CREATED
    item = create_resp.json()
    assert item["tenant_id"] == tenant["id"]

    # leitura é pública
    list_resp = client.get(base)
    assert list_resp.status_code == status.HTTP_200_OK
    assert [i["id"] for i in list_resp.json()] == [item["id"]]

    update_resp = client.put(f"{base}/{item['id']}", json={title_field: "Atualizado"}, headers=super_admin_headers)
    assert update_resp.status_code == status.HTTP_200_OK
    assert update_resp.json()[title_field] == "Atualizado"

    delete_resp = client.delete(f"{base}/{item['id']}", headers=super_admin_headers)
    assert delete_resp.status_code == status.HTTP_204_NO_CONTENT
    assert client.get(f"{base}/{item['id']}").status_code == status.HTTP_404_NOT_FOUND


def test_content_is_scoped_to_tenant(client, super_admin_headers, create_tenant):
    tenant = create_tenant()
    other = create_tenant(slug="estudio-zen", domain="estudiozen.com")
    item = client.post(f"/api/tenants/{tenant['id']}/faqs", json=_faq(), headers=super_admin_headers).json()

    assert client.get(f"/api/tenants/{other['id']}/faqs").json() == []
    assert client.get(f"/api/tenants/{other['id']}/faqs/{item['id']}").status_code == status.HTTP_404_NOT_FOUND


def test_items_are_listed_by_order(client, super_admin_headers, create_tenant):
    tenant = create_tenant()
    base = f"/api/tenants/{tenant['id']}/team"
    client.post(base, json=_team_member(name="Sem ordem"), headers=super_admin_headers)
    client.post(base, json=_team_member(name="Segundo", order=2), headers=super_admin_headers)
    client.post(base, json=_team_member(name="Primeiro", order=1), headers=super_admin_headers)

    assert [m["name"] for m in client.get(base).json()] == ["Primeiro", "Segundo", "Sem ordem"]


def test_testimonial_rating_defaults_and_is_validated(client, super_admin_headers, create_tenant):
    tenant = create_tenant()
    base = f"/api/tenants/{tenant['id']}/testimonials"

    created = client.post(base, json=_testimonial(), headers=super_admin_headers)
    invalid = client.post(base, json=_testimonial(rating="6"), headers=super_admin_headers)

    assert created.json()["rating"] == "5"
    assert invalid.status_code == 422


def test_team_language_level_is_validated(client, super_admin_headers, create_tenant):
    tenant = create_tenant()

    response = client.post(
        f"/api/tenants/{tenant['id']}/team",
        json=_team_member(languages=[{"language": "Inglês", "level": "mediano"}]),
        headers=super_admin_headers,
    )

    assert response.status_code == 422


def test_service_requires_order(client, super_admin_headers, create_tenant):
    tenant = create_tenant()
    payload = _service()
    payload.pop("order")

    response = client.post(f"/api/tenants/{tenant['id']}/services", json=payload, headers=super_admin_headers)

    assert response.status_code == 422


def test_tenant_admin_writes_only_own_content(client, create_tenant):
    tenant = create_tenant()
    other = create_tenant(slug="estudio-zen", domain="estudiozen.com")
    headers = make_auth_headers("tenant-admin", tenant_id=tenant["id"])

    own = client.post(f"/api/tenants/{tenant['id']}/services", json=_service(), headers=headers)
    foreign = client.post(f"/api/tenants/{other['id']}/services", json=_service(), headers=headers)

    assert own.status_code == status.HTTP_201_CREATED
    assert foreign.status_code == status.HTTP_403_FORBIDDEN


def test_writes_require_token(client, create_tenant):
    tenant = create_tenant()

    response = client.post(f"/api/tenants/{tenant['id']}/faqs", json=_faq())

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_regular_user_cannot_write_content(client, create_tenant):
    tenant = create_tenant()
    headers = make_auth_headers("user", tenant_id=tenant["id"])

    response = client.post(f"/api/tenants/{tenant['id']}/testimonials", json=_testimonial(), headers=headers)

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_unknown_tenant_returns_404(client, super_admin_headers):
    tenant_id = uuid4()

    assert client.get(f"/api/tenants/{tenant_id}/services").status_code == status.HTTP_404_NOT_FOUND
    created = client.post(f"/api/tenants/{tenant_id}/services", json=_service(), headers=super_admin_headers)
    assert created.status_code == status.HTTP_404_NOT_FOUND
