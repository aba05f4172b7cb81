from sqlalchemy import func, select

from conftest import COMPANY, MISSING_ID
from hrms.models.models import Company


def test_create_company(client, auth_headers):
    resp = client.post("/v1/empresas", json=COMPANY, headers=auth_headers)

    assert resp.status_code == 201
    body = resp.json()
    assert body["succeeded"] is True
    assert body["message"] == f"Empresa cadastrada com sucesso, id: #{body['data']['id']}."
    assert body["data"]["cnpj"] == "12345678004175"
    assert body["data"]["dataFundacao"] == "15/05/2010"
    assert body["data"]["status"] == "A"
    assert body["data"]["criadoPor"] == "Usuário Teste"


def test_duplicate_cnpj_is_conflict(client, auth_headers, company):
    resp = client.post("/v1/empresas", json=COMPANY, headers=auth_headers)

    assert resp.status_code == 409
    assert resp.json()["message"] == "Já existe uma empresa cadastrada com este CNPJ."


def test_invalid_email_is_rejected(client, auth_headers, db):
    resp = client.post("/v1/empresas", json={**COMPANY, "email": "contato-sem-dominio"}, headers=auth_headers)

    assert resp.status_code == 400
    assert [m.split(" ")[0] for m in resp.json()["message"]] == ["email"]
    assert db.scalar(select(func.count()).select_from(Company)) == 0


def test_cnpj_is_reusable_after_exclusion(client, auth_headers, company):
    client.delete(f"/v1/empresas/{company['id']}", headers=auth_headers)

    assert client.post("/v1/empresas", json=COMPANY, headers=auth_headers).status_code == 201


def test_list_and_get_only_active(client, auth_headers, company):
    other = client.post(
        "/v1/empresas",
        json={**COMPANY, "nomeFantasia": "Alpha Obras", "cnpj": "11222333000181"},
        headers=auth_headers,
    ).json()["data"]
    client.delete(f"/v1/empresas/{company['id']}", headers=auth_headers)

    listed = client.get("/v1/empresas", headers=auth_headers).json()
    assert [c["id"] for c in listed] == [other["id"]]

    resp = client.get(f"/v1/empresas/{company['id']}", headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json()["message"] == "Empresa não encontrada."


def test_partial_update_leaves_other_fields(client, auth_headers, company):
    resp = client.patch(f"/v1/empresas/{company['id']}", json={"cidade": "Belo Horizonte"}, headers=auth_headers)

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert resp.json()["message"] == f"Empresa id: #{company['id']} atualizada com sucesso."
    assert data["cidade"] == "Belo Horizonte"
    for field in ("nomeFantasia", "razaoSocial", "cnpj", "rua", "numero", "bairro", "estado", "cep", "dataFundacao"):
        assert data[field] == company[field]


def test_update_excluded_company_is_not_found(client, auth_headers, company):
    client.delete(f"/v1/empresas/{company['id']}", headers=auth_headers)

    resp = client.patch(f"/v1/empresas/{company['id']}", json={"cidade": "Recife"}, headers=auth_headers)

    assert resp.status_code == 404
    assert resp.json()["message"] == "Empresa não encontrada."


def test_remove_is_soft_and_not_idempotent(client, auth_headers, company, db):
    first = client.delete(f"/v1/empresas/{company['id']}", headers=auth_headers)
    assert first.status_code == 200
    assert first.json()["message"] == f"Empresa id: #{company['id']} excluída com sucesso."

    second = client.delete(f"/v1/empresas/{company['id']}", headers=auth_headers)
    assert second.status_code == 404
    assert second.json() == {
        "statusCode": 404,
        "message": "Empresa já excluída ou não encontrada.",
        "error": "Not Found",
    }
    # Row is kept, only flagged
    assert db.scalar(select(func.count()).select_from(Company)) == 1


def test_remove_unknown_company(client, auth_headers):
    resp = client.delete(f"/v1/empresas/{MISSING_ID}", headers=auth_headers)

    assert resp.status_code == 404
    assert resp.json()["message"] == "Empresa já excluída ou não encontrada."


def test_invalid_company_id(client, auth_headers):
    resp = client.get("/v1/empresas/123", headers=auth_headers)

    assert resp.status_code == 400
    assert resp.json()["message"] == "Validation failed (uuid is expected)"
