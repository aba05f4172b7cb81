import uuid

from sqlalchemy import func, select

from conftest import COMPANY, EMPLOYEE, MISSING_ID
from hrms.models.models import Employee


def test_create_employee_starts_active(client, auth_headers, company):
    resp = client.post(f"/v1/empresas/{company['id']}/funcionarios", json=EMPLOYEE, headers=auth_headers)

    assert resp.status_code == 201
    data = resp.json()["data"]
    assert resp.json()["message"] == f"Funcionário cadastrado com sucesso, id: #{data['id']}."
    assert data["statusFuncionario"] == "ATIVO"
    assert data["cpf"] == "13420162626"
    assert data["dataAdmissao"] == "12/02/2025"
    assert data["empresaId"] == company["id"]


def test_create_under_missing_company_writes_nothing(client, auth_headers, db):
    resp = client.post(f"/v1/empresas/{MISSING_ID}/funcionarios", json=EMPLOYEE, headers=auth_headers)

    assert resp.status_code == 404
    assert resp.json()["message"] == "Empresa não encontrada."
    assert db.scalar(select(func.count()).select_from(Employee)) == 0


def test_invalid_email_is_rejected(client, auth_headers, company, employee):
    created = client.post(
        f"/v1/empresas/{company['id']}/funcionarios",
        json={**EMPLOYEE, "cpf": "52998224725", "email": "invalido"},
        headers=auth_headers,
    )
    updated = client.patch(f"/v1/funcionarios/{employee['id']}", json={"email": "invalido"}, headers=auth_headers)

    assert created.status_code == 400
    assert updated.status_code == 400
    assert [m.split(" ")[0] for m in updated.json()["message"]] == ["email"]


def test_duplicate_cpf_is_conflict(client, auth_headers, company, employee):
    resp = client.post(f"/v1/empresas/{company['id']}/funcionarios", json=EMPLOYEE, headers=auth_headers)

    assert resp.status_code == 409
    assert resp.json()["message"] == "Já existe um funcionário cadastrado com este CPF."


def test_references_must_belong_to_the_company(client, auth_headers, company):
    other = client.post(
        "/v1/empresas",
        json={**COMPANY, "nomeFantasia": "Outra", "cnpj": "11222333000181"},
        headers=auth_headers,
    ).json()["data"]
    foreign_department = client.post(
        f"/v1/empresas/{other['id']}/setores", json={"nome": "Obras"}, headers=auth_headers
    ).json()["data"]

    resp = client.post(
        f"/v1/empresas/{company['id']}/funcionarios",
        json={**EMPLOYEE, "setorId": foreign_department["id"]},
        headers=auth_headers,
    )

    assert resp.status_code == 404
    assert resp.json()["message"] == "Setor não encontrado."


def test_references_are_stored(client, auth_headers, company):
    role = client.post(f"/v1/empresas/{company['id']}/funcoes", json={"nome": "Pedreiro"}, headers=auth_headers).json()["data"]
    center = client.post(
        f"/v1/empresas/{company['id']}/centros-custos", json={"nome": "Obra 1"}, headers=auth_headers
    ).json()["data"]

    resp = client.post(
        f"/v1/empresas/{company['id']}/funcionarios",
        json={**EMPLOYEE, "funcaoId": role["id"], "centroCustoId": center["id"]},
        headers=auth_headers,
    )

    assert resp.status_code == 201
    assert resp.json()["data"]["funcaoId"] == role["id"]
    assert resp.json()["data"]["centroCustoId"] == center["id"]
    assert resp.json()["data"]["setorId"] is None


def test_partial_update_leaves_other_fields(client, auth_headers, employee):
    resp = client.patch(f"/v1/funcionarios/{employee['id']}", json={"gestor": "Nova Gestora"}, headers=auth_headers)

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert resp.json()["message"] == f"Funcionário id: #{employee['id']} atualizado com sucesso."
    assert data["gestor"] == "Nova Gestora"
    for field in ("nome", "cpf", "dataNascimento", "regimeContratacao", "rua", "cidade", "pis"):
        assert data[field] == employee[field]


def test_employment_status_is_not_writable(client, auth_headers, employee, db):
    resp = client.patch(
        f"/v1/funcionarios/{employee['id']}",
        json={"statusFuncionario": "DEMITIDO", "nome": "Outro Nome"},
        headers=auth_headers,
    )

    assert resp.status_code == 200
    assert resp.json()["data"]["statusFuncionario"] == "ATIVO"
    assert db.get(Employee, uuid.UUID(employee["id"])).nome == "Outro Nome"


def test_list_employees(client, auth_headers, company, employee):
    resp = client.get(f"/v1/empresas/{company['id']}/funcionarios", headers=auth_headers)

    assert resp.status_code == 200
    assert [e["id"] for e in resp.json()] == [employee["id"]]


def test_remove_twice_is_not_found(client, auth_headers, employee):
    assert client.delete(f"/v1/funcionarios/{employee['id']}", headers=auth_headers).status_code == 200

    resp = client.delete(f"/v1/funcionarios/{employee['id']}", headers=auth_headers)

    assert resp.status_code == 404
    assert resp.json()["message"] == "Funcionário já excluído ou não encontrado."
    get = client.get(f"/v1/funcionarios/{employee['id']}", headers=auth_headers)
    assert get.json()["message"] == "Funcionário não encontrado."
