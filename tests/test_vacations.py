import uuid

from sqlalchemy import func, select

from conftest import MISSING_ID, TERMINATION
from hrms.models.models import Vacation


MARCH = {"dataInicio": "2025-03-01", "dataFim": "2025-03-10", "observacao": "Primeiro período"}


def _post(client, headers, employee_id, payload=None):
    return client.post(f"/v1/funcionarios/{employee_id}/ferias", json=payload or MARCH, headers=headers)


def test_create_vacation(client, auth_headers, employee):
    resp = _post(client, auth_headers, employee["id"])

    assert resp.status_code == 201
    data = resp.json()["data"]
    assert resp.json()["message"] == f"Férias cadastradas com sucesso, id: #{data['id']}."
    assert data["dataInicio"] == "01/03/2025"
    assert data["dataFim"] == "10/03/2025"


def test_inverted_period_is_rejected(client, auth_headers, employee, db):
    resp = _post(client, auth_headers, employee["id"], {"dataInicio": "2025-03-10", "dataFim": "2025-03-01"})

    assert resp.status_code == 400
    assert resp.json()["message"] == ["A data final das férias não pode ser anterior à data inicial."]
    assert db.scalar(select(func.count()).select_from(Vacation)) == 0


def test_overlapping_period_is_conflict(client, auth_headers, employee):
    _post(client, auth_headers, employee["id"])

    resp = _post(client, auth_headers, employee["id"], {"dataInicio": "2025-03-05", "dataFim": "2025-03-15"})

    assert resp.status_code == 409
    assert resp.json()["message"] == "O funcionário já possui férias cadastradas neste período."


def test_excluded_vacation_does_not_block_period(client, auth_headers, employee):
    first = _post(client, auth_headers, employee["id"]).json()["data"]
    client.delete(f"/v1/funcionarios/ferias/{first['id']}", headers=auth_headers)

    assert _post(client, auth_headers, employee["id"]).status_code == 201


def test_terminated_employee_cannot_take_vacation(client, auth_headers, employee):
    client.post(f"/v1/funcionarios/{employee['id']}/demissoes", json=TERMINATION, headers=auth_headers)

    resp = _post(client, auth_headers, employee["id"])

    assert resp.status_code == 409
    assert resp.json()["message"] == "Não é possível cadastrar férias para um funcionário demitido."


def test_create_for_missing_employee(client, auth_headers, db):
    resp = _post(client, auth_headers, MISSING_ID)

    assert resp.status_code == 404
    assert resp.json()["message"] == "Funcionário não encontrado."
    assert db.scalar(select(func.count()).select_from(Vacation)) == 0


def test_lists_are_newest_first(client, auth_headers, company, employee):
    _post(client, auth_headers, employee["id"])
    _post(client, auth_headers, employee["id"], {"dataInicio": "2025-07-01", "dataFim": "2025-07-20"})

    by_employee = client.get(f"/v1/funcionarios/{employee['id']}/ferias", headers=auth_headers).json()
    by_company = client.get(f"/v1/empresas/{company['id']}/ferias", headers=auth_headers).json()

    assert [v["dataInicio"] for v in by_employee] == ["01/07/2025", "01/03/2025"]
    assert [v["id"] for v in by_company] == [v["id"] for v in by_employee]


def test_company_lists_hide_excluded_employee(client, auth_headers, company, employee):
    _post(client, auth_headers, employee["id"])
    client.post(f"/v1/funcionarios/{employee['id']}/demissoes", json=TERMINATION, headers=auth_headers)
    client.delete(f"/v1/funcionarios/{employee['id']}", headers=auth_headers)

    vacations = client.get(f"/v1/empresas/{company['id']}/ferias", headers=auth_headers)
    terminations = client.get(f"/v1/empresas/{company['id']}/demissoes", headers=auth_headers)

    assert vacations.status_code == 200
    assert vacations.json() == []
    assert terminations.status_code == 200
    assert terminations.json() == []


def test_partial_update(client, auth_headers, employee):
    created = _post(client, auth_headers, employee["id"]).json()["data"]

    resp = client.patch(f"/v1/funcionarios/ferias/{created['id']}", json={"dataFim": "2025-03-12"}, headers=auth_headers)

    assert resp.status_code == 200
    assert resp.json()["message"] == f"Férias id: #{created['id']} atualizadas com sucesso."
    assert resp.json()["data"]["dataFim"] == "12/03/2025"
    assert resp.json()["data"]["dataInicio"] == "01/03/2025"
    assert resp.json()["data"]["observacao"] == "Primeiro período"


def test_update_that_inverts_stored_period(client, auth_headers, employee):
    created = _post(client, auth_headers, employee["id"]).json()["data"]

    resp = client.patch(f"/v1/funcionarios/ferias/{created['id']}", json={"dataFim": "2025-02-01"}, headers=auth_headers)

    assert resp.status_code == 400
    assert resp.json() == {
        "statusCode": 400,
        "message": "A data final das férias não pode ser anterior à data inicial.",
        "error": "Bad Request",
    }


def test_update_into_overlap_is_conflict(client, auth_headers, employee):
    _post(client, auth_headers, employee["id"])
    july = _post(client, auth_headers, employee["id"], {"dataInicio": "2025-07-01", "dataFim": "2025-07-20"}).json()["data"]

    resp = client.patch(f"/v1/funcionarios/ferias/{july['id']}", json={"dataInicio": "2025-03-08"}, headers=auth_headers)

    assert resp.status_code == 409


def test_remove_twice_is_not_found(client, auth_headers, employee):
    created = _post(client, auth_headers, employee["id"]).json()["data"]

    first = client.delete(f"/v1/funcionarios/ferias/{created['id']}", headers=auth_headers)
    second = client.delete(f"/v1/funcionarios/ferias/{created['id']}", headers=auth_headers)

    assert first.json()["message"] == f"Férias id: #{created['id']} excluídas com sucesso."
    assert second.status_code == 404
    assert second.json()["message"] == "Férias já excluídas ou não encontradas."


def test_get_unknown_vacation(client, auth_headers):
    resp = client.get(f"/v1/funcionarios/ferias/{uuid.uuid4()}", headers=auth_headers)

    assert resp.status_code == 404
    assert resp.json()["message"] == "Férias não encontradas."
