from fastapi.testclient import TestClient
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.exc import OperationalError

from hrms.errors import TOO_MANY_REQUESTS, error_body
from hrms.main import app
from hrms.services import companies


def test_error_body_shape():
    assert error_body(404, "Empresa não encontrada.") == {
        "statusCode": 404,
        "message": "Empresa não encontrada.",
        "error": "Not Found",
    }


def test_database_errors_do_not_leak(client, auth_headers, monkeypatch):
    def broken(db):
        raise OperationalError("SELECT * FROM empresas", {}, Exception("connection refused on 10.0.0.5"))

    monkeypatch.setattr(companies, "list_companies", broken)

    resp = client.get("/v1/empresas", headers=auth_headers)

    assert resp.status_code == 500
    assert resp.json() == {
        "statusCode": 500,
        "message": "Erro ao processar a consulta no banco de dados.",
        "error": "Internal Server Error",
    }
    assert "10.0.0.5" not in resp.text


def test_unexpected_errors_are_generic(session_factory, auth_headers, monkeypatch):
    from hrms.db import get_db

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    def boom(db):
        raise RuntimeError("stack details")

    monkeypatch.setattr(companies, "list_companies", boom)
    app.dependency_overrides[get_db] = override_get_db
    try:
        with TestClient(app, raise_server_exceptions=False) as c:
            resp = c.get("/v1/empresas", headers=auth_headers)
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json() == {
        "statusCode": 500,
        "message": "Erro desconhecido. Contate o administrador.",
        "error": "Internal Server Error",
    }


def test_unknown_route_uses_error_shape(client):
    resp = client.get("/v1/nada")

    assert resp.status_code == 404
    assert resp.json() == {"statusCode": 404, "message": "Not Found", "error": "Not Found"}


def test_rate_limit_returns_error_shape(client, monkeypatch):
    monkeypatch.setattr(app.state, "limiter", Limiter(key_func=get_remote_address, default_limits=["2/minute"]))

    responses = [client.get("/health") for _ in range(3)]

    assert [r.status_code for r in responses] == [200, 200, 429]
    assert responses[-1].json() == {
        "statusCode": 429,
        "message": TOO_MANY_REQUESTS,
        "error": "Too Many Requests",
    }


def test_request_id_is_echoed(client):
    resp = client.get("/health", headers={"X-Request-ID": "abc-123"})

    assert resp.status_code == 200
    assert resp.headers["X-Request-ID"] == "abc-123"


def test_metrics_are_exposed(client):
    client.get("/health")

    resp = client.get("/metrics")

    assert resp.status_code == 200
    assert "http_request" in resp.text
