"""
Shared fixtures: an in-memory SQLite database per test, a TestClient wired to
it through ``get_db`` and authenticated users for each ``funcao``.
"""
import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_DB", "false")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hrms.auth.security import create_access_token
from hrms.db import Base, get_db
from hrms.main import app
from hrms.models.models import UserFunction
from hrms.schemas.auth import UserCreate
from hrms.services.users import create_user


COMPANY = {
    "nomeFantasia": "Tech Solutions",
    "razaoSocial": "Tech Solutions LTDA",
    "cnpj": "12.345.678/0041-75",
    "rua": "Rua da Tecnologia",
    "numero": "123",
    "complemento": "Sala 45",
    "bairro": "Centro",
    "cidade": "São Paulo",
    "estado": "SP",
    "cep": "01000-000",
    "dataFundacao": "2010-05-15",
    "email": "contato@techsolutions.com.br",
    "celular": "+5531991897926",
}

EMPLOYEE = {
    "nome": "Funcionário Teste",
    "cpf": "134.201.626-26",
    "carteiraIdentidade": "MG-18.821.128",
    "sexo": "M",
    "dataNascimento": "1996-10-15",
    "estadoCivil": "SOLTEIRO",
    "naturalidade": "Belo Horizonte",
    "nacionalidade": "Brasileiro",
    "email": "email@teste.com.br",
    "celular": "31991897926",
    "pis": "12345678910",
    "regimeContratacao": "CLT",
    "dataAdmissao": "2025-02-12",
    "salario": 3799,
    "cargaHoraria": 44,
    "gestor": "Gestor Teste",
    "rua": "Rua Teste",
    "numero": "1000",
    "bairro": "Bela Vista",
    "cidade": "São Paulo",
    "estado": "SP",
    "cep": "01000-000",
}

TERMINATION = {
    "data": "2025-02-16",
    "motivoInterno": "Motivo teste",
    "motivoTrabalhista": "Motivo teste",
    "acaoTrabalhista": "123456789",
    "formaDemissao": "Teste de forma",
}

MISSING_ID = "86f226c4-38b0-464c-987e-35293033faf6"


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def _user(db, nome: str, email: str, funcao: UserFunction):
    return create_user(db, UserCreate(nome=nome, email=email, senha="senha-segura-123", funcao=funcao))


def _headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(str(user.id), funcao=user.funcao.value)}"}


@pytest.fixture()
def admin_user(db):
    return _user(db, "Usuário Teste", "admin@techsolutions.com.br", UserFunction.ADMIN)


@pytest.fixture()
def hr_user(db):
    return _user(db, "Analista RH", "rh@techsolutions.com.br", UserFunction.HR)


@pytest.fixture()
def auth_headers(admin_user):
    return _headers(admin_user)


@pytest.fixture()
def hr_headers(hr_user):
    return _headers(hr_user)


@pytest.fixture()
def company(client, auth_headers):
    resp = client.post("/v1/empresas", json=COMPANY, headers=auth_headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


@pytest.fixture()
def employee(client, auth_headers, company):
    resp = client.post(f"/v1/empresas/{company['id']}/funcionarios", json=EMPLOYEE, headers=auth_headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]
