import uuid
from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from ..models.models import (
    ContractRegime,
    EmployeeRecordStatus,
    EmployeeStatus,
    MaritalStatus,
    Sex,
)
from .common import BrDate, PayloadModel, RecordResponse


class EmployeeBase(PayloadModel):
    nome: str = Field(min_length=1, max_length=255)
    cpf: str = Field(min_length=11, max_length=11)
    carteira_identidade: Optional[str] = Field(default=None, max_length=20)
    sexo: Optional[Sex] = None
    data_nascimento: date
    estado_civil: Optional[MaritalStatus] = None
    naturalidade: Optional[str] = Field(default=None, max_length=100)
    nacionalidade: Optional[str] = Field(default=None, max_length=100)
    email: Optional[EmailStr] = None
    celular: Optional[str] = Field(default=None, max_length=20)
    pis: Optional[str] = Field(default=None, max_length=11)
    regime_contratacao: ContractRegime
    data_admissao: date
    salario: Decimal = Field(ge=0)
    carga_horaria: Optional[int] = Field(default=None, ge=0)
    gestor: Optional[str] = Field(default=None, max_length=255)

    rua: str = Field(min_length=1, max_length=255)
    numero: str = Field(min_length=1, max_length=10)
    complemento: Optional[str] = Field(default=None, max_length=100)
    bairro: str = Field(min_length=1, max_length=100)
    cidade: str = Field(min_length=1, max_length=100)
    estado: str = Field(min_length=2, max_length=2)
    cep: str = Field(min_length=1, max_length=10)

    funcao_id: Optional[uuid.UUID] = None
    setor_id: Optional[uuid.UUID] = None
    centro_custo_id: Optional[uuid.UUID] = None

    @field_validator("cpf", "pis", mode="before")
    @classmethod
    def only_digits(cls, v):
        if v is None:
            return None
        return "".join(ch for ch in str(v) if ch.isdigit())


class EmployeeCreate(EmployeeBase):
    pass


class EmployeeUpdate(PayloadModel):
    """Every field optional; the employment status is not editable here."""

    nome: Optional[str] = Field(default=None, min_length=1, max_length=255)
    cpf: Optional[str] = Field(default=None, min_length=11, max_length=11)
    carteira_identidade: Optional[str] = Field(default=None, max_length=20)
    sexo: Optional[Sex] = None
    data_nascimento: Optional[date] = None
    estado_civil: Optional[MaritalStatus] = None
    naturalidade: Optional[str] = Field(default=None, max_length=100)
    nacionalidade: Optional[str] = Field(default=None, max_length=100)
    email: Optional[EmailStr] = None
    celular: Optional[str] = Field(default=None, max_length=20)
    pis: Optional[str] = Field(default=None, max_length=11)
    regime_contratacao: Optional[ContractRegime] = None
    data_admissao: Optional[date] = None
    salario: Optional[Decimal] = Field(default=None, ge=0)
    carga_horaria: Optional[int] = Field(default=None, ge=0)
    gestor: Optional[str] = Field(default=None, max_length=255)

    rua: Optional[str] = Field(default=None, min_length=1, max_length=255)
    numero: Optional[str] = Field(default=None, min_length=1, max_length=10)
    complemento: Optional[str] = Field(default=None, max_length=100)
    bairro: Optional[str] = Field(default=None, min_length=1, max_length=100)
    cidade: Optional[str] = Field(default=None, min_length=1, max_length=100)
    estado: Optional[str] = Field(default=None, min_length=2, max_length=2)
    cep: Optional[str] = Field(default=None, min_length=1, max_length=10)

    funcao_id: Optional[uuid.UUID] = None
    setor_id: Optional[uuid.UUID] = None
    centro_custo_id: Optional[uuid.UUID] = None

    @field_validator("cpf", "pis", mode="before")
    @classmethod
    def only_digits(cls, v):
        if v is None:
            return None
        return "".join(ch for ch in str(v) if ch.isdigit())


class EmployeeResponse(RecordResponse):
    nome: str
    cpf: str
    carteira_identidade: Optional[str] = None
    sexo: Optional[Sex] = None
    data_nascimento: BrDate
    estado_civil: Optional[MaritalStatus] = None
    naturalidade: Optional[str] = None
    nacionalidade: Optional[str] = None
    email: Optional[str] = None
    celular: Optional[str] = None
    pis: Optional[str] = None
    regime_contratacao: ContractRegime
    data_admissao: BrDate
    salario: Decimal
    carga_horaria: Optional[int] = None
    gestor: Optional[str] = None
    rua: str
    numero: str
    complemento: Optional[str] = None
    bairro: str
    cidade: str
    estado: str
    cep: str
    empresa_id: uuid.UUID
    funcao_id: Optional[uuid.UUID] = None
    setor_id: Optional[uuid.UUID] = None
    centro_custo_id: Optional[uuid.UUID] = None
    status_funcionario: EmployeeStatus
    status: EmployeeRecordStatus
