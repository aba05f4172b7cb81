from datetime import date
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from ..models.models import CompanyStatus
from .common import BrDate, PayloadModel, RecordResponse


def _digits(v):
    if v is None:
        return None
    return "".join(ch for ch in str(v) if ch.isdigit())


class CompanyBase(PayloadModel):
    nome_fantasia: str = Field(min_length=1, max_length=255)
    razao_social: str = Field(min_length=1, max_length=255)
    cnpj: str = Field(min_length=14, max_length=14)
    rua: str = Field(min_length=1, max_length=255)
    numero: str = Field(min_length=1, max_length=10)
    complemento: Optional[str] = Field(default=None, max_length=100)
    bairro: str = Field(min_length=1, max_length=100)
    cidade: str = Field(min_length=1, max_length=100)
    estado: str = Field(min_length=2, max_length=2)
    cep: str = Field(min_length=1, max_length=10)
    data_fundacao: Optional[date] = None
    email: Optional[EmailStr] = None
    celular: Optional[str] = Field(default=None, max_length=20)
    telefone: Optional[str] = Field(default=None, max_length=20)

    @field_validator("cnpj", mode="before")
    @classmethod
    def only_digits(cls, v):
        return _digits(v)


class CompanyCreate(CompanyBase):
    pass


class CompanyUpdate(PayloadModel):
    nome_fantasia: Optional[str] = Field(default=None, min_length=1, max_length=255)
    razao_social: Optional[str] = Field(default=None, min_length=1, max_length=255)
    cnpj: Optional[str] = Field(default=None, min_length=14, max_length=14)
    rua: Optional[str] = Field(default=None, min_length=1, max_length=255)
    numero: Optional[str] = Field(default=None, min_length=1, max_length=10)
    complemento: Optional[str] = Field(default=None, max_length=100)
    bairro: Optional[str] = Field(default=None, min_length=1, max_length=100)
    cidade: Optional[str] = Field(default=None, min_length=1, max_length=100)
    estado: Optional[str] = Field(default=None, min_length=2, max_length=2)
    cep: Optional[str] = Field(default=None, min_length=1, max_length=10)
    data_fundacao: Optional[date] = None
    email: Optional[EmailStr] = None
    celular: Optional[str] = Field(default=None, max_length=20)
    telefone: Optional[str] = Field(default=None, max_length=20)

    @field_validator("cnpj", mode="before")
    @classmethod
    def only_digits(cls, v):
        return _digits(v)


class CompanyResponse(RecordResponse):
    nome_fantasia: str
    razao_social: str
    cnpj: str
    rua: str
    numero: str
    complemento: Optional[str] = None
    bairro: str
    cidade: str
    estado: str
    cep: str
    data_fundacao: Optional[BrDate] = None
    email: Optional[str] = None
    celular: Optional[str] = None
    telefone: Optional[str] = None
    status: CompanyStatus
