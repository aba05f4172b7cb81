import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..errors import ConflictError
from ..models.models import Company
from ..schemas.companies import CompanyCreate, CompanyUpdate
from . import records


NOT_FOUND = "Empresa não encontrada."
ALREADY_REMOVED = "Empresa já excluída ou não encontrada."
CNPJ_TAKEN = "Já existe uma empresa cadastrada com este CNPJ."


def _ensure_cnpj_available(db: Session, cnpj: str, ignore_id: Optional[uuid.UUID] = None) -> None:
    query = select(Company.id).where(Company.cnpj == cnpj, records.is_active(Company))
    if ignore_id is not None:
        query = query.where(Company.id != ignore_id)
    if db.scalars(query).first() is not None:
        raise ConflictError(CNPJ_TAKEN)


def create_company(db: Session, payload: CompanyCreate, actor_id: uuid.UUID) -> Company:
    _ensure_cnpj_available(db, payload.cnpj)
    return records.insert(db, Company(**payload.model_dump()), actor_id)


def list_companies(db: Session) -> list:
    return records.list_active(db, Company, order_by=[Company.nome_fantasia.asc()])


def get_company(db: Session, company_id: uuid.UUID) -> Company:
    return records.get_active(db, Company, company_id, NOT_FOUND)


def update_company(db: Session, company_id: uuid.UUID, payload: CompanyUpdate, actor_id: uuid.UUID) -> Company:
    values = records.payload_values(payload)
    if "cnpj" in values:
        _ensure_cnpj_available(db, values["cnpj"], ignore_id=company_id)
    return records.update_active(db, Company, company_id, values, actor_id, NOT_FOUND)


def remove_company(db: Session, company_id: uuid.UUID, actor_id: uuid.UUID) -> Company:
    return records.soft_delete(db, Company, company_id, actor_id, ALREADY_REMOVED)
