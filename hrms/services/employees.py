import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..errors import ConflictError, NotFoundError
from ..models.models import CostCenter, Department, Employee, EmployeeStatus, Role
from ..schemas.employees import EmployeeCreate, EmployeeUpdate
from . import records
from .companies import get_company
from .organization import COST_CENTER_NOT_FOUND, DEPARTMENT_NOT_FOUND, ROLE_NOT_FOUND


NOT_FOUND = "Funcionário não encontrado."
ALREADY_REMOVED = "Funcionário já excluído ou não encontrado."
CPF_TAKEN = "Já existe um funcionário cadastrado com este CPF."

# FK attribute -> (model, NotFound message)
_REFERENCES = {
    "funcao_id": (Role, ROLE_NOT_FOUND),
    "setor_id": (Department, DEPARTMENT_NOT_FOUND),
    "centro_custo_id": (CostCenter, COST_CENTER_NOT_FOUND),
}


def _ensure_cpf_available(db: Session, cpf: str, ignore_id: Optional[uuid.UUID] = None) -> None:
    query = select(Employee.id).where(Employee.cpf == cpf, records.is_active(Employee))
    if ignore_id is not None:
        query = query.where(Employee.id != ignore_id)
    if db.scalars(query).first() is not None:
        raise ConflictError(CPF_TAKEN)


def _check_references(db: Session, company_id: uuid.UUID, values: dict) -> None:
    for field, (model, not_found) in _REFERENCES.items():
        ref_id = values.get(field)
        if ref_id is None:
            continue
        row = records.find_active(db, model, ref_id)
        if row is None or row.empresa_id != company_id:
            raise NotFoundError(not_found)


def create_employee(db: Session, company_id: uuid.UUID, payload: EmployeeCreate, actor_id: uuid.UUID) -> Employee:
    company = get_company(db, company_id)
    values = payload.model_dump()
    _ensure_cpf_available(db, values["cpf"])
    _check_references(db, company.id, values)
    employee = Employee(empresa_id=company.id, status_funcionario=EmployeeStatus.ACTIVE, **values)
    return records.insert(db, employee, actor_id)


def list_employees(db: Session, company_id: uuid.UUID) -> list:
    get_company(db, company_id)
    return records.list_active(db, Employee, Employee.empresa_id == company_id, order_by=[Employee.nome.asc()])


def get_employee(db: Session, employee_id: uuid.UUID) -> Employee:
    return records.get_active(db, Employee, employee_id, NOT_FOUND)


def lock_employee(db: Session, employee_id: uuid.UUID) -> Employee:
    """Load an active employee holding a row lock until the transaction ends."""
    employee = db.scalars(
        select(Employee)
        .where(Employee.id == employee_id, records.is_active(Employee))
        .with_for_update(of=Employee)
    ).first()
    if employee is None:
        raise NotFoundError(NOT_FOUND)
    return employee


def update_employee(db: Session, employee_id: uuid.UUID, payload: EmployeeUpdate, actor_id: uuid.UUID) -> Employee:
    employee = get_employee(db, employee_id)
    values = records.payload_values(payload)
    if "cpf" in values:
        _ensure_cpf_available(db, values["cpf"], ignore_id=employee.id)
    _check_references(db, employee.empresa_id, values)
    return records.update_active(db, Employee, employee_id, values, actor_id, NOT_FOUND)


def remove_employee(db: Session, employee_id: uuid.UUID, actor_id: uuid.UUID) -> Employee:
    return records.soft_delete(db, Employee, employee_id, actor_id, ALREADY_REMOVED)
