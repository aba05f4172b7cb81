import uuid
from datetime import date
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..errors import ConflictError, ValidationError
from ..models.models import Employee, EmployeeStatus, Vacation
from ..schemas.leave import INVALID_PERIOD, VacationCreate, VacationUpdate
from . import records
from .companies import get_company
from .employees import get_employee


NOT_FOUND = "Férias não encontradas."
ALREADY_REMOVED = "Férias já excluídas ou não encontradas."
OVERLAPPING = "O funcionário já possui férias cadastradas neste período."
TERMINATED_EMPLOYEE = "Não é possível cadastrar férias para um funcionário demitido."


def _ensure_no_overlap(
    db: Session,
    employee_id: uuid.UUID,
    start: date,
    end: date,
    ignore_id: Optional[uuid.UUID] = None,
) -> None:
    query = select(Vacation.id).where(
        Vacation.funcionario_id == employee_id,
        records.is_active(Vacation),
        Vacation.data_inicio <= end,
        Vacation.data_fim >= start,
    )
    if ignore_id is not None:
        query = query.where(Vacation.id != ignore_id)
    if db.scalars(query).first() is not None:
        raise ConflictError(OVERLAPPING)


def create_vacation(db: Session, employee_id: uuid.UUID, payload: VacationCreate, actor_id: uuid.UUID) -> Vacation:
    employee = get_employee(db, employee_id)
    if employee.status_funcionario == EmployeeStatus.TERMINATED:
        raise ConflictError(TERMINATED_EMPLOYEE)
    _ensure_no_overlap(db, employee.id, payload.data_inicio, payload.data_fim)
    return records.insert(db, Vacation(funcionario_id=employee.id, **payload.model_dump()), actor_id)


def list_employee_vacations(db: Session, employee_id: uuid.UUID) -> list:
    get_employee(db, employee_id)
    return records.list_active(
        db, Vacation, Vacation.funcionario_id == employee_id, order_by=[Vacation.data_inicio.desc()]
    )


def list_company_vacations(db: Session, company_id: uuid.UUID) -> list:
    get_company(db, company_id)
    employees = select(Employee.id).where(Employee.empresa_id == company_id, records.is_active(Employee))
    return records.list_active(
        db, Vacation, Vacation.funcionario_id.in_(employees), order_by=[Vacation.data_inicio.desc()]
    )


def get_vacation(db: Session, vacation_id: uuid.UUID) -> Vacation:
    return records.get_active(db, Vacation, vacation_id, NOT_FOUND)


def update_vacation(db: Session, vacation_id: uuid.UUID, payload: VacationUpdate, actor_id: uuid.UUID) -> Vacation:
    vacation = get_vacation(db, vacation_id)
    values = records.payload_values(payload)
    start = values.get("data_inicio", vacation.data_inicio)
    end = values.get("data_fim", vacation.data_fim)
    if end < start:
        raise ValidationError(INVALID_PERIOD)
    if "data_inicio" in values or "data_fim" in values:
        _ensure_no_overlap(db, vacation.funcionario_id, start, end, ignore_id=vacation.id)
    return records.update_active(db, Vacation, vacation_id, values, actor_id, NOT_FOUND)


def remove_vacation(db: Session, vacation_id: uuid.UUID, actor_id: uuid.UUID) -> Vacation:
    return records.soft_delete(db, Vacation, vacation_id, actor_id, ALREADY_REMOVED)
