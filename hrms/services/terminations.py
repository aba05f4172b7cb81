"""
Terminations and the employee status transition they drive.

Creating a termination moves the employee ``ATIVO -> DEMITIDO``; excluding it
moves ``DEMITIDO -> ATIVO``. Both sides are written in one transaction while
the employee row is locked, and the partial unique index on ``demissoes``
keeps a second open termination out even if two requests race past the check.
Any other employment status (FERIAS, AFASTADO) belongs to other flows and is
never overwritten here.
"""
import uuid

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..errors import ConflictError, NotFoundError
from ..models.models import Employee, EmployeeStatus, Termination
from ..schemas.leave import TerminationCreate, TerminationUpdate
from . import records
from .audit import create_audit_log
from .companies import get_company
from .employees import get_employee, lock_employee


logger = structlog.get_logger(__name__)

NOT_FOUND = "Demissão não encontrada."
ALREADY_REMOVED = "Demissão já excluída ou não encontrada."
ALREADY_TERMINATED = "O funcionário já foi demitido."


def _has_open_termination(db: Session, employee_id: uuid.UUID) -> bool:
    query = select(Termination.id).where(
        Termination.funcionario_id == employee_id, records.is_active(Termination)
    )
    return db.scalars(query).first() is not None


def _set_employment_status(db: Session, employee: Employee, status: EmployeeStatus, actor_id: uuid.UUID) -> None:
    before = employee.status_funcionario
    employee.status_funcionario = status
    employee.atualizado_por_id = actor_id
    employee.atualizado_em = records.utcnow()
    create_audit_log(
        db,
        Employee.__tablename__,
        employee.id,
        "UPDATE",
        actor_id,
        {"status_funcionario": {"before": before.value, "after": status.value}},
    )


def create_termination(db: Session, employee_id: uuid.UUID, payload: TerminationCreate, actor_id: uuid.UUID) -> Termination:
    employee = lock_employee(db, employee_id)
    if employee.status_funcionario == EmployeeStatus.TERMINATED or _has_open_termination(db, employee.id):
        db.rollback()
        raise ConflictError(ALREADY_TERMINATED)

    termination = records.insert(
        db,
        Termination(funcionario_id=employee.id, **payload.model_dump()),
        actor_id,
        autocommit=False,
        conflict_message=ALREADY_TERMINATED,
    )
    _set_employment_status(db, employee, EmployeeStatus.TERMINATED, actor_id)
    records.commit(db, conflict_message=ALREADY_TERMINATED)
    db.refresh(termination)
    logger.info("termination_created", termination_id=str(termination.id), employee_id=str(employee.id))
    return termination


def list_employee_terminations(db: Session, employee_id: uuid.UUID) -> list:
    get_employee(db, employee_id)
    return records.list_active(
        db,
        Termination,
        Termination.funcionario_id == employee_id,
        order_by=[Termination.data.desc(), Termination.criado_em.desc()],
    )


def list_company_terminations(db: Session, company_id: uuid.UUID) -> list:
    get_company(db, company_id)
    employees = select(Employee.id).where(Employee.empresa_id == company_id, records.is_active(Employee))
    return records.list_active(
        db,
        Termination,
        Termination.funcionario_id.in_(employees),
        order_by=[Termination.data.desc(), Termination.criado_em.desc()],
    )


def get_termination(db: Session, termination_id: uuid.UUID) -> Termination:
    return records.get_active(db, Termination, termination_id, NOT_FOUND)


def update_termination(db: Session, termination_id: uuid.UUID, payload: TerminationUpdate, actor_id: uuid.UUID) -> Termination:
    return records.update_active(db, Termination, termination_id, records.payload_values(payload), actor_id, NOT_FOUND)


def remove_termination(db: Session, termination_id: uuid.UUID, actor_id: uuid.UUID) -> Termination:
    current = records.find_active(db, Termination, termination_id)
    if current is None:
        raise NotFoundError(ALREADY_REMOVED)

    # Lock the employee before touching the termination, same order as create
    employee = db.scalars(
        select(Employee).where(Employee.id == current.funcionario_id).with_for_update(of=Employee)
    ).first()
    termination = records.soft_delete(db, Termination, termination_id, actor_id, ALREADY_REMOVED, autocommit=False)
    if employee is not None and employee.status_funcionario == EmployeeStatus.TERMINATED:
        _set_employment_status(db, employee, EmployeeStatus.ACTIVE, actor_id)
    records.commit(db)
    db.refresh(termination)
    logger.info("termination_removed", termination_id=str(termination.id), employee_id=str(current.funcionario_id))
    return termination
