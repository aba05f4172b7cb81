"""Company-scoped records: departments, cost centers, EPIs, roles and projects."""
import uuid
from typing import List

from sqlalchemy.orm import Session

from ..errors import NotFoundError
from ..models.models import CostCenter, Department, Epi, Project, Role
from ..schemas.organization import (
    CostCenterCreate,
    CostCenterUpdate,
    DepartmentCreate,
    DepartmentUpdate,
    EpiCreate,
    EpiUpdate,
    ProjectCreate,
    ProjectUpdate,
    RoleCreate,
    RoleUpdate,
)
from . import records
from .companies import get_company


DEPARTMENT_NOT_FOUND = "Setor não encontrado."
DEPARTMENT_REMOVED = "Setor já excluído ou não encontrado."
COST_CENTER_NOT_FOUND = "Centro de custo não encontrado."
COST_CENTER_REMOVED = "Centro de custo já excluído ou não encontrado."
EPI_NOT_FOUND = "EPI não encontrado."
EPI_REMOVED = "EPI já excluído ou não encontrado."
ROLE_NOT_FOUND = "Função não encontrada."
ROLE_REMOVED = "Função já excluída ou não encontrada."
PROJECT_NOT_FOUND = "Projeto não encontrado."
PROJECT_REMOVED = "Projeto já excluído ou não encontrado."


def _create_scoped(db: Session, model, company_id: uuid.UUID, values: dict, actor_id: uuid.UUID):
    company = get_company(db, company_id)
    return records.insert(db, model(empresa_id=company.id, **values), actor_id)


def _list_scoped(db: Session, model, company_id: uuid.UUID) -> list:
    get_company(db, company_id)
    return records.list_active(db, model, model.empresa_id == company_id, order_by=[model.nome.asc()])


# ---------- Departments ----------

def create_department(db: Session, company_id: uuid.UUID, payload: DepartmentCreate, actor_id: uuid.UUID) -> Department:
    return _create_scoped(db, Department, company_id, payload.model_dump(), actor_id)


def list_departments(db: Session, company_id: uuid.UUID) -> list:
    return _list_scoped(db, Department, company_id)


def get_department(db: Session, department_id: uuid.UUID) -> Department:
    return records.get_active(db, Department, department_id, DEPARTMENT_NOT_FOUND)


def update_department(db: Session, department_id: uuid.UUID, payload: DepartmentUpdate, actor_id: uuid.UUID) -> Department:
    return records.update_active(db, Department, department_id, records.payload_values(payload), actor_id, DEPARTMENT_NOT_FOUND)


def remove_department(db: Session, department_id: uuid.UUID, actor_id: uuid.UUID) -> Department:
    return records.soft_delete(db, Department, department_id, actor_id, DEPARTMENT_REMOVED)


# ---------- Cost centers ----------

def create_cost_center(db: Session, company_id: uuid.UUID, payload: CostCenterCreate, actor_id: uuid.UUID) -> CostCenter:
    return _create_scoped(db, CostCenter, company_id, payload.model_dump(), actor_id)


def list_cost_centers(db: Session, company_id: uuid.UUID) -> list:
    return _list_scoped(db, CostCenter, company_id)


def get_cost_center(db: Session, cost_center_id: uuid.UUID) -> CostCenter:
    return records.get_active(db, CostCenter, cost_center_id, COST_CENTER_NOT_FOUND)


def update_cost_center(db: Session, cost_center_id: uuid.UUID, payload: CostCenterUpdate, actor_id: uuid.UUID) -> CostCenter:
    return records.update_active(db, CostCenter, cost_center_id, records.payload_values(payload), actor_id, COST_CENTER_NOT_FOUND)


def remove_cost_center(db: Session, cost_center_id: uuid.UUID, actor_id: uuid.UUID) -> CostCenter:
    return records.soft_delete(db, CostCenter, cost_center_id, actor_id, COST_CENTER_REMOVED)


# ---------- EPIs ----------

def create_epi(db: Session, company_id: uuid.UUID, payload: EpiCreate, actor_id: uuid.UUID) -> Epi:
    return _create_scoped(db, Epi, company_id, payload.model_dump(), actor_id)


def list_epis(db: Session, company_id: uuid.UUID) -> list:
    return _list_scoped(db, Epi, company_id)


def get_epi(db: Session, epi_id: uuid.UUID) -> Epi:
    return records.get_active(db, Epi, epi_id, EPI_NOT_FOUND)


def update_epi(db: Session, epi_id: uuid.UUID, payload: EpiUpdate, actor_id: uuid.UUID) -> Epi:
    return records.update_active(db, Epi, epi_id, records.payload_values(payload), actor_id, EPI_NOT_FOUND)


def remove_epi(db: Session, epi_id: uuid.UUID, actor_id: uuid.UUID) -> Epi:
    return records.soft_delete(db, Epi, epi_id, actor_id, EPI_REMOVED)


# ---------- Roles ----------

def _resolve_epis(db: Session, company_id: uuid.UUID, epi_ids: List[uuid.UUID]) -> List[Epi]:
    # Every EPI must be active and belong to the role's company
    wanted = list(dict.fromkeys(epi_ids))
    if not wanted:
        return []
    rows = records.list_active(db, Epi, Epi.id.in_(wanted), Epi.empresa_id == company_id)
    if len(rows) != len(wanted):
        raise NotFoundError(EPI_NOT_FOUND)
    return rows


def create_role(db: Session, company_id: uuid.UUID, payload: RoleCreate, actor_id: uuid.UUID) -> Role:
    company = get_company(db, company_id)
    epis = _resolve_epis(db, company.id, payload.epis_ids)
    role = Role(empresa_id=company.id, **payload.model_dump(exclude={"epis_ids"}))
    role.epis = epis
    return records.insert(db, role, actor_id)


def list_roles(db: Session, company_id: uuid.UUID) -> list:
    return _list_scoped(db, Role, company_id)


def get_role(db: Session, role_id: uuid.UUID) -> Role:
    return records.get_active(db, Role, role_id, ROLE_NOT_FOUND)


def update_role(db: Session, role_id: uuid.UUID, payload: RoleUpdate, actor_id: uuid.UUID) -> Role:
    role = get_role(db, role_id)
    epis = None
    extra_changes = None
    if payload.epis_ids is not None:
        epis = _resolve_epis(db, role.empresa_id, payload.epis_ids)
        before = sorted(str(epi.id) for epi in role.epis)
        after = sorted(str(epi.id) for epi in epis)
        if before != after:
            extra_changes = {"epis": {"before": before, "after": after}}
    values = records.payload_values(payload, exclude={"epis_ids"})
    role = records.update_active(
        db, Role, role_id, values, actor_id, ROLE_NOT_FOUND, autocommit=False, extra_changes=extra_changes
    )
    if epis is not None:
        role.epis = epis
    records.commit(db)
    db.refresh(role)
    return role


def remove_role(db: Session, role_id: uuid.UUID, actor_id: uuid.UUID) -> Role:
    return records.soft_delete(db, Role, role_id, actor_id, ROLE_REMOVED)


# ---------- Projects ----------

def create_project(db: Session, company_id: uuid.UUID, payload: ProjectCreate, actor_id: uuid.UUID) -> Project:
    return _create_scoped(db, Project, company_id, payload.model_dump(), actor_id)


def list_projects(db: Session, company_id: uuid.UUID) -> list:
    return _list_scoped(db, Project, company_id)


def get_project(db: Session, project_id: uuid.UUID) -> Project:
    return records.get_active(db, Project, project_id, PROJECT_NOT_FOUND)


def update_project(db: Session, project_id: uuid.UUID, payload: ProjectUpdate, actor_id: uuid.UUID) -> Project:
    return records.update_active(db, Project, project_id, records.payload_values(payload), actor_id, PROJECT_NOT_FOUND)


def remove_project(db: Session, project_id: uuid.UUID, actor_id: uuid.UUID) -> Project:
    return records.soft_delete(db, Project, project_id, actor_id, PROJECT_REMOVED)
