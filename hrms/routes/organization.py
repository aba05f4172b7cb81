"""Company-scoped records: /v1/empresas/{empresa_id}/<recurso> and /v1/empresas/<recurso>/{id}."""
import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..auth.security import get_current_user
from ..db import get_db
from ..models.models import User
from ..schemas.common import Envelope
from ..schemas.organization import (
    CostCenterCreate,
    CostCenterResponse,
    CostCenterUpdate,
    DepartmentCreate,
    DepartmentResponse,
    DepartmentUpdate,
    EpiCreate,
    EpiResponse,
    EpiUpdate,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
    RoleCreate,
    RoleResponse,
    RoleUpdate,
)
from ..services import organization as service


router = APIRouter(prefix="/v1/empresas", tags=["empresas"])


# ---------- Setores ----------

@router.post("/{empresa_id}/setores", response_model=Envelope[DepartmentResponse], status_code=status.HTTP_201_CREATED)
def create_department(
    empresa_id: uuid.UUID,
    payload: DepartmentCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    row = service.create_department(db, empresa_id, payload, user.id)
    return Envelope(data=DepartmentResponse.model_validate(row), message=f"Setor cadastrado com sucesso, id: #{row.id}.")


@router.get("/{empresa_id}/setores", response_model=List[DepartmentResponse])
def list_departments(empresa_id: uuid.UUID, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return [DepartmentResponse.model_validate(r) for r in service.list_departments(db, empresa_id)]


@router.get("/setores/{department_id}", response_model=DepartmentResponse)
def get_department(department_id: uuid.UUID, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return DepartmentResponse.model_validate(service.get_department(db, department_id))


@router.patch("/setores/{department_id}", response_model=Envelope[DepartmentResponse])
def update_department(
    department_id: uuid.UUID,
    payload: DepartmentUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    row = service.update_department(db, department_id, payload, user.id)
    return Envelope(data=DepartmentResponse.model_validate(row), message=f"Setor id: #{row.id} atualizado com sucesso.")


@router.delete("/setores/{department_id}", response_model=Envelope[DepartmentResponse])
def remove_department(department_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    row = service.remove_department(db, department_id, user.id)
    return Envelope(data=DepartmentResponse.model_validate(row), message=f"Setor id: #{row.id} excluído com sucesso.")


# ---------- Centros de custo ----------

@router.post(
    "/{empresa_id}/centros-custos",
    response_model=Envelope[CostCenterResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_cost_center(
    empresa_id: uuid.UUID,
    payload: CostCenterCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    row = service.create_cost_center(db, empresa_id, payload, user.id)
    return Envelope(
        data=CostCenterResponse.model_validate(row),
        message=f"Centro de custo cadastrado com sucesso, id: #{row.id}.",
    )


@router.get("/{empresa_id}/centros-custos", response_model=List[CostCenterResponse])
def list_cost_centers(empresa_id: uuid.UUID, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return [CostCenterResponse.model_validate(r) for r in service.list_cost_centers(db, empresa_id)]


@router.get("/centros-custos/{cost_center_id}", response_model=CostCenterResponse)
def get_cost_center(cost_center_id: uuid.UUID, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return CostCenterResponse.model_validate(service.get_cost_center(db, cost_center_id))


@router.patch("/centros-custos/{cost_center_id}", response_model=Envelope[CostCenterResponse])
def update_cost_center(
    cost_center_id: uuid.UUID,
    payload: CostCenterUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    row = service.update_cost_center(db, cost_center_id, payload, user.id)
    return Envelope(
        data=CostCenterResponse.model_validate(row),
        message=f"Centro de custo id: #{row.id} atualizado com sucesso.",
    )


@router.delete("/centros-custos/{cost_center_id}", response_model=Envelope[CostCenterResponse])
def remove_cost_center(cost_center_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    row = service.remove_cost_center(db, cost_center_id, user.id)
    return Envelope(
        data=CostCenterResponse.model_validate(row),
        message=f"Centro de custo id: #{row.id} excluído com sucesso.",
    )


# ---------- EPIs ----------

@router.post("/{empresa_id}/epis", response_model=Envelope[EpiResponse], status_code=status.HTTP_201_CREATED)
def create_epi(
    empresa_id: uuid.UUID,
    payload: EpiCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    row = service.create_epi(db, empresa_id, payload, user.id)
    return Envelope(data=EpiResponse.model_validate(row), message=f"EPI cadastrado com sucesso, id: #{row.id}.")


@router.get("/{empresa_id}/epis", response_model=List[EpiResponse])
def list_epis(empresa_id: uuid.UUID, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return [EpiResponse.model_validate(r) for r in service.list_epis(db, empresa_id)]


@router.get("/epis/{epi_id}", response_model=EpiResponse)
def get_epi(epi_id: uuid.UUID, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return EpiResponse.model_validate(service.get_epi(db, epi_id))


@router.patch("/epis/{epi_id}", response_model=Envelope[EpiResponse])
def update_epi(
    epi_id: uuid.UUID,
    payload: EpiUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    row = service.update_epi(db, epi_id, payload, user.id)
    return Envelope(data=EpiResponse.model_validate(row), message=f"EPI id: #{row.id} atualizado com sucesso.")


@router.delete("/epis/{epi_id}", response_model=Envelope[EpiResponse])
def remove_epi(epi_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    row = service.remove_epi(db, epi_id, user.id)
    return Envelope(data=EpiResponse.model_validate(row), message=f"EPI id: #{row.id} excluído com sucesso.")


# ---------- Funções ----------

@router.post("/{empresa_id}/funcoes", response_model=Envelope[RoleResponse], status_code=status.HTTP_201_CREATED)
def create_role(
    empresa_id: uuid.UUID,
    payload: RoleCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    row = service.create_role(db, empresa_id, payload, user.id)
    return Envelope(data=RoleResponse.model_validate(row), message=f"Função cadastrada com sucesso, id: #{row.id}.")


@router.get("/{empresa_id}/funcoes", response_model=List[RoleResponse])
def list_roles(empresa_id: uuid.UUID, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return [RoleResponse.model_validate(r) for r in service.list_roles(db, empresa_id)]


@router.get("/funcoes/{role_id}", response_model=RoleResponse)
def get_role(role_id: uuid.UUID, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return RoleResponse.model_validate(service.get_role(db, role_id))


@router.patch("/funcoes/{role_id}", response_model=Envelope[RoleResponse])
def update_role(
    role_id: uuid.UUID,
    payload: RoleUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    row = service.update_role(db, role_id, payload, user.id)
    return Envelope(data=RoleResponse.model_validate(row), message=f"Função id: #{row.id} atualizada com sucesso.")


@router.delete("/funcoes/{role_id}", response_model=Envelope[RoleResponse])
def remove_role(role_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    row = service.remove_role(db, role_id, user.id)
    return Envelope(data=RoleResponse.model_validate(row), message=f"Função id: #{row.id} excluída com sucesso.")


# ---------- Projetos ----------

@router.post("/{empresa_id}/projetos", response_model=Envelope[ProjectResponse], status_code=status.HTTP_201_CREATED)
def create_project(
    empresa_id: uuid.UUID,
    payload: ProjectCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    row = service.create_project(db, empresa_id, payload, user.id)
    return Envelope(data=ProjectResponse.model_validate(row), message=f"Projeto cadastrado com sucesso, id: #{row.id}.")


@router.get("/{empresa_id}/projetos", response_model=List[ProjectResponse])
def list_projects(empresa_id: uuid.UUID, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return [ProjectResponse.model_validate(r) for r in service.list_projects(db, empresa_id)]


@router.get("/projetos/{project_id}", response_model=ProjectResponse)
def get_project(project_id: uuid.UUID, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return ProjectResponse.model_validate(service.get_project(db, project_id))


@router.patch("/projetos/{project_id}", response_model=Envelope[ProjectResponse])
def update_project(
    project_id: uuid.UUID,
    payload: ProjectUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    row = service.update_project(db, project_id, payload, user.id)
    return Envelope(data=ProjectResponse.model_validate(row), message=f"Projeto id: #{row.id} atualizado com sucesso.")


@router.delete("/projetos/{project_id}", response_model=Envelope[ProjectResponse])
def remove_project(project_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    row = service.remove_project(db, project_id, user.id)
    return Envelope(data=ProjectResponse.model_validate(row), message=f"Projeto id: #{row.id} excluído com sucesso.")
