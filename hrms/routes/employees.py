import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..auth.security import get_current_user
from ..db import get_db
from ..models.models import User
from ..schemas.common import Envelope
from ..schemas.employees import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from ..services import employees as service


router = APIRouter(prefix="/v1", tags=["funcionarios"])


@router.post(
    "/empresas/{empresa_id}/funcionarios",
    response_model=Envelope[EmployeeResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_employee(
    empresa_id: uuid.UUID,
    payload: EmployeeCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    employee = service.create_employee(db, empresa_id, payload, user.id)
    return Envelope(
        data=EmployeeResponse.model_validate(employee),
        message=f"Funcionário cadastrado com sucesso, id: #{employee.id}.",
    )


@router.get("/empresas/{empresa_id}/funcionarios", response_model=List[EmployeeResponse])
def list_employees(empresa_id: uuid.UUID, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return [EmployeeResponse.model_validate(e) for e in service.list_employees(db, empresa_id)]


@router.get("/funcionarios/{employee_id}", response_model=EmployeeResponse)
def get_employee(employee_id: uuid.UUID, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return EmployeeResponse.model_validate(service.get_employee(db, employee_id))


@router.patch("/funcionarios/{employee_id}", response_model=Envelope[EmployeeResponse])
def update_employee(
    employee_id: uuid.UUID,
    payload: EmployeeUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    employee = service.update_employee(db, employee_id, payload, user.id)
    return Envelope(
        data=EmployeeResponse.model_validate(employee),
        message=f"Funcionário id: #{employee.id} atualizado com sucesso.",
    )


@router.delete("/funcionarios/{employee_id}", response_model=Envelope[EmployeeResponse])
def remove_employee(employee_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    employee = service.remove_employee(db, employee_id, user.id)
    return Envelope(
        data=EmployeeResponse.model_validate(employee),
        message=f"Funcionário id: #{employee.id} excluído com sucesso.",
    )
