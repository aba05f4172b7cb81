import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..auth.security import get_current_user
from ..db import get_db
from ..models.models import User
from ..schemas.common import Envelope
from ..schemas.leave import VacationCreate, VacationResponse, VacationUpdate
from ..services import vacations as service


router = APIRouter(prefix="/v1", tags=["ferias"])


@router.post(
    "/funcionarios/{funcionario_id}/ferias",
    response_model=Envelope[VacationResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_vacation(
    funcionario_id: uuid.UUID,
    payload: VacationCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    vacation = service.create_vacation(db, funcionario_id, payload, user.id)
    return Envelope(
        data=VacationResponse.model_validate(vacation),
        message=f"Férias cadastradas com sucesso, id: #{vacation.id}.",
    )


@router.get("/funcionarios/{funcionario_id}/ferias", response_model=List[VacationResponse])
def list_employee_vacations(funcionario_id: uuid.UUID, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return [VacationResponse.model_validate(v) for v in service.list_employee_vacations(db, funcionario_id)]


@router.get("/empresas/{empresa_id}/ferias", response_model=List[VacationResponse])
def list_company_vacations(empresa_id: uuid.UUID, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return [VacationResponse.model_validate(v) for v in service.list_company_vacations(db, empresa_id)]


@router.get("/funcionarios/ferias/{vacation_id}", response_model=VacationResponse)
def get_vacation(vacation_id: uuid.UUID, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return VacationResponse.model_validate(service.get_vacation(db, vacation_id))


@router.patch("/funcionarios/ferias/{vacation_id}", response_model=Envelope[VacationResponse])
def update_vacation(
    vacation_id: uuid.UUID,
    payload: VacationUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    vacation = service.update_vacation(db, vacation_id, payload, user.id)
    return Envelope(
        data=VacationResponse.model_validate(vacation),
        message=f"Férias id: #{vacation.id} atualizadas com sucesso.",
    )


@router.delete("/funcionarios/ferias/{vacation_id}", response_model=Envelope[VacationResponse])
def remove_vacation(vacation_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    vacation = service.remove_vacation(db, vacation_id, user.id)
    return Envelope(
        data=VacationResponse.model_validate(vacation),
        message=f"Férias id: #{vacation.id} excluídas com sucesso.",
    )
