import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..auth.security import get_current_user
from ..db import get_db
from ..models.models import User
from ..schemas.common import Envelope
from ..schemas.leave import TerminationCreate, TerminationResponse, TerminationUpdate
from ..services import terminations as service


router = APIRouter(prefix="/v1", tags=["demissoes"])


@router.post(
    "/funcionarios/{funcionario_id}/demissoes",
    response_model=Envelope[TerminationResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_termination(
    funcionario_id: uuid.UUID,
    payload: TerminationCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    termination = service.create_termination(db, funcionario_id, payload, user.id)
    return Envelope(
        data=TerminationResponse.model_validate(termination),
        message=f"Demissão cadastrada com sucesso, id: #{termination.id}.",
    )


@router.get("/funcionarios/{funcionario_id}/demissoes", response_model=List[TerminationResponse])
def list_employee_terminations(funcionario_id: uuid.UUID, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return [TerminationResponse.model_validate(t) for t in service.list_employee_terminations(db, funcionario_id)]


@router.get("/empresas/{empresa_id}/demissoes", response_model=List[TerminationResponse])
def list_company_terminations(empresa_id: uuid.UUID, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return [TerminationResponse.model_validate(t) for t in service.list_company_terminations(db, empresa_id)]


@router.get("/funcionarios/demissoes/{termination_id}", response_model=TerminationResponse)
def get_termination(termination_id: uuid.UUID, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return TerminationResponse.model_validate(service.get_termination(db, termination_id))


@router.patch("/funcionarios/demissoes/{termination_id}", response_model=Envelope[TerminationResponse])
def update_termination(
    termination_id: uuid.UUID,
    payload: TerminationUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    termination = service.update_termination(db, termination_id, payload, user.id)
    return Envelope(
        data=TerminationResponse.model_validate(termination),
        message=f"Demissão id: #{termination.id} atualizada com sucesso.",
    )


@router.delete("/funcionarios/demissoes/{termination_id}", response_model=Envelope[TerminationResponse])
def remove_termination(termination_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    termination = service.remove_termination(db, termination_id, user.id)
    return Envelope(
        data=TerminationResponse.model_validate(termination),
        message=f"Demissão id: #{termination.id} excluída com sucesso.",
    )
