import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..auth.security import get_current_user
from ..db import get_db
from ..models.models import User
from ..schemas.common import Envelope
from ..schemas.companies import CompanyCreate, CompanyResponse, CompanyUpdate
from ..services import companies as service


router = APIRouter(prefix="/v1/empresas", tags=["empresas"])


@router.post("", response_model=Envelope[CompanyResponse], status_code=status.HTTP_201_CREATED)
def create_company(payload: CompanyCreate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    company = service.create_company(db, payload, user.id)
    return Envelope(
        data=CompanyResponse.model_validate(company),
        message=f"Empresa cadastrada com sucesso, id: #{company.id}.",
    )


@router.get("", response_model=List[CompanyResponse])
def list_companies(db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return [CompanyResponse.model_validate(c) for c in service.list_companies(db)]


@router.get("/{company_id}", response_model=CompanyResponse)
def get_company(company_id: uuid.UUID, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return CompanyResponse.model_validate(service.get_company(db, company_id))


@router.patch("/{company_id}", response_model=Envelope[CompanyResponse])
def update_company(
    company_id: uuid.UUID,
    payload: CompanyUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    company = service.update_company(db, company_id, payload, user.id)
    return Envelope(
        data=CompanyResponse.model_validate(company),
        message=f"Empresa id: #{company.id} atualizada com sucesso.",
    )


@router.delete("/{company_id}", response_model=Envelope[CompanyResponse])
def remove_company(company_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    company = service.remove_company(db, company_id, user.id)
    return Envelope(
        data=CompanyResponse.model_validate(company),
        message=f"Empresa id: #{company.id} excluída com sucesso.",
    )
