import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..auth.security import get_current_user, require_roles
from ..db import get_db
from ..models.models import User, UserFunction
from ..schemas.auth import UserCreate, UserResponse
from ..schemas.common import Envelope
from ..services import users as service


router = APIRouter(prefix="/v1/usuarios", tags=["usuarios"])


@router.post("", response_model=Envelope[UserResponse], status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_roles(UserFunction.ADMIN)),
):
    user = service.create_user(db, payload, admin.id)
    return Envelope(data=UserResponse.model_validate(user), message=f"Usuário cadastrado com sucesso, id: #{user.id}.")


@router.get("", response_model=List[UserResponse])
def list_users(db: Session = Depends(get_db), _: User = Depends(require_roles(UserFunction.ADMIN))):
    return [UserResponse.model_validate(u) for u in service.list_users(db)]


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: uuid.UUID, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return UserResponse.model_validate(service.get_user(db, user_id))
