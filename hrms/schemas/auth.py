import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from ..models.models import UserFunction, UserStatus
from .common import CamelModel, PayloadModel


class LoginRequest(BaseModel):
    email: EmailStr
    senha: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class UserCreate(PayloadModel):
    nome: str = Field(min_length=1, max_length=255)
    email: EmailStr
    senha: str = Field(min_length=8)
    funcao: UserFunction = UserFunction.HR


class UserResponse(CamelModel):
    id: uuid.UUID
    nome: str
    email: str
    funcao: UserFunction
    status: UserStatus
    criado_em: Optional[datetime] = None
    ultimo_login_em: Optional[datetime] = None

    class Config:
        from_attributes = True
