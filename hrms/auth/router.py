import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..config import settings
from ..db import get_db
from ..models.models import User
from ..schemas.auth import LoginRequest, TokenResponse, UserResponse
from ..services.users import authenticate
from .security import create_access_token, get_current_user


router = APIRouter(prefix="/auth", tags=["auth"])
logger = structlog.get_logger(__name__)

INVALID_CREDENTIALS = "Credenciais inválidas."


@router.post("/login", response_model=TokenResponse)
def login(req: LoginRequest, db: Session = Depends(get_db)):
    user = authenticate(db, req.email, req.senha)
    if user is None:
        logger.info("login_failed", email=req.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)
    access = create_access_token(str(user.id), funcao=user.funcao.value)
    logger.info("login_succeeded", user_id=str(user.id))
    return TokenResponse(access_token=access, expires_in=settings.jwt_ttl_seconds)


@router.get("/me", response_model=UserResponse, response_model_by_alias=True)
def me(user: User = Depends(get_current_user)):
    return UserResponse.model_validate(user)
