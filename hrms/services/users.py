import uuid
from typing import Optional

import structlog
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..auth.security import get_password_hash, verify_password
from ..errors import ConflictError, NotFoundError
from ..models.models import User
from ..schemas.auth import UserCreate
from . import records
from .audit import create_audit_log


logger = structlog.get_logger(__name__)

NOT_FOUND = "Usuário não encontrado."
EMAIL_TAKEN = "Já existe um usuário cadastrado com este e-mail."


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def create_user(db: Session, payload: UserCreate, actor_id: Optional[uuid.UUID] = None) -> User:
    email = _normalize_email(payload.email)
    if db.scalars(select(User.id).where(func.lower(User.email) == email)).first() is not None:
        raise ConflictError(EMAIL_TAKEN)
    user = User(
        nome=payload.nome,
        email=email,
        senha_hash=get_password_hash(payload.senha),
        funcao=payload.funcao,
    )
    db.add(user)
    db.flush()
    create_audit_log(
        db, User.__tablename__, user.id, "CREATE", actor_id,
        {"nome": user.nome, "email": user.email, "funcao": user.funcao.value},
    )
    records.commit(db, conflict_message=EMAIL_TAKEN)
    db.refresh(user)
    logger.info("user_created", user_id=str(user.id), funcao=user.funcao.value)
    return user


def list_users(db: Session) -> list:
    return records.list_active(db, User, order_by=[User.nome.asc()])


def get_user(db: Session, user_id: uuid.UUID) -> User:
    return records.get_active(db, User, user_id, NOT_FOUND)


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    """Return the active user owning ``email`` when ``password`` matches, else None."""
    user = db.scalars(
        select(User).where(func.lower(User.email) == _normalize_email(email), records.is_active(User))
    ).first()
    if user is None or not verify_password(password, user.senha_hash):
        return None
    user.ultimo_login_em = records.utcnow()
    db.commit()
    db.refresh(user)
    return user
