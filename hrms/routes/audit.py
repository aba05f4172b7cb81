from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..auth.security import require_roles
from ..db import get_db
from ..models.models import User, UserFunction
from ..schemas.audit import AuditLogResponse
from ..services.audit import get_audit_logs


router = APIRouter(prefix="/v1/auditoria", tags=["auditoria"])


@router.get("", response_model=List[AuditLogResponse])
def list_audit_logs(
    entity_type: Optional[str] = Query(default=None, alias="entidade"),
    entity_id: Optional[str] = Query(default=None, alias="entidadeId"),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(UserFunction.ADMIN)),
):
    logs = get_audit_logs(db, entity_type=entity_type, entity_id=entity_id, limit=limit, offset=offset)
    return [AuditLogResponse.model_validate(log) for log in logs]
