"""
Generic record operations shared by every resource service.

Each resource table carries a ``status`` column whose enum exposes
``active_status`` / ``deleted_status`` on the model class, plus the audit
stamps from ``AuditMixin``. Reads only ever see active rows; writes go
through conditional UPDATEs so a row that was excluded in the meantime
reports NotFound instead of being resurrected.
"""
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence

import structlog
from sqlalchemy import inspect as sa_inspect, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import ConflictError, NotFoundError
from .audit import compute_diff, create_audit_log, snapshot


logger = structlog.get_logger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def is_active(model):
    return model.status == model.active_status


def column_keys(row: Any) -> List[str]:
    return [attr.key for attr in sa_inspect(row).mapper.column_attrs]


def find_active(db: Session, model, record_id: uuid.UUID):
    return db.scalars(select(model).where(model.id == record_id, is_active(model))).first()


def get_active(db: Session, model, record_id: uuid.UUID, not_found: str):
    row = find_active(db, model, record_id)
    if row is None:
        raise NotFoundError(not_found)
    return row


def list_active(db: Session, model, *criteria, order_by: Optional[Sequence] = None) -> list:
    query = select(model).where(is_active(model), *criteria)
    if order_by:
        query = query.order_by(*order_by)
    return list(db.scalars(query).unique().all())


def commit(db: Session, conflict_message: Optional[str] = None) -> None:
    """Commit the unit of work; storage-level uniqueness violations become Conflict."""
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        if conflict_message is None:
            raise
        raise ConflictError(conflict_message)


def insert(db: Session, row: Any, actor_id: uuid.UUID, *, autocommit: bool = True, conflict_message: Optional[str] = None):
    row.criado_por_id = actor_id
    db.add(row)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        if conflict_message is None:
            raise
        raise ConflictError(conflict_message)
    create_audit_log(db, row.__tablename__, row.id, "CREATE", actor_id, snapshot(row, column_keys(row)))
    if autocommit:
        commit(db, conflict_message)
        db.refresh(row)
    logger.info("record_created", table=row.__tablename__, id=str(row.id), actor_id=str(actor_id))
    return row


def update_active(
    db: Session,
    model,
    record_id: uuid.UUID,
    values: Dict[str, Any],
    actor_id: uuid.UUID,
    not_found: str,
    *,
    autocommit: bool = True,
    conflict_message: Optional[str] = None,
    extra_changes: Optional[Dict[str, Any]] = None,
):
    """Merge ``values`` into an active row; omitted fields are left untouched.

    ``extra_changes`` lets the caller add diffs for relationships that are
    written outside the UPDATE statement (e.g. association tables).
    """
    row = get_active(db, model, record_id, not_found)
    before = snapshot(row, values.keys())

    assignments = {getattr(model, key): value for key, value in values.items()}
    assignments[model.atualizado_por_id] = actor_id
    assignments[model.atualizado_em] = utcnow()
    result = db.execute(
        update(model)
        .where(model.id == record_id, is_active(model))
        .values(assignments)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(not_found)

    db.refresh(row)
    changes = compute_diff(before, snapshot(row, values.keys()))
    if extra_changes:
        changes.update(extra_changes)
    create_audit_log(db, model.__tablename__, record_id, "UPDATE", actor_id, changes)
    if autocommit:
        commit(db, conflict_message)
        db.refresh(row)
    logger.info("record_updated", table=model.__tablename__, id=str(record_id), fields=sorted(values.keys()))
    return row


def soft_delete(
    db: Session,
    model,
    record_id: uuid.UUID,
    actor_id: uuid.UUID,
    not_found: str,
    *,
    autocommit: bool = True,
):
    """Flip an active row to its deleted marker; an already-excluded row is NotFound."""
    result = db.execute(
        update(model)
        .where(model.id == record_id, is_active(model))
        .values({
            model.status: model.deleted_status,
            model.atualizado_por_id: actor_id,
            model.atualizado_em: utcnow(),
        })
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(not_found)

    create_audit_log(
        db,
        model.__tablename__,
        record_id,
        "DELETE",
        actor_id,
        {"status": {"before": model.active_status.value, "after": model.deleted_status.value}},
    )
    if autocommit:
        commit(db)
    logger.info("record_soft_deleted", table=model.__tablename__, id=str(record_id), actor_id=str(actor_id))
    row = db.get(model, record_id)
    db.refresh(row)
    return row


def payload_values(payload, exclude: Iterable[str] = ()) -> Dict[str, Any]:
    """Fields the caller actually sent; ``null`` counts as not sent."""
    return payload.model_dump(exclude_unset=True, exclude_none=True, exclude=set(exclude))
