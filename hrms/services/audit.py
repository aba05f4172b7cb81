"""
Audit logging service.
Append-only audit log with integrity hashing, written in the same
transaction as the change it describes.
"""
import enum
import hashlib
import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, Optional
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models.models import AuditLog
from ..config import settings


def _json_safe(value: Any) -> Any:
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (uuid.UUID, Decimal)):
        return str(value)
    return value


def snapshot(row: Any, fields: Iterable[str]) -> Dict[str, Any]:
    """Capture the JSON-safe values of ``fields`` on an ORM row."""
    return {f: _json_safe(getattr(row, f, None)) for f in fields}


def create_audit_log(
    db: Session,
    entity_type: str,
    entity_id: Any,
    action: str,
    actor_id: Optional[uuid.UUID] = None,
    changes_json: Optional[Dict] = None,
    integrity_secret: Optional[str] = None,
) -> AuditLog:
    """
    Stage an append-only audit log entry on the session.

    The caller owns the transaction: nothing is committed here, so the entry
    lands (or rolls back) together with the change it records.

    Args:
        db: Database session
        entity_type: Table of the entity (empresas|funcionarios|demissoes|...)
        entity_id: Entity ID
        action: Action performed (CREATE|UPDATE|DELETE)
        actor_id: User ID who performed the action
        changes_json: Before/after diff or created values
        integrity_secret: Secret for integrity hash (defaults to JWT_SECRET)

    Returns:
        The pending AuditLog object
    """
    timestamp_utc = datetime.utcnow().replace(tzinfo=None)

    integrity_hash = None
    if integrity_secret is None:
        integrity_secret = settings.jwt_secret

    if integrity_secret:
        canonical_data = {
            "entity_type": entity_type,
            "entity_id": str(entity_id),
            "action": action,
            "actor_id": str(actor_id) if actor_id else None,
            "timestamp_utc": timestamp_utc.isoformat(),
            "changes": changes_json,
        }
        canonical_data = {k: v for k, v in canonical_data.items() if v is not None}
        canonical_json = json.dumps(canonical_data, sort_keys=True, default=str)
        integrity_hash = hashlib.sha256(f"{canonical_json}:{integrity_secret}".encode()).hexdigest()

    audit_log = AuditLog(
        entity_type=entity_type,
        entity_id=str(entity_id),
        action=action,
        actor_id=actor_id,
        changes_json=changes_json,
        timestamp_utc=timestamp_utc,
        integrity_hash=integrity_hash,
    )
    db.add(audit_log)
    return audit_log


def get_audit_logs(
    db: Session,
    entity_type: Optional[str] = None,
    entity_id: Optional[str] = None,
    limit: int = 100,
    offset: int = 0,
) -> list:
    query = select(AuditLog)
    if entity_type:
        query = query.where(AuditLog.entity_type == entity_type)
    if entity_id:
        query = query.where(AuditLog.entity_id == entity_id)
    query = query.order_by(AuditLog.timestamp_utc.desc()).limit(limit).offset(offset)
    return list(db.scalars(query).all())


def compute_diff(before: Dict, after: Dict) -> Dict:
    """Return ``{field: {"before": x, "after": y}}`` for every changed field."""
    diff = {}
    for key in set(before.keys()) | set(after.keys()):
        before_val = before.get(key)
        after_val = after.get(key)
        if before_val != after_val:
            diff[key] = {"before": before_val, "after": after_val}
    return diff
