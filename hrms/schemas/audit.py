import uuid
from datetime import datetime
from typing import Optional

from .common import CamelModel


class AuditLogResponse(CamelModel):
    id: uuid.UUID
    entity_type: str
    entity_id: str
    action: str
    actor_id: Optional[uuid.UUID] = None
    changes_json: Optional[dict] = None
    timestamp_utc: datetime
    integrity_hash: Optional[str] = None

    class Config:
        from_attributes = True
