import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from ..models.models import (
    CostCenterStatus,
    DepartmentStatus,
    EpiStatus,
    ProjectStatus,
    RoleStatus,
)
from .common import BrDateTime, CamelModel, PayloadModel, RecordResponse


# ---------- Departments / cost centers ----------

class NamedRecordCreate(PayloadModel):
    nome: str = Field(min_length=1, max_length=255)


class NamedRecordUpdate(PayloadModel):
    nome: Optional[str] = Field(default=None, min_length=1, max_length=255)


class DepartmentCreate(NamedRecordCreate):
    pass


class DepartmentUpdate(NamedRecordUpdate):
    pass


class DepartmentResponse(RecordResponse):
    nome: str
    empresa_id: uuid.UUID
    status: DepartmentStatus


class CostCenterCreate(NamedRecordCreate):
    pass


class CostCenterUpdate(NamedRecordUpdate):
    pass


class CostCenterResponse(RecordResponse):
    nome: str
    empresa_id: uuid.UUID
    status: CostCenterStatus


# ---------- EPIs ----------

class EpiCreate(PayloadModel):
    nome: str = Field(min_length=1, max_length=255)
    descricao: Optional[str] = Field(default=None, max_length=255)
    certificado_aprovacao: Optional[str] = Field(default=None, max_length=20)


class EpiUpdate(PayloadModel):
    nome: Optional[str] = Field(default=None, min_length=1, max_length=255)
    descricao: Optional[str] = Field(default=None, max_length=255)
    certificado_aprovacao: Optional[str] = Field(default=None, max_length=20)


class EpiResponse(RecordResponse):
    nome: str
    descricao: Optional[str] = None
    certificado_aprovacao: Optional[str] = None
    empresa_id: uuid.UUID
    status: EpiStatus


class EpiSummary(CamelModel):
    id: uuid.UUID
    nome: str

    class Config:
        from_attributes = True


# ---------- Roles ----------

class RoleCreate(PayloadModel):
    nome: str = Field(min_length=1, max_length=255)
    epis_ids: List[uuid.UUID] = Field(default_factory=list)


class RoleUpdate(PayloadModel):
    nome: Optional[str] = Field(default=None, min_length=1, max_length=255)
    epis_ids: Optional[List[uuid.UUID]] = None


class RoleResponse(RecordResponse):
    nome: str
    empresa_id: uuid.UUID
    epis: List[EpiSummary] = []
    status: RoleStatus


# ---------- Projects ----------

class ProjectCreate(PayloadModel):
    nome: str = Field(min_length=1, max_length=255)
    descricao: str = Field(min_length=1, max_length=255)
    data_inicio: datetime
    cno: str = Field(min_length=1, max_length=12)


class ProjectUpdate(PayloadModel):
    nome: Optional[str] = Field(default=None, min_length=1, max_length=255)
    descricao: Optional[str] = Field(default=None, min_length=1, max_length=255)
    data_inicio: Optional[datetime] = None
    cno: Optional[str] = Field(default=None, min_length=1, max_length=12)


class ProjectResponse(RecordResponse):
    nome: str
    descricao: str
    data_inicio: BrDateTime
    cno: str
    empresa_id: uuid.UUID
    status: ProjectStatus
