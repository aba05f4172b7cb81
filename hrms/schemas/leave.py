import uuid
from datetime import date
from typing import Optional

from pydantic import Field, model_validator
from pydantic_core import PydanticCustomError

from ..models.models import TerminationStatus, VacationStatus
from .common import BrDate, PayloadModel, RecordResponse


INVALID_PERIOD = "A data final das férias não pode ser anterior à data inicial."


# ---------- Vacations ----------

class VacationCreate(PayloadModel):
    data_inicio: date
    data_fim: date
    observacao: Optional[str] = Field(default=None, max_length=255)

    @model_validator(mode="after")
    def check_period(self):
        if self.data_fim < self.data_inicio:
            raise PydanticCustomError("invalid_period", INVALID_PERIOD)
        return self


class VacationUpdate(PayloadModel):
    data_inicio: Optional[date] = None
    data_fim: Optional[date] = None
    observacao: Optional[str] = Field(default=None, max_length=255)

    @model_validator(mode="after")
    def check_period(self):
        if self.data_inicio and self.data_fim and self.data_fim < self.data_inicio:
            raise PydanticCustomError("invalid_period", INVALID_PERIOD)
        return self


class VacationResponse(RecordResponse):
    data_inicio: BrDate
    data_fim: BrDate
    observacao: Optional[str] = None
    funcionario_id: uuid.UUID
    status: VacationStatus


# ---------- Terminations ----------

class TerminationCreate(PayloadModel):
    data: date
    motivo_interno: str = Field(min_length=1, max_length=255)
    motivo_trabalhista: str = Field(min_length=1, max_length=255)
    acao_trabalhista: Optional[str] = Field(default=None, max_length=255)
    forma_demissao: str = Field(min_length=1, max_length=255)


class TerminationUpdate(PayloadModel):
    data: Optional[date] = None
    motivo_interno: Optional[str] = Field(default=None, min_length=1, max_length=255)
    motivo_trabalhista: Optional[str] = Field(default=None, min_length=1, max_length=255)
    acao_trabalhista: Optional[str] = Field(default=None, max_length=255)
    forma_demissao: Optional[str] = Field(default=None, min_length=1, max_length=255)


class TerminationResponse(RecordResponse):
    data: BrDate
    motivo_interno: str
    motivo_trabalhista: str
    acao_trabalhista: Optional[str] = None
    forma_demissao: str
    funcionario_id: uuid.UUID
    status: TerminationStatus
