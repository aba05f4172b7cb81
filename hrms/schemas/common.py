import uuid
from datetime import date, datetime
from typing import Annotated, Generic, Optional, TypeVar

from pydantic import BaseModel, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel


T = TypeVar("T")

# Dates leave the API in the Brazilian short format (dd/mm/aaaa)
BrDate = Annotated[date, PlainSerializer(lambda d: d.strftime("%d/%m/%Y"), return_type=str, when_used="json")]
BrDateTime = Annotated[datetime, PlainSerializer(lambda d: d.strftime("%d/%m/%Y"), return_type=str, when_used="json")]


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class PayloadModel(CamelModel):
    @field_validator("*", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            v = v.strip()
        return v


class RecordResponse(CamelModel):
    id: uuid.UUID
    criado_por: Optional[str] = None
    atualizado_por: Optional[str] = None
    criado_em: Optional[datetime] = None
    atualizado_em: Optional[datetime] = None

    class Config:
        from_attributes = True

    @field_validator("criado_por", "atualizado_por", mode="before")
    @classmethod
    def user_display_name(cls, v):
        # Audit stamps are exposed as the user's name, not the raw FK
        if v is None or isinstance(v, str):
            return v
        return getattr(v, "nome", None)


class Envelope(BaseModel, Generic[T]):
    succeeded: bool = True
    data: Optional[T] = None
    message: str
