"""Service-level failures and their translation into HTTP responses.

Services raise the typed errors below and never build responses themselves.
The handlers registered by ``register_exception_handlers`` are the only place
where a failure becomes a ``{statusCode, message, error}`` body.
"""
from http import HTTPStatus
from typing import Any, List, Union

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = structlog.get_logger(__name__)

UUID_EXPECTED = "Validation failed (uuid is expected)"
DATABASE_ERROR = "Erro ao processar a consulta no banco de dados."
UNKNOWN_ERROR = "Erro desconhecido. Contate o administrador."
TOO_MANY_REQUESTS = "Muitas requisições. Tente novamente em instantes."


class ServiceError(Exception):
    """Base class for failures raised by the service layer."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(ServiceError):
    """Referenced record is missing or soft-deleted."""

    status_code = HTTPStatus.NOT_FOUND


class ConflictError(ServiceError):
    """Write would break a uniqueness or state-exclusivity rule."""

    status_code = HTTPStatus.CONFLICT


class ValidationError(ServiceError):
    """Input is well-formed but inconsistent once merged with the stored record."""

    status_code = HTTPStatus.BAD_REQUEST


def error_body(status_code: int, message: Union[str, List[str]]) -> dict:
    return {
        "statusCode": int(status_code),
        "message": message,
        "error": HTTPStatus(status_code).phrase,
    }


def _error_response(status_code: int, message: Any, headers=None) -> JSONResponse:
    return JSONResponse(status_code=int(status_code), content=error_body(status_code, message), headers=headers)


def _describe_validation_errors(exc: RequestValidationError) -> Union[str, List[str]]:
    messages: List[str] = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] == "path" and err.get("type", "").startswith("uuid"):
            return UUID_EXPECTED
        msg = err.get("msg", "is invalid")
        if len(loc) <= 1:
            # model-level check on the whole body
            messages.append(msg)
            continue
        messages.append(f"{loc[-1]} {msg}")
    return messages


async def service_error_handler(request: Request, exc: ServiceError):
    logger.info("service_error", path=request.url.path, status=int(exc.status_code), detail=exc.message)
    return _error_response(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return _error_response(HTTPStatus.BAD_REQUEST, _describe_validation_errors(exc))


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _error_response(exc.status_code, exc.detail, headers=getattr(exc, "headers", None))


def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    logger.warning("rate_limit_exceeded", path=request.url.path, limit=str(exc.detail))
    return _error_response(HTTPStatus.TOO_MANY_REQUESTS, TOO_MANY_REQUESTS)


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("database_error", path=request.url.path, exc_info=exc)
    return _error_response(HTTPStatus.INTERNAL_SERVER_ERROR, DATABASE_ERROR)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("unhandled_exception", path=request.url.path, exc_info=exc)
    return _error_response(HTTPStatus.INTERNAL_SERVER_ERROR, UNKNOWN_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
