"""
Central error handling.
Every error raised by a route, dependency or the database layer is turned
into the JSON envelope here, so handlers never format errors themselves.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

import jwt
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from responses import error_body

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "Duplicate entry. This record already exists."
MISSING_REFERENCE_MESSAGE = "Referenced record does not exist."
IN_USE_MESSAGE = "This record is referenced by other records and cannot be removed."
GENERIC_MESSAGE = "Internal server error"

# MySQL error numbers
ER_DUP_ENTRY = 1062
ER_ROW_IS_REFERENCED_2 = 1451
ER_NO_REFERENCED_ROW_2 = 1452


def _humanize(field: Any) -> str:
    return str(field).replace("_", " ").capitalize()


def format_validation_errors(exc) -> List[Dict[str, Any]]:
    """Return [{field, message, value}] for pydantic / FastAPI validation errors."""
    detail_list = []
    errors = exc.errors() if hasattr(exc, "errors") else []

    for err in errors:
        loc = err.get("loc", [])
        field = loc[-1] if len(loc) > 1 else loc[0] if loc else None
        err_type = err.get("type", "")
        message = err.get("msg", "Invalid value")

        if err_type == "missing":
            message = f"{_humanize(field)} is required"
        elif message.startswith("Value error, "):
            message = message[len("Value error, "):]

        value = err.get("input")
        if err_type == "missing" or isinstance(value, dict):
            value = None

        detail_list.append({
            "field": field,
            "message": message,
            "value": jsonable_encoder(value),
        })
    return detail_list


def _integrity_kind(exc: IntegrityError) -> Optional[str]:
    orig = getattr(exc, "orig", None)
    code = orig.args[0] if orig is not None and getattr(orig, "args", None) else None
    text = str(orig if orig is not None else exc).lower()

    if code == ER_DUP_ENTRY or "duplicate" in text or "unique constraint" in text:
        return "duplicate"
    if code == ER_ROW_IS_REFERENCED_2:
        return "in_use"
    if code == ER_NO_REFERENCED_ROW_2:
        return "foreign_key"
    if "foreign key" in text:
        # SQLite reports both directions with the same message
        statement = (getattr(exc, "statement", None) or "").lstrip().upper()
        return "in_use" if statement.startswith("DELETE") else "foreign_key"
    return None


def classify_exception(exc: Exception, path: str = "", debug: bool = False) -> Tuple[int, Dict[str, Any]]:
    """
    Map any exception to (status_code, envelope body).

    validation -> 400, HTTPException -> its own status, unknown route -> 404,
    duplicate key -> 409, missing foreign key -> 400, everything else -> 500
    with the exception text only outside production.
    """
    if isinstance(exc, (RequestValidationError, ValidationError)):
        return status.HTTP_400_BAD_REQUEST, error_body("Validation failed", format_validation_errors(exc))

    if isinstance(exc, StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            return exc.status_code, error_body(f"Route {path} not found")
        if isinstance(exc.detail, dict):
            return exc.status_code, error_body(**exc.detail)
        return exc.status_code, error_body(str(exc.detail))

    if isinstance(exc, jwt.ExpiredSignatureError):
        return status.HTTP_401_UNAUTHORIZED, error_body("Token expired")

    if isinstance(exc, jwt.PyJWTError):
        return status.HTTP_401_UNAUTHORIZED, error_body("Invalid token")

    if isinstance(exc, IntegrityError):
        kind = _integrity_kind(exc)
        if kind == "duplicate":
            return status.HTTP_409_CONFLICT, error_body(DUPLICATE_MESSAGE)
        if kind == "foreign_key":
            return status.HTTP_400_BAD_REQUEST, error_body(MISSING_REFERENCE_MESSAGE)
        if kind == "in_use":
            return status.HTTP_409_CONFLICT, error_body(IN_USE_MESSAGE)

    if isinstance(exc, (OperationalError, PoolTimeoutError)):
        logger.warning(f"Database unavailable on {path}: {exc}")

    message = str(exc) if debug and str(exc) else GENERIC_MESSAGE
    return status.HTTP_500_INTERNAL_SERVER_ERROR, error_body(message)


def _respond(request: Request, exc: Exception) -> JSONResponse:
    settings = request.app.state.settings
    status_code, body = classify_exception(exc, request.url.path, debug=not settings.is_production)

    if status_code >= 500:
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    elif status_code != status.HTTP_404_NOT_FOUND:
        logger.info(f"{request.method} {request.url.path} rejected with {status_code}: {body['message']}")

    headers = getattr(exc, "headers", None)
    return JSONResponse(status_code=status_code, content=body, headers=headers)


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    return _respond(request, exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _respond(request, exc)


async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    return _respond(request, exc)


async def token_exception_handler(request: Request, exc: jwt.PyJWTError):
    return _respond(request, exc)


async def unhandled_exception_handler(request: Request, exc: Exception):
    return _respond(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(ValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(jwt.PyJWTError, token_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
