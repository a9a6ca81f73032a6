"""
Error types and the handlers that render them.

Two families live here.  Store failures (``DuplicateQueryError``,
``RecordNotFoundError``, ``StoreClosedError``, ``StoreError``) are
raised by :mod:`query_tracker_api.app.core.db` and describe what the
database refused.  Domain failures (``NotFoundError``,
``ConflictError``, ``ValidationFailure``) are raised by the services
and carry the HTTP status the endpoints translate them into.

``register_exception_handlers`` renders every ``HTTPException`` and
request validation error as ``{"statusCode": ..., "message": ...}``
so that clients always receive the same error shape.
"""

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class StoreError(Exception):
    """Unexpected persistence failure."""


class StoreClosedError(StoreError):
    """The store was used before ``connect`` or after ``close``."""


class DuplicateQueryError(StoreError):
    """The ``form_data_id`` uniqueness constraint rejected an insert."""

    def __init__(self, form_data_id: str) -> None:
        super().__init__(f"Query already exists for form data {form_data_id}")
        self.form_data_id = form_data_id


class RecordNotFoundError(StoreError):
    """The targeted row does not exist."""

    def __init__(self, table: str, record_id: str) -> None:
        super().__init__(f"No {table} row with id {record_id}")
        self.table = table
        self.record_id = record_id


class QueryTrackerError(Exception):
    """Base class for failures surfaced to API clients."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationFailure(QueryTrackerError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(QueryTrackerError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(QueryTrackerError):
    status_code = status.HTTP_400_BAD_REQUEST


def _error_body(status_code: int, message: str) -> Dict[str, Any]:
    return {"statusCode": status_code, "message": message}


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Summarise the first validation error as ``field: reason``."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "path", "query"))
    reason = first.get("msg", "invalid value")
    if location:
        return f"Invalid request: {location}: {reason}"
    return f"Invalid request: {reason}"


def register_exception_handlers(app: FastAPI) -> None:
    log = logging.getLogger("query_tracker_api.errors")

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.status_code, exc.detail or "HTTP error"),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        message = _describe_validation_error(exc)
        log.info("Rejected %s %s: %s", request.method, request.url.path, message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body(status.HTTP_400_BAD_REQUEST, message),
        )

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        log.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"),
        )
