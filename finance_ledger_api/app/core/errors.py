"""
Error taxonomy, result values and HTTP error rendering.

Services never raise for expected failures such as a missing or
foreign transaction.  They return a ``Result`` carrying either the
value or an ``ErrorKind`` plus a human readable message.  The API
layer unwraps results into ``AppError`` and the handlers registered by
``register_exception_handlers`` turn every failure into a JSON body of
the form::

    {"message": "...", "timestamp": "...", "status": 404, "error": "NOT_FOUND"}
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)

T = TypeVar("T")


class ErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT = "CONFLICT"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


STATUS_CODES: Dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class AppError(Exception):
    """A typed failure on its way to the HTTP boundary."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details or {}

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a service call: a value or an error kind with a message."""

    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "Result[T]":
        return cls(error=kind, message=message)

    def unwrap(self) -> T:
        """Return the value or raise ``AppError`` for a failed result."""
        if self.error is not None:
            raise AppError(self.error, self.message or self.error.value)
        return self.value


def error_body(kind: ErrorKind, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"message": message}
    if details:
        body.update(details)
    body["timestamp"] = datetime.now(timezone.utc).isoformat()
    body["status"] = STATUS_CODES[kind]
    body["error"] = kind.value
    return body


def _headers_for(kind: ErrorKind) -> Optional[Dict[str, str]]:
    if kind is ErrorKind.UNAUTHENTICATED:
        return {"WWW-Authenticate": "Bearer"}
    return None


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.kind, exc.message, exc.details),
        headers=_headers_for(exc.kind),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render a malformed request body as 400 with one entry per field.

    The field name is the last element of the error location; only the
    first message reported for a field is kept.
    """
    fields: Dict[str, str] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = loc[-1] if loc else "body"
        fields.setdefault(field, error.get("msg", "Invalid value"))
    return JSONResponse(
        status_code=STATUS_CODES[ErrorKind.VALIDATION_ERROR],
        content=error_body(ErrorKind.VALIDATION_ERROR, "Validation failed", {"fields": fields}),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error while processing %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=STATUS_CODES[ErrorKind.INTERNAL_ERROR],
        content=error_body(ErrorKind.INTERNAL_ERROR, "Unexpected error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
