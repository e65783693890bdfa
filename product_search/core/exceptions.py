"""
Typed errors for the search facade and their HTTP mapping.
Services raise a ProductSearchError subclass; the boundary picks the status code by kind.
"""

import logging
from enum import Enum
from typing import Any

from elasticsearch import ApiError, ConnectionError as ESConnectionError, ConnectionTimeout
from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    BACKEND_UNAVAILABLE = "backend_unavailable"
    BACKEND_ERROR = "backend_error"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.BACKEND_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.BACKEND_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ProductSearchError(Exception):
    """Base error. ``message`` is safe to return to callers; engine detail is only logged."""

    kind: ErrorKind = ErrorKind.BACKEND_ERROR

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class ValidationFailedError(ProductSearchError):
    kind = ErrorKind.VALIDATION


class ProductNotFoundError(ProductSearchError):
    kind = ErrorKind.NOT_FOUND


class VersionConflictError(ProductSearchError):
    kind = ErrorKind.CONFLICT


class BackendUnavailableError(ProductSearchError):
    kind = ErrorKind.BACKEND_UNAVAILABLE


class BackendError(ProductSearchError):
    kind = ErrorKind.BACKEND_ERROR


# Statuses meaning the engine cannot serve the request right now (404 here is a missing index)
UNAVAILABLE_STATUSES = frozenset({404, 429, 503})


def kind_for_status(status_code: int | None) -> ErrorKind:
    """Error kind for an engine HTTP status on a call that is not a document lookup."""
    if status_code == 409:
        return ErrorKind.CONFLICT
    if status_code in UNAVAILABLE_STATUSES:
        return ErrorKind.BACKEND_UNAVAILABLE
    return ErrorKind.BACKEND_ERROR


_ERROR_BY_KIND: dict[ErrorKind, type[ProductSearchError]] = {
    ErrorKind.CONFLICT: VersionConflictError,
    ErrorKind.BACKEND_UNAVAILABLE: BackendUnavailableError,
    ErrorKind.BACKEND_ERROR: BackendError,
}


def translate_engine_error(exc: Exception, message: str) -> ProductSearchError:
    """Map an elasticsearch client exception to a typed error carrying a generic message."""
    if isinstance(exc, (ESConnectionError, ConnectionTimeout)):
        return BackendUnavailableError(message)
    if isinstance(exc, ApiError):
        return _ERROR_BY_KIND[kind_for_status(getattr(exc.meta, "status", None))](message)
    return BackendError(message)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {error.get('msg')}" if loc else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ProductSearchError)
    async def handle_product_search_error(request: Request, exc: ProductSearchError) -> Response:
        if exc.kind is ErrorKind.NOT_FOUND:
            return Response(status_code=exc.status_code)
        payload: dict[str, Any] = {"detail": exc.message, "kind": exc.kind.value}
        if exc.details:
            payload.update(exc.details)
        return JSONResponse(status_code=exc.status_code, content=payload)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _validation_message(exc)
        logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": message, "kind": ErrorKind.VALIDATION.value},
        )
