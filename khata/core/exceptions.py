"""
Global exception handling for the application.
Every failure is rendered in the ledger envelope: {"success": false, "error": ..., "details"?: [...]}.
"""

from typing import Any, Dict, List, Optional

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[List[Dict[str, Any]]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or []
        super().__init__(self.message)


class ValidationException(AppError):
    """Input failed validation; details carry one entry per offending field."""
    def __init__(self, message: str = "Validation failed", details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class ConflictException(AppError):
    """Duplicate email/phone or another uniqueness rule."""
    def __init__(self, message: str = "Resource already exists", details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class UnauthorizedException(AppError):
    """Authentication failure error."""
    def __init__(self, message: str = "Unauthorized", details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, details)


class ForbiddenException(AppError):
    """Authorization failure error."""
    def __init__(self, message: str = "Access denied", details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message, status.HTTP_403_FORBIDDEN, details)


class EntityNotFoundException(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Entity not found", details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)


class MethodNotAllowedException(AppError):
    def __init__(self, message: str = "Method not allowed", details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message, status.HTTP_405_METHOD_NOT_ALLOWED, details)


class InternalException(AppError):
    """Unexpected failure. Only the generic message ever reaches the client."""
    def __init__(self, message: str = GENERIC_ERROR_MESSAGE):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


class StorageError(Exception):
    """Raised by repositories when the database call fails."""


class DuplicateEntryError(StorageError):
    """A unique constraint rejected an insert or update."""


def error_response(status_code: int, message: str, details: Optional[List[Dict[str, Any]]] = None) -> JSONResponse:
    content: Dict[str, Any] = {"success": False, "error": message}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def _format_validation_errors(errors) -> List[Dict[str, Any]]:
    # Local import keeps core.validation free of FastAPI
    from khata.core.validation import FieldError

    details = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or None
        cause = (err.get("ctx") or {}).get("error")

        if isinstance(cause, FieldError):
            message = cause.message
        elif err.get("type") == "missing":
            message = f"Field '{field}' is required" if field else "Request body is required"
        else:
            message = err.get("msg", "Invalid value")

        details.append({"field": field, "message": message})
    return details


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Request failed", path=request.url.path, error=exc.message)
    return error_response(exc.status_code, exc.message, exc.details)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Validation failed",
        _format_validation_errors(exc.errors()),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing failures raised by Starlette (unknown path, wrong method)."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = "Endpoint not found"
    elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        message = MethodNotAllowedException().message
    else:
        message = str(exc.detail)
    return error_response(exc.status_code, message)


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.exception("Storage failure", path=request.url.path, error_type=type(exc).__name__)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions globally."""
    logger.exception("Unexpected error occurred", path=request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


def register_exception_handlers(app) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
