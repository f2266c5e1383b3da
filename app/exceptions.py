# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Error taxonomy:
# - decode errors (bad body / path)        -> 400 VALIDATION_ERROR
# - absent task on read                    -> 404 TASK_NOT_FOUND
# - unknown user or wrong password         -> 400 INVALID_CREDENTIALS
# - store lock timeout                     -> 503 STORE_UNAVAILABLE
# - save failure (strict persistence only) -> 500 *_ERROR
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.guard import StoreUnavailableError
from lib.persistence import PersistenceError
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)


class TaskStoreException(Exception):
    """
    Base exception for the HTTP layer.

    Carries the status code and a structured body for the response.
    """

    def __init__(
        self,
        message: str,
        code: str = "TASKSTORE_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Task Exceptions
# =============================================================================

class TaskNotFoundError(TaskStoreException):
    """Raised when a task ID doesn't exist."""

    def __init__(self, task_id: int):
        super().__init__(
            message="Task not found",
            code="TASK_NOT_FOUND",
            status_code=404,
            details={"task_id": task_id}
        )


# =============================================================================
# User Exceptions
# =============================================================================

class InvalidCredentialsError(TaskStoreException):
    """
    Raised on a failed login.

    Unknown username and wrong password produce the same error so the
    response does not reveal which one was wrong.
    """

    def __init__(self):
        super().__init__(
            message="Invalid username or password",
            code="INVALID_CREDENTIALS",
            status_code=400,
        )


# =============================================================================
# Exception Handlers
# =============================================================================

# Status codes for errors raised below the HTTP layer
APPLICATION_ERROR_STATUS: dict[type[ApplicationError], int] = {
    StoreUnavailableError: 503,
    PersistenceError: 500,
}


async def taskstore_exception_handler(
    request: Request,
    exc: TaskStoreException
) -> JSONResponse:
    """Convert TaskStoreException to JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def application_error_handler(
    request: Request,
    exc: ApplicationError
) -> JSONResponse:
    """
    Convert store/persistence errors to JSON responses.

    Unknown ApplicationError subclasses map to 500.
    """
    status_code = 500
    for error_type, mapped in APPLICATION_ERROR_STATUS.items():
        if isinstance(exc, error_type):
            status_code = mapped
            break

    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status_code, content=exc.to_dict())


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request decoding errors.

    Malformed or mistyped bodies and path parameters are client errors
    and answer 400 rather than FastAPI's default 422.
    """
    errors = [
        {
            "loc": list(error.get("loc", ())),
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Request could not be decoded",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )
