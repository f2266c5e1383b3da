# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Base error type for failures below the HTTP layer (persistence, locking).
# app/exceptions.py maps these to status codes.
# =============================================================================

from typing import Any


class ApplicationError(Exception):
    """
    Base error class for storage-level errors.

    Errors should tell how to fix the problem, not only what failed.

    Attributes:
        code: Machine-readable error code
        message: Human-readable error message
        suggestion: What the caller can do about it
        details: Extra context (paths, timeouts, ...)

    Example:
        class DiskFullError(ApplicationError):
            def __init__(self, path: str):
                super().__init__(f"No space left for {path}", code="DISK_FULL")
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Body for API error responses."""
        result: dict[str, Any] = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result
