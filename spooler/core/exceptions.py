"""
Custom exceptions for the Spooler API.
Every error raised by the storage and inspection layers derives from
SpoolerAPIException so handlers can map it to a JSON response.
"""

from typing import Any


class SpoolerAPIException(Exception):
    """Base exception for all Spooler API errors."""

    def __init__(
        self,
        error: str,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        self.error = error
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to response dictionary."""
        response = {
            "error": self.error,
            "message": self.message,
        }
        if self.details:
            response["details"] = self.details
        return response


class ValidationException(SpoolerAPIException):
    """400 - Unsafe object key or malformed request."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            error="validation_failed",
            message=message,
            status_code=400,
            details=details,
        )


class ObjectNotFoundException(SpoolerAPIException):
    """404 - Stored object not found."""

    def __init__(self, key: str):
        super().__init__(
            error="not_found",
            message=f"Object '{key}' not found",
            status_code=404,
            details={"key": key},
        )


class PayloadTooLargeException(SpoolerAPIException):
    """413 - Upload size exceeds limit."""

    def __init__(self, max_size: int):
        max_size_mb = max_size / (1024 * 1024)
        super().__init__(
            error="payload_too_large",
            message=f"Maximum upload size exceeded ({max_size_mb:.0f}MB limit)",
            status_code=413,
        )


class FormatException(SpoolerAPIException):
    """422 - Print file could not be parsed despite a recognized extension."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            error="invalid_format",
            message=message,
            status_code=422,
            details=details,
        )


class StorageException(SpoolerAPIException):
    """500 - Storage backend error."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            error="storage_error",
            message=message,
            status_code=500,
            details=details,
        )
