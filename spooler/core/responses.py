"""
Error response helpers for the Spooler API.
Error bodies are built from the ErrorResponse schema, and the same schema is
declared on routes so it appears in the OpenAPI document.
"""

from typing import Any

from fastapi.responses import JSONResponse

from spooler.core.exceptions import SpoolerAPIException
from spooler.schemas.error import ErrorResponse

ERROR_DESCRIPTIONS = {
    400: "Unsafe object key",
    404: "Object not found",
    413: "Upload exceeds the size limit",
    422: "Unreadable print file",
    500: "Storage failure",
}


def error_response(exc: SpoolerAPIException) -> JSONResponse:
    """Render an API exception as a JSON error body."""
    body = ErrorResponse(**exc.to_dict())
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
    )


def internal_error_response() -> JSONResponse:
    """Sanitized body for unexpected errors; nothing from the exception leaks."""
    body = ErrorResponse(error="internal_error", message="An unexpected error occurred")
    return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))


def error_responses(*status_codes: int) -> dict[int | str, dict[str, Any]]:
    """Build a route's `responses=` declaration for the given error statuses."""
    return {
        code: {"model": ErrorResponse, "description": ERROR_DESCRIPTIONS[code]}
        for code in status_codes
    }
