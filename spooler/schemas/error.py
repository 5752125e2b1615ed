"""
Pydantic schemas for error responses.
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standard error response format.

    Examples:
        400: {"error": "validation_failed", "message": "Path traversal not allowed"}
        404: {"error": "not_found", "message": "Object '...' not found"}
        413: {"error": "payload_too_large", "message": "maximum size exceeded"}
        422: {"error": "invalid_format", "message": "Failed to read 3MF archive"}
    """

    error: str = Field(
        ...,
        description="Error code string",
        examples=["validation_failed", "not_found", "invalid_format", "storage_error"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] | None = Field(
        default=None,
        description="Optional additional error details",
    )
