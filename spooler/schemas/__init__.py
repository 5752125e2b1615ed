"""
Pydantic schemas for request/response validation.
"""

from spooler.schemas.preview import (
    FileKind,
    FileMetadata,
    PreviewResponse,
    UploadResponse,
)
from spooler.schemas.error import ErrorResponse

__all__ = [
    # Preview schemas
    "FileKind",
    "FileMetadata",
    "PreviewResponse",
    "UploadResponse",
    # Error schemas
    "ErrorResponse",
]
