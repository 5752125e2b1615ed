"""
Pydantic schemas for print file previews.
"""

import enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FileKind(str, enum.Enum):
    """Print file container kinds recognized by the inspector."""
    STL = "stl"
    THREEMF = "threemf"                # unsliced 3MF package
    GCODE_THREEMF = "gcode_threemf"    # sliced 3MF package
    UNKNOWN = "unknown"


# Wire names used by the preview endpoint
FILE_TYPE_NAMES = {
    FileKind.STL: "stl",
    FileKind.THREEMF: "3mf",
    FileKind.GCODE_THREEMF: "gcode.3mf",
    FileKind.UNKNOWN: "unknown",
}


class FileMetadata(BaseModel):
    """
    Preview extracted from a print file.

    At most one payload is set: raw_model holds base64 model bytes,
    thumbnail holds a PNG data URI. Computed per request, never persisted.
    """

    model_config = ConfigDict(frozen=True)

    kind: FileKind = FileKind.UNKNOWN
    raw_model: str | None = None
    thumbnail: str | None = None

    @model_validator(mode="after")
    def check_single_payload(self) -> "FileMetadata":
        if self.raw_model is not None and self.thumbnail is not None:
            raise ValueError("raw_model and thumbnail are mutually exclusive")
        return self

    def to_preview(self) -> "PreviewResponse":
        return PreviewResponse(
            file_type=FILE_TYPE_NAMES[self.kind],
            model_data=self.raw_model,
            preview_image=self.thumbnail,
        )


class PreviewResponse(BaseModel):
    """Response schema for the preview endpoint."""

    file_type: str = Field(
        ...,
        description="Detected file type",
        examples=["stl", "3mf", "gcode.3mf", "unknown"],
    )
    model_data: str | None = Field(
        default=None,
        description="Base64-encoded model bytes (stl, 3mf)",
    )
    preview_image: str | None = Field(
        default=None,
        description="PNG thumbnail as a data URI (gcode.3mf)",
    )


class UploadResponse(BaseModel):
    """Response schema for a stored upload."""

    message: str
    file: str
    backend_filename: str
