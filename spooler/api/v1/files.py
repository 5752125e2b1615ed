"""
Print file endpoints.
Upload, download and delete stored print files, and preview uploads
without persisting them.
"""

import logging

from fastapi import APIRouter, File, UploadFile
from fastapi.responses import StreamingResponse

from spooler.core.exceptions import PayloadTooLargeException
from spooler.core.responses import error_responses
from spooler.dependencies import AppSettings, Inspector, Storage
from spooler.schemas.preview import PreviewResponse, UploadResponse
from spooler.storage import generate_object_key, iter_chunks

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    status_code=201,
    response_model=UploadResponse,
    responses=error_responses(413, 500),
)
async def upload_print_file(
    storage: Storage,
    settings: AppSettings,
    file: UploadFile = File(..., description="Print file (.stl, .3mf, .gcode.3mf)"),
):
    """
    Store an uploaded print file under a freshly generated key.

    The upload is streamed to the storage backend rather than read into
    memory.
    """
    if file.size is not None and file.size > settings.MAX_UPLOAD_SIZE:
        raise PayloadTooLargeException(settings.MAX_UPLOAD_SIZE)

    filename = file.filename or ""
    key = generate_object_key(filename)

    await storage.store(key, file.file)
    logger.info("Uploaded %s as %s", filename, key)

    return UploadResponse(
        message="file uploaded successfully",
        file=filename,
        backend_filename=key,
    )


@router.post(
    "/preview",
    response_model=PreviewResponse,
    response_model_exclude_none=True,
    responses=error_responses(413, 422),
)
async def preview_print_file(
    inspector: Inspector,
    settings: AppSettings,
    file: UploadFile = File(..., description="Print file to preview"),
):
    """
    Extract a preview from an uploaded print file. Nothing is stored.

    Returns one of:
    - {"file_type": "stl", "model_data": "<base64>"}
    - {"file_type": "3mf", "model_data": "<base64>"}
    - {"file_type": "gcode.3mf", "preview_image": "data:image/png;base64,..."}
    - {"file_type": "unknown"}
    """
    # Archive parsing needs the whole file in memory, so bound it first
    content = await file.read(settings.MAX_PREVIEW_SIZE + 1)
    if len(content) > settings.MAX_PREVIEW_SIZE:
        raise PayloadTooLargeException(settings.MAX_PREVIEW_SIZE)

    metadata = inspector.inspect(file.filename or "", content)
    return metadata.to_preview()


@router.get("/{key}", responses=error_responses(400, 404, 500))
async def download_print_file(key: str, storage: Storage):
    """Stream a stored print file as an attachment."""
    handle = await storage.fetch(key)

    return StreamingResponse(
        iter_chunks(handle),
        media_type="application/octet-stream",
        headers={"Content-Disposition": f'attachment; filename="{key}"'},
    )


@router.delete("/{key}", responses=error_responses(400, 404, 500))
async def delete_print_file(key: str, storage: Storage):
    """Permanently delete a stored print file."""
    await storage.delete(key)
    return {"message": "file deleted", "key": key}
