"""Router: POST /api/upload — upload a PDF for analysis."""

from __future__ import annotations

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, File, UploadFile

from scribeai.config import Settings, get_settings
from scribeai.exceptions import UnexpectedError, ValidationError
from scribeai.schemas.files import FileUploadResponse
from scribeai.storage import local as storage

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["files"])

PDF_MIME_TYPE = "application/pdf"


@router.post("/upload", response_model=FileUploadResponse)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    settings: Settings = Depends(get_settings),
):
    """Upload a PDF to transient storage.

    Returns the generated file id, original filename, size, and the path to
    pass to /api/process.
    """
    if file is None:
        raise ValidationError("No file provided")

    if file.content_type != PDF_MIME_TYPE:
        raise ValidationError("Only PDF files are accepted")

    content = await file.read()
    if len(content) > settings.max_upload_bytes:
        raise ValidationError("File size exceeds 20MB limit")

    file_id = storage.generate_file_id()
    try:
        saved_path = storage.save_upload(settings, file_id, content)
    except Exception as exc:
        logger.error("upload_write_failed", file_id=file_id, error=str(exc))
        raise UnexpectedError("Failed to upload file") from exc

    logger.info(
        "file_uploaded",
        file_id=file_id,
        filename=file.filename,
        size_bytes=len(content),
    )

    return FileUploadResponse(
        file_id=file_id,
        file_name=file.filename or f"{file_id}.pdf",
        file_size=len(content),
        file_path=str(saved_path),
    )
