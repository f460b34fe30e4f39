"""Router: POST /api/process — OCR, clean and summarize an uploaded PDF."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends

from scribeai.config import Settings, get_settings
from scribeai.exceptions import NotFoundError, ScribeError, UnexpectedError, ValidationError
from scribeai.schemas.common import AnalysisResponse, OCRProvider
from scribeai.schemas.files import ProcessRequest
from scribeai.services.analysis import analyse_document
from scribeai.storage import local as storage

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["process"])


@router.post("/process", response_model=AnalysisResponse)
def process_document(req: ProcessRequest, settings: Settings = Depends(get_settings)):
    """Run the full analysis for a previously uploaded PDF.

    1. OCR with the selected provider (gemini or documentai)
    2. Clean the extracted text
    3. Summarize with Gemini
    4. Delete the upload

    Declared sync so the blocking provider calls run in the threadpool.
    """
    if not req.file_path:
        raise ValidationError("No file path provided")

    try:
        pdf_path = storage.resolve_upload(settings, req.file_path)
    except FileNotFoundError:
        raise NotFoundError("File not found. It may have been auto-deleted.")

    try:
        return analyse_document(
            pdf_path,
            settings,
            provider=req.ocr_provider or OCRProvider.GEMINI.value,
            doc_ai_creds=req.doc_ai_creds,
        )
    except ScribeError:
        raise
    except Exception as exc:
        logger.exception("process_error", file=pdf_path.name)
        raise UnexpectedError("An unexpected error occurred") from exc
