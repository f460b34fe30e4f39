"""Document analysis flow: OCR → clean → summarize → cleanup."""

from __future__ import annotations

from pathlib import Path

import structlog

from scribeai.config import Settings
from scribeai.exceptions import ScribeError, UpstreamServiceError, ValidationError
from scribeai.schemas.common import AnalysisResponse, OCRPage, OCRResult, SummaryResult
from scribeai.schemas.files import DocAiCredentials
from scribeai.services.ocr import get_ocr_provider
from scribeai.services.summarizer import summarize_text
from scribeai.services.text_cleaner import clean_text, get_word_count
from scribeai.storage import local as storage

logger = structlog.get_logger(__name__)

DEFAULT_PAGE_CONFIDENCE = 0.9


def average_confidence(pages: list[OCRPage]) -> float:
    """Mean page confidence rounded to 2 decimals; 0 for no pages.

    Pages without a reported confidence count as 0.9.
    """
    if not pages:
        return 0.0
    total = sum(
        DEFAULT_PAGE_CONFIDENCE if p.confidence is None else p.confidence for p in pages
    )
    return round(total / len(pages), 2)


def _run_ocr(
    pdf_path: Path,
    provider: str,
    settings: Settings,
    doc_ai_creds: DocAiCredentials | None,
) -> OCRResult:
    try:
        ocr = get_ocr_provider(provider, settings, doc_ai_creds)
        return ocr.extract(pdf_path.read_bytes())
    except ValidationError:
        raise
    except Exception as exc:
        message = exc.message if isinstance(exc, ScribeError) else str(exc)
        logger.error("ocr_failed", provider=provider, error=message)
        raise UpstreamServiceError(f"OCR failed: {message}") from exc


def _run_summary(text: str, settings: Settings) -> SummaryResult:
    try:
        return summarize_text(text, settings)
    except Exception as exc:
        message = exc.message if isinstance(exc, ScribeError) else str(exc)
        logger.error("summarization_failed", error=message)
        raise UpstreamServiceError(f"Summarization failed: {message}") from exc


def analyse_document(
    pdf_path: Path,
    settings: Settings,
    provider: str = "gemini",
    doc_ai_creds: DocAiCredentials | None = None,
) -> AnalysisResponse:
    """Run the full analysis for one uploaded PDF.

    Each stage wraps its own failures with a stage label. Nothing is retried
    and nothing is rolled back; the upload is deleted only after both
    provider calls succeed.
    """
    log = logger.bind(file=pdf_path.name, provider=provider)

    # Step 1: OCR
    ocr_result = _run_ocr(pdf_path, provider, settings, doc_ai_creds)
    log.info("ocr_complete", pages=len(ocr_result.pages), chars=len(ocr_result.raw_text))

    # Step 2: Clean text
    cleaned = clean_text(ocr_result.raw_text)
    word_count = get_word_count(cleaned)
    log.info("text_cleaned", words=word_count)

    # Step 3: Summarize
    summary = _run_summary(cleaned, settings)
    log.info("summary_complete", bullets=len(summary.bullet_points))

    # Step 4: Cleanup
    storage.remove_upload(pdf_path)

    return AnalysisResponse(
        raw_text=ocr_result.raw_text,
        clean_extract=cleaned,
        pages=ocr_result.pages,
        word_count=word_count,
        confidence=average_confidence(ocr_result.pages),
        summary=summary,
    )
