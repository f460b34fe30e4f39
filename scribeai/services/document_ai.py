"""Google Document AI OCR adapter."""

from __future__ import annotations

from typing import Any, Iterable

import structlog
from google.api_core.client_options import ClientOptions
from google.api_core.exceptions import GoogleAPIError
from google.cloud import documentai

from scribeai.config import Settings
from scribeai.exceptions import ConfigurationError, UpstreamServiceError
from scribeai.schemas.common import OCRPage, OCRResult
from scribeai.schemas.files import DocAiCredentials
from scribeai.services.ocr import BaseOCRProvider

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Layout helpers (any object shaped like documentai.Document.Page)
# ---------------------------------------------------------------------------

def _anchored_text(layout: Any, full_text: str) -> str:
    anchor = getattr(layout, "text_anchor", None)
    segments = getattr(anchor, "text_segments", None) or []
    return "".join(
        full_text[int(seg.start_index or 0):int(seg.end_index or 0)] for seg in segments
    )


def _collect(units: Iterable[Any], full_text: str) -> tuple[str, list[float]]:
    text = ""
    scores: list[float] = []
    for unit in units or []:
        layout = getattr(unit, "layout", None)
        if layout is None:
            continue
        text += _anchored_text(layout, full_text)
        if layout.confidence:
            scores.append(float(layout.confidence))
    return text, scores


def build_page(page_number: int, page: Any, full_text: str) -> OCRPage:
    """Rebuild one page's text and confidence from its layout tree.

    Blocks are preferred; paragraphs are used when blocks yield no text.
    Confidence is the mean of the scored units, 0 when none are scored.
    """
    text, scores = _collect(getattr(page, "blocks", None), full_text)
    if not text:
        paragraph_text, paragraph_scores = _collect(getattr(page, "paragraphs", None), full_text)
        if paragraph_text:
            text = paragraph_text
        scores += paragraph_scores

    confidence = round(sum(scores) / len(scores), 2) if scores else 0.0
    return OCRPage(
        page_number=page_number,
        text=text or f"[Page {page_number} text extraction unavailable]",
        confidence=min(max(confidence, 0.0), 1.0),
    )


def document_to_result(document: Any) -> OCRResult:
    if document is None or not document.text:
        raise UpstreamServiceError("Document AI returned empty result")
    full_text = document.text
    pages = [
        build_page(i + 1, page, full_text) for i, page in enumerate(document.pages or [])
    ]
    return OCRResult(raw_text=full_text, pages=pages)


# ---------------------------------------------------------------------------
# Adapter
# ---------------------------------------------------------------------------

class DocumentAIProvider(BaseOCRProvider):
    """OCR through a Document AI processor."""

    name = "documentai"

    def __init__(self, *, project_id: str, location: str, processor_id: str) -> None:
        if not project_id or not processor_id:
            raise ConfigurationError(
                "Missing GOOGLE_PROJECT_ID or DOCUMENT_AI_PROCESSOR_ID environment variables"
            )
        self.project_id = project_id
        self.location = location or "us"
        self.processor_id = processor_id

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        creds: DocAiCredentials | None = None,
    ) -> "DocumentAIProvider":
        creds = creds or DocAiCredentials()
        return cls(
            project_id=creds.project_id or settings.google_project_id,
            location=creds.location or settings.google_location,
            processor_id=creds.processor_id or settings.document_ai_processor_id,
        )

    def _client(self) -> documentai.DocumentProcessorServiceClient:
        opts = ClientOptions(api_endpoint=f"{self.location}-documentai.googleapis.com")
        return documentai.DocumentProcessorServiceClient(client_options=opts)

    def extract(self, pdf_bytes: bytes) -> OCRResult:
        client = self._client()
        name = client.processor_path(self.project_id, self.location, self.processor_id)
        request = documentai.ProcessRequest(
            name=name,
            raw_document=documentai.RawDocument(content=pdf_bytes, mime_type="application/pdf"),
        )

        logger.info("documentai_call_start", processor=name, size_bytes=len(pdf_bytes))
        try:
            result = client.process_document(request=request)
        except GoogleAPIError as exc:
            logger.warning("documentai_call_failed", processor=name, error=str(exc))
            raise UpstreamServiceError(f"Document AI error: {exc}") from exc

        ocr_result = document_to_result(result.document)
        logger.info("documentai_call_success", pages=len(ocr_result.pages))
        return ocr_result
