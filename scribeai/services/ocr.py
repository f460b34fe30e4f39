"""OCR provider contract and factory."""

from __future__ import annotations

from abc import ABC, abstractmethod

from scribeai.config import Settings
from scribeai.exceptions import ValidationError
from scribeai.schemas.common import OCRProvider, OCRResult
from scribeai.schemas.files import DocAiCredentials


class BaseOCRProvider(ABC):
    """Contract for all OCR adapters."""

    name: str = ""

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> OCRResult:
        """Extract text from a PDF.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            OCRResult with 1-based, contiguous page numbers.

        Raises:
            ConfigurationError: if a required credential is missing.
            UpstreamServiceError: if the provider call fails.
        """


def get_ocr_provider(
    provider: str,
    settings: Settings,
    doc_ai_creds: DocAiCredentials | None = None,
) -> BaseOCRProvider:
    """Create the OCR adapter selected by the caller."""
    from scribeai.services.document_ai import DocumentAIProvider
    from scribeai.services.vision_ocr import VisionOCRProvider

    name = (provider or OCRProvider.GEMINI.value).lower()
    if name == OCRProvider.DOCUMENT_AI.value:
        return DocumentAIProvider.from_settings(settings, doc_ai_creds)
    if name == OCRProvider.GEMINI.value:
        return VisionOCRProvider.from_settings(settings)
    raise ValidationError(
        f"Unknown OCR provider '{provider}'. Choose from: {[p.value for p in OCRProvider]}"
    )
