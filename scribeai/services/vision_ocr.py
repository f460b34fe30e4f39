"""OCR through a multimodal chat model (Gemini via OpenRouter).

The PDF is sent inline as a base64 data URL next to an extraction prompt.
The model has no notion of per-page confidence, so fixed values are used:
0.9 for pages decoded from a JSON answer, 0.8 when the answer could not be
parsed and is kept verbatim as page 1.
"""

from __future__ import annotations

import base64
from typing import Any

import structlog

from scribeai.config import Settings
from scribeai.exceptions import ConfigurationError
from scribeai.schemas.common import OCRPage, OCRResult
from scribeai.services.llm_json import as_text, parse_json_object
from scribeai.services.ocr import BaseOCRProvider
from scribeai.services.openai_client import call_chat_completion, get_client

logger = structlog.get_logger(__name__)

PARSED_CONFIDENCE = 0.9
FALLBACK_CONFIDENCE = 0.8

# ---------------------------------------------------------------------------
# PROMPT
# ---------------------------------------------------------------------------

EXTRACTION_PROMPT = """Extract all text from this document. Preserve the layout as much as possible.
Return the result in JSON format:
{
    "rawText": "The full extracted text...",
    "pages": [
        { "pageNumber": 1, "text": "Page 1 text..." }
    ]
}
If you cannot distinguish pages, just put everything in page 1."""


def parse_ocr_response(content: str) -> OCRResult:
    """Turn the model's answer into an OCRResult.

    Pages are renumbered 1..N in the order the model returned them; a page
    without text takes the document's rawText.
    """
    data = parse_json_object(content)
    if data is None:
        logger.info("vision_ocr_unparsed_response", chars=len(content))
        return OCRResult(
            raw_text=content,
            pages=[OCRPage(page_number=1, text=content, confidence=FALLBACK_CONFIDENCE)],
        )

    raw_text = as_text(data.get("rawText")) or content
    raw_pages = data.get("pages")
    pages: list[OCRPage] = []
    if isinstance(raw_pages, list):
        for item in raw_pages:
            if isinstance(item, dict):
                text = as_text(item.get("text"))
            else:
                text = as_text(item)
            pages.append(
                OCRPage(page_number=len(pages) + 1, text=text or raw_text, confidence=PARSED_CONFIDENCE)
            )

    if not pages:
        pages = [OCRPage(page_number=1, text=raw_text, confidence=PARSED_CONFIDENCE)]
    return OCRResult(raw_text=raw_text, pages=pages)


class VisionOCRProvider(BaseOCRProvider):
    """Multimodal LLM OCR through the OpenRouter chat API."""

    name = "gemini"

    def __init__(self, *, api_key: str, settings: Settings) -> None:
        if not api_key:
            raise ConfigurationError("Missing OPENROUTER_API_KEY")
        self.api_key = api_key
        self.settings = settings

    @classmethod
    def from_settings(cls, settings: Settings, api_key: str | None = None) -> "VisionOCRProvider":
        return cls(api_key=settings.openrouter_api_key or api_key or "", settings=settings)

    def _messages(self, pdf_bytes: bytes) -> list[dict[str, Any]]:
        encoded = base64.b64encode(pdf_bytes).decode("ascii")
        return [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": EXTRACTION_PROMPT},
                    {
                        "type": "image_url",
                        "image_url": {"url": f"data:application/pdf;base64,{encoded}"},
                    },
                ],
            }
        ]

    def extract(self, pdf_bytes: bytes) -> OCRResult:
        client = get_client(self.settings, self.api_key)
        content = call_chat_completion(
            client,
            self.settings.openrouter_model,
            self._messages(pdf_bytes),
        )
        result = parse_ocr_response(content)
        logger.info("vision_ocr_complete", pages=len(result.pages))
        return result
