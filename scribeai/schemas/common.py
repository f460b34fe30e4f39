"""Shared schema types used across the application."""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class OCRProvider(str, enum.Enum):
    GEMINI = "gemini"
    DOCUMENT_AI = "documentai"


# ---------------------------------------------------------------------------
# Base model — snake_case in Python, camelCase on the wire
# ---------------------------------------------------------------------------

class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Data Models
# ---------------------------------------------------------------------------

class OCRPage(CamelModel):
    """Text of a single page as returned by an OCR provider."""
    page_number: int = Field(..., ge=1, description="1-based page number")
    text: str = Field("", description="Extracted page text")
    confidence: float | None = Field(None, ge=0.0, le=1.0, description="Provider confidence")


class OCRResult(CamelModel):
    """Normalised output of any OCR provider."""
    raw_text: str = Field("", description="Full extracted text")
    pages: list[OCRPage] = Field(default_factory=list, description="Pages in document order")


class SummaryEntities(CamelModel):
    dates: list[str] = Field(default_factory=list)
    people: list[str] = Field(default_factory=list)
    organizations: list[str] = Field(default_factory=list)
    amounts: list[str] = Field(default_factory=list)


class SummaryResult(CamelModel):
    """Structured summary produced by the summarization model."""
    executive_summary: str = Field("", description="100-150 word overview")
    bullet_points: list[str] = Field(default_factory=list)
    key_topics: list[str] = Field(default_factory=list)
    entities: SummaryEntities = Field(default_factory=SummaryEntities)


class AnalysisResponse(CamelModel):
    """Everything the dashboard needs to render one analysed document."""
    raw_text: str
    clean_extract: str
    pages: list[OCRPage]
    word_count: int
    confidence: float
    summary: SummaryResult
