"""Schemas for file upload and processing endpoints."""

from typing import Optional

from pydantic import Field

from scribeai.schemas.common import CamelModel, OCRProvider


class FileUploadResponse(CamelModel):
    """Response returned after a successful PDF upload."""
    file_id: str = Field(..., description="Generated identifier of the stored upload")
    file_name: str = Field(..., description="Original filename")
    file_size: int = Field(..., description="File size in bytes")
    file_path: str = Field(..., description="Absolute path of the transient copy")


class DocAiCredentials(CamelModel):
    """Caller-supplied Document AI settings; blanks fall back to the environment."""
    project_id: Optional[str] = None
    location: Optional[str] = None
    processor_id: Optional[str] = None


class ProcessRequest(CamelModel):
    file_path: Optional[str] = Field(None, description="Path returned by /api/upload")
    ocr_provider: Optional[str] = Field(
        OCRProvider.GEMINI.value, description="OCR backend to use; null means gemini"
    )
    doc_ai_creds: Optional[DocAiCredentials] = None
