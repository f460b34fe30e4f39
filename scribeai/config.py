"""Application configuration loaded from environment variables."""

import tempfile

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration for the ScribeAI application."""

    # Google Document AI
    google_project_id: str = Field(default="", description="Google Cloud project id")
    google_location: str = Field(default="us", description="Document AI processor location")
    document_ai_processor_id: str = Field(default="", description="Document AI processor id")

    # OpenRouter (multimodal OCR)
    openrouter_api_key: str = Field(default="", description="OpenRouter API key")
    openrouter_model: str = Field(
        default="google/gemini-2.0-flash-lite-001", description="Vision model used for OCR"
    )
    openrouter_base_url: str = Field(
        default="https://openrouter.ai/api/v1", description="OpenAI-compatible endpoint"
    )
    openrouter_timeout_seconds: int = Field(default=120, description="OCR request timeout")
    app_url: str = Field(default="http://localhost:8000", description="Public URL sent as HTTP-Referer")

    # Gemini (summarization)
    gemini_api_key: str = Field(default="", description="Gemini API key")
    gemini_model: str = Field(default="gemini-2.0-flash", description="Summarization model")

    # Auth
    database_url: str = Field(default="sqlite:///scribeai.db", description="User store URL")
    auth_secret: str = Field(default="", description="Secret used to sign session tokens")
    session_max_age_seconds: int = Field(default=30 * 24 * 60 * 60, description="Session lifetime")

    # Uploads
    upload_dir: str = Field(default_factory=tempfile.gettempdir, description="Transient upload directory")
    max_upload_bytes: int = Field(default=20 * 1024 * 1024, description="Maximum PDF size")

    log_level: str = Field(default="INFO", description="Root log level")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "case_sensitive": False, "extra": "ignore"}


def get_settings() -> Settings:
    """Build settings from the current environment.

    Used as a FastAPI dependency so every request sees the environment as it
    is at call time.
    """
    return Settings()
