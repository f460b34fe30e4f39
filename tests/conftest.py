"""Shared fixtures: isolated settings, test client, sample PDFs."""

import io

import pytest
from fastapi.testclient import TestClient
from pypdf import PdfWriter
from sqlalchemy.orm import sessionmaker

from scribeai.config import Settings, get_settings
from scribeai.database import get_engine
from scribeai.main import app


@pytest.fixture()
def settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway database and upload directory."""
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'scribeai-test.db'}",
        upload_dir=str(tmp_path / "uploads"),
        auth_secret="test-secret-key",
        openrouter_api_key="",
        gemini_api_key="",
        google_project_id="",
        document_ai_processor_id="",
    )


@pytest.fixture()
def client(settings):
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def db_session(settings):
    factory = sessionmaker(bind=get_engine(settings.database_url), expire_on_commit=False)
    session = factory()
    yield session
    session.close()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """A minimal single-page PDF."""
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buf = io.BytesIO()
    writer.write(buf)
    return buf.getvalue()


@pytest.fixture()
def uploaded_pdf(client, sample_pdf_bytes) -> dict:
    """Upload the sample PDF and return the upload response body."""
    response = client.post(
        "/api/upload",
        files={"file": ("notes.pdf", sample_pdf_bytes, "application/pdf")},
    )
    assert response.status_code == 200
    return response.json()
