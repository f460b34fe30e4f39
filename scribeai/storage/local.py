"""Transient filesystem storage for uploaded PDFs."""

from __future__ import annotations

import secrets
import string
import time
from pathlib import Path

import structlog

from scribeai.config import Settings

logger = structlog.get_logger(__name__)

FILE_PREFIX = "scribeai"
_BASE36 = string.digits + string.ascii_lowercase


def uploads_dir(settings: Settings) -> Path:
    d = Path(settings.upload_dir).resolve()
    d.mkdir(parents=True, exist_ok=True)
    return d


def generate_file_id() -> str:
    """Return ``scribeai_<epoch millis>_<random base36 suffix>``."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(6))
    return f"{FILE_PREFIX}_{int(time.time() * 1000)}_{suffix}"


# ---------------------------------------------------------------------------
# File operations
# ---------------------------------------------------------------------------

def save_upload(settings: Settings, file_id: str, file_bytes: bytes) -> Path:
    """Save an uploaded PDF to the upload directory."""
    path = uploads_dir(settings) / f"{file_id}.pdf"
    path.write_bytes(file_bytes)
    return path


def resolve_upload(settings: Settings, file_path: str) -> Path:
    """Return the upload at ``file_path`` (raises if not found).

    Paths outside the upload directory are reported as missing so a client
    can never make the service read or delete arbitrary files.
    """
    base = uploads_dir(settings)
    path = Path(file_path).resolve()
    if path.parent != base or path.suffix != ".pdf" or not path.is_file():
        raise FileNotFoundError(f"Upload not found: {file_path}")
    return path


def remove_upload(path: Path) -> bool:
    """Delete an upload; failures are logged, never raised."""
    try:
        path.unlink()
    except OSError as exc:
        logger.warning("upload_cleanup_failed", path=str(path), error=str(exc))
        return False
    logger.info("upload_removed", path=str(path))
    return True
