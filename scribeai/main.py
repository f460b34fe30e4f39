"""FastAPI application entry point."""

from __future__ import annotations

import logging
import sys

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from scribeai.config import get_settings
from scribeai.exceptions import ScribeError, UnexpectedError, ValidationError
from scribeai.routers.pages import FRONTEND_DIR

# ---------------------------------------------------------------------------
# Structured logging configuration
# ---------------------------------------------------------------------------

structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(),
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logging.basicConfig(
    format="%(message)s",
    stream=sys.stdout,
    level=get_settings().log_level.upper(),
)

logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = FastAPI(
    title="ScribeAI API",
    description=(
        "Upload a PDF, extract its text with OCR (Gemini via OpenRouter or Google "
        "Document AI), clean it, and summarize it with Gemini."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS — allow all in development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------

@app.exception_handler(ScribeError)
async def scribe_error_handler(request: Request, exc: ScribeError):
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, status=exc.status_code, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def _error_for_invalid_request(path: str, fields: set) -> ScribeError:
    """Translate a request FastAPI could not decode into the route's own error."""
    if path == "/api/process":
        if "filePath" in fields:
            return ValidationError("No file path provided")
        return UnexpectedError("An unexpected error occurred")
    if path == "/api/upload":
        if "file" in fields:
            return ValidationError("Only PDF files are accepted")
        return UnexpectedError("Failed to upload file")
    return ValidationError("Invalid request body")


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    # loc is ("body", <field>, ...) for field errors, ("body", <offset>) for bad JSON
    fields = {err["loc"][1] for err in exc.errors() if len(err.get("loc", ())) > 1}
    logger.warning("request_invalid", path=request.url.path, errors=len(exc.errors()))
    return await scribe_error_handler(request, _error_for_invalid_request(request.url.path, fields))


# ---------------------------------------------------------------------------
# Mount routers
# ---------------------------------------------------------------------------

from scribeai.routers.auth import router as auth_router
from scribeai.routers.files import router as files_router
from scribeai.routers.pages import router as pages_router
from scribeai.routers.process import router as process_router

app.include_router(auth_router)
app.include_router(files_router)
app.include_router(process_router)
app.include_router(pages_router)


# ---------------------------------------------------------------------------
# Static files (frontend)
# ---------------------------------------------------------------------------

if FRONTEND_DIR.exists():
    app.mount("/static", StaticFiles(directory=str(FRONTEND_DIR)), name="static")


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

@app.get("/health", tags=["system"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "ScribeAI API",
        "version": "1.0.0",
    }


@app.get("/", tags=["system"])
async def root():
    """Root — serve the landing page."""
    index_html = FRONTEND_DIR / "index.html"
    if index_html.exists():
        return FileResponse(str(index_html), media_type="text/html")
    return {
        "message": "ScribeAI API",
        "docs": "/docs",
        "health": "/health",
    }
