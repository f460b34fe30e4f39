"""Router: HTML pages and the session-based access rules around them."""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse, RedirectResponse

from scribeai.dependencies import get_session

# Frontend directory
FRONTEND_DIR = Path(__file__).resolve().parent.parent.parent / "frontend"

router = APIRouter(tags=["pages"], include_in_schema=False)


def _page(name: str) -> FileResponse:
    return FileResponse(str(FRONTEND_DIR / name), media_type="text/html")


@router.get("/dashboard")
async def dashboard(session=Depends(get_session)):
    """Dashboard requires a session; anonymous visitors go to /login."""
    if session is None:
        return RedirectResponse("/login", status_code=302)
    return _page("dashboard.html")


@router.get("/login")
async def login_page(session=Depends(get_session)):
    """Signed-in users have nothing to do on /login."""
    if session is not None:
        return RedirectResponse("/dashboard", status_code=302)
    return _page("login.html")
