"""Request dependencies shared by routers."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import Depends, Request

from scribeai.config import Settings, get_settings
from scribeai.schemas.auth import SessionUser
from scribeai.services.auth import SESSION_COOKIE, decode_token


def session_token(request: Request) -> Optional[str]:
    """Session token from the cookie, or from an ``Authorization: Bearer`` header."""
    token = request.cookies.get(SESSION_COOKIE)
    if token:
        return token
    header = request.headers.get("authorization", "")
    scheme, _, value = header.partition(" ")
    if scheme.lower() == "bearer" and value:
        return value.strip()
    return None


def get_session(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> Optional[tuple[SessionUser, datetime]]:
    return decode_token(session_token(request), settings)
