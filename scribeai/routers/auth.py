"""Router: /api/auth — registration, credential login and sessions."""

from __future__ import annotations

from typing import Any

import pydantic
import structlog
from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from scribeai.config import Settings, get_settings
from scribeai.database import get_db
from scribeai.dependencies import get_session
from scribeai.exceptions import AuthenticationError
from scribeai.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    SessionResponse,
    SessionUser,
    UserOut,
)
from scribeai.services.auth import (
    SESSION_COOKIE,
    DuplicateEmailError,
    authorize_credentials,
    issue_token,
    register_user,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _first_error_message(exc: pydantic.ValidationError) -> str:
    error = exc.errors()[0]
    ctx_error = (error.get("ctx") or {}).get("error")
    if ctx_error is not None:
        return str(ctx_error)
    field = ".".join(str(part) for part in error.get("loc", ()))
    return f"{field}: {error['msg']}" if field else error["msg"]


def _register_reply(status_code: int, message: str, user: UserOut | None = None) -> JSONResponse:
    body = RegisterResponse(user=user, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json", by_alias=True))


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(payload: Any = Body(None), db: Session = Depends(get_db)):
    """Create a credential account. The response never contains the password hash."""
    try:
        req = RegisterRequest.model_validate(payload)
    except pydantic.ValidationError as exc:
        return _register_reply(400, _first_error_message(exc))

    try:
        user = register_user(db, email=req.email, password=req.password, name=req.name)
    except DuplicateEmailError:
        return _register_reply(409, "User with this email already exists")
    except Exception:
        logger.exception("registration_error")
        return _register_reply(500, "Something went wrong")

    return _register_reply(201, "User created successfully", UserOut.model_validate(user))


@router.post("/login", response_model=LoginResponse)
def login(
    req: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Exchange email and password for a signed session token."""
    user = authorize_credentials(db, req.email, req.password)
    if user is None:
        raise AuthenticationError("Invalid email or password")

    token, expires = issue_token(user, settings)
    body = LoginResponse(
        user=SessionUser(id=user.id, email=user.email, name=user.name),
        access_token=token,
        expires=expires,
    )
    response = JSONResponse(content=body.model_dump(mode="json", by_alias=True))
    response.set_cookie(
        SESSION_COOKIE,
        token,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        samesite="lax",
    )
    logger.info("user_logged_in", user_id=user.id)
    return response


@router.post("/logout")
def logout():
    response = JSONResponse(content={"ok": True})
    response.delete_cookie(SESSION_COOKIE)
    return response


@router.get("/session", response_model=SessionResponse)
def read_session(session=Depends(get_session)):
    if session is None:
        return SessionResponse()
    user, expires = session
    return SessionResponse(user=user, expires=expires)
