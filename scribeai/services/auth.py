"""Credential authentication and stateless session tokens."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from scribeai.config import Settings
from scribeai.exceptions import ConfigurationError
from scribeai.models import User
from scribeai.schemas.auth import SessionUser

logger = structlog.get_logger(__name__)

TOKEN_ALGORITHM = "HS256"
SESSION_COOKIE = "scribeai.session-token"


class DuplicateEmailError(Exception):
    """Raised when registering an email that already has an account."""


# ---------------------------------------------------------------------------
# User store
# ---------------------------------------------------------------------------

def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.scalars(select(User).where(User.email == email)).first()


def register_user(db: Session, *, email: str, password: str, name: str) -> User:
    """Create a credential user with an auto-verified email.

    The existence check gives the friendly answer; the UNIQUE constraint on
    ``users.email`` catches concurrent registrations of the same address.
    """
    if get_user_by_email(db, email) is not None:
        raise DuplicateEmailError(email)

    user = User(email=email, name=name, email_verified=datetime.now(timezone.utc))
    user.set_password(password)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateEmailError(email) from exc
    db.refresh(user)
    logger.info("user_registered", user_id=user.id)
    return user


def authorize_credentials(db: Session, email: Optional[str], password: Optional[str]) -> Optional[User]:
    """Credential grant: the user on success, None on any failure."""
    if not email or not password:
        return None
    user = get_user_by_email(db, email)
    if user is None or not user.password_hash:
        logger.info("login_failed", reason="unknown_user")
        return None
    if not user.check_password(password):
        logger.info("login_failed", reason="bad_password", user_id=user.id)
        return None
    return user


# ---------------------------------------------------------------------------
# Session tokens
# ---------------------------------------------------------------------------

def issue_token(user: User, settings: Settings) -> tuple[str, datetime]:
    """Sign a session token for ``user``; returns the token and its expiry."""
    if not settings.auth_secret:
        raise ConfigurationError("Missing AUTH_SECRET environment variable")
    now = datetime.now(timezone.utc)
    expires = now + timedelta(seconds=settings.session_max_age_seconds)
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "name": user.name,
        "iat": now,
        "exp": expires,
    }
    token = jwt.encode(payload, settings.auth_secret, algorithm=TOKEN_ALGORITHM)
    return token, expires.replace(microsecond=0)


def decode_token(token: Optional[str], settings: Settings) -> Optional[tuple[SessionUser, datetime]]:
    """Verify a session token; None when it is absent, invalid or expired."""
    if not token or not settings.auth_secret:
        return None
    try:
        payload = jwt.decode(token, settings.auth_secret, algorithms=[TOKEN_ALGORITHM])
        user = SessionUser(id=int(payload["sub"]), email=payload["email"], name=payload.get("name"))
    except (jwt.InvalidTokenError, KeyError, ValueError) as exc:
        logger.info("session_rejected", error=str(exc))
        return None
    return user, datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
