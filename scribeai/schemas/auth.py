"""Schemas for registration, login and session endpoints."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from scribeai.schemas.common import CamelModel

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class RegisterRequest(CamelModel):
    email: str
    password: str
    name: str

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        value = value.strip()
        if not _EMAIL_RE.match(value):
            raise ValueError("Invalid email")
        return value

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: str) -> str:
        if len(value) < 6:
            raise ValueError("Password must be at least 6 characters")
        return value

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if len(value) < 2:
            raise ValueError("Name must be at least 2 characters")
        return value


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserOut(CamelModel):
    """A user as exposed over the API; never includes the password hash."""
    id: int
    email: str
    name: Optional[str] = None
    email_verified: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class SessionUser(CamelModel):
    """Identity decoded from a session token."""
    id: int
    email: str
    name: Optional[str] = None


class RegisterResponse(CamelModel):
    user: Optional[UserOut] = None
    message: str


class LoginResponse(CamelModel):
    user: SessionUser
    access_token: str
    expires: datetime


class SessionResponse(CamelModel):
    user: Optional[SessionUser] = None
    expires: Optional[datetime] = Field(None, description="Token expiry, if authenticated")
