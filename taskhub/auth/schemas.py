"""
Auth domain: Pydantic V2 request/response schemas.

Separation of concerns:
  - *Request  models:  input from the client (strict extra="forbid")
  - *Response models:  output to the client (the password hash is never exposed)

Email shape and password length are deliberately plain strings here: the auth
service owns those rules and reports them as 400 InvalidInput.
"""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from taskhub.auth.constants import UserRole


class _Base(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        str_strip_whitespace=True,
    )


# ── Email + Password flow ─────────────────────────────────────────────────────

class RegisterRequest(_Base):
    """Body for POST /auth/register."""

    email: str = Field(max_length=255, examples=["user@example.com"])
    password: str = Field(max_length=128, examples=["password123"])


class LoginRequest(_Base):
    """Body for POST /auth/login."""

    email: str = Field(max_length=255)
    password: str = Field(max_length=128)


class RefreshRequest(_Base):
    """Body for POST /auth/refresh."""

    refresh_token: str


# ── Response models ───────────────────────────────────────────────────────────

class TokenResponse(BaseModel):
    """Returned on successful login / refresh."""

    model_config = ConfigDict(extra="forbid")

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int  # access token lifetime in seconds


class UserResponse(BaseModel):
    """A user record without its password hash."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: uuid.UUID
    email: str
    role: UserRole
    created_at: datetime
    updated_at: datetime


class ProfileResponse(BaseModel):
    """Claims of the access token presented on GET /auth/profile."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    role: UserRole
