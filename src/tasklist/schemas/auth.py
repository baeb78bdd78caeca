"""Pydantic schemas for signup and login.

Learn: Emails are trimmed before validation but their letter case is kept
as typed. Uniqueness and lookups are case-insensitive (see
AccountService). Passwords are never trimmed or echoed back.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class _Credentials(BaseModel):
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value):
        return value.strip() if isinstance(value, str) else value


class SignupRequest(_Credentials):
    password: str = Field(..., min_length=8, max_length=128)


class LoginRequest(_Credentials):
    password: str = Field(..., min_length=1, max_length=128)


class UserRead(BaseModel):
    id: uuid.UUID
    email: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    """Returned by both signup and login."""
    token: str
    token_type: str = "bearer"
    user: UserRead
