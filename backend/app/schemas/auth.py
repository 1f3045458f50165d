"""Request and response models for /api/auth."""

import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from app.schemas.common import NonEmptyStr


def _normalize_email(value: str) -> str:
    email = value.strip().lower()
    local, _, domain = email.partition("@")
    if not local or not domain:
        raise ValueError("must be a valid email address")
    return email


class RegisterRequest(BaseModel):
    email: NonEmptyStr
    password: str = Field(min_length=1)
    name: NonEmptyStr

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class LoginRequest(BaseModel):
    email: NonEmptyStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class UserPublic(BaseModel):
    id: uuid.UUID
    email: str
    name: str

    model_config = {"from_attributes": True}


class UserProfile(UserPublic):
    """Everything about the account except the password hash."""

    role: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class AuthResult(BaseModel):
    user: UserPublic
    token: str


class TokenStatus(BaseModel):
    valid: bool
    payload: Dict[str, Any]
