"""Request and response models for /api/confirmations."""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from app.schemas.common import NonEmptyStr
from app.schemas.invitation import InvitationSummary


class ConfirmRequest(BaseModel):
    invitation_code: NonEmptyStr
    guest_name: NonEmptyStr
    guest_email: NonEmptyStr
    phone: Optional[str] = None
    plus_one: bool = False
    dietary_restrictions: Optional[str] = None
    confirmed: bool = True

    @field_validator("guest_email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class ConfirmationUpdate(BaseModel):
    confirmed: Optional[bool] = None
    guest_name: Optional[NonEmptyStr] = None
    guest_email: Optional[NonEmptyStr] = None
    phone: Optional[str] = None
    plus_one: Optional[bool] = None
    dietary_restrictions: Optional[str] = None

    @field_validator("guest_email")
    @classmethod
    def normalize_email(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().lower() if v is not None else v


class CheckInRequest(BaseModel):
    qr_code: str = Field(description="Scanned QR text, with or without the data-URL prefix")


class ConfirmResult(BaseModel):
    id: uuid.UUID
    confirmation_code: str
    guest_name: str
    guest_email: str
    confirmed: bool
    qr_code: str


class ConfirmationResponse(BaseModel):
    id: uuid.UUID
    invitation_id: uuid.UUID
    guest_name: str
    guest_email: str
    phone: Optional[str] = None
    plus_one: bool
    dietary_restrictions: Optional[str] = None
    confirmed: bool
    confirmation_code: str
    qr_code_data: str
    status: str
    checked_in_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ConfirmationDetail(ConfirmationResponse):
    invitation: InvitationSummary


class ConfirmationStats(BaseModel):
    total: int
    confirmed: int
    pending: int
    with_plus_one: int
    checked_in: int


class ConfirmationList(BaseModel):
    confirmations: List[ConfirmationResponse]
    stats: ConfirmationStats


class CheckInResult(BaseModel):
    id: uuid.UUID
    confirmation_code: str
    guest_name: str
    guest_email: str
    phone: Optional[str] = None
    plus_one: bool
    dietary_restrictions: Optional[str] = None
    status: str
    checked_in_at: datetime
    invitation: InvitationSummary
