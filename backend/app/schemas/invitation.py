"""
Wedding Invitations Backend — Invitation Schemas
==================================================

What:  Request bodies for creating/updating invitations and the owner and
       public response shapes.

Design Decision:
    The public view (PublicInvitation) deliberately omits id, user_id and
    timestamps; guests only need what is printed on the card.
"""

import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.common import NonEmptyStr


class InvitationCreate(BaseModel):
    groom_name: NonEmptyStr
    bride_name: NonEmptyStr
    ceremony_date: date = Field(description="ISO date, e.g. 2024-12-25")
    ceremony_time: NonEmptyStr = Field(description='Free-form time, e.g. "10:00"')
    location: NonEmptyStr
    description: Optional[str] = None
    max_guests: Optional[int] = Field(default=None, ge=1)


class InvitationUpdate(BaseModel):
    """
    Partial update. Only fields present in the request body are applied;
    `description` may be explicitly set to null, the rest may not.
    """

    groom_name: Optional[NonEmptyStr] = None
    bride_name: Optional[NonEmptyStr] = None
    ceremony_date: Optional[date] = None
    ceremony_time: Optional[NonEmptyStr] = None
    location: Optional[NonEmptyStr] = None
    description: Optional[str] = None
    max_guests: Optional[int] = Field(default=None, ge=1)


class InvitationResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    invitation_code: str
    groom_name: str
    bride_name: str
    ceremony_date: date
    ceremony_time: str
    location: str
    description: Optional[str] = None
    max_guests: int
    created_at: datetime
    updated_at: Optional[datetime] = None
    share_url: Optional[str] = Field(default=None, description="Public link to the invitation page")

    model_config = {"from_attributes": True}


class PublicInvitation(BaseModel):
    invitation_code: str
    groom_name: str
    bride_name: str
    ceremony_date: date
    ceremony_time: str
    location: str
    description: Optional[str] = None
    max_guests: int
    ceremony_date_formatted: str

    model_config = {"from_attributes": True}


class InvitationSummary(BaseModel):
    """Invitation fields embedded in confirmation responses."""

    invitation_code: str
    groom_name: str
    bride_name: str
    ceremony_date: date
    location: str

    model_config = {"from_attributes": True}
