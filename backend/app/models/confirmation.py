"""
Wedding Invitations Backend — Confirmation SQLAlchemy Model
=============================================================

What:  ORM model for the `confirmations` table (guest RSVPs).
Who:   ConfirmationService through the DataGateway.

Lifecycle:
    1. Created (or updated in place) when a guest submits the RSVP form.
       The row keeps its confirmation_code across re-submissions.
    2. `status` starts as 'pending' and flips to 'checked-in' exactly once,
       when the guest's QR payload is scanned at the venue.

One row per (invitation, guest email) is enforced by the upsert logic in
ConfirmationService; there is no unique constraint on the pair.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.utils import utc_now

STATUS_PENDING = "pending"
STATUS_CHECKED_IN = "checked-in"


class Confirmation(Base):
    """A guest's attendance answer for one invitation."""

    __tablename__ = "confirmations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    invitation_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("invitations.id", ondelete="CASCADE"),
        nullable=False,
    )

    # ── Guest details ─────────────────────────────────────────────────────
    guest_name: Mapped[str] = mapped_column(String(255), nullable=False)
    guest_email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    plus_one: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    dietary_restrictions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    confirmed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )

    # ── Codes ─────────────────────────────────────────────────────────────
    confirmation_code: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        unique=True,
        index=True,
    )
    # data:text/plain;base64,<payload>, rebuilt on every RSVP submission
    qr_code_data: Mapped[str] = mapped_column(Text, nullable=False)

    # ── Check-in latch ────────────────────────────────────────────────────
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=STATUS_PENDING,
        server_default=text(f"'{STATUS_PENDING}'"),
    )
    checked_in_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_confirmations_invitation_email", "invitation_id", "guest_email"),
    )

    @property
    def is_checked_in(self) -> bool:
        return self.status == STATUS_CHECKED_IN

    def __repr__(self) -> str:
        return (
            f"<Confirmation(id={self.id}, code='{self.confirmation_code}', "
            f"status='{self.status}')>"
        )
