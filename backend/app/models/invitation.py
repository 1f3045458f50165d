"""
Wedding Invitations Backend — Invitation SQLAlchemy Model
===========================================================

What:  ORM model for the `invitations` table.
Why:   One row per wedding; the public `invitation_code` is what guests see
       in links and QR payloads.
Who:   InvitationService (CRUD, public view) and ConfirmationService (joins).

Table Design Rationale:
    - invitation_code: groom initial + bride initial + DDMMYY, with a "-N"
      suffix on collision. Unique, indexed; looked up on every public view.
    - ceremony_date is a DATE, ceremony_time a free-form string ("10:00",
      "10.00 WIB") because couples write times in many formats.
    - max_guests caps confirmed attendance (guest + plus-one).
    - No ORM relationships: confirmations are fetched by explicit queries in
      the DataGateway so no lazy load can fire inside an async session.
"""

import uuid
from datetime import date, datetime
from typing import Optional

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.utils import utc_now


class Invitation(Base):
    """
    A wedding invitation owned by exactly one user.

    Query Patterns:
        - Public view:  WHERE invitation_code = :code
        - Owner list:   WHERE user_id = :uid ORDER BY created_at DESC
          → served by idx_invitations_user_created
    """

    __tablename__ = "invitations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    invitation_code: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        unique=True,
        index=True,
    )

    # ── Couple & ceremony ─────────────────────────────────────────────────
    groom_name: Mapped[str] = mapped_column(String(255), nullable=False)
    bride_name: Mapped[str] = mapped_column(String(255), nullable=False)
    ceremony_date: Mapped[date] = mapped_column(Date, nullable=False)
    ceremony_time: Mapped[str] = mapped_column(String(50), nullable=False)
    location: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    max_guests: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=100,
        server_default=text("100"),
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
        Index("idx_invitations_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Invitation(id={self.id}, code='{self.invitation_code}')>"
