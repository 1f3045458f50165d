"""
Wedding Invitations Backend — Data Gateway
============================================

What:  The only module that issues SQL. Services call these methods instead
       of building queries themselves.
Why:   Keeps query shapes (joins, ordering, the conditional check-in UPDATE)
       in one reviewable place and lets service tests swap in a fake.
How:   Wraps one AsyncSession. A new gateway is built per request by
       `app.dependencies.get_gateway`; there is no module-level instance.

Transactions:
    Methods only add/flush. Services decide when a unit of work is complete
    and call `commit()`.
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import case, delete, func, inspect, select, text, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base
from app.models import STATUS_CHECKED_IN, Confirmation, Invitation, User

logger = logging.getLogger(__name__)


class DataGateway:
    """Async persistence operations for users, invitations and confirmations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    # ── Unit of work ──────────────────────────────────────────────────────

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()

    async def refresh(self, instance: Any) -> None:
        await self.session.refresh(instance)

    async def ping(self) -> None:
        """Round-trip a trivial query; raises if the database is unreachable."""
        await self.session.execute(text("SELECT 1"))

    # ── Users ─────────────────────────────────────────────────────────────

    async def get_user_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_user_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        return await self.session.get(User, user_id)

    async def create_user(self, email: str, password_hash: str, name: str) -> User:
        user = User(email=email, password_hash=password_hash, name=name)
        self.session.add(user)
        await self.session.flush()
        return user

    # ── Invitations ───────────────────────────────────────────────────────

    async def get_invitation_by_id(self, invitation_id: uuid.UUID) -> Optional[Invitation]:
        return await self.session.get(Invitation, invitation_id)

    async def get_invitation_by_code(self, code: str) -> Optional[Invitation]:
        result = await self.session.execute(
            select(Invitation).where(Invitation.invitation_code == code)
        )
        return result.scalar_one_or_none()

    async def invitation_code_exists(self, code: str) -> bool:
        result = await self.session.execute(
            select(Invitation.id).where(Invitation.invitation_code == code)
        )
        return result.first() is not None

    async def list_invitations_for_user(self, user_id: uuid.UUID) -> List[Invitation]:
        """Owner's invitations, newest first."""
        result = await self.session.execute(
            select(Invitation)
            .where(Invitation.user_id == user_id)
            .order_by(Invitation.created_at.desc(), Invitation.id)
        )
        return list(result.scalars().all())

    async def create_invitation(self, **fields: Any) -> Invitation:
        invitation = Invitation(**fields)
        self.session.add(invitation)
        await self.session.flush()
        return invitation

    async def update_invitation(self, invitation: Invitation, changes: Dict[str, Any]) -> Invitation:
        for name, value in changes.items():
            setattr(invitation, name, value)
        await self.session.flush()
        return invitation

    async def delete_invitation(self, invitation: Invitation) -> None:
        """Delete an invitation and every confirmation that belongs to it."""
        await self.session.execute(
            delete(Confirmation).where(Confirmation.invitation_id == invitation.id)
        )
        await self.session.delete(invitation)
        await self.session.flush()

    # ── Confirmations ─────────────────────────────────────────────────────

    async def get_confirmation_by_id(self, confirmation_id: uuid.UUID) -> Optional[Confirmation]:
        return await self.session.get(Confirmation, confirmation_id)

    async def find_confirmation(
        self, invitation_id: uuid.UUID, guest_email: str
    ) -> Optional[Confirmation]:
        result = await self.session.execute(
            select(Confirmation)
            .where(
                Confirmation.invitation_id == invitation_id,
                Confirmation.guest_email == guest_email,
            )
            .order_by(Confirmation.created_at)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def confirmation_code_exists(self, code: str) -> bool:
        result = await self.session.execute(
            select(Confirmation.id).where(Confirmation.confirmation_code == code)
        )
        return result.first() is not None

    async def get_confirmation_with_invitation(
        self, confirmation_code: str
    ) -> Optional[Tuple[Confirmation, Invitation]]:
        result = await self.session.execute(
            select(Confirmation, Invitation)
            .join(Invitation, Confirmation.invitation_id == Invitation.id)
            .where(Confirmation.confirmation_code == confirmation_code)
        )
        row = result.first()
        return (row[0], row[1]) if row else None

    async def get_confirmation_for_check_in(
        self, invitation_code: str, confirmation_code: str
    ) -> Optional[Tuple[Confirmation, Invitation]]:
        """Both codes must point at the same confirmation/invitation pair."""
        result = await self.session.execute(
            select(Confirmation, Invitation)
            .join(Invitation, Confirmation.invitation_id == Invitation.id)
            .where(
                Confirmation.confirmation_code == confirmation_code,
                Invitation.invitation_code == invitation_code,
            )
        )
        row = result.first()
        return (row[0], row[1]) if row else None

    async def list_confirmations(self, invitation_id: uuid.UUID) -> List[Confirmation]:
        result = await self.session.execute(
            select(Confirmation)
            .where(Confirmation.invitation_id == invitation_id)
            .order_by(Confirmation.created_at.desc(), Confirmation.id)
        )
        return list(result.scalars().all())

    async def confirmed_guest_count(self, invitation_id: uuid.UUID) -> int:
        """Confirmed attendees, counting a plus-one as a second guest."""
        result = await self.session.execute(
            select(
                func.coalesce(func.sum(case((Confirmation.plus_one.is_(True), 2), else_=1)), 0)
            ).where(
                Confirmation.invitation_id == invitation_id,
                Confirmation.confirmed.is_(True),
            )
        )
        return int(result.scalar_one())

    async def create_confirmation(self, **fields: Any) -> Confirmation:
        confirmation = Confirmation(**fields)
        self.session.add(confirmation)
        await self.session.flush()
        return confirmation

    async def update_confirmation(
        self, confirmation: Confirmation, changes: Dict[str, Any]
    ) -> Confirmation:
        for name, value in changes.items():
            setattr(confirmation, name, value)
        await self.session.flush()
        return confirmation

    async def mark_checked_in(self, confirmation_id: uuid.UUID, when: datetime) -> bool:
        """
        Flip the check-in latch with a single conditional UPDATE.

        Returns False when the row was already checked in, including when a
        concurrent scan won the race between our read and this write.
        """
        result = await self.session.execute(
            update(Confirmation)
            .where(
                Confirmation.id == confirmation_id,
                Confirmation.status != STATUS_CHECKED_IN,
            )
            .values(status=STATUS_CHECKED_IN, checked_in_at=when, updated_at=when)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def delete_confirmation(self, confirmation: Confirmation) -> None:
        await self.session.delete(confirmation)
        await self.session.flush()

    # ── Diagnostics (debug routes) ────────────────────────────────────────

    async def create_tables(self) -> None:
        """Create missing tables on this session's connection."""
        conn = await self.session.connection()
        await conn.run_sync(Base.metadata.create_all)

    async def connection_info(self) -> Dict[str, Any]:
        conn = await self.session.connection()
        return {
            "url": conn.engine.url.render_as_string(hide_password=True),
            "dialect": conn.dialect.name,
            "driver": conn.dialect.driver,
        }

    async def table_info(self) -> Dict[str, List[str]]:
        """Column names per table, as the connected database reports them."""

        def _inspect(sync_conn) -> Dict[str, List[str]]:
            inspector = inspect(sync_conn)
            return {
                table: [column["name"] for column in inspector.get_columns(table)]
                for table in inspector.get_table_names()
            }

        conn = await self.session.connection()
        return await conn.run_sync(_inspect)

    async def row_counts(self) -> Dict[str, int]:
        counts = {}
        for model in (User, Invitation, Confirmation):
            result = await self.session.execute(select(func.count()).select_from(model))
            counts[model.__tablename__] = int(result.scalar_one())
        return counts
