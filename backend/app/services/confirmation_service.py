"""
Wedding Invitations Backend — Confirmation Service
====================================================

What:  The guest RSVP lifecycle: confirm (upsert), look up, list with
       stats, update, delete, and check-in at the venue.
Who:   Called by the /api/confirmations route handlers.

Lifecycle:
    ┌──────────┐  confirm (again)   ┌──────────┐   scan QR    ┌────────────┐
    │  (none)  │───────────────────▶│ pending  │─────────────▶│ checked-in │
    └──────────┘                    └──────────┘   (once)     └────────────┘

    - Confirming is keyed on (invitation, guest email). A second submission
      updates the existing row, keeps its confirmation code and rebuilds
      the QR payload.
    - Check-in is a one-way latch written with a conditional UPDATE, so two
      simultaneous scans of the same code cannot both succeed.

Guest cap:
    A new RSVP with confirmed=true is refused once confirmed guests (each
    counting 1, plus 1 for a plus-one) already reach the invitation's
    max_guests. Updates to existing RSVPs are not capped.
"""

import logging
import uuid
from typing import Tuple

from app.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
    WeddingInvitationError,
)
from app.models import Confirmation, Invitation
from app.schemas.confirmation import (
    CheckInResult,
    ConfirmationDetail,
    ConfirmationList,
    ConfirmationResponse,
    ConfirmationStats,
    ConfirmationUpdate,
    ConfirmRequest,
    ConfirmResult,
)
from app.schemas.invitation import InvitationSummary
from app.services import code_generator, qr_payload
from app.services.gateway import DataGateway
from app.utils import ensure_aware_utc, utc_now

logger = logging.getLogger(__name__)

# Attempts at drawing an unused confirmation code before giving up
CODE_ATTEMPTS = 5

NULLABLE_UPDATE_FIELDS = {"phone", "dietary_restrictions"}


class ConfirmationService:
    def __init__(self, gateway: DataGateway, qr_signing_secret: str = ""):
        self.gateway = gateway
        self.qr_signing_secret = qr_signing_secret

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _new_confirmation_code(self) -> str:
        for _ in range(CODE_ATTEMPTS):
            code = code_generator.confirmation_code()
            if not await self.gateway.confirmation_code_exists(code):
                return code
        raise ConflictError(message="Could not allocate a confirmation code, please retry")

    async def _get_owned(
        self, confirmation_id: uuid.UUID, user_id: uuid.UUID
    ) -> Tuple[Confirmation, Invitation]:
        confirmation = await self.gateway.get_confirmation_by_id(confirmation_id)
        invitation = None
        if confirmation is not None:
            invitation = await self.gateway.get_invitation_by_id(confirmation.invitation_id)
        if confirmation is None or invitation is None or invitation.user_id != user_id:
            raise NotFoundError(resource="confirmation", resource_id=str(confirmation_id))
        return confirmation, invitation

    async def _check_capacity(self, invitation: Invitation, request: ConfirmRequest) -> None:
        if not request.confirmed:
            return
        attending = await self.gateway.confirmed_guest_count(invitation.id)
        arriving = 2 if request.plus_one else 1
        if attending + arriving > invitation.max_guests:
            raise ConflictError(
                message="This invitation has reached its guest limit",
                context={"invitation_id": str(invitation.id), "max_guests": invitation.max_guests},
            )

    # ── Public operations ─────────────────────────────────────────────────

    async def confirm(self, request: ConfirmRequest) -> ConfirmResult:
        """Create or update the guest's RSVP."""
        try:
            invitation = await self.gateway.get_invitation_by_code(request.invitation_code)
            if invitation is None:
                raise NotFoundError(resource="invitation", resource_id=request.invitation_code)

            existing = await self.gateway.find_confirmation(invitation.id, request.guest_email)
            code = existing.confirmation_code if existing else await self._new_confirmation_code()
            qr_data = qr_payload.build(
                invitation_code=invitation.invitation_code,
                confirmation_code=code,
                guest_email=request.guest_email,
                signing_secret=self.qr_signing_secret,
            )
            fields = {
                "guest_name": request.guest_name,
                "phone": request.phone or None,
                "plus_one": request.plus_one,
                "dietary_restrictions": request.dietary_restrictions or None,
                "confirmed": request.confirmed,
                "qr_code_data": qr_data,
            }

            if existing is not None:
                confirmation = await self.gateway.update_confirmation(existing, fields)
            else:
                await self._check_capacity(invitation, request)
                confirmation = await self.gateway.create_confirmation(
                    invitation_id=invitation.id,
                    guest_email=request.guest_email,
                    confirmation_code=code,
                    **fields,
                )
            await self.gateway.commit()
        except WeddingInvitationError:
            raise
        except Exception as e:
            logger.error("Failed to save confirmation: %s", str(e), exc_info=True)
            raise DatabaseError(context={"original_error": type(e).__name__})

        logger.info(
            "Confirmation %s %s for invitation %s",
            confirmation.confirmation_code,
            "updated" if existing else "created",
            invitation.invitation_code,
        )
        return ConfirmResult(
            id=confirmation.id,
            confirmation_code=confirmation.confirmation_code,
            guest_name=confirmation.guest_name,
            guest_email=confirmation.guest_email,
            confirmed=confirmation.confirmed,
            qr_code=confirmation.qr_code_data,
        )

    async def get_by_code(self, confirmation_code: str) -> ConfirmationDetail:
        if not confirmation_code or not confirmation_code.strip():
            raise ValidationError(message="Invalid confirmation code", field="code")
        try:
            found = await self.gateway.get_confirmation_with_invitation(confirmation_code)
        except Exception as e:
            logger.error("Failed to load confirmation: %s", str(e), exc_info=True)
            raise DatabaseError(context={"original_error": type(e).__name__})

        if found is None:
            raise NotFoundError(resource="confirmation", resource_id=confirmation_code)
        confirmation, invitation = found
        base = ConfirmationResponse.model_validate(confirmation)
        return ConfirmationDetail(
            **base.model_dump(),
            invitation=InvitationSummary.model_validate(invitation),
        )

    async def check_in(self, qr_data: str) -> CheckInResult:
        """
        Decode a scanned QR payload and flip the guest to checked-in.

        Raises:
            ValidationError: payload is not a well-formed (or correctly signed) QR payload
            NotFoundError:   codes do not resolve to one confirmation of that invitation
            ConflictError:   guest already checked in; `data` carries the original time
        """
        payload = qr_payload.decode(qr_data, signing_secret=self.qr_signing_secret)

        try:
            found = await self.gateway.get_confirmation_for_check_in(
                payload.invitation_code, payload.confirmation_code
            )
            if found is None:
                raise NotFoundError(
                    resource="confirmation",
                    context={"invitation_code": payload.invitation_code},
                )
            confirmation, invitation = found

            if confirmation.is_checked_in:
                raise self._already_checked_in(confirmation)

            now = utc_now()
            if not await self.gateway.mark_checked_in(confirmation.id, now):
                # Another scan won between our read and the UPDATE
                await self.gateway.refresh(confirmation)
                raise self._already_checked_in(confirmation)

            await self.gateway.commit()
            await self.gateway.refresh(confirmation)
        except WeddingInvitationError:
            raise
        except Exception as e:
            logger.error("Check-in failed: %s", str(e), exc_info=True)
            raise DatabaseError(context={"original_error": type(e).__name__})

        logger.info("Guest checked in: %s", confirmation.confirmation_code)
        return CheckInResult(
            id=confirmation.id,
            confirmation_code=confirmation.confirmation_code,
            guest_name=confirmation.guest_name,
            guest_email=confirmation.guest_email,
            phone=confirmation.phone,
            plus_one=confirmation.plus_one,
            dietary_restrictions=confirmation.dietary_restrictions,
            status=confirmation.status,
            checked_in_at=ensure_aware_utc(confirmation.checked_in_at) or now,
            invitation=InvitationSummary.model_validate(invitation),
        )

    @staticmethod
    def _already_checked_in(confirmation: Confirmation) -> ConflictError:
        checked_in_at = ensure_aware_utc(confirmation.checked_in_at)
        return ConflictError(
            message="Guest already checked in",
            data={
                "guest_name": confirmation.guest_name,
                "checked_in_at": checked_in_at.isoformat() if checked_in_at else None,
            },
            context={"confirmation_code": confirmation.confirmation_code},
        )

    # ── Owner operations ──────────────────────────────────────────────────

    async def list_for_invitation(
        self, invitation_id: uuid.UUID, user_id: uuid.UUID
    ) -> ConfirmationList:
        try:
            invitation = await self.gateway.get_invitation_by_id(invitation_id)
            if invitation is None or invitation.user_id != user_id:
                raise NotFoundError(resource="invitation", resource_id=str(invitation_id))
            rows = await self.gateway.list_confirmations(invitation_id)
        except WeddingInvitationError:
            raise
        except Exception as e:
            logger.error("Failed to list confirmations: %s", str(e), exc_info=True)
            raise DatabaseError(context={"original_error": type(e).__name__})

        stats = ConfirmationStats(
            total=len(rows),
            confirmed=sum(1 for c in rows if c.confirmed),
            pending=sum(1 for c in rows if not c.confirmed),
            with_plus_one=sum(1 for c in rows if c.plus_one),
            checked_in=sum(1 for c in rows if c.is_checked_in),
        )
        return ConfirmationList(
            confirmations=[ConfirmationResponse.model_validate(c) for c in rows],
            stats=stats,
        )

    async def update(
        self,
        confirmation_id: uuid.UUID,
        user_id: uuid.UUID,
        payload: ConfirmationUpdate,
    ) -> ConfirmationResponse:
        changes = {
            name: value
            for name, value in payload.model_dump(exclude_unset=True).items()
            if value is not None or name in NULLABLE_UPDATE_FIELDS
        }
        try:
            confirmation, _ = await self._get_owned(confirmation_id, user_id)
            if changes:
                confirmation = await self.gateway.update_confirmation(confirmation, changes)
                await self.gateway.commit()
                await self.gateway.refresh(confirmation)
        except WeddingInvitationError:
            raise
        except Exception as e:
            logger.error("Failed to update confirmation %s: %s", confirmation_id, str(e), exc_info=True)
            raise DatabaseError(context={"original_error": type(e).__name__})

        return ConfirmationResponse.model_validate(confirmation)

    async def delete(self, confirmation_id: uuid.UUID, user_id: uuid.UUID) -> None:
        try:
            confirmation, _ = await self._get_owned(confirmation_id, user_id)
            await self.gateway.delete_confirmation(confirmation)
            await self.gateway.commit()
        except WeddingInvitationError:
            raise
        except Exception as e:
            logger.error("Failed to delete confirmation %s: %s", confirmation_id, str(e), exc_info=True)
            raise DatabaseError(context={"original_error": type(e).__name__})

        logger.info("Confirmation %s deleted", confirmation_id)
