"""
Wedding Invitations Backend — Invitation Service
==================================================

What:  Invitation CRUD for owners plus the public, unauthenticated view.
Who:   Called by the /api/invitations route handlers.

Ownership:
    Every owner-scoped method loads the row first and compares `user_id`
    with the caller. A row that exists but belongs to someone else raises
    the same NotFoundError as a missing row.

Invitation codes:
    The base code (see code_generator.invitation_code) is tried first.
    When another wedding already uses it, "-2", "-3", ... are appended up to
    `invitation_code_max_suffix`; past that the create fails with a
    ConflictError. Codes are assigned once and never change on update.
"""

import logging
import uuid
from typing import Any, Dict, List

from app.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
    WeddingInvitationError,
)
from app.models import Invitation
from app.schemas.invitation import (
    InvitationCreate,
    InvitationResponse,
    InvitationUpdate,
    PublicInvitation,
)
from app.services import code_generator
from app.services.gateway import DataGateway

logger = logging.getLogger(__name__)

MIN_CODE_LENGTH = 5

# Columns that accept an explicit null in an update body
NULLABLE_UPDATE_FIELDS = {"description"}


def check_code_shape(code: str) -> None:
    if not code or len(code) < MIN_CODE_LENGTH:
        raise ValidationError(message="Invalid invitation code", field="code")


class InvitationService:
    def __init__(
        self,
        gateway: DataGateway,
        public_base_url: str = "",
        default_max_guests: int = 100,
        max_code_suffix: int = 99,
    ):
        self.gateway = gateway
        self.public_base_url = public_base_url
        self.default_max_guests = default_max_guests
        self.max_code_suffix = max_code_suffix

    # ── Helpers ───────────────────────────────────────────────────────────

    def _to_response(self, invitation: Invitation) -> InvitationResponse:
        response = InvitationResponse.model_validate(invitation)
        if self.public_base_url:
            response.share_url = (
                f"{self.public_base_url}/api/invitations/view/{invitation.invitation_code}"
            )
        return response

    async def _allocate_code(self, base_code: str) -> str:
        if not await self.gateway.invitation_code_exists(base_code):
            return base_code
        for n in range(2, self.max_code_suffix + 1):
            candidate = f"{base_code}-{n}"
            if not await self.gateway.invitation_code_exists(candidate):
                logger.info("Invitation code %s taken, using %s", base_code, candidate)
                return candidate
        raise ConflictError(
            message="Could not allocate a unique invitation code for this couple and date",
            context={"base_code": base_code},
        )

    async def _get_owned(self, invitation_id: uuid.UUID, user_id: uuid.UUID) -> Invitation:
        invitation = await self.gateway.get_invitation_by_id(invitation_id)
        if invitation is None or invitation.user_id != user_id:
            raise NotFoundError(resource="invitation", resource_id=str(invitation_id))
        return invitation

    # ── Operations ────────────────────────────────────────────────────────

    async def create(self, user_id: uuid.UUID, payload: InvitationCreate) -> InvitationResponse:
        base_code = code_generator.invitation_code(
            payload.groom_name, payload.bride_name, payload.ceremony_date
        )
        try:
            code = await self._allocate_code(base_code)
            invitation = await self.gateway.create_invitation(
                user_id=user_id,
                invitation_code=code,
                groom_name=payload.groom_name,
                bride_name=payload.bride_name,
                ceremony_date=payload.ceremony_date,
                ceremony_time=payload.ceremony_time,
                location=payload.location,
                description=payload.description or None,
                max_guests=payload.max_guests or self.default_max_guests,
            )
            await self.gateway.commit()
        except WeddingInvitationError:
            raise
        except Exception as e:
            logger.error("Failed to create invitation: %s", str(e), exc_info=True)
            raise DatabaseError(context={"original_error": type(e).__name__})

        logger.info("Invitation %s created with code %s", invitation.id, invitation.invitation_code)
        return self._to_response(invitation)

    async def list_for_owner(self, user_id: uuid.UUID) -> List[InvitationResponse]:
        try:
            invitations = await self.gateway.list_invitations_for_user(user_id)
        except Exception as e:
            logger.error("Failed to list invitations: %s", str(e), exc_info=True)
            raise DatabaseError(context={"original_error": type(e).__name__})
        return [self._to_response(invitation) for invitation in invitations]

    async def get_public(self, code: str) -> PublicInvitation:
        """Guest-facing view by code; no authentication."""
        check_code_shape(code)
        try:
            invitation = await self.gateway.get_invitation_by_code(code)
        except Exception as e:
            logger.error("Failed to load invitation %s: %s", code, str(e), exc_info=True)
            raise DatabaseError(context={"original_error": type(e).__name__})

        if invitation is None:
            raise NotFoundError(resource="invitation", resource_id=code)

        return PublicInvitation(
            invitation_code=invitation.invitation_code,
            groom_name=invitation.groom_name,
            bride_name=invitation.bride_name,
            ceremony_date=invitation.ceremony_date,
            ceremony_time=invitation.ceremony_time,
            location=invitation.location,
            description=invitation.description,
            max_guests=invitation.max_guests,
            ceremony_date_formatted=code_generator.format_ceremony_date(invitation.ceremony_date),
        )

    async def get_owned_by_code(self, code: str, user_id: uuid.UUID) -> InvitationResponse:
        check_code_shape(code)
        try:
            invitation = await self.gateway.get_invitation_by_code(code)
        except Exception as e:
            logger.error("Failed to load invitation %s: %s", code, str(e), exc_info=True)
            raise DatabaseError(context={"original_error": type(e).__name__})

        if invitation is None or invitation.user_id != user_id:
            raise NotFoundError(resource="invitation", resource_id=code)
        return self._to_response(invitation)

    async def update(
        self,
        invitation_id: uuid.UUID,
        user_id: uuid.UUID,
        payload: InvitationUpdate,
    ) -> InvitationResponse:
        """Apply only the fields the client sent."""
        changes: Dict[str, Any] = {
            name: value
            for name, value in payload.model_dump(exclude_unset=True).items()
            if value is not None or name in NULLABLE_UPDATE_FIELDS
        }
        try:
            invitation = await self._get_owned(invitation_id, user_id)
            if changes:
                invitation = await self.gateway.update_invitation(invitation, changes)
                await self.gateway.commit()
                await self.gateway.refresh(invitation)
        except WeddingInvitationError:
            raise
        except Exception as e:
            logger.error("Failed to update invitation %s: %s", invitation_id, str(e), exc_info=True)
            raise DatabaseError(context={"original_error": type(e).__name__})

        logger.info("Invitation %s updated: %s", invitation_id, sorted(changes))
        return self._to_response(invitation)

    async def delete(self, invitation_id: uuid.UUID, user_id: uuid.UUID) -> None:
        """Delete an owned invitation together with its confirmations."""
        try:
            invitation = await self._get_owned(invitation_id, user_id)
            await self.gateway.delete_invitation(invitation)
            await self.gateway.commit()
        except WeddingInvitationError:
            raise
        except Exception as e:
            logger.error("Failed to delete invitation %s: %s", invitation_id, str(e), exc_info=True)
            raise DatabaseError(context={"original_error": type(e).__name__})

        logger.info("Invitation %s deleted", invitation_id)

