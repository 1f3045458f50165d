"""
Wedding Invitations Backend — Confirmation Route Handlers
===========================================================

What:  Guest RSVP and venue check-in (public), plus owner listing and edits.

Public:  POST /confirm, POST /check-in, GET /{confirmation_code}
Owner:   GET /invitations/{invitation_id}, PUT /{id}, DELETE /{id}

`/check-in` and `/invitations/...` are declared before `/{confirmation_code}`.
"""

import logging
import uuid

from fastapi import APIRouter, Depends

from app.dependencies import get_confirmation_service, get_current_user_id
from app.schemas.common import ErrorResponse, StandardResponse
from app.schemas.confirmation import (
    CheckInRequest,
    CheckInResult,
    ConfirmationDetail,
    ConfirmationList,
    ConfirmationResponse,
    ConfirmationUpdate,
    ConfirmRequest,
    ConfirmResult,
)
from app.services.confirmation_service import ConfirmationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/confirmations", tags=["Confirmations"])

_owner_errors = {
    401: {"description": "Missing or invalid token", "model": ErrorResponse},
    404: {"description": "Not found or not owned", "model": ErrorResponse},
}


@router.post(
    "/confirm",
    status_code=201,
    response_model=StandardResponse[ConfirmResult],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Submit or update a guest's RSVP",
)
async def confirm_attendance(
    body: ConfirmRequest,
    service: ConfirmationService = Depends(get_confirmation_service),
) -> StandardResponse[ConfirmResult]:
    """
    Upsert keyed on (invitation, guest email). Always 201, whether the RSVP
    was new or an update, because existing RSVP pages rely on that code.
    """
    result = await service.confirm(body)
    return StandardResponse(message="Attendance confirmed successfully", data=result)


@router.post(
    "/check-in",
    response_model=StandardResponse[CheckInResult],
    responses={
        400: {"description": "Malformed QR or already checked in", "model": ErrorResponse},
        404: {"description": "Codes do not match a confirmation", "model": ErrorResponse},
    },
    summary="Check a guest in by scanned QR payload",
)
async def check_in(
    body: CheckInRequest,
    service: ConfirmationService = Depends(get_confirmation_service),
) -> StandardResponse[CheckInResult]:
    result = await service.check_in(body.qr_code)
    return StandardResponse(message="Guest checked in successfully", data=result)


@router.get(
    "/invitations/{invitation_id}",
    response_model=StandardResponse[ConfirmationList],
    responses=_owner_errors,
    summary="All confirmations of an owned invitation, with stats",
)
async def list_confirmations(
    invitation_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    service: ConfirmationService = Depends(get_confirmation_service),
) -> StandardResponse[ConfirmationList]:
    listing = await service.list_for_invitation(invitation_id, user_id)
    return StandardResponse(message="Confirmations retrieved successfully", data=listing)


@router.get(
    "/{confirmation_code}",
    response_model=StandardResponse[ConfirmationDetail],
    responses={404: {"model": ErrorResponse}},
    summary="Look up a confirmation by its code",
)
async def get_confirmation(
    confirmation_code: str,
    service: ConfirmationService = Depends(get_confirmation_service),
) -> StandardResponse[ConfirmationDetail]:
    detail = await service.get_by_code(confirmation_code)
    return StandardResponse(message="Confirmation retrieved successfully", data=detail)


@router.put(
    "/{confirmation_id}",
    response_model=StandardResponse[ConfirmationResponse],
    responses=_owner_errors,
    summary="Update a guest's confirmation",
)
async def update_confirmation(
    confirmation_id: uuid.UUID,
    body: ConfirmationUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    service: ConfirmationService = Depends(get_confirmation_service),
) -> StandardResponse[ConfirmationResponse]:
    confirmation = await service.update(confirmation_id, user_id, body)
    return StandardResponse(message="Confirmation updated successfully", data=confirmation)


@router.delete(
    "/{confirmation_id}",
    response_model=StandardResponse[None],
    responses=_owner_errors,
    summary="Delete a guest's confirmation",
)
async def delete_confirmation(
    confirmation_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    service: ConfirmationService = Depends(get_confirmation_service),
) -> StandardResponse[None]:
    await service.delete(confirmation_id, user_id)
    return StandardResponse(message="Confirmation deleted successfully", data=None)
