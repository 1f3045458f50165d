"""
Wedding Invitations Backend — Invitation Route Handlers
=========================================================

What:  Owner CRUD under /api/invitations plus the public guest view.

Route order matters: `/view/{code}` is declared before `/{code}` so the
public path is never captured as an owner lookup.
"""

import logging
import uuid
from typing import List

from fastapi import APIRouter, Depends

from app.dependencies import get_current_user_id, get_invitation_service
from app.schemas.common import ErrorResponse, StandardResponse
from app.schemas.invitation import (
    InvitationCreate,
    InvitationResponse,
    InvitationUpdate,
    PublicInvitation,
)
from app.services.invitation_service import InvitationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/invitations", tags=["Invitations"])

_owner_errors = {
    401: {"description": "Missing or invalid token", "model": ErrorResponse},
    404: {"description": "Not found or not owned", "model": ErrorResponse},
}


@router.post(
    "",
    status_code=201,
    response_model=StandardResponse[InvitationResponse],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    summary="Create an invitation",
)
async def create_invitation(
    body: InvitationCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    service: InvitationService = Depends(get_invitation_service),
) -> StandardResponse[InvitationResponse]:
    invitation = await service.create(user_id, body)
    return StandardResponse(message="Invitation created successfully", data=invitation)


@router.get(
    "",
    response_model=StandardResponse[List[InvitationResponse]],
    responses={401: {"model": ErrorResponse}},
    summary="List the caller's invitations, newest first",
)
async def list_invitations(
    user_id: uuid.UUID = Depends(get_current_user_id),
    service: InvitationService = Depends(get_invitation_service),
) -> StandardResponse[List[InvitationResponse]]:
    invitations = await service.list_for_owner(user_id)
    return StandardResponse(message="Invitations retrieved successfully", data=invitations)


@router.get(
    "/view/{code}",
    response_model=StandardResponse[PublicInvitation],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Public invitation page data (no authentication)",
)
async def view_invitation(
    code: str,
    service: InvitationService = Depends(get_invitation_service),
) -> StandardResponse[PublicInvitation]:
    invitation = await service.get_public(code)
    return StandardResponse(message="Invitation retrieved successfully", data=invitation)


@router.get(
    "/{code}",
    response_model=StandardResponse[InvitationResponse],
    responses={400: {"model": ErrorResponse}, **_owner_errors},
    summary="Owner view of an invitation by code",
)
async def get_invitation(
    code: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    service: InvitationService = Depends(get_invitation_service),
) -> StandardResponse[InvitationResponse]:
    invitation = await service.get_owned_by_code(code, user_id)
    return StandardResponse(message="Invitation retrieved successfully", data=invitation)


@router.put(
    "/{invitation_id}",
    response_model=StandardResponse[InvitationResponse],
    responses=_owner_errors,
    summary="Partially update an invitation",
)
async def update_invitation(
    invitation_id: uuid.UUID,
    body: InvitationUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    service: InvitationService = Depends(get_invitation_service),
) -> StandardResponse[InvitationResponse]:
    invitation = await service.update(invitation_id, user_id, body)
    return StandardResponse(message="Invitation updated successfully", data=invitation)


@router.delete(
    "/{invitation_id}",
    response_model=StandardResponse[None],
    responses=_owner_errors,
    summary="Delete an invitation and its confirmations",
)
async def delete_invitation(
    invitation_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    service: InvitationService = Depends(get_invitation_service),
) -> StandardResponse[None]:
    await service.delete(invitation_id, user_id)
    return StandardResponse(message="Invitation deleted successfully", data=None)
