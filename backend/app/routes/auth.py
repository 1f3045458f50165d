"""
Wedding Invitations Backend — Auth Route Handlers
===================================================

What:  Account registration, login, token verification and profile.
Who:   The couple/planner dashboard. Guests never authenticate.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends

from app.dependencies import get_auth_service, get_bearer_token, get_current_claims
from app.schemas.auth import (
    AuthResult,
    LoginRequest,
    RegisterRequest,
    TokenStatus,
    UserProfile,
)
from app.schemas.common import ErrorResponse, StandardResponse
from app.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/register",
    status_code=201,
    response_model=StandardResponse[AuthResult],
    responses={400: {"model": ErrorResponse}},
    summary="Create an account",
)
async def register(
    body: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> StandardResponse[AuthResult]:
    result = await service.register(email=body.email, password=body.password, name=body.name)
    return StandardResponse(message="User registered successfully", data=result)


@router.post(
    "/login",
    response_model=StandardResponse[AuthResult],
    responses={401: {"model": ErrorResponse}},
    summary="Exchange email and password for a bearer token",
)
async def login(
    body: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> StandardResponse[AuthResult]:
    result = await service.login(email=body.email, password=body.password)
    return StandardResponse(message="Login successful", data=result)


@router.post(
    "/verify",
    response_model=StandardResponse[TokenStatus],
    responses={401: {"model": ErrorResponse}},
    summary="Check whether a bearer token is still valid",
)
async def verify(
    token: str = Depends(get_bearer_token),
    service: AuthService = Depends(get_auth_service),
) -> StandardResponse[TokenStatus]:
    payload = service.verify(token)
    return StandardResponse(message="Token is valid", data=TokenStatus(valid=True, payload=payload))


@router.get(
    "/me",
    response_model=StandardResponse[UserProfile],
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Profile of the authenticated user",
)
async def me(
    claims: Dict[str, Any] = Depends(get_current_claims),
    service: AuthService = Depends(get_auth_service),
) -> StandardResponse[UserProfile]:
    profile = await service.me(claims)
    return StandardResponse(message="User retrieved successfully", data=profile)
