"""
Wedding Invitations Backend — FastAPI Dependencies
====================================================

What:  Builds the per-request objects route handlers depend on.
How:   session → DataGateway → service, resolved by FastAPI's Depends.
       Settings are reached through `get_settings` so tests can override
       them with `app.dependency_overrides`.

Auth guard:
    `get_current_claims` reads `Authorization: Bearer <token>` and raises
    AuthenticationError (401) when the header is missing or the token does
    not verify. Owner-scoped routes depend on `get_current_user_id`.
"""

import uuid
from typing import Any, Dict, Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, settings
from app.database import get_db_session
from app.exceptions import AuthenticationError
from app.services.auth_service import AuthService
from app.services.confirmation_service import ConfirmationService
from app.services.gateway import DataGateway
from app.services.invitation_service import InvitationService
from app.services.token_service import TokenService


def get_settings() -> Settings:
    return settings


def get_gateway(session: AsyncSession = Depends(get_db_session)) -> DataGateway:
    return DataGateway(session)


def get_token_service(config: Settings = Depends(get_settings)) -> TokenService:
    return TokenService(
        secret=config.jwt_secret,
        algorithm=config.jwt_algorithm,
        ttl_seconds=config.access_token_ttl_seconds,
    )


def get_auth_service(
    gateway: DataGateway = Depends(get_gateway),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(gateway, tokens)


def get_invitation_service(
    gateway: DataGateway = Depends(get_gateway),
    config: Settings = Depends(get_settings),
) -> InvitationService:
    return InvitationService(
        gateway,
        public_base_url=config.public_base_url,
        default_max_guests=config.default_max_guests,
        max_code_suffix=config.invitation_code_max_suffix,
    )


def get_confirmation_service(
    gateway: DataGateway = Depends(get_gateway),
    config: Settings = Depends(get_settings),
) -> ConfirmationService:
    return ConfirmationService(gateway, qr_signing_secret=config.qr_signing_secret)


def get_bearer_token(
    authorization: Optional[str] = Header(default=None),
) -> str:
    token = TokenService.extract_bearer(authorization)
    if token is None:
        raise AuthenticationError(message="Missing authorization token")
    return token


def get_current_claims(
    token: str = Depends(get_bearer_token),
    tokens: TokenService = Depends(get_token_service),
) -> Dict[str, Any]:
    """Verified token claims; raises 401 for anything else."""
    result = tokens.verify(token)
    if not result.success or result.payload is None:
        raise AuthenticationError(message=result.error or "Invalid or expired token")
    return result.payload


def get_current_user_id(claims: Dict[str, Any] = Depends(get_current_claims)) -> uuid.UUID:
    try:
        return uuid.UUID(claims["sub"])
    except (KeyError, ValueError):
        raise AuthenticationError(message="Token subject is not a valid user id")
