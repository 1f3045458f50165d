"""
Wedding Invitations Backend — Auth Service
============================================

What:  Account registration, login, token verification and profile lookup.
Who:   Called by the /api/auth route handlers.

Flow:
    register → hash password → insert user → issue token
    login    → load by email → verify password → issue token
    me       → load the user named by the token's `sub` claim

Login failures for unknown emails and wrong passwords produce the same
401 message so the endpoint cannot be used to probe which emails exist.
"""

import logging
import uuid
from typing import Any, Dict

from sqlalchemy.exc import IntegrityError

from app.exceptions import (
    AuthenticationError,
    ConflictError,
    DatabaseError,
    NotFoundError,
    WeddingInvitationError,
)
from app.models import User
from app.schemas.auth import AuthResult, UserProfile, UserPublic
from app.services.credentials import hash_password, verify_password
from app.services.gateway import DataGateway
from app.services.token_service import TokenService

logger = logging.getLogger(__name__)


class AuthService:
    """Stateless per request; holds the gateway and token service it was built with."""

    def __init__(self, gateway: DataGateway, tokens: TokenService):
        self.gateway = gateway
        self.tokens = tokens

    def _issue_for(self, user: User) -> str:
        return self.tokens.issue({"sub": str(user.id), "email": user.email, "role": user.role})

    async def register(self, email: str, password: str, name: str) -> AuthResult:
        """
        Create an account and return it with a fresh token.

        Raises:
            ConflictError: email already registered (including a concurrent
                registration that wins the unique-index race)
        """
        try:
            if await self.gateway.get_user_by_email(email) is not None:
                raise ConflictError(message="Email already registered", context={"email": email})

            user = await self.gateway.create_user(
                email=email,
                password_hash=hash_password(password),
                name=name,
            )
            await self.gateway.commit()
        except IntegrityError:
            await self.gateway.rollback()
            raise ConflictError(message="Email already registered", context={"email": email})
        except WeddingInvitationError:
            raise
        except Exception as e:
            logger.error("Failed to register user: %s", str(e), exc_info=True)
            raise DatabaseError(context={"original_error": type(e).__name__})

        logger.info("User registered: %s", user.id)
        return AuthResult(user=UserPublic.model_validate(user), token=self._issue_for(user))

    async def login(self, email: str, password: str) -> AuthResult:
        try:
            user = await self.gateway.get_user_by_email(email)
        except Exception as e:
            logger.error("Failed to load user for login: %s", str(e), exc_info=True)
            raise DatabaseError(context={"original_error": type(e).__name__})

        if user is None or not verify_password(password, user.password_hash):
            raise AuthenticationError(message="Invalid email or password")

        logger.info("User logged in: %s", user.id)
        return AuthResult(user=UserPublic.model_validate(user), token=self._issue_for(user))

    def verify(self, token: str) -> Dict[str, Any]:
        """Return the claims of a valid token, or raise AuthenticationError."""
        result = self.tokens.verify(token)
        if not result.success or result.payload is None:
            raise AuthenticationError(message=result.error or "Invalid or expired token")
        return result.payload

    async def me(self, claims: Dict[str, Any]) -> UserProfile:
        """Load the account identified by the token's subject."""
        try:
            user_id = uuid.UUID(claims["sub"])
        except (KeyError, ValueError):
            raise AuthenticationError(message="Token subject is not a valid user id")

        try:
            user = await self.gateway.get_user_by_id(user_id)
        except Exception as e:
            logger.error("Failed to load user %s: %s", user_id, str(e), exc_info=True)
            raise DatabaseError(context={"original_error": type(e).__name__})

        if user is None:
            raise NotFoundError(resource="user", resource_id=str(user_id))
        return UserProfile.model_validate(user)
