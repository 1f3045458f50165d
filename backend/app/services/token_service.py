"""
Wedding Invitations Backend — Token Service
=============================================

What:  Issues and verifies the HS256 bearer tokens used by the API.
Why:   Keeps every JWT detail (library, algorithm, claim checks) behind one
       small class so routes and dependencies only see success/failure.
How:   python-jose signs and decodes; the secret is passed in by the caller
       (see app.dependencies.get_token_service), never read from a global.

Claims:
    sub    user id (string), required
    email  user email, required
    role   optional
    iat    issued-at (unix seconds)
    exp    iat + ttl
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from app.exceptions import ConfigurationError
from app.utils import utc_now

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 86_400


@dataclass
class TokenVerification:
    """Outcome of `TokenService.verify`. `payload` is set only on success."""

    success: bool
    payload: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


class TokenService:
    """
    Stateless JWT issuer/verifier bound to one secret.

    Raises ConfigurationError on use when the secret is empty; there is
    no fallback key.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.ttl_seconds = ttl_seconds

    def _require_secret(self) -> str:
        if not self.secret:
            logger.error("JWT secret is not configured")
            raise ConfigurationError(
                message="Authentication is not configured on this server",
                context={"setting": "JWT_SECRET"},
            )
        return self.secret

    def issue(
        self,
        claims: Dict[str, Any],
        ttl_seconds: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> str:
        """
        Sign `claims` into a compact JWT.

        `now` exists so tests can mint already-expired tokens.
        """
        secret = self._require_secret()
        issued_at = now or utc_now()
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds

        payload = dict(claims)
        payload["iat"] = int(issued_at.timestamp())
        payload["exp"] = int((issued_at + timedelta(seconds=ttl)).timestamp())
        return jwt.encode(payload, secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenVerification:
        """Check signature, expiry and required claims; never raises for bad tokens."""
        secret = self._require_secret()
        try:
            payload = jwt.decode(token, secret, algorithms=[self.algorithm])
        except JWTError as e:
            return TokenVerification(success=False, error=str(e) or "Invalid token")

        if not isinstance(payload.get("sub"), str) or not isinstance(payload.get("email"), str):
            return TokenVerification(success=False, error="Token payload is missing sub or email")

        return TokenVerification(success=True, payload=payload)

    @staticmethod
    def extract_bearer(header: Optional[str]) -> Optional[str]:
        """Return the token from `Bearer <token>`, or None for any other shape."""
        if not header:
            return None
        parts = header.split(" ")
        if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
            return None
        return parts[1]
