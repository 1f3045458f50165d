"""
Wedding Invitations Backend — Custom Exception Hierarchy
==========================================================

What:  Application-specific exceptions for every error scenario.
Why:   Services raise these instead of returning error dicts; global handlers
       registered in main.py turn them into the error envelope with the right
       HTTP status code.
How:   Each exception carries a user-safe message and an optional context dict
       (logged server-side, never returned to the client).

Exception Hierarchy:
    WeddingInvitationError (base)
    ├── ValidationError          → 400 Bad Request
    ├── ConflictError            → 400 Bad Request (duplicate email, double check-in)
    ├── AuthenticationError      → 401 Unauthorized
    ├── NotFoundError            → 404 Not Found (also used for "not yours")
    ├── ConfigurationError       → 500 Internal Server Error
    └── DatabaseError            → 500 Internal Server Error

Ownership failures are deliberately raised as NotFoundError so that a caller
cannot distinguish "does not exist" from "belongs to someone else".
"""

from typing import Any, Dict, Optional


class WeddingInvitationError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(WeddingInvitationError):
    """
    Raised when client input fails validation.

    When:    Missing fields, malformed invitation codes, undecodable QR payloads.
    HTTP:    400 Bad Request
    """

    status_code = 400
    error_code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class ConflictError(WeddingInvitationError):
    """
    Raised when a request collides with existing state.

    When:    Email already registered, guest already checked in, guest cap reached.
    HTTP:    400 Bad Request (existing clients branch on 400, not 409)

    `data` is returned to the client alongside the error; for a repeated
    check-in it carries the original `checked_in_at` timestamp.
    """

    status_code = 400
    error_code = "conflict"

    def __init__(
        self,
        message: str = "The request conflicts with existing data",
        data: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.data = data


class AuthenticationError(WeddingInvitationError):
    """
    Raised when the bearer token is missing, invalid, or expired, or when
    login credentials do not match.

    HTTP:    401 Unauthorized
    """

    status_code = 401
    error_code = "authentication_failed"

    def __init__(
        self,
        message: str = "Invalid or expired token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(WeddingInvitationError):
    """
    Raised when a requested resource does not exist or is not owned by the caller.

    HTTP:    404 Not Found
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource


class ConfigurationError(WeddingInvitationError):
    """
    Raised when a required setting (e.g. JWT_SECRET) is missing at the point of use.

    HTTP:    500 Internal Server Error
    """

    error_code = "configuration_error"

    def __init__(
        self,
        message: str = "Server is not configured correctly",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(WeddingInvitationError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        The original exception type is kept in `context` and logged only.
    """

    error_code = "server_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
