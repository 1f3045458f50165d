"""
Wedding Invitations Backend — Shared Response Envelopes
=========================================================

What:  The success and error envelopes every endpoint returns.
Why:   Clients branch on `status` before reading `data`, so every response,
       including errors raised deep inside a service, uses one of these two
       shapes.

    success: {"status": "success", "message": ..., "data": ...}
    error:   {"status": "error", "message": ..., "error": ..., "request_id": ..., "data"?: ...}
"""

from typing import Annotated, Any, Generic, Optional, TypeVar

from pydantic import BaseModel, Field, StringConstraints

T = TypeVar("T")

# Required text field: surrounding whitespace stripped, must not be empty
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class StandardResponse(BaseModel, Generic[T]):
    status: str = Field(default="success")
    message: str
    data: Optional[T] = None


class ErrorResponse(BaseModel):
    """
    What:  Standard error response format.
    Who:   Built by the exception handlers in main.py.

    `error` is a short machine-readable code ("validation_error",
    "not_found", ...). `data` appears only when the error carries extra
    context for the client, such as the original check-in time.
    """

    status: str = Field(default="error")
    message: str = Field(description="Human-readable error message")
    error: str = Field(description="Machine-readable error code")
    request_id: Optional[str] = Field(default=None, description="Correlates with server logs")
    data: Optional[Any] = None


class HealthResponse(BaseModel):
    """Returned by GET /health; not wrapped in the success envelope."""

    status: str = Field(description="healthy or unhealthy")
    version: str
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float
