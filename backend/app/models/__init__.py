"""ORM models. Importing this package registers every table on `Base.metadata`."""

from app.models.confirmation import STATUS_CHECKED_IN, STATUS_PENDING, Confirmation
from app.models.invitation import Invitation
from app.models.user import User

__all__ = [
    "Confirmation",
    "Invitation",
    "STATUS_CHECKED_IN",
    "STATUS_PENDING",
    "User",
]
