"""Small time helpers shared by models, services and schemas."""

import logging
from datetime import date, datetime, timezone
from typing import Optional, Union

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_aware_utc(dt_value: Optional[datetime]) -> Optional[datetime]:
    """
    Attach UTC to naive datetimes read back from the database.

    SQLite drops tzinfo on round-trip; PostgreSQL returns aware values,
    which are normalized to UTC here as well.
    """
    if dt_value is None:
        return None
    if dt_value.tzinfo is None:
        return dt_value.replace(tzinfo=timezone.utc)
    return dt_value.astimezone(timezone.utc)


def parse_date(value: Union[date, datetime, str, None]) -> Optional[date]:
    """
    Parse a ceremony date given as `date`, `datetime` or ISO string.

    Returns None when the value cannot be interpreted; callers decide
    whether that is a validation error.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            logger.debug(f"Unparseable date string: {text!r}")
            return None
    return None
