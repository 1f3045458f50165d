"""
Wedding Invitations Backend — Code Generator
==============================================

What:  Human-readable invitation codes and random confirmation codes.
Who:   InvitationService (invitation codes) and ConfirmationService
       (confirmation codes). The public view also uses the date formatter.

Invitation codes:
    groom initial + bride initial + ceremony date as DDMMYY
    ("John Smith", "Jane Doe", 2024-12-25) → "JD251224"
    Collisions are resolved by InvitationService with a "-N" suffix.

Confirmation codes:
    "CONF" + 8 characters from A-Z0-9, drawn with `secrets`.
"""

import secrets
import string
from datetime import date
from typing import Union

from app.exceptions import ValidationError
from app.utils import parse_date

CONFIRMATION_PREFIX = "CONF"
CONFIRMATION_ALPHABET = string.ascii_uppercase + string.digits
CONFIRMATION_RANDOM_LENGTH = 8

INDONESIAN_DAYS = ["Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu"]
INDONESIAN_MONTHS = [
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
]


def _initial(name: str, field: str) -> str:
    words = (name or "").split()
    if not words:
        raise ValidationError(message=f"{field} is required", field=field)
    return words[0][0].upper()


def invitation_code(
    groom_name: str,
    bride_name: str,
    ceremony_date: Union[date, str],
) -> str:
    """Derive the base invitation code for a couple and ceremony date."""
    groom = _initial(groom_name, "groom_name")
    bride = _initial(bride_name, "bride_name")
    parsed = parse_date(ceremony_date)
    if parsed is None:
        raise ValidationError(message="ceremony_date must be a valid date", field="ceremony_date")
    return f"{groom}{bride}{parsed.strftime('%d%m%y')}"


def confirmation_code() -> str:
    suffix = "".join(
        secrets.choice(CONFIRMATION_ALPHABET) for _ in range(CONFIRMATION_RANDOM_LENGTH)
    )
    return f"{CONFIRMATION_PREFIX}{suffix}"


def format_ceremony_date(value: date) -> str:
    """Long Indonesian date, e.g. "Rabu, 25 Desember 2024"."""
    day_name = INDONESIAN_DAYS[value.weekday()]
    month_name = INDONESIAN_MONTHS[value.month - 1]
    return f"{day_name}, {value.day} {month_name} {value.year}"
