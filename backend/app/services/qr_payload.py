"""
Wedding Invitations Backend — QR Payload Codec
================================================

What:  Builds, encodes and decodes the text carried by a guest's QR code.
Why:   The check-in scanner only ever sees this string, so its format is
       the contract between the RSVP page and the door staff app.

Wire format:
    data:text/plain;base64,<base64(JSON)>

    JSON object:
        type               "wedding_confirmation"
        invitation_code    e.g. "JD251224"
        confirmation_code  e.g. "CONFAB12CD34"
        guest_email
        timestamp          ISO 8601, when the payload was built
        signature          hex HMAC-SHA256, only when a signing secret is set

Signing:
    The signature covers type, invitation_code, confirmation_code,
    guest_email and timestamp joined with "|". With a secret configured,
    `decode` rejects payloads whose signature is missing or wrong.
"""

import base64
import binascii
import hashlib
import hmac
import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from app.exceptions import ValidationError
from app.utils import utc_now

DATA_URL_PREFIX = "data:text/plain;base64,"
PAYLOAD_TYPE = "wedding_confirmation"
SIGNED_FIELDS = ("type", "invitation_code", "confirmation_code", "guest_email", "timestamp")


@dataclass
class QRPayload:
    invitation_code: str
    confirmation_code: str
    guest_email: Optional[str] = None
    timestamp: Optional[str] = None


def _signature(fields: Dict[str, Any], secret: str) -> str:
    message = "|".join(str(fields.get(name) or "") for name in SIGNED_FIELDS)
    return hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).hexdigest()


def build(
    invitation_code: str,
    confirmation_code: str,
    guest_email: str,
    signing_secret: str = "",
    now: Optional[datetime] = None,
) -> str:
    """Return the full data-URL string to embed in a confirmation."""
    fields: Dict[str, Any] = {
        "type": PAYLOAD_TYPE,
        "invitation_code": invitation_code,
        "confirmation_code": confirmation_code,
        "guest_email": guest_email,
        "timestamp": (now or utc_now()).isoformat(),
    }
    if signing_secret:
        fields["signature"] = _signature(fields, signing_secret)

    encoded = base64.b64encode(json.dumps(fields).encode("utf-8")).decode("ascii")
    return f"{DATA_URL_PREFIX}{encoded}"


def decode(qr_data: str, signing_secret: str = "") -> QRPayload:
    """
    Parse a scanned payload, with or without the data-URL prefix.

    Raises:
        ValidationError: for anything that is not a well-formed payload.
    """
    if not isinstance(qr_data, str) or not qr_data.strip():
        raise ValidationError(message="QR code data is required", field="qr_data")

    raw = qr_data.strip()
    if raw.startswith(DATA_URL_PREFIX):
        raw = raw[len(DATA_URL_PREFIX):]

    try:
        decoded = base64.b64decode(raw, validate=True)
        fields = json.loads(decoded.decode("utf-8"))
    except (binascii.Error, ValueError, RecursionError):
        # UnicodeDecodeError and JSONDecodeError are both ValueErrors;
        # deeply nested JSON exhausts the parser stack
        raise ValidationError(message="Invalid QR code format", field="qr_data")

    if not isinstance(fields, dict):
        raise ValidationError(message="Invalid QR code format", field="qr_data")

    invitation_code = fields.get("invitation_code")
    confirmation_code = fields.get("confirmation_code")
    if not isinstance(invitation_code, str) or not invitation_code:
        raise ValidationError(message="QR code is missing the invitation code", field="qr_data")
    if not isinstance(confirmation_code, str) or not confirmation_code:
        raise ValidationError(message="QR code is missing the confirmation code", field="qr_data")

    if signing_secret:
        provided = fields.get("signature")
        if not isinstance(provided, str) or not hmac.compare_digest(
            provided.encode("utf-8"), _signature(fields, signing_secret).encode("utf-8")
        ):
            raise ValidationError(message="QR code signature is invalid", field="qr_data")

    guest_email = fields.get("guest_email")
    timestamp = fields.get("timestamp")
    return QRPayload(
        invitation_code=invitation_code,
        confirmation_code=confirmation_code,
        guest_email=guest_email if isinstance(guest_email, str) else None,
        timestamp=timestamp if isinstance(timestamp, str) else None,
    )
