"""
Wedding Invitations Backend — Credential Hashing
==================================================

What:  Password hashing and verification with PBKDF2-HMAC-SHA256.
Who:   AuthService (register, login).

Stored format:
    hex(salt || derived_key)
    16-byte random salt, 100,000 iterations, 32-byte derived key, so a stored
    hash is always 96 hex characters.
    Existing accounts depend on these parameters; changing them invalidates
    every stored hash.
"""

import hashlib
import hmac
import os

SALT_BYTES = 16
KEY_BYTES = 32
ITERATIONS = 100_000
HASH_NAME = "sha256"


def _derive(password: str, salt: bytes) -> bytes:
    return hashlib.pbkdf2_hmac(
        HASH_NAME,
        password.encode("utf-8"),
        salt,
        ITERATIONS,
        dklen=KEY_BYTES,
    )


def hash_password(password: str) -> str:
    """Hash `password` with a fresh random salt and return the hex-encoded record."""
    salt = os.urandom(SALT_BYTES)
    return (salt + _derive(password, salt)).hex()


def verify_password(password: str, stored_hash: str) -> bool:
    """
    Check `password` against a record produced by `hash_password`.

    Malformed records (not hex, wrong length) never raise; they simply
    fail verification.
    """
    if not isinstance(stored_hash, str) or len(stored_hash) != 2 * (SALT_BYTES + KEY_BYTES):
        return False
    try:
        raw = bytes.fromhex(stored_hash)
    except ValueError:
        return False

    salt, expected = raw[:SALT_BYTES], raw[SALT_BYTES:]
    return hmac.compare_digest(_derive(password, salt), expected)
