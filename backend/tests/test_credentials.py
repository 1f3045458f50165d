"""
Wedding Invitations Backend — Credential Hashing Tests
========================================================

What we test:
    ✅ Hash/verify round trip and wrong-password rejection
    ✅ Fresh salt per hash
    ✅ Any single-bit change to a stored hash fails verification
    ✅ Malformed stored hashes return False instead of raising
"""

import pytest

from app.services.credentials import KEY_BYTES, SALT_BYTES, hash_password, verify_password


class TestHashPassword:

    def test_hash_is_hex_salt_plus_key(self):
        """Stored hash is hex(16-byte salt || 32-byte key)."""
        stored = hash_password("correct horse")
        assert len(stored) == 2 * (SALT_BYTES + KEY_BYTES)
        bytes.fromhex(stored)

    def test_same_password_gets_different_salts(self):
        assert hash_password("same") != hash_password("same")


class TestVerifyPassword:

    def setup_method(self):
        self.stored = hash_password("correct horse")

    def test_correct_password_verifies(self):
        assert verify_password("correct horse", self.stored) is True

    def test_wrong_password_fails(self):
        assert verify_password("battery staple", self.stored) is False

    @pytest.mark.parametrize("position", [0, 20, 40, 95])
    def test_single_bit_mutation_fails(self, position):
        """Flipping one bit anywhere (salt or key) breaks verification."""
        raw = bytearray(bytes.fromhex(self.stored))
        raw[position // 2] ^= 0x01
        assert verify_password("correct horse", raw.hex()) is False

    @pytest.mark.parametrize(
        "stored",
        ["", "not-hex", "abc", "zz" * 48, "00" * 47, "00" * 49],
    )
    def test_malformed_hash_returns_false(self, stored):
        assert verify_password("anything", stored) is False

    def test_non_string_hash_returns_false(self):
        assert verify_password("anything", None) is False
