"""
Wedding Invitations Backend — Token Service Tests
===================================================

What we test:
    ✅ Issued tokens verify and carry sub/email/iat/exp
    ✅ Expired, tampered and foreign-secret tokens fail without raising
    ✅ Tokens missing sub or email are rejected
    ✅ Bearer header parsing
    ✅ Empty secret is a configuration error, not a default key
"""

from datetime import timedelta

import pytest
from jose import jwt

from app.exceptions import ConfigurationError
from app.services.token_service import TokenService
from app.utils import utc_now

SECRET = "unit-test-secret-0123456789"


class TestIssueAndVerify:

    def setup_method(self):
        self.tokens = TokenService(SECRET, ttl_seconds=3600)
        self.claims = {"sub": "3f1c9e0a-0000-4000-8000-000000000001", "email": "a@example.com"}

    def test_issued_token_verifies(self):
        token = self.tokens.issue(self.claims)
        result = self.tokens.verify(token)

        assert result.success is True
        assert result.error is None
        assert result.payload["sub"] == self.claims["sub"]
        assert result.payload["email"] == "a@example.com"
        assert result.payload["exp"] - result.payload["iat"] == 3600

    def test_expired_token_fails(self):
        """A token minted two hours ago with a one hour ttl is rejected."""
        token = self.tokens.issue(self.claims, now=utc_now() - timedelta(hours=2))
        result = self.tokens.verify(token)

        assert result.success is False
        assert result.payload is None
        assert result.error

    def test_custom_ttl(self):
        token = self.tokens.issue(self.claims, ttl_seconds=60)
        payload = self.tokens.verify(token).payload
        assert payload["exp"] - payload["iat"] == 60

    def test_token_signed_with_other_secret_fails(self):
        other = TokenService("a-completely-different-secret")
        assert self.tokens.verify(other.issue(self.claims)).success is False

    def test_tampered_token_fails(self):
        token = self.tokens.issue(self.claims)
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[:-2] + ("AA" if signature[-2:] != "AA" else "BB")])
        assert self.tokens.verify(tampered).success is False

    def test_garbage_token_fails(self):
        assert self.tokens.verify("not.a.jwt").success is False

    @pytest.mark.parametrize("missing", ["sub", "email"])
    def test_token_without_required_claim_fails(self, missing):
        claims = {k: v for k, v in self.claims.items() if k != missing}
        token = jwt.encode(claims, SECRET, algorithm="HS256")
        result = self.tokens.verify(token)

        assert result.success is False
        assert "sub or email" in result.error

    def test_non_string_sub_fails(self):
        token = jwt.encode({"sub": 42, "email": "a@example.com"}, SECRET, algorithm="HS256")
        assert self.tokens.verify(token).success is False


class TestMissingSecret:

    def test_issue_without_secret_raises(self):
        with pytest.raises(ConfigurationError):
            TokenService("").issue({"sub": "x", "email": "y"})

    def test_verify_without_secret_raises(self):
        with pytest.raises(ConfigurationError):
            TokenService("").verify("anything")


class TestExtractBearer:

    @pytest.mark.parametrize(
        "header, expected",
        [
            ("Bearer abc", "abc"),
            ("bearer abc", "abc"),
            ("BEARER abc", "abc"),
            ("Basic abc", None),
            ("Bearer", None),
            ("Bearer a b", None),
            ("Bearer ", None),
            ("", None),
            (None, None),
        ],
    )
    def test_extract_bearer(self, header, expected):
        assert TokenService.extract_bearer(header) == expected
