"""
Wedding Invitations Backend — Auth API Tests
==============================================

What we test:
    ✅ Register returns 201 with user + token; email is normalized
    ✅ Duplicate email and missing fields are 400 with the error envelope
    ✅ Login success and uniform 401 for wrong password / unknown email
    ✅ /verify and /me require a valid bearer token
    ✅ /me returns the caller's own record, never another user's
"""

from datetime import timedelta

import pytest

from app.config import settings
from app.services.token_service import TokenService
from app.utils import utc_now


class TestRegister:

    @pytest.mark.asyncio
    async def test_register_success(self, test_client):
        response = await test_client.post(
            "/api/auth/register",
            json={"email": "  Couple@Example.COM ", "password": "pw123456", "name": "John & Jane"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "success"
        assert body["data"]["user"]["email"] == "couple@example.com"
        assert body["data"]["user"]["name"] == "John & Jane"
        assert "password_hash" not in body["data"]["user"]
        assert body["data"]["token"]

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, test_client, register_user):
        await register_user(email="dup@example.com")
        response = await test_client.post(
            "/api/auth/register",
            json={"email": "DUP@example.com", "password": "x", "name": "Other"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == "error"
        assert body["message"] == "Email already registered"
        assert body["request_id"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"password": "x", "name": "n"},
            {"email": "a@example.com", "name": "n"},
            {"email": "a@example.com", "password": "x"},
            {"email": "a@example.com", "password": "x", "name": "   "},
            {"email": "not-an-email", "password": "x", "name": "n"},
        ],
    )
    async def test_missing_or_invalid_fields(self, test_client, payload):
        response = await test_client.post("/api/auth/register", json=payload)
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_malformed_json_is_400(self, test_client):
        response = await test_client.post(
            "/api/auth/register",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_success(self, test_client, register_user):
        registered = await register_user(email="login@example.com", password="right-pass")
        response = await test_client.post(
            "/api/auth/login",
            json={"email": "Login@example.com", "password": "right-pass"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"]["id"] == registered["user"]["id"]
        assert data["token"]

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_look_the_same(self, test_client, register_user):
        await register_user(email="login@example.com", password="right-pass")

        wrong = await test_client.post(
            "/api/auth/login", json={"email": "login@example.com", "password": "nope"}
        )
        unknown = await test_client.post(
            "/api/auth/login", json={"email": "ghost@example.com", "password": "nope"}
        )

        assert wrong.status_code == unknown.status_code == 401
        assert wrong.json()["message"] == unknown.json()["message"]


class TestVerifyAndMe:

    @pytest.mark.asyncio
    async def test_verify_valid_token(self, test_client, register_user):
        user = await register_user()
        response = await test_client.post("/api/auth/verify", headers=user["headers"])

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["valid"] is True
        assert data["payload"]["sub"] == user["user"]["id"]
        assert data["payload"]["email"] == "couple@example.com"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "headers",
        [{}, {"Authorization": "Basic abc"}, {"Authorization": "Bearer not-a-jwt"}],
    )
    async def test_verify_rejects_bad_headers(self, test_client, headers):
        response = await test_client.post("/api/auth/verify", headers=headers)
        assert response.status_code == 401
        assert response.json()["status"] == "error"

    @pytest.mark.asyncio
    async def test_expired_token_rejected(self, test_client, register_user):
        user = await register_user()
        tokens = TokenService(settings.jwt_secret, ttl_seconds=60)
        expired = tokens.issue(
            {"sub": user["user"]["id"], "email": "couple@example.com"},
            now=utc_now() - timedelta(minutes=5),
        )
        response = await test_client.get("/api/auth/me", headers={"Authorization": f"Bearer {expired}"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_me_returns_caller(self, test_client, register_user):
        first = await register_user(email="first@example.com", name="First")
        second = await register_user(email="second@example.com", name="Second")

        response = await test_client.get("/api/auth/me", headers=second["headers"])

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == second["user"]["id"] != first["user"]["id"]
        assert data["email"] == "second@example.com"
        assert data["role"] == "user"
        assert "password_hash" not in data

    @pytest.mark.asyncio
    async def test_me_for_deleted_account_is_404(self, test_client):
        """A valid token whose subject no longer exists."""
        token = TokenService(settings.jwt_secret).issue(
            {"sub": "00000000-0000-4000-8000-000000000000", "email": "gone@example.com"}
        )
        response = await test_client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 404
