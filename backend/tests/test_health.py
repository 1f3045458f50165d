"""
Wedding Invitations Backend — Health, Docs and Debug Route Tests
==================================================================

What we test:
    ✅ /health reports the database as connected
    ✅ Responses carry X-Request-ID (generated or echoed)
    ✅ OpenAPI schema is served at /api-docs-json
    ✅ Debug routes work when enabled
    ✅ Unknown paths use the error envelope
"""

import pytest


class TestHealth:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["version"]

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/health")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_request_id_echoed_in_errors(self, test_client):
        response = await test_client.get(
            "/api/invitations/view/NOPE00", headers={"X-Request-ID": "trace-123"}
        )
        assert response.headers["X-Request-ID"] == "trace-123"
        assert response.json()["request_id"] == "trace-123"


class TestDocs:

    @pytest.mark.asyncio
    async def test_openapi_schema(self, test_client):
        response = await test_client.get("/api-docs-json")

        assert response.status_code == 200
        paths = response.json()["paths"]
        assert "/api/confirmations/check-in" in paths
        assert "/api/invitations/view/{code}" in paths

    @pytest.mark.asyncio
    async def test_unknown_path_uses_error_envelope(self, test_client):
        response = await test_client.get("/api/nothing-here")
        assert response.status_code == 404
        assert response.json()["status"] == "error"


class TestDebugRoutes:

    @pytest.mark.asyncio
    async def test_init_db_and_table_info(self, test_client):
        init = await test_client.post("/api/debug/init-db")
        assert init.status_code == 200
        assert {"users", "invitations", "confirmations"} <= set(init.json()["data"]["tables"])

        info = await test_client.get("/api/debug/table-info")
        assert "invitation_code" in info.json()["data"]["tables"]["invitations"]

    @pytest.mark.asyncio
    async def test_db_health_counts_rows(self, test_client, register_user):
        await register_user()
        response = await test_client.get("/api/debug/db-health")

        assert response.status_code == 200
        assert response.json()["data"]["row_counts"]["users"] == 1

    @pytest.mark.asyncio
    async def test_db_connection_masks_password(self, test_client):
        response = await test_client.get("/api/debug/db-connection")

        assert response.status_code == 200
        assert response.json()["data"]["dialect"] == "sqlite"
