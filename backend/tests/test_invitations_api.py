"""
Wedding Invitations Backend — Invitation API Tests
====================================================

What we test:
    ✅ Create derives the code from initials + date, with "-N" on collision
    ✅ Listing is owner-scoped and newest first
    ✅ Public view exposes only card fields plus the formatted date
    ✅ Another user's invitation is indistinguishable from a missing one (404)
    ✅ Partial update, including clearing the description
    ✅ Delete removes the invitation and its confirmations
    ✅ Short codes are 400, missing auth is 401
"""

import uuid

import pytest


async def create_invitation(client, headers, payload):
    response = await client.post("/api/invitations", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreateInvitation:

    @pytest.mark.asyncio
    async def test_create_returns_generated_code(self, test_client, register_user, invitation_payload):
        owner = await register_user()
        data = await create_invitation(test_client, owner["headers"], invitation_payload)

        assert data["invitation_code"] == "JD251224"
        assert data["user_id"] == owner["user"]["id"]
        assert data["ceremony_date"] == "2024-12-25"
        assert data["max_guests"] == 150
        assert data["share_url"] == "https://wedding.test/api/invitations/view/JD251224"

    @pytest.mark.asyncio
    async def test_default_max_guests(self, test_client, register_user, invitation_payload):
        owner = await register_user()
        invitation_payload.pop("max_guests")
        data = await create_invitation(test_client, owner["headers"], invitation_payload)
        assert data["max_guests"] == 100

    @pytest.mark.asyncio
    async def test_colliding_codes_get_suffix(self, test_client, register_user, invitation_payload):
        first = await register_user(email="a@example.com")
        second = await register_user(email="b@example.com")

        one = await create_invitation(test_client, first["headers"], invitation_payload)
        two = await create_invitation(test_client, second["headers"], invitation_payload)
        three = await create_invitation(test_client, first["headers"], invitation_payload)

        assert [one["invitation_code"], two["invitation_code"], three["invitation_code"]] == [
            "JD251224",
            "JD251224-2",
            "JD251224-3",
        ]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["groom_name", "bride_name", "ceremony_date", "ceremony_time", "location"])
    async def test_missing_required_field(self, test_client, register_user, invitation_payload, missing):
        owner = await register_user()
        invitation_payload.pop(missing)
        response = await test_client.post("/api/invitations", json=invitation_payload, headers=owner["headers"])
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_invalid_date(self, test_client, register_user, invitation_payload):
        owner = await register_user()
        invitation_payload["ceremony_date"] = "25/12/2024"
        response = await test_client.post("/api/invitations", json=invitation_payload, headers=owner["headers"])
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_requires_auth(self, test_client, invitation_payload):
        response = await test_client.post("/api/invitations", json=invitation_payload)
        assert response.status_code == 401


class TestReadInvitations:

    @pytest.mark.asyncio
    async def test_list_is_owner_scoped_newest_first(self, test_client, register_user, invitation_payload):
        owner = await register_user(email="a@example.com")
        other = await register_user(email="b@example.com")

        older = await create_invitation(test_client, owner["headers"], invitation_payload)
        invitation_payload.update(groom_name="Andi", bride_name="Rina", ceremony_date="2025-03-01")
        newer = await create_invitation(test_client, owner["headers"], invitation_payload)
        await create_invitation(test_client, other["headers"], invitation_payload)

        response = await test_client.get("/api/invitations", headers=owner["headers"])

        assert response.status_code == 200
        codes = [item["invitation_code"] for item in response.json()["data"]]
        assert codes == [newer["invitation_code"], older["invitation_code"]]

    @pytest.mark.asyncio
    async def test_public_view(self, test_client, register_user, invitation_payload):
        owner = await register_user()
        await create_invitation(test_client, owner["headers"], invitation_payload)

        response = await test_client.get("/api/invitations/view/JD251224")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["ceremony_date_formatted"] == "Rabu, 25 Desember 2024"
        assert data["groom_name"] == "John Smith"
        assert "id" not in data
        assert "user_id" not in data

    @pytest.mark.asyncio
    async def test_public_view_unknown_code(self, test_client):
        response = await test_client.get("/api/invitations/view/ZZ010101")
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_short_code_rejected(self, test_client, register_user):
        owner = await register_user()
        assert (await test_client.get("/api/invitations/view/JD1")).status_code == 400
        assert (await test_client.get("/api/invitations/JD1", headers=owner["headers"])).status_code == 400

    @pytest.mark.asyncio
    async def test_owner_get_by_code(self, test_client, register_user, invitation_payload):
        owner = await register_user()
        created = await create_invitation(test_client, owner["headers"], invitation_payload)

        response = await test_client.get("/api/invitations/JD251224", headers=owner["headers"])

        assert response.status_code == 200
        assert response.json()["data"]["id"] == created["id"]

    @pytest.mark.asyncio
    async def test_other_user_cannot_get_by_code(self, test_client, register_user, invitation_payload):
        owner = await register_user(email="a@example.com")
        intruder = await register_user(email="b@example.com")
        await create_invitation(test_client, owner["headers"], invitation_payload)

        foreign = await test_client.get("/api/invitations/JD251224", headers=intruder["headers"])
        missing = await test_client.get("/api/invitations/QQ010101", headers=intruder["headers"])

        assert foreign.status_code == missing.status_code == 404
        assert foreign.json()["message"] == missing.json()["message"]


class TestUpdateInvitation:

    @pytest.mark.asyncio
    async def test_partial_update(self, test_client, register_user, invitation_payload):
        owner = await register_user()
        created = await create_invitation(test_client, owner["headers"], invitation_payload)

        response = await test_client.put(
            f"/api/invitations/{created['id']}",
            json={"location": "Bali", "description": None, "max_guests": 80},
            headers=owner["headers"],
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["location"] == "Bali"
        assert data["description"] is None
        assert data["max_guests"] == 80
        assert data["groom_name"] == "John Smith"
        assert data["invitation_code"] == created["invitation_code"]

    @pytest.mark.asyncio
    async def test_null_for_required_field_is_ignored(self, test_client, register_user, invitation_payload):
        owner = await register_user()
        created = await create_invitation(test_client, owner["headers"], invitation_payload)

        response = await test_client.put(
            f"/api/invitations/{created['id']}",
            json={"groom_name": None},
            headers=owner["headers"],
        )

        assert response.status_code == 200
        assert response.json()["data"]["groom_name"] == "John Smith"

    @pytest.mark.asyncio
    async def test_other_user_cannot_update(self, test_client, register_user, invitation_payload):
        owner = await register_user(email="a@example.com")
        intruder = await register_user(email="b@example.com")
        created = await create_invitation(test_client, owner["headers"], invitation_payload)

        response = await test_client.put(
            f"/api/invitations/{created['id']}", json={"location": "Elsewhere"}, headers=intruder["headers"]
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_bad_uuid_is_400(self, test_client, register_user):
        owner = await register_user()
        response = await test_client.put("/api/invitations/not-a-uuid", json={}, headers=owner["headers"])
        assert response.status_code == 400


class TestDeleteInvitation:

    @pytest.mark.asyncio
    async def test_delete_removes_confirmations(self, test_client, register_user, invitation_payload):
        owner = await register_user()
        created = await create_invitation(test_client, owner["headers"], invitation_payload)
        confirm = await test_client.post(
            "/api/confirmations/confirm",
            json={"invitation_code": "JD251224", "guest_name": "Budi", "guest_email": "budi@example.com"},
        )
        code = confirm.json()["data"]["confirmation_code"]

        response = await test_client.delete(f"/api/invitations/{created['id']}", headers=owner["headers"])

        assert response.status_code == 200
        assert response.json()["data"] is None
        assert (await test_client.get("/api/invitations/view/JD251224")).status_code == 404
        assert (await test_client.get(f"/api/confirmations/{code}")).status_code == 404

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete(self, test_client, register_user, invitation_payload):
        owner = await register_user(email="a@example.com")
        intruder = await register_user(email="b@example.com")
        created = await create_invitation(test_client, owner["headers"], invitation_payload)

        response = await test_client.delete(f"/api/invitations/{created['id']}", headers=intruder["headers"])

        assert response.status_code == 404
        assert (await test_client.get("/api/invitations/view/JD251224")).status_code == 200

    @pytest.mark.asyncio
    async def test_delete_unknown(self, test_client, register_user):
        owner = await register_user()
        response = await test_client.delete(f"/api/invitations/{uuid.uuid4()}", headers=owner["headers"])
        assert response.status_code == 404
