"""
RoomForge Backend — /api/rooms Endpoint Tests
==============================================

What:  HTTP-level tests for the room catalog endpoints.
How:   HTTPX AsyncClient over ASGITransport; demo data loaded per test.

What we test:
    ✅ List, ?id= lookup, X-Total-Count header
    ✅ Create returns 201 with max(id) + 1; missing fields → 400
    ✅ Partial update and delete; unknown IDs → 404
"""

import pytest


class TestListRooms:

    @pytest.mark.asyncio
    async def test_list_all_rooms(self, test_client):
        response = await test_client.get("/api/rooms")

        assert response.status_code == 200
        rooms = response.json()
        assert len(rooms) == 8
        assert response.headers["X-Total-Count"] == "8"
        assert rooms[0] == {
            "id": 1,
            "name": "The Forge",
            "capacity": 12,
            "features": ["Projector", "Whiteboard", "Video Conferencing"],
        }

    @pytest.mark.asyncio
    async def test_view_single_room(self, test_client):
        response = await test_client.get("/api/rooms", params={"id": 4})

        assert response.status_code == 200
        assert response.json()["name"] == "Innovation Hub"

    @pytest.mark.asyncio
    async def test_view_unknown_room(self, test_client):
        response = await test_client.get("/api/rooms", params={"id": 404})

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "not_found"
        assert "404" in body["message"]

    @pytest.mark.asyncio
    async def test_non_numeric_id_is_a_bad_request(self, test_client):
        response = await test_client.get("/api/rooms", params={"id": "abc"})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"


class TestCreateRoom:

    @pytest.mark.asyncio
    async def test_create_room(self, test_client):
        response = await test_client.post(
            "/api/rooms",
            json={"name": "Rooftop", "capacity": 25, "features": ["WiFi", "Sunlight"]},
        )

        assert response.status_code == 201
        assert response.json() == {
            "id": 9,
            "name": "Rooftop",
            "capacity": 25,
            "features": ["WiFi", "Sunlight"],
        }

    @pytest.mark.asyncio
    async def test_features_default_to_empty(self, test_client):
        response = await test_client.post("/api/rooms", json={"name": "Closet", "capacity": "2"})

        assert response.status_code == 201
        assert response.json()["features"] == []
        assert response.json()["capacity"] == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"name": "No capacity"},
            {"capacity": 4},
            {"name": "", "capacity": 4},
            {"name": "Zero", "capacity": 0},
        ],
    )
    async def test_missing_or_empty_fields(self, test_client, payload):
        response = await test_client.post("/api/rooms", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"]["errors"]

        listing = await test_client.get("/api/rooms")
        assert len(listing.json()) == 8


class TestUpdateRoom:

    @pytest.mark.asyncio
    async def test_partial_update(self, test_client):
        response = await test_client.put("/api/rooms/6", json={"capacity": 10})

        assert response.status_code == 200
        room = response.json()
        assert room["capacity"] == 10
        assert room["name"] == "Brainstorm Bay"
        assert room["features"] == ["Whiteboard", "TV Screen"]

    @pytest.mark.asyncio
    async def test_update_persists(self, test_client):
        await test_client.put("/api/rooms/6", json={"name": "Idea Bay", "features": []})

        room = (await test_client.get("/api/rooms", params={"id": 6})).json()
        assert room["name"] == "Idea Bay"
        assert room["features"] == []

    @pytest.mark.asyncio
    async def test_update_unknown_room(self, test_client):
        response = await test_client.put("/api/rooms/404", json={"name": "Nowhere"})

        assert response.status_code == 404


class TestDeleteRoom:

    @pytest.mark.asyncio
    async def test_delete_room(self, test_client):
        response = await test_client.delete("/api/rooms/3")

        assert response.status_code == 200
        assert response.json()["name"] == "Focus Pod"

        missing = await test_client.get("/api/rooms", params={"id": 3})
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_unknown_room(self, test_client):
        response = await test_client.delete("/api/rooms/404")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_delete_twice(self, test_client):
        assert (await test_client.delete("/api/rooms/3")).status_code == 200
        assert (await test_client.delete("/api/rooms/3")).status_code == 404
