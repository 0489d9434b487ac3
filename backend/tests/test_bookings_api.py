"""
RoomForge Backend — /api/bookings Endpoint Tests
=================================================

What:  HTTP-level tests for booking CRUD and the 400/404/409 write policy.
How:   HTTPX AsyncClient over ASGITransport; demo data loaded per test.

What we test:
    ✅ ?id= and ?roomId= filtering, minute-precision date-times in responses
    ✅ Create: 201, 400 (missing fields / bad interval / timezone), 404, 409
    ✅ A 409 leaves the booking list unchanged
    ✅ Update: startTime/endTime aliases, self-exclusion, 404, 409
    ✅ Delete: 200 then 404
    ✅ Two concurrent overlapping creates: exactly one wins
"""

import asyncio

import pytest


def booking_payload(**overrides):
    payload = {
        "roomId": 1,
        "title": "Retro",
        "start": "2025-11-24T10:00",
        "end": "2025-11-24T11:00",
    }
    payload.update(overrides)
    return payload


class TestListBookings:

    @pytest.mark.asyncio
    async def test_list_all(self, test_client):
        response = await test_client.get("/api/bookings")

        assert response.status_code == 200
        assert len(response.json()) == 15
        assert response.headers["X-Total-Count"] == "15"

    @pytest.mark.asyncio
    async def test_view_single_booking(self, test_client):
        response = await test_client.get("/api/bookings", params={"id": 101})

        assert response.status_code == 200
        assert response.json() == {
            "id": 101,
            "roomId": 1,
            "title": "Team Sync",
            "start": "2025-11-24T09:00",
            "end": "2025-11-24T10:00",
        }

    @pytest.mark.asyncio
    async def test_view_unknown_booking(self, test_client):
        response = await test_client.get("/api/bookings", params={"id": 999})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_filter_by_room(self, test_client):
        response = await test_client.get("/api/bookings", params={"roomId": 4})

        assert response.status_code == 200
        assert [b["id"] for b in response.json()] == [102, 110]

    @pytest.mark.asyncio
    async def test_filter_by_room_without_bookings(self, test_client):
        response = await test_client.get("/api/bookings", params={"roomId": 404})

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_id_wins_over_room_id(self, test_client):
        response = await test_client.get("/api/bookings", params={"id": 103, "roomId": 1})

        assert response.json()["id"] == 103


class TestCreateBooking:

    @pytest.mark.asyncio
    async def test_create_booking(self, test_client):
        response = await test_client.post("/api/bookings", json=booking_payload())

        assert response.status_code == 201
        body = response.json()
        assert body["roomId"] == 1
        assert body["start"] == "2025-11-24T10:00"
        assert body["end"] == "2025-11-24T11:00"

        fetched = await test_client.get("/api/bookings", params={"id": body["id"]})
        assert fetched.json() == body

    @pytest.mark.asyncio
    async def test_seconds_are_preserved(self, test_client):
        response = await test_client.post(
            "/api/bookings",
            json=booking_payload(start="2025-11-24T10:00:30", end="2025-11-24T10:45:00"),
        )

        assert response.status_code == 201
        assert response.json()["start"] == "2025-11-24T10:00:30"
        assert response.json()["end"] == "2025-11-24T10:45"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["roomId", "title", "start", "end"])
    async def test_missing_field(self, test_client, missing):
        payload = booking_payload()
        del payload[missing]

        response = await test_client.post("/api/bookings", json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_end_before_start(self, test_client):
        response = await test_client.post(
            "/api/bookings", json=booking_payload(start="2025-11-24T12:00", end="2025-11-24T11:00")
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_timezone_offsets_rejected(self, test_client):
        response = await test_client.post(
            "/api/bookings", json=booking_payload(start="2025-11-24T10:00:00Z")
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_room(self, test_client):
        response = await test_client.post("/api/bookings", json=booking_payload(roomId=99))

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_overlap_is_a_conflict(self, test_client):
        response = await test_client.post(
            "/api/bookings", json=booking_payload(start="2025-11-24T09:30", end="2025-11-24T10:30")
        )

        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "booking_conflict"
        assert body["message"] == "Room is already booked for this time slot"
        assert body["details"]["conflicting_booking_ids"] == [101]

    @pytest.mark.asyncio
    async def test_conflict_does_not_change_bookings(self, test_client):
        before = (await test_client.get("/api/bookings")).json()

        response = await test_client.post(
            "/api/bookings", json=booking_payload(start="2025-11-24T08:00", end="2025-11-24T09:01")
        )
        assert response.status_code == 409

        after = (await test_client.get("/api/bookings")).json()
        assert after == before

    @pytest.mark.asyncio
    async def test_back_to_back_booking_allowed(self, test_client):
        """Starts exactly when Team Sync (09:00-10:00) ends."""
        response = await test_client.post("/api/bookings", json=booking_payload())
        assert response.status_code == 201

        before = await test_client.post(
            "/api/bookings",
            json=booking_payload(start="2025-11-24T08:00", end="2025-11-24T09:00"),
        )
        assert before.status_code == 201

    @pytest.mark.asyncio
    async def test_concurrent_overlapping_creates(self, test_client):
        """Requests are serialized, so only one of two clashing bookings lands."""
        payload = booking_payload(start="2025-11-30T09:00", end="2025-11-30T10:00")

        responses = await asyncio.gather(
            test_client.post("/api/bookings", json=payload),
            test_client.post("/api/bookings", json=payload),
        )

        assert sorted(r.status_code for r in responses) == [201, 409]
        room_bookings = (await test_client.get("/api/bookings", params={"roomId": 1})).json()
        assert len(room_bookings) == 3


class TestUpdateBooking:

    @pytest.mark.asyncio
    async def test_update_title(self, test_client):
        response = await test_client.put("/api/bookings/101", json={"title": "Daily Sync"})

        assert response.status_code == 200
        assert response.json()["title"] == "Daily Sync"
        assert response.json()["start"] == "2025-11-24T09:00"

    @pytest.mark.asyncio
    async def test_start_time_end_time_aliases(self, test_client):
        response = await test_client.put(
            "/api/bookings/101",
            json={"startTime": "2025-11-24T09:15", "endTime": "2025-11-24T10:15"},
        )

        assert response.status_code == 200
        assert response.json()["start"] == "2025-11-24T09:15"
        assert response.json()["end"] == "2025-11-24T10:15"

    @pytest.mark.asyncio
    async def test_update_overlapping_other_booking(self, test_client):
        response = await test_client.put(
            "/api/bookings/108",
            json={"start": "2025-11-24T09:00", "end": "2025-11-24T09:30"},
        )

        assert response.status_code == 409
        assert response.json()["message"] == "Room is already booked for this updated time slot"

        unchanged = (await test_client.get("/api/bookings", params={"id": 108})).json()
        assert unchanged["start"] == "2025-11-28T09:00"

    @pytest.mark.asyncio
    async def test_move_to_unknown_room(self, test_client):
        response = await test_client.put("/api/bookings/101", json={"roomId": 99})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_unknown_booking(self, test_client):
        response = await test_client.put("/api/bookings/999", json={"title": "x"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_to_backwards_interval(self, test_client):
        response = await test_client.put("/api/bookings/101", json={"end": "2025-11-24T08:00"})

        assert response.status_code == 400


class TestDeleteBooking:

    @pytest.mark.asyncio
    async def test_delete_booking(self, test_client):
        response = await test_client.delete("/api/bookings/105")

        assert response.status_code == 200
        assert response.json()["title"] == "Focus Time - Code Review"

        again = await test_client.delete("/api/bookings/105")
        assert again.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_unknown_booking(self, test_client):
        response = await test_client.delete("/api/bookings/1")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"
