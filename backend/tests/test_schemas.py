"""
RoomForge Backend — Schema Tests
=================================

What we test:
    ✅ camelCase input/output with snake_case attributes
    ✅ Minute-precision date-time rendering
    ✅ Timezone-aware values and backwards intervals rejected
    ✅ startTime/endTime aliases on update
"""

from datetime import datetime

import pytest
from pydantic import ValidationError

from roomforge.schemas.booking import (
    BookingCreate,
    BookingResponse,
    BookingUpdate,
    format_local_datetime,
)
from roomforge.schemas.room import RoomUpdate


class TestFormatLocalDatetime:

    def test_whole_minutes(self):
        assert format_local_datetime(datetime(2025, 11, 24, 9, 0)) == "2025-11-24T09:00"

    def test_keeps_seconds(self):
        assert format_local_datetime(datetime(2025, 11, 24, 9, 0, 30)) == "2025-11-24T09:00:30"


class TestBookingCreate:

    def test_camel_case_input(self):
        booking = BookingCreate.model_validate({
            "roomId": 3,
            "title": "Review",
            "start": "2025-11-24T09:00",
            "end": "2025-11-24T10:00",
        })

        assert booking.room_id == 3
        assert booking.start == datetime(2025, 11, 24, 9, 0)

    def test_rejects_timezone(self):
        with pytest.raises(ValidationError):
            BookingCreate.model_validate({
                "roomId": 3,
                "title": "Review",
                "start": "2025-11-24T09:00+02:00",
                "end": "2025-11-24T10:00+02:00",
            })

    @pytest.mark.parametrize("end", ["2025-11-24T09:00", "2025-11-24T08:00"])
    def test_rejects_empty_or_backwards_interval(self, end):
        with pytest.raises(ValidationError, match="end must be after start"):
            BookingCreate.model_validate({
                "roomId": 3,
                "title": "Review",
                "start": "2025-11-24T09:00",
                "end": end,
            })

    def test_rejects_blank_title(self):
        with pytest.raises(ValidationError):
            BookingCreate.model_validate({
                "roomId": 3,
                "title": "",
                "start": "2025-11-24T09:00",
                "end": "2025-11-24T10:00",
            })


class TestBookingUpdate:

    def test_start_time_alias(self):
        update = BookingUpdate.model_validate({
            "startTime": "2025-11-24T09:15",
            "endTime": "2025-11-24T10:15",
        })

        assert update.start == datetime(2025, 11, 24, 9, 15)
        assert update.end == datetime(2025, 11, 24, 10, 15)

    def test_omitted_fields_stay_none(self):
        update = BookingUpdate.model_validate({"title": "Renamed"})

        assert update.room_id is None
        assert update.start is None
        assert update.end is None


class TestResponses:

    def test_booking_response_dump(self):
        response = BookingResponse(
            id=101,
            room_id=1,
            title="Team Sync",
            start=datetime(2025, 11, 24, 9, 0),
            end=datetime(2025, 11, 24, 10, 0),
        )

        assert response.model_dump(by_alias=True) == {
            "id": 101,
            "roomId": 1,
            "title": "Team Sync",
            "start": "2025-11-24T09:00",
            "end": "2025-11-24T10:00",
        }

    def test_room_update_features_can_be_cleared(self):
        update = RoomUpdate.model_validate({"features": []})

        assert update.features == []
        assert update.name is None
