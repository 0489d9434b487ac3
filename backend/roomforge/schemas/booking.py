"""
RoomForge Backend — Booking Request/Response Schemas
=====================================================

What:  Pydantic models for the /api/bookings contract.

Date-times:
    start/end are ISO-8601 local date-times without an offset, e.g.
    "2025-11-24T09:00". Values carrying a timezone are rejected, since
    naive and aware datetimes cannot be compared. Responses echo the
    minute-precision form ("2025-11-24T09:00") unless the value has
    seconds.

Update aliases:
    BookingUpdate also accepts startTime/endTime for start/end.
"""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, Field, field_serializer, field_validator, model_validator

from roomforge.schemas.common import CamelModel


def format_local_datetime(value: datetime) -> str:
    """Renders a naive datetime as ISO-8601, dropping zero seconds."""
    if value.second == 0 and value.microsecond == 0:
        return value.isoformat(timespec="minutes")
    return value.isoformat()


def _require_naive(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is not None:
        raise ValueError("must be a local date-time without a timezone offset")
    return value


class BookingCreate(CamelModel):
    room_id: int = Field(description="ID of the room to book")
    title: str = Field(min_length=1, max_length=255, description="Meeting title")
    start: datetime = Field(description="Local start time (inclusive)")
    end: datetime = Field(description="Local end time (exclusive)")

    @field_validator("start", "end")
    @classmethod
    def reject_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _require_naive(value)

    @model_validator(mode="after")
    def check_interval(self) -> "BookingCreate":
        if self.start >= self.end:
            raise ValueError("end must be after start")
        return self


class BookingUpdate(CamelModel):
    room_id: Optional[int] = None
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    start: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("start", "startTime"),
    )
    end: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("end", "endTime"),
    )

    @field_validator("start", "end")
    @classmethod
    def reject_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _require_naive(value)


class BookingResponse(CamelModel):
    """Full representation of a booking as returned by every /api/bookings endpoint."""
    id: int = Field(description="Booking identifier")
    room_id: int = Field(description="ID of the booked room")
    title: str
    start: datetime
    end: datetime

    @field_serializer("start", "end")
    def serialize_times(self, value: datetime) -> str:
        return format_local_datetime(value)
