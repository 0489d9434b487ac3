"""
RoomForge Backend — Booking SQLAlchemy Model
=============================================

What:  ORM model representing the `bookings` table.
Who:   Used by BookingService for CRUD and conflict checks.

Table Design:
    - Integer primary key assigned by BookingService as max(id) + 1, the same
      scheme as rooms, so seeded IDs never collide with a database sequence.
    - room_id is a plain indexed integer, not a foreign key. Deleting a room
      leaves its bookings in place; the room reference is only validated when
      a booking is written.
    - start/end are naive DATETIMEs holding local wall-clock time. The API
      accepts ISO-8601 date-times without an offset, so no timezone is stored.
      The columns are named start_time/end_time because END is a reserved
      word in SQL.

    Index on (room_id, start_time):
        Conflict checks load every booking of one room; the composite index
        serves that lookup and keeps the result in chronological order.
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from roomforge.database import Base


class Booking(Base):
    """
    A reservation of one room for the half-open interval [start, end).

    Invariant (maintained by BookingService, not by the database):
        For a fixed room_id no two bookings' intervals intersect.
    """

    __tablename__ = "bookings"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=False,
        comment="Booking identifier, max(id) + 1 on create",
    )

    room_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="ID of the booked room",
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Meeting title",
    )

    start: Mapped[datetime] = mapped_column(
        "start_time",
        DateTime(timezone=False),
        nullable=False,
        comment="Local start time (inclusive)",
    )

    end: Mapped[datetime] = mapped_column(
        "end_time",
        DateTime(timezone=False),
        nullable=False,
        comment="Local end time (exclusive)",
    )

    __table_args__ = (
        Index("idx_bookings_room_start", "room_id", "start_time"),
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, room_id={self.room_id}, "
            f"start='{self.start}', end='{self.end}')>"
        )
