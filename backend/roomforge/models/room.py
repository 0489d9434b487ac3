"""
RoomForge Backend — Room SQLAlchemy Model
==========================================

What:  ORM model representing the `rooms` table (the room catalog).
Who:   Used by RoomService for CRUD, by BookingService for existence checks,
       and by Alembic for schema management.

Table Design:
    - Integer primary key: IDs are small and human-friendly ("room 4").
      New rooms receive max(id) + 1, assigned by RoomService.
    - features: JSON array of labels ("Projector", "Whiteboard", ...).
      Stored inline because labels are free-form and never queried on.
"""

from typing import List

from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from roomforge.database import Base


class Room(Base):
    """A bookable meeting room."""

    __tablename__ = "rooms"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=False,
        comment="Room identifier, max(id) + 1 on create",
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name of the room",
    )

    capacity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Number of people the room seats",
    )

    features: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Feature labels such as Projector or Whiteboard",
    )

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, name='{self.name}', capacity={self.capacity})>"
