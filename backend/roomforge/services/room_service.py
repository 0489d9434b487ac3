"""
RoomForge Backend — Room Service
=================================

What:  CRUD operations on the room catalog.
Who:   Called by the /api/rooms route handlers; BookingService uses
       room_exists() before accepting a booking.

Design Decision:
    RoomService is stateless: it receives the request's AsyncSession on every
    call. Database failures are wrapped in DatabaseError; NotFoundError
    propagates unchanged to the global handler (→ 404).
"""

import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from roomforge.exceptions import DatabaseError, NotFoundError
from roomforge.models.room import Room
from roomforge.schemas.room import RoomResponse

logger = logging.getLogger(__name__)


class RoomService:
    """
    Business logic layer for room operations.

    Responsibilities:
        - list_rooms() / get_room(): catalog reads
        - create_room(): assigns max(id) + 1 and stores the room
        - update_room(): partial update, omitted fields keep their value
        - delete_room(): removes the room and returns it
        - room_exists(): existence check used by bookings
    """

    async def _load(self, db: AsyncSession, room_id: int) -> Room:
        result = await db.execute(select(Room).where(Room.id == room_id))
        room = result.scalar_one_or_none()
        if room is None:
            raise NotFoundError(resource="room", resource_id=room_id)
        return room

    async def list_rooms(self, db: AsyncSession) -> List[RoomResponse]:
        """Return every room ordered by ID."""
        try:
            result = await db.execute(select(Room).order_by(Room.id))
            return [RoomResponse.model_validate(room) for room in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing rooms: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve rooms. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_room(self, db: AsyncSession, room_id: int) -> RoomResponse:
        """
        Retrieve a single room.

        Raises:
            NotFoundError: No room with this ID (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            room = await self._load(db, room_id)
            return RoomResponse.model_validate(room)
        except SQLAlchemyError as e:
            logger.error("Database error fetching room %s: %s", room_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the room. Please try again.",
                context={"room_id": room_id},
            )

    async def room_exists(self, db: AsyncSession, room_id: int) -> bool:
        result = await db.execute(select(func.count(Room.id)).where(Room.id == room_id))
        return (result.scalar() or 0) > 0

    async def create_room(
        self,
        db: AsyncSession,
        name: str,
        capacity: int,
        features: Optional[List[str]] = None,
    ) -> RoomResponse:
        """
        Add a room to the catalog.

        The new ID is one more than the highest existing ID (1 for an empty
        catalog). IDs of deleted rooms at the top of the range are reused.
        """
        try:
            result = await db.execute(select(func.max(Room.id)))
            new_id = (result.scalar() or 0) + 1

            room = Room(
                id=new_id,
                name=name,
                capacity=capacity,
                features=list(features or []),
            )
            db.add(room)
            await db.flush()
            logger.info("Room created: %s (%s, capacity=%d)", room.id, room.name, room.capacity)
            return RoomResponse.model_validate(room)
        except SQLAlchemyError as e:
            logger.error("Database error creating room: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the room. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def update_room(
        self,
        db: AsyncSession,
        room_id: int,
        name: Optional[str] = None,
        capacity: Optional[int] = None,
        features: Optional[List[str]] = None,
    ) -> RoomResponse:
        """
        Apply a partial update.

        None means "keep the current value". An empty features list is a real
        value and clears the room's features.
        """
        try:
            room = await self._load(db, room_id)
            if name is not None:
                room.name = name
            if capacity is not None:
                room.capacity = capacity
            if features is not None:
                room.features = list(features)
            await db.flush()
            logger.info("Room %s updated", room.id)
            return RoomResponse.model_validate(room)
        except SQLAlchemyError as e:
            logger.error("Database error updating room %s: %s", room_id, str(e))
            raise DatabaseError(
                message="Could not update the room. Please try again.",
                context={"room_id": room_id},
            )

    async def delete_room(self, db: AsyncSession, room_id: int) -> RoomResponse:
        """
        Remove a room and return it as it was.

        Bookings that reference the room are left untouched.
        """
        try:
            room = await self._load(db, room_id)
            deleted = RoomResponse.model_validate(room)
            await db.delete(room)
            await db.flush()
            logger.info("Room %s deleted", room_id)
            return deleted
        except SQLAlchemyError as e:
            logger.error("Database error deleting room %s: %s", room_id, str(e))
            raise DatabaseError(
                message="Could not delete the room. Please try again.",
                context={"room_id": room_id},
            )


# ── Singleton Instance ────────────────────────────────────────────────────
room_service = RoomService()
