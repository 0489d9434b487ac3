"""
RoomForge Backend — Booking Service (Write Policy)
===================================================

What:  Booking CRUD plus the policy that decides which writes are permitted.
How:   Composes RoomService (room existence) and the conflict rule in
       services.conflicts; persists through the request's AsyncSession.
Who:   Called by the /api/bookings route handlers.

Write Policy:
    Create  (POST /api/bookings)
        1. Body validation, including start < end         → 400 (schema)
        2. Referenced room must exist                      → 404
        3. No overlap with any booking of that room        → 409
        4. Insert with ID = max(id) + 1                    → 201

    Update  (PUT /api/bookings/{id})
        1. Booking must exist                              → 404
        2. Merge prospective room/title/start/end
        3. Prospective start < end                         → 400
        4. If the room changes, the new room must exist    → 404
        5. No overlap with other bookings of the
           prospective room (the edited booking excluded)  → 409
        6. Apply                                           → 200

    A rejected write changes nothing: the exception rolls back the
    request's transaction in get_db_session().
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from roomforge.exceptions import (
    BookingConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from roomforge.models.booking import Booking
from roomforge.schemas.booking import BookingResponse
from roomforge.services.conflicts import find_conflicts
from roomforge.services.room_service import room_service

logger = logging.getLogger(__name__)


class BookingService:
    """
    Business logic layer for booking operations.

    Error Handling Strategy:
        NotFoundError, ValidationError and BookingConflictError are raised
        directly and map to 404/400/409. SQLAlchemy failures are wrapped in
        DatabaseError (→ 500) with a generic client message.
    """

    async def _load(self, db: AsyncSession, booking_id: int) -> Booking:
        result = await db.execute(select(Booking).where(Booking.id == booking_id))
        booking = result.scalar_one_or_none()
        if booking is None:
            raise NotFoundError(resource="booking", resource_id=booking_id)
        return booking

    async def _room_bookings(self, db: AsyncSession, room_id: int) -> List[Booking]:
        result = await db.execute(
            select(Booking).where(Booking.room_id == room_id).order_by(Booking.start)
        )
        return list(result.scalars().all())

    async def _ensure_room(self, db: AsyncSession, room_id: int) -> None:
        if not await room_service.room_exists(db, room_id):
            raise NotFoundError(resource="room", resource_id=room_id)

    async def _ensure_free(
        self,
        db: AsyncSession,
        room_id: int,
        start: datetime,
        end: datetime,
        exclude_id: Optional[int] = None,
        message: str = "Room is already booked for this time slot",
    ) -> None:
        conflicts = find_conflicts(
            start, end, await self._room_bookings(db, room_id), exclude_id=exclude_id
        )
        if conflicts:
            ids = [booking.id for booking in conflicts]
            logger.info(
                "Booking rejected: room %s %s-%s overlaps bookings %s",
                room_id, start.isoformat(), end.isoformat(), ids,
            )
            raise BookingConflictError(room_id=room_id, conflicting_ids=ids, message=message)

    async def list_bookings(
        self,
        db: AsyncSession,
        room_id: Optional[int] = None,
    ) -> List[BookingResponse]:
        """
        Return all bookings ordered by ID, or only those of one room.

        A room ID with no bookings (or no room at all) yields an empty list.
        """
        try:
            query = select(Booking)
            if room_id is not None:
                query = query.where(Booking.room_id == room_id)
            result = await db.execute(query.order_by(Booking.id))
            return [BookingResponse.model_validate(b) for b in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing bookings: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve bookings. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_booking(self, db: AsyncSession, booking_id: int) -> BookingResponse:
        try:
            return BookingResponse.model_validate(await self._load(db, booking_id))
        except SQLAlchemyError as e:
            logger.error("Database error fetching booking %s: %s", booking_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the booking. Please try again.",
                context={"booking_id": booking_id},
            )

    async def create_booking(
        self,
        db: AsyncSession,
        room_id: int,
        title: str,
        start: datetime,
        end: datetime,
    ) -> BookingResponse:
        """
        Book a room for [start, end).

        Raises:
            ValidationError:      end is not after start (→ 400)
            NotFoundError:        room does not exist (→ 404)
            BookingConflictError: overlaps an existing booking (→ 409)
            DatabaseError:        persistence failed (→ 500)
        """
        if start >= end:
            raise ValidationError(message="Booking end must be after its start", field="end")

        try:
            await self._ensure_room(db, room_id)
            await self._ensure_free(db, room_id, start, end)

            result = await db.execute(select(func.max(Booking.id)))
            new_id = (result.scalar() or 0) + 1

            booking = Booking(id=new_id, room_id=room_id, title=title, start=start, end=end)
            db.add(booking)
            await db.flush()
            logger.info(
                "Booking %s created: room %s %s-%s",
                booking.id, room_id, start.isoformat(), end.isoformat(),
            )
            return BookingResponse.model_validate(booking)
        except SQLAlchemyError as e:
            logger.error("Database error creating booking: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the booking. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def update_booking(
        self,
        db: AsyncSession,
        booking_id: int,
        room_id: Optional[int] = None,
        title: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> BookingResponse:
        """
        Apply a partial update to a booking.

        Omitted fields keep their current value. The conflict check runs
        against the prospective room/start/end and ignores the booking's own
        current interval.
        """
        try:
            booking = await self._load(db, booking_id)

            new_room_id = room_id if room_id is not None else booking.room_id
            new_start = start if start is not None else booking.start
            new_end = end if end is not None else booking.end

            if new_start >= new_end:
                raise ValidationError(message="Booking end must be after its start", field="end")

            if new_room_id != booking.room_id:
                await self._ensure_room(db, new_room_id)

            await self._ensure_free(
                db,
                new_room_id,
                new_start,
                new_end,
                exclude_id=booking.id,
                message="Room is already booked for this updated time slot",
            )

            booking.room_id = new_room_id
            if title is not None:
                booking.title = title
            booking.start = new_start
            booking.end = new_end
            await db.flush()
            logger.info("Booking %s updated", booking.id)
            return BookingResponse.model_validate(booking)
        except SQLAlchemyError as e:
            logger.error("Database error updating booking %s: %s", booking_id, str(e))
            raise DatabaseError(
                message="Could not update the booking. Please try again.",
                context={"booking_id": booking_id},
            )

    async def delete_booking(self, db: AsyncSession, booking_id: int) -> BookingResponse:
        """Remove a booking and return it as it was."""
        try:
            booking = await self._load(db, booking_id)
            deleted = BookingResponse.model_validate(booking)
            await db.delete(booking)
            await db.flush()
            logger.info("Booking %s deleted", booking_id)
            return deleted
        except SQLAlchemyError as e:
            logger.error("Database error deleting booking %s: %s", booking_id, str(e))
            raise DatabaseError(
                message="Could not delete the booking. Please try again.",
                context={"booking_id": booking_id},
            )


# ── Singleton Instance ────────────────────────────────────────────────────
booking_service = BookingService()
