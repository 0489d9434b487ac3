"""
RoomForge Backend — Booking Route Handlers
===========================================

What:  CRUD endpoints for bookings under /api/bookings.
How:   Thin handlers; the write policy (room existence, overlap) lives in
       BookingService and surfaces here as 404/409 via the global handlers.

Endpoints:
    GET    /api/bookings                 all bookings
    GET    /api/bookings?id=N            one booking (404 if unknown)
    GET    /api/bookings?roomId=N        bookings of one room
    POST   /api/bookings                 create (201 / 400 / 404 / 409)
    PUT    /api/bookings/{booking_id}    partial update (200 / 400 / 404 / 409)
    DELETE /api/bookings/{booking_id}    delete, returns the removed booking
"""

import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from roomforge.database import get_db_session
from roomforge.schemas.booking import BookingCreate, BookingResponse, BookingUpdate
from roomforge.schemas.common import ErrorResponse
from roomforge.services.booking_service import booking_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Bookings"])


@router.get(
    "/bookings",
    response_model=Union[BookingResponse, List[BookingResponse]],
    responses={
        200: {"description": "A single booking when ?id is given, otherwise a list"},
        404: {"description": "Booking not found", "model": ErrorResponse},
    },
    summary="List bookings or view one booking",
    description="`id` takes precedence over `roomId` when both are given.",
)
async def list_bookings(
    response: Response,
    id: Optional[int] = Query(default=None, description="Return only the booking with this ID"),
    room_id: Optional[int] = Query(
        default=None, alias="roomId", description="Only bookings of this room"
    ),
    db: AsyncSession = Depends(get_db_session),
) -> Union[BookingResponse, List[BookingResponse]]:
    if id is not None:
        return await booking_service.get_booking(db=db, booking_id=id)

    bookings = await booking_service.list_bookings(db=db, room_id=room_id)
    response.headers["X-Total-Count"] = str(len(bookings))
    return bookings


@router.post(
    "/bookings",
    status_code=201,
    response_model=BookingResponse,
    responses={
        201: {"description": "Booking created", "model": BookingResponse},
        400: {"description": "Missing or invalid fields", "model": ErrorResponse},
        404: {"description": "Room does not exist", "model": ErrorResponse},
        409: {"description": "Room already booked for this time slot", "model": ErrorResponse},
    },
    summary="Book a room",
)
async def create_booking(
    payload: BookingCreate,
    db: AsyncSession = Depends(get_db_session),
) -> BookingResponse:
    """
    Book a room for the half-open interval [start, end).

    A booking that ends exactly when another starts is accepted.
    """
    logger.info(
        "Booking request: room=%s start=%s end=%s",
        payload.room_id, payload.start.isoformat(), payload.end.isoformat(),
    )
    return await booking_service.create_booking(
        db=db,
        room_id=payload.room_id,
        title=payload.title,
        start=payload.start,
        end=payload.end,
    )


@router.put(
    "/bookings/{booking_id}",
    response_model=BookingResponse,
    responses={
        400: {"description": "Invalid fields", "model": ErrorResponse},
        404: {"description": "Booking or room not found", "model": ErrorResponse},
        409: {"description": "Updated slot overlaps another booking", "model": ErrorResponse},
    },
    summary="Update a booking",
    description=(
        "Fields left out keep their current value. `startTime`/`endTime` are "
        "accepted as aliases for `start`/`end`."
    ),
)
async def update_booking(
    booking_id: int,
    payload: BookingUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> BookingResponse:
    return await booking_service.update_booking(
        db=db,
        booking_id=booking_id,
        room_id=payload.room_id,
        title=payload.title,
        start=payload.start,
        end=payload.end,
    )


@router.delete(
    "/bookings/{booking_id}",
    response_model=BookingResponse,
    responses={404: {"description": "Booking not found", "model": ErrorResponse}},
    summary="Cancel a booking",
)
async def delete_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> BookingResponse:
    return await booking_service.delete_booking(db=db, booking_id=booking_id)
