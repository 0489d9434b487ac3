"""
RoomForge Backend — Room Route Handlers
========================================

What:  CRUD endpoints for the room catalog under /api/rooms.
How:   Extracts path/query/body parameters, delegates to RoomService,
       returns camelCase JSON.

Endpoints:
    GET    /api/rooms            all rooms, or one room with ?id=N
    POST   /api/rooms            create (201)
    PUT    /api/rooms/{room_id}  partial update
    DELETE /api/rooms/{room_id}  delete, returns the removed room
"""

import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from roomforge.database import get_db_session
from roomforge.schemas.common import ErrorResponse
from roomforge.schemas.room import RoomCreate, RoomResponse, RoomUpdate
from roomforge.services.room_service import room_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Rooms"])


@router.get(
    "/rooms",
    response_model=Union[RoomResponse, List[RoomResponse]],
    responses={
        200: {"description": "A single room when ?id is given, otherwise every room"},
        404: {"description": "Room not found", "model": ErrorResponse},
    },
    summary="List rooms or view one room",
)
async def list_rooms(
    response: Response,
    id: Optional[int] = Query(default=None, description="Return only the room with this ID"),
    db: AsyncSession = Depends(get_db_session),
) -> Union[RoomResponse, List[RoomResponse]]:
    """
    List all rooms, or return a single room when `?id=` is supplied.

    The list form carries an X-Total-Count header.
    """
    if id is not None:
        return await room_service.get_room(db=db, room_id=id)

    rooms = await room_service.list_rooms(db=db)
    response.headers["X-Total-Count"] = str(len(rooms))
    return rooms


@router.post(
    "/rooms",
    status_code=201,
    response_model=RoomResponse,
    responses={
        201: {"description": "Room created", "model": RoomResponse},
        400: {"description": "Missing or invalid fields", "model": ErrorResponse},
    },
    summary="Create a room",
)
async def create_room(
    payload: RoomCreate,
    db: AsyncSession = Depends(get_db_session),
) -> RoomResponse:
    return await room_service.create_room(
        db=db,
        name=payload.name,
        capacity=payload.capacity,
        features=payload.features,
    )


@router.put(
    "/rooms/{room_id}",
    response_model=RoomResponse,
    responses={
        400: {"description": "Invalid fields", "model": ErrorResponse},
        404: {"description": "Room not found", "model": ErrorResponse},
    },
    summary="Update a room",
    description="Fields left out of the body keep their current value.",
)
async def update_room(
    room_id: int,
    payload: RoomUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> RoomResponse:
    return await room_service.update_room(
        db=db,
        room_id=room_id,
        name=payload.name,
        capacity=payload.capacity,
        features=payload.features,
    )


@router.delete(
    "/rooms/{room_id}",
    response_model=RoomResponse,
    responses={404: {"description": "Room not found", "model": ErrorResponse}},
    summary="Delete a room",
    description="Returns the deleted room. Bookings that reference it are kept.",
)
async def delete_room(
    room_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> RoomResponse:
    return await room_service.delete_room(db=db, room_id=room_id)
