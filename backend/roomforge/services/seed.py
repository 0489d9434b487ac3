"""
RoomForge Backend — Demo Catalog
=================================

What:  The rooms and bookings the service starts with.
When:  Loaded during startup when SEED_DEMO_DATA is enabled and the room
       catalog is empty. With the in-memory default this happens on every
       start; with a persistent database only on the first one.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from roomforge.models.booking import Booking
from roomforge.models.room import Room

logger = logging.getLogger(__name__)

DEMO_ROOMS: List[Dict[str, Any]] = [
    {"id": 1, "name": "The Forge", "capacity": 12,
     "features": ["Projector", "Whiteboard", "Video Conferencing"]},
    {"id": 2, "name": "Crystal Room", "capacity": 4,
     "features": ["TV Screen", "Whiteboard"]},
    {"id": 3, "name": "Focus Pod", "capacity": 1,
     "features": ["Soundproofing"]},
    {"id": 4, "name": "Innovation Hub", "capacity": 20,
     "features": ["Projector", "Whiteboard", "Video Conferencing", "WiFi"]},
    {"id": 5, "name": "Executive Suite", "capacity": 8,
     "features": ["TV Screen", "Video Conferencing", "Whiteboard", "Air Conditioning"]},
    {"id": 6, "name": "Brainstorm Bay", "capacity": 6,
     "features": ["Whiteboard", "TV Screen"]},
    {"id": 7, "name": "Quiet Corner", "capacity": 2,
     "features": ["Soundproofing", "WiFi"]},
    {"id": 8, "name": "Tech Lab", "capacity": 15,
     "features": ["Projector", "Video Conferencing", "Whiteboard", "WiFi"]},
]

# (id, room_id, title, start, end)
DEMO_BOOKINGS: List[tuple] = [
    (101, 1, "Team Sync", "2025-11-24T09:00", "2025-11-24T10:00"),
    (102, 4, "Q4 Strategy Planning", "2025-11-23T14:00", "2025-11-23T16:30"),
    (103, 2, "Client Presentation", "2025-11-25T10:00", "2025-11-25T11:30"),
    (104, 5, "Board Meeting", "2025-11-26T09:00", "2025-11-26T12:00"),
    (105, 3, "Focus Time - Code Review", "2025-11-23T13:00", "2025-11-23T14:00"),
    (106, 8, "Product Demo", "2025-11-24T15:00", "2025-11-24T16:00"),
    (107, 6, "Design Sprint Workshop", "2025-11-27T10:00", "2025-11-27T12:00"),
    (108, 1, "All Hands Meeting", "2025-11-28T09:00", "2025-11-28T10:30"),
    (109, 7, "1-on-1 with Manager", "2025-11-23T11:00", "2025-11-23T11:30"),
    (110, 4, "Training Session - New Software", "2025-11-29T13:00", "2025-11-29T15:00"),
    (111, 2, "Budget Review", "2025-11-24T11:00", "2025-11-24T12:00"),
    (112, 5, "Investor Pitch", "2025-11-25T14:00", "2025-11-25T15:30"),
    (113, 8, "Engineering Standup", "2025-11-23T09:30", "2025-11-23T10:00"),
    (114, 6, "Marketing Campaign Review", "2025-11-26T15:00", "2025-11-26T16:30"),
    (115, 3, "Deep Work Session", "2025-11-27T14:00", "2025-11-27T16:00"),
]


async def seed_demo_data(db: AsyncSession) -> bool:
    """
    Insert the demo catalog if there are no rooms yet.

    Returns:
        True when data was inserted, False when the catalog was already populated.
    """
    result = await db.execute(select(func.count(Room.id)))
    if (result.scalar() or 0) > 0:
        logger.info("Room catalog already populated; skipping demo data")
        return False

    db.add_all(Room(**{**room, "features": list(room["features"])}) for room in DEMO_ROOMS)
    db.add_all(
        Booking(
            id=booking_id,
            room_id=room_id,
            title=title,
            start=datetime.fromisoformat(start),
            end=datetime.fromisoformat(end),
        )
        for booking_id, room_id, title, start, end in DEMO_BOOKINGS
    )
    await db.flush()
    logger.info("Seeded %d rooms and %d bookings", len(DEMO_ROOMS), len(DEMO_BOOKINGS))
    return True
