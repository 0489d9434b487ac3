"""
RoomForge Backend — Booking Conflict Detection
===============================================

What:  The overlap rule for bookings of the same room.
How:   Plain functions over datetimes; no database or HTTP access, so the rule
       is unit-testable on its own. BookingService loads the bookings of the
       target room and calls find_conflicts() before every create/update.

Overlap Rule (half-open intervals):
    [start, end) and [other_start, other_end) conflict iff
        start < other_end AND end > other_start

    Touching endpoints do not conflict:
        09:00-10:00 and 10:00-11:00   → no conflict
        09:00-10:00 and 09:30-10:30   → conflict
        09:00-12:00 and 10:00-11:00   → conflict (containment)
"""

from datetime import datetime
from typing import Iterable, List, Optional, Protocol


class Interval(Protocol):
    """Anything with an id and a [start, end) interval, e.g. the Booking model."""

    id: int
    start: datetime
    end: datetime


def intervals_overlap(
    start: datetime,
    end: datetime,
    other_start: datetime,
    other_end: datetime,
) -> bool:
    """True when [start, end) and [other_start, other_end) intersect."""
    return start < other_end and end > other_start


def find_conflicts(
    start: datetime,
    end: datetime,
    bookings: Iterable[Interval],
    exclude_id: Optional[int] = None,
) -> List[Interval]:
    """
    Return the bookings whose interval overlaps [start, end).

    Args:
        start, end: Candidate interval.
        bookings:   Existing bookings of the same room. Room filtering is the
                    caller's job.
        exclude_id: ID of the booking being edited, skipped so an update
                    never conflicts with its own previous interval.
    """
    return [
        booking
        for booking in bookings
        if booking.id != exclude_id
        and intervals_overlap(start, end, booking.start, booking.end)
    ]
