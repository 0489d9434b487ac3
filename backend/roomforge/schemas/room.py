"""
RoomForge Backend — Room Request/Response Schemas
==================================================

What:  Pydantic models for the /api/rooms contract.

Create vs Update:
    RoomCreate requires name and capacity; features defaults to [].
    RoomUpdate makes every field optional. An omitted (or null) field keeps
    its stored value, while `"features": []` explicitly clears the list.
"""

from typing import List, Optional

from pydantic import Field

from roomforge.schemas.common import CamelModel


class RoomCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255, description="Room display name")
    capacity: int = Field(ge=1, description="Number of seats")
    features: List[str] = Field(default_factory=list, description="Feature labels")


class RoomUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    capacity: Optional[int] = Field(default=None, ge=1)
    features: Optional[List[str]] = None


class RoomResponse(CamelModel):
    """Full representation of a room as returned by every /api/rooms endpoint."""
    id: int = Field(description="Room identifier")
    name: str
    capacity: int
    features: List[str] = Field(default_factory=list)
