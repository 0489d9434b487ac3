"""Create rooms and bookings tables

Revision ID: 001
Revises: None
Create Date: 2025-11-20 00:00:00.000000

What:  Initial schema: the room catalog and the bookings made against it.
Note:  bookings.room_id has no foreign key; deleting a room keeps its
       bookings (see roomforge/models/booking.py).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "rooms",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False,
                  comment="Room identifier, max(id) + 1 on create"),
        sa.Column("name", sa.String(255), nullable=False,
                  comment="Display name of the room"),
        sa.Column("capacity", sa.Integer(), nullable=False,
                  comment="Number of people the room seats"),
        sa.Column("features", sa.JSON(), nullable=False,
                  comment="Feature labels such as Projector or Whiteboard"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False,
                  comment="Booking identifier, max(id) + 1 on create"),
        sa.Column("room_id", sa.Integer(), nullable=False,
                  comment="ID of the booked room"),
        sa.Column("title", sa.String(255), nullable=False,
                  comment="Meeting title"),
        sa.Column("start_time", sa.DateTime(timezone=False), nullable=False,
                  comment="Local start time (inclusive)"),
        sa.Column("end_time", sa.DateTime(timezone=False), nullable=False,
                  comment="Local end time (exclusive)"),
        sa.PrimaryKeyConstraint("id"),
    )

    # Conflict checks load all bookings of one room in start order
    op.create_index("idx_bookings_room_start", "bookings", ["room_id", "start_time"])


def downgrade() -> None:
    """Drops both tables. Destructive: all rooms and bookings are lost."""
    op.drop_index("idx_bookings_room_start", table_name="bookings")
    op.drop_table("bookings")
    op.drop_table("rooms")
