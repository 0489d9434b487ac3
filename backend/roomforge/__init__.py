"""
RoomForge Backend — Application Package Initializer
====================================================

What: Marks the `roomforge` directory as a Python package.
Who:  Used by uvicorn (`uvicorn roomforge.main:app`), Alembic and pytest.

Architecture Note:
    The backend is split into layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← existence checks, conflict policy
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch the database directly; services never build HTTP
    responses. The only non-trivial rule in the system, booking overlap
    detection, lives in `roomforge.services.conflicts` as plain functions.
"""

__version__ = "1.0.0"
