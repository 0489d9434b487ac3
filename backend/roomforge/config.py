"""
RoomForge Backend — Application Configuration
==============================================

What:  Every tunable of the service, from storage to rate limits.
How:   A pydantic-settings model filled from the environment (and an
       optional .env file), exposed as the module-level `settings`.
       Invalid values fail at import, before the app is built.

Storage Note:
    The default DATABASE_URL is an in-memory SQLite database. Rooms and
    bookings live for the lifetime of the process and the demo catalog is
    re-seeded on every start. Point DATABASE_URL at a file or at PostgreSQL
    (postgresql+asyncpg://...) to keep data across restarts.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Runtime configuration. Environment variable names are the upper-cased
    field names (DATABASE_URL, SEED_DEMO_DATA, RATE_LIMIT_REQUESTS, ...).
    Defaults run the demo service with no configuration at all.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Any async SQLAlchemy URL: sqlite+aiosqlite://... or postgresql+asyncpg://...
    database_url: str = Field(
        default="sqlite+aiosqlite:///:memory:",
        description="Async SQLAlchemy connection URL",
    )

    # Pool sizing only applies to server databases; SQLite uses a single
    # shared connection.
    db_pool_size: int = Field(default=5, ge=1, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # Run Base.metadata.create_all() during startup. Disable when the schema
    # is managed with Alembic.
    create_tables_on_startup: bool = Field(default=True)

    # Load the demo rooms and bookings when the room catalog is empty
    seed_demo_data: bool = Field(default=True)

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def is_in_memory_database(self) -> bool:
        return self.is_sqlite and ":memory:" in self.database_url

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated list of origins, "*" allows any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Rate Limiting ─────────────────────────────────────────────────────
    # Per-IP sliding window
    rate_limit_requests: int = Field(default=300, ge=10, le=100000)
    rate_limit_window: int = Field(default=60, ge=1, le=86400)  # seconds

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Read once; modules import this object rather than Settings
settings = Settings()
