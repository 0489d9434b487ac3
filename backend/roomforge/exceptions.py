"""
RoomForge Backend — Custom Exception Hierarchy
===============================================

What:  Application errors raised by services and middleware.
How:   Every error knows its HTTP status and machine-readable error code;
       handlers in main.py turn it into the shared JSON error body
       {error, message, details, request_id}.

Exception Hierarchy:
    RoomForgeError (base)                   500 server_error
    ├── ValidationError                     400 validation_error
    ├── NotFoundError                       404 not_found
    ├── BookingConflictError                409 booking_conflict
    ├── RateLimitExceededError              429 rate_limit_exceeded
    └── DatabaseError                       500 server_error
"""

from typing import Any, Dict, Iterable, Optional


class RoomForgeError(Exception):
    """
    Base for every RoomForge error.

    Attributes:
        message:  Text safe to show to the API client
        context:  Structured details, returned as `details` for 4xx errors
    """

    status_code = 500
    error_code = "server_error"

    def __init__(self, message: str = "Something went wrong", context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = dict(context) if context else {}


class ValidationError(RoomForgeError):
    """
    A request that passed schema validation but breaks a booking rule,
    e.g. an update that leaves the end at or before the start.

    Missing fields and wrong types never reach the services: FastAPI raises
    RequestValidationError for those, rendered with the same 400 body.
    """

    status_code = 400
    error_code = "validation_error"

    def __init__(self, message: str, field: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.field = field
        if field:
            self.context["field"] = field


class NotFoundError(RoomForgeError):
    """Unknown room or booking ID, including a booking that names a missing room."""

    status_code = 404
    error_code = "not_found"

    def __init__(self, resource: str, resource_id: Any = None, context: Optional[Dict[str, Any]] = None):
        if resource_id is None:
            message = f"{resource.capitalize()} not found"
        else:
            message = f"{resource.capitalize()} with ID '{resource_id}' was not found"
        super().__init__(message, context)
        self.resource = resource
        self.resource_id = resource_id
        self.context.update(resource=resource, resource_id=resource_id)


class BookingConflictError(RoomForgeError):
    """
    The requested [start, end) slot intersects at least one booking of the
    same room. The clashing booking IDs go back to the client in `details`.
    """

    status_code = 409
    error_code = "booking_conflict"

    def __init__(
        self,
        room_id: int,
        conflicting_ids: Iterable[int],
        message: str = "Room is already booked for this time slot",
    ):
        self.room_id = room_id
        self.conflicting_ids = sorted(conflicting_ids)
        super().__init__(
            message,
            {"room_id": room_id, "conflicting_booking_ids": self.conflicting_ids},
        )


class RateLimitExceededError(RoomForgeError):
    """Too many requests from one client IP; answered with a Retry-After header."""

    status_code = 429
    error_code = "rate_limit_exceeded"

    def __init__(self, retry_after: int, context: Optional[Dict[str, Any]] = None):
        super().__init__(f"Too many requests, retry in {retry_after}s", context)
        self.retry_after = retry_after
        self.context["retry_after"] = retry_after


class DatabaseError(RoomForgeError):
    """
    The storage layer failed.

    The client only ever sees a generic message; the driver error is kept in
    `context` for the server log.
    """

    def __init__(self, message: str = "Storage operation failed", context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
