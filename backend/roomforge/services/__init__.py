# Services package init
"""
RoomForge Backend — Services Layer
===================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   Services receive the request's AsyncSession, apply business rules, and
       return response schemas or raise application exceptions.

Service Inventory:
    - conflicts:        Half-open interval overlap rule (pure functions)
    - RoomService:      Room catalog CRUD and existence checks
    - BookingService:   Booking CRUD and the write policy (404 / 409 checks)
    - seed:             Demo rooms and bookings loaded at startup
"""
