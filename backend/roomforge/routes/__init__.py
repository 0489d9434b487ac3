# Routes package init
"""
RoomForge Backend — API Routes Package
=======================================

Route Inventory:
    - rooms.py:     GET/POST /api/rooms, PUT/DELETE /api/rooms/{id}
    - bookings.py:  GET/POST /api/bookings, PUT/DELETE /api/bookings/{id}
    - health.py:    GET / (banner), GET /health

Design Principle:
    Routes are THIN. They extract data from the request, call a service and
    return its result. Status codes for failures come from the exception
    handlers registered in main.py.
"""
