# Middleware package init
"""
RoomForge Backend — Middleware Package
=======================================

Middleware Chain (execution order):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Rate limiting runs before anything else and rejects with 429. The request
    ID is assigned next so the access log line and error bodies carry it.
"""
