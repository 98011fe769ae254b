"""
Stockroom Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: assigns the correlation ID every later log line carries
    2. Logging: writes one access line per request with status and duration
    3. GZip / CORS: Starlette's stock middleware, configured in main.py

    API-key checks are NOT middleware: each route names its own header, so
    the check is a per-route dependency (see stockroom.security).
"""
