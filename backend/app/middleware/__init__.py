"""
Wedding Invitations Backend — Middleware Package
==================================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first, so every later log line can carry it
    2. Logging wraps the rest and records status and duration
    3. GZip and CORS are Starlette's own middleware

Responses travel the chain in reverse, which is how the request ID ends up
in the `X-Request-ID` response header.
"""
