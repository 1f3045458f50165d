"""
Wedding Invitations Backend — API Routes Package
==================================================

Route Inventory:
    - auth.py:           /api/auth/register, /login, /verify, /me
    - invitations.py:    /api/invitations (CRUD) and /api/invitations/view/{code}
    - confirmations.py:  /api/confirmations (RSVP, listing, check-in)
    - debug.py:          /api/debug/* (only mounted when ENABLE_DEBUG_ROUTES is set)
    - health.py:         /health

Design Principle:
    Routes stay thin: parse the request, call one service method, wrap the
    result in the success envelope. Errors are raised, never returned; the
    handlers in main.py shape them.
"""
