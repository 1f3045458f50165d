"""
Wedding Invitations Backend — Application Package Initializer
===============================================================

What: Marks the `app` directory as a Python package.
Why:  Enables module imports like `from app.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend is layered the same way for every resource:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← parse, validate, envelope
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← auth, invitations, RSVP lifecycle
    ├─────────────────────────────────────┤
    │         Data Gateway                │  ← the only code that issues queries
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘

    Routes never touch the session directly; services receive a gateway
    constructed per request by `app.dependencies`.
"""

__version__ = "1.0.0"
