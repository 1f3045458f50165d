"""
Wedding Invitations Backend — Database Session Management
===========================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   Creates one async engine per process, provides a session dependency
       that commits on success and rolls back on error.
Who:   Used by `app.dependencies` to build the per-request DataGateway.
When:  Engine is created at module import; sessions are created per-request.

Connection Pooling:
    Pool sizing only applies to server databases (PostgreSQL). SQLite,
    used by the test suite and local experiments, gets SQLAlchemy's own
    default pool because it rejects the QueuePool arguments.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import settings


def build_engine(url: str) -> AsyncEngine:
    """Create an async engine with pool options suited to the backend in `url`."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(url, **options)


# ── Engine & Session Factory ──────────────────────────────────────────────
# One engine for the process lifetime; sessions are cheap and per-request.
engine = build_engine(settings.database_url)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object so Alembic autogenerate and
    `create_all` see users, invitations and confirmations together.
    """
    pass


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the dependency chain (gateway → service → route)
        3. On success: commits anything the service left pending
        4. On error: rolls back the transaction
        5. Always: closes the session (returns connection to pool)

    Services commit their own writes explicitly, so the final commit here is
    usually a no-op; it exists for read paths that touched nothing.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def create_all_tables(bind: AsyncEngine = engine) -> None:
    """
    Create every table known to `Base.metadata` if it does not exist yet.

    Used by the debug init-db endpoint and the test suite. Production
    schemas are managed by Alembic.
    """
    import app.models  # noqa: F401  (registers models with Base.metadata)

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Close all pooled connections; called from the lifespan shutdown."""
    await engine.dispose()
