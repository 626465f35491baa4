"""
AddrNotes Backend — Database Engine & Session Factory
=======================================================

What:  Async SQLAlchemy engine, session factory and declarative base.
Why:   The session factory is the long-lived storage client handle: created
       once per process, shared by every request, holding configuration only.
How:   SqlNoteStore opens one short session per storage call from
       `async_session_factory`; nothing here keeps per-request state.
Who:   Used by the SQL note store, the Alembic environment and the lifespan hook.

Connection Pooling Strategy:
    Pool sizing comes from settings for server databases (PostgreSQL).
    SQLite URLs get SQLAlchemy's default pool, since SQLite engines reject
    pool_size / max_overflow.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from addrnotes.config import settings


def build_engine(url: str) -> AsyncEngine:
    """Create an async engine, passing pool options only where the dialect takes them."""
    options = {"echo": settings.log_level == "DEBUG"}
    if not url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,  # Recycle after 1 hour to prevent stale connections
        )
    return create_async_engine(url, **options)


# ── Engine Configuration ──────────────────────────────────────────────────
engine = build_engine(settings.database_url)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: rows read inside a session stay readable after commit
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for migrations.
    """
    pass


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
