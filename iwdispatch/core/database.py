#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Database engine and session factory for the sub-wiki registry.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from .config import get_settings


# -----------------------------------------------------------------------------

class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""
    pass


# -----------------------------------------------------------------------------

def make_engine(url: str | None = None, echo: bool | None = None) -> AsyncEngine:
    settings = get_settings()
    db_url  = url  or settings.database_url
    db_echo = echo if echo is not None else settings.db_echo

    kwargs: dict = {}
    if "sqlite" in db_url:
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in db_url:
            # one connection, or every session gets its own empty database
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_size"]    = settings.db_pool_size
        kwargs["max_overflow"] = settings.db_max_overflow

    return create_async_engine(db_url, echo=db_echo, **kwargs)


# -----------------------------------------------------------------------------

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


# -----------------------------------------------------------------------------

def init_db(url: str | None = None, echo: bool | None = None) -> None:
    """Initialise the engine and session factory.  Call once at startup."""
    global _engine, _session_factory
    _engine = make_engine(url, echo)
    _session_factory = async_sessionmaker(
        _engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# -----------------------------------------------------------------------------

def get_engine() -> AsyncEngine:
    if _engine is None:
        init_db()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    if _session_factory is None:
        init_db()
    return _session_factory


# -----------------------------------------------------------------------------

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that yields a database session."""
    factory = get_session_factory()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# -----------------------------------------------------------------------------

async def create_all_tables() -> None:
    """Create all tables (dev / test only — use Alembic in production)."""
    import iwdispatch.models.models  # noqa: F401  — registers ORM models on Base

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# -----------------------------------------------------------------------------
