#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pytest fixtures for IWDispatch tests.
Uses an in-memory SQLite database so no external services are needed.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import json
import os

# ── Env vars must be set before importing iwdispatch modules ─────────────────
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT",  "testing")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from iwdispatch.core.config import get_settings
from iwdispatch.core.database import Base, get_db
import iwdispatch.models.models  # noqa: F401  — registers ORM models on Base


# -----------------------------------------------------------------------------

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"

# Rule mapping in the same shape as the IWD_PREFIXES setting.
FARM_RULES: dict[str, dict] = {
    "examplefarm": {
        "interwiki": "farm",
        "url": "https://$2.example.org/wiki/$1",
        "urlInt": "https://$2.example.org/$3/wiki/$1",
    },
    "checkedfarm": {
        "interwiki": "checked",
        "url": "https://$2.checked.org/wiki/$1",
        "urlInt": "https://$2.checked.org/$3/wiki/$1",
        "dbname": "wiki_$2",
        "dbnameInt": "wiki_$2_$3",
    },
    "transfarm": {
        "interwiki": "trans",
        "url": "https://$2.trans.org/wiki/$1",
        "baseTransOnly": True,
    },
}


# -----------------------------------------------------------------------------

@pytest.fixture
def farm_rules() -> dict[str, dict]:
    return json.loads(json.dumps(FARM_RULES))


@pytest.fixture
def settings_env(monkeypatch, farm_rules):
    """Point Settings at *farm_rules* and drop the cached Settings instance."""
    monkeypatch.setenv("IWD_PREFIXES", json.dumps(farm_rules))
    monkeypatch.delenv("IWD_PREFIXES_FILE", raising=False)
    monkeypatch.delenv("LOCAL_DATABASES", raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


# -----------------------------------------------------------------------------

@pytest_asyncio.fixture(scope="function")
async def db_engine():
    engine = create_async_engine(
        TEST_DB_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(scope="function")
async def db_session(db_session_factory):
    async with db_session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(settings_env, db_session_factory):
    """HTTP test client wired to an isolated in-memory DB and FARM_RULES."""
    from iwdispatch.main import create_app

    async def override_get_db():
        async with db_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app = create_app()
    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# -----------------------------------------------------------------------------
