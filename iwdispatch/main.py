#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
IWDispatch — FastAPI application factory
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from iwdispatch.core.config import get_settings
from iwdispatch.core.database import create_all_tables, get_session_factory, init_db
from iwdispatch.core.logging import configure_logging
from iwdispatch.routes import interwiki, wikis
from iwdispatch.services.interwiki import InterwikiDispatcher, rules_from_settings
from iwdispatch.services.registry import WikiRegistry, seed_wikis

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    init_db()
    await create_all_tables()   # safe: CREATE TABLE IF NOT EXISTS
    await _seed_registry(app.state.registry)
    yield


# -----------------------------------------------------------------------------

async def _seed_registry(registry: WikiRegistry) -> None:
    """Register the configured LOCAL_DATABASES and load the registry snapshot."""
    settings = get_settings()
    factory = get_session_factory()

    async with factory() as session:
        try:
            added = await seed_wikis(session, settings.local_databases)
            await session.commit()
            if added:
                log.info("Seeded %d sub-wiki(s) from LOCAL_DATABASES", added)
            await registry.refresh(session)
        except Exception:
            await session.rollback()
            raise


# -----------------------------------------------------------------------------

def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging("DEBUG" if settings.debug else settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Resolves wiki-farm interwiki titles to external URLs.",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )

    # ── Interwiki state ───────────────────────────────────────────────────
    # Invalid rule configuration raises RuleConfigError here, before serving.

    app.state.dispatcher = InterwikiDispatcher(rules_from_settings(settings))
    app.state.registry   = WikiRegistry(settings.local_databases)

    # ── CORS ──────────────────────────────────────────────────────────────

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── API routers ───────────────────────────────────────────────────────

    prefix = "/api/v1"

    app.include_router(interwiki.router, prefix=prefix)
    app.include_router(wikis.router,     prefix=prefix)

    # ── Global exception handlers ─────────────────────────────────────────

    @app.exception_handler(500)
    async def server_error(request: Request, exc):
        log.error("Unhandled error on %s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    # ── Health check ──────────────────────────────────────────────────────

    @app.get("/api/health", tags=["system"])
    async def health(request: Request):
        return {
            "status":  "ok",
            "version": settings.app_version,
            "app":     settings.app_name,
            "rules":   len(request.app.state.dispatcher.rules),
        }

    return app


# -----------------------------------------------------------------------------

app = create_app()


# -----------------------------------------------------------------------------
