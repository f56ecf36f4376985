#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Application configuration.

All values can be overridden via environment variables or a .env file.
The interwiki rule mapping is read from ``IWD_PREFIXES`` (JSON) and/or the
JSON file named by ``IWD_PREFIXES_FILE``.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from iwdispatch._version import __version__ as _pkg_version


# -----------------------------------------------------------------------------

class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ────────────────────────────────────────────────────────

    app_name: str = "IWDispatch"
    app_version: str = _pkg_version
    base_url: str = "http://localhost:8000"
    debug: bool = False
    environment: Literal["development", "testing", "production"] = "development"
    log_level: str = "INFO"

    # ── Database ───────────────────────────────────────────────────────────

    database_url: str = "sqlite+aiosqlite:///./iwdispatch.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_echo: bool = False

    # ── Interwiki farms ────────────────────────────────────────────────────

    # farm name → rule record; validated by services.interwiki.loader
    iwd_prefixes: dict[str, dict[str, Any]] = {}
    iwd_prefixes_file: Optional[Path] = None

    # sub-wiki identifiers seeded into the registry at startup
    local_databases: list[str] = []

    # ── CORS ───────────────────────────────────────────────────────────────

    cors_origins: list[str] = [
        "http://localhost:8000",
        "http://localhost:3000",
    ]

    @property
    def is_testing(self) -> bool:
        return self.environment == "testing"


# -----------------------------------------------------------------------------

@lru_cache
def get_settings() -> Settings:
    return Settings()


# -----------------------------------------------------------------------------
