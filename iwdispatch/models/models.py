#!/usr/bin/env python
#
#
# ----------------------------------------------------------------------------
"""
ORM Models
==========

Tables
------
local_wikis     — sub-wikis provisioned on this farm, by database identifier

The default interwiki existence check expands a rule's ``dbname`` template
(e.g. ``wiki_$2``) and looks the result up among these identifiers.
All primary keys are UUIDs.  Timestamps stored in UTC.
"""
# ----------------------------------------------------------------------------

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from iwdispatch.core.database import Base


# ----------------------------------------------------------------------------

def _uuid_col(primary_key=False, nullable=False, **kw):
    """UUID column stored as String(36) — works for both SQLite and PostgreSQL."""
    return mapped_column(
        String(36),
        primary_key=primary_key,
        nullable=nullable,
        default=lambda: str(uuid.uuid4()),
        **kw,
    )


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# local_wikis
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class LocalWiki(Base):
    __tablename__ = "local_wikis"

    id:         Mapped[str]      = _uuid_col(primary_key=True)
    dbname:     Mapped[str]      = mapped_column(String(128), unique=True, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self) -> str:
        return f"<LocalWiki {self.dbname}>"
