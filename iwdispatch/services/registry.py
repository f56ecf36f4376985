#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Sub-wiki registry — the set of database identifiers provisioned on this farm.

Rows live in ``local_wikis``.  Resolution never touches the database: it
reads the in-memory snapshot held by ``WikiRegistry``, which ``refresh()``
replaces in a single assignment after every change.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from collections.abc import Iterable

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from iwdispatch.models import LocalWiki
from iwdispatch.schemas import LocalWikiCreate

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

class WikiRegistry:

    def __init__(self, known: Iterable[str] = ()) -> None:
        self._known: frozenset[str] = frozenset(known)

    def snapshot(self) -> frozenset[str]:
        return self._known

    def replace(self, known: Iterable[str]) -> None:
        self._known = frozenset(known)

    async def refresh(self, db: AsyncSession) -> frozenset[str]:
        result = await db.execute(select(LocalWiki.dbname))
        self.replace(result.scalars().all())
        log.debug("Sub-wiki registry refreshed (%d wikis)", len(self._known))
        return self._known


# -----------------------------------------------------------------------------

async def add_wiki(db: AsyncSession, data: LocalWikiCreate) -> LocalWiki:
    existing = await db.execute(select(LocalWiki).where(LocalWiki.dbname == data.dbname))
    if existing.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Wiki '{data.dbname}' is already registered",
        )

    wiki = LocalWiki(dbname=data.dbname)
    db.add(wiki)
    await db.flush()
    log.info("Registered sub-wiki %s", data.dbname)
    return wiki


# -----------------------------------------------------------------------------

async def get_wiki(db: AsyncSession, dbname: str) -> LocalWiki:
    result = await db.execute(select(LocalWiki).where(LocalWiki.dbname == dbname))
    wiki = result.scalar_one_or_none()
    if not wiki:
        raise HTTPException(status_code=404, detail=f"Wiki '{dbname}' not found")
    return wiki


# -----------------------------------------------------------------------------

async def list_wikis(db: AsyncSession, skip: int = 0, limit: int = 100) -> list[LocalWiki]:
    result = await db.execute(
        select(LocalWiki).order_by(LocalWiki.dbname).offset(skip).limit(limit)
    )
    return list(result.scalars().all())


# -----------------------------------------------------------------------------

async def delete_wiki(db: AsyncSession, dbname: str) -> None:
    wiki = await get_wiki(db, dbname)
    await db.delete(wiki)
    await db.flush()
    log.info("Removed sub-wiki %s", dbname)


# -----------------------------------------------------------------------------

async def seed_wikis(db: AsyncSession, names: Iterable[str]) -> int:
    """Insert any of *names* not yet registered.  Returns how many were added."""
    wanted = set(names)
    if not wanted:
        return 0

    result = await db.execute(select(LocalWiki.dbname).where(LocalWiki.dbname.in_(wanted)))
    present = set(result.scalars().all())

    added = 0
    for name in sorted(wanted - present):
        db.add(LocalWiki(dbname=name))
        added += 1
    await db.flush()
    return added


# -----------------------------------------------------------------------------
