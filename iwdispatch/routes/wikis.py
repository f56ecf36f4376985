#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Sub-wiki registry router
========================
GET    /api/v1/wikis              — list registered sub-wiki identifiers
POST   /api/v1/wikis              — register a sub-wiki
GET    /api/v1/wikis/{dbname}     — get one
DELETE /api/v1/wikis/{dbname}     — unregister

Every change refreshes the in-memory snapshot used by interwiki resolution.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from iwdispatch.core.database import get_db
from iwdispatch.core.deps import get_registry
from iwdispatch.schemas import LocalWikiCreate, LocalWikiResponse, OKResponse
from iwdispatch.services import registry as wiki_svc
from iwdispatch.services.registry import WikiRegistry


# -----------------------------------------------------------------------------

router = APIRouter(prefix="/wikis", tags=["wikis"])


# -----------------------------------------------------------------------------

@router.get("", response_model=list[LocalWikiResponse])
async def list_wikis(
    skip:  int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
):
    return await wiki_svc.list_wikis(db, skip=skip, limit=limit)


# -----------------------------------------------------------------------------

@router.post("", response_model=LocalWikiResponse, status_code=201)
async def create_wiki(
    data: LocalWikiCreate,
    db: AsyncSession = Depends(get_db),
    registry: WikiRegistry = Depends(get_registry),
):
    wiki = await wiki_svc.add_wiki(db, data)
    await registry.refresh(db)
    return wiki


# -----------------------------------------------------------------------------

@router.get("/{dbname}", response_model=LocalWikiResponse)
async def get_wiki(dbname: str, db: AsyncSession = Depends(get_db)):
    return await wiki_svc.get_wiki(db, dbname)


# -----------------------------------------------------------------------------

@router.delete("/{dbname}", response_model=OKResponse)
async def delete_wiki(
    dbname: str,
    db: AsyncSession = Depends(get_db),
    registry: WikiRegistry = Depends(get_registry),
):
    await wiki_svc.delete_wiki(db, dbname)
    await registry.refresh(db)
    return OKResponse(message=f"Wiki '{dbname}' removed")


# -----------------------------------------------------------------------------
