#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Interwiki router
================
GET    /api/v1/interwiki/rules     — active rules, in dispatch order
POST   /api/v1/interwiki/resolve   — resolve one farm title
POST   /api/v1/interwiki/render    — rewrite farm links in a wikitext snippet
POST   /api/v1/interwiki/reload    — re-read rules from configuration
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from iwdispatch.core.config import get_settings
from iwdispatch.core.deps import get_dispatcher, get_registry
from iwdispatch.schemas import (
    ReloadResponse,
    RenderRequest,
    RenderResponse,
    ResolveRequest,
    ResolveResponse,
    RuleResponse,
)
from iwdispatch.services.interwiki import (
    InterwikiDispatcher,
    Rewritten,
    Rule,
    RuleConfigError,
    Title,
    rules_from_settings,
)
from iwdispatch.services.linker import InterwikiLinker
from iwdispatch.services.registry import WikiRegistry

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

router = APIRouter(prefix="/interwiki", tags=["interwiki"])


# -----------------------------------------------------------------------------

@router.get("/rules", response_model=list[RuleResponse])
async def list_rules(dispatcher: InterwikiDispatcher = Depends(get_dispatcher)):
    return [_rule_dict(r) for r in dispatcher.rules]


# -----------------------------------------------------------------------------

@router.post("/resolve", response_model=ResolveResponse)
async def resolve_title(
    data: ResolveRequest,
    dispatcher: InterwikiDispatcher = Depends(get_dispatcher),
    registry: WikiRegistry = Depends(get_registry),
):
    title = Title(interwiki=data.interwiki, dbkey=data.dbkey, namespace_text=data.namespace)
    result = dispatcher.resolve(title, data.query, registry.snapshot())
    if isinstance(result, Rewritten):
        return ResolveResponse(rewritten=True, url=result.url)
    return ResolveResponse(rewritten=False)


# -----------------------------------------------------------------------------

@router.post("/render", response_model=RenderResponse)
async def render_links(
    data: RenderRequest,
    dispatcher: InterwikiDispatcher = Depends(get_dispatcher),
    registry: WikiRegistry = Depends(get_registry),
):
    linker = InterwikiLinker(dispatcher, registry.snapshot)
    return RenderResponse(html=linker.rewrite(data.content, data.query))


# -----------------------------------------------------------------------------

@router.post("/reload", response_model=ReloadResponse)
async def reload_rules(dispatcher: InterwikiDispatcher = Depends(get_dispatcher)):
    get_settings.cache_clear()
    try:
        rules = rules_from_settings(get_settings())
    except RuleConfigError as exc:
        log.warning("Rule reload rejected: %s", exc)
        raise HTTPException(
            status_code=422,
            detail=str(exc),
        )
    dispatcher.reload(rules)
    return ReloadResponse(rule_count=len(rules))


# -----------------------------------------------------------------------------

def _rule_dict(r: Rule) -> dict:
    return {
        "name":                r.name,
        "interwiki":           r.interwiki,
        "subprefix":           r.subprefix,
        "base_trans_only":     r.base_trans_only,
        "url":                 r.url_template,
        "url_int":             r.url_template_int,
        "dbname":              r.db_name_template,
        "dbname_int":          r.db_name_template_int,
        "custom_exists_check": r.exists_override is not None,
    }


# -----------------------------------------------------------------------------
