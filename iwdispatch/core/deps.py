#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
FastAPI dependencies for the per-application singletons kept on ``app.state``.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import Request

from iwdispatch.services.interwiki import InterwikiDispatcher
from iwdispatch.services.registry import WikiRegistry


# -----------------------------------------------------------------------------

def get_dispatcher(request: Request) -> InterwikiDispatcher:
    return request.app.state.dispatcher


def get_registry(request: Request) -> WikiRegistry:
    return request.app.state.registry


# -----------------------------------------------------------------------------
