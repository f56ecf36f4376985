#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Title decomposer
================
Splits the dbkey of a farm interwiki title into its parts:

    [subprefix<sep>][language.]wiki[<sep>article]

<sep> is one or more ``_`` / ``:`` characters (spaces are already ``_`` in a
dbkey).  Examples with subprefix ``fb``:

    fb_en.acme:Main_Page   → language="en", wiki="acme", article="Main_Page"
    fb:acme                → language="",   wiki="acme", article=""
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from functools import lru_cache
from typing import Optional

from .types import MatchResult


# -----------------------------------------------------------------------------

_SEP      = r"[_:]+"
_LANGUAGE = r"(?:([a-z-]{2,12})\.)?"
_WIKI     = r"([a-z0-9-]{1,50})"
_ARTICLE  = r"(?:" + _SEP + r"(.*))?"


# -----------------------------------------------------------------------------

@lru_cache(maxsize=64)
def _grammar(subprefix: str) -> re.Pattern[str]:
    # An empty subprefix drops the prefix segment, separator included.
    lead = re.escape(subprefix) + _SEP if subprefix else ""
    return re.compile(
        lead + _LANGUAGE + _WIKI + _ARTICLE,
        re.IGNORECASE | re.ASCII | re.DOTALL,
    )


# -----------------------------------------------------------------------------

def decompose(dbkey: str, subprefix: str = "") -> Optional[MatchResult]:
    """Return the parts of *dbkey*, or None when it does not fit the grammar."""
    if not dbkey:
        return None

    m = _grammar(subprefix or "").fullmatch(dbkey)
    if m is None:
        return None

    language, wiki, article = m.groups()
    return MatchResult(
        wiki=wiki.lower(),
        language=(language or "").lower(),
        article=article or "",
    )


# -----------------------------------------------------------------------------
