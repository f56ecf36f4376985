#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Value types shared by the interwiki resolver.

Everything here is immutable: rule tuples are built once by the loader and
swapped wholesale on reload, never edited in place.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Union


# -----------------------------------------------------------------------------

class ExistenceChecker(Protocol):
    """Answers whether a sub-wiki addressed by a rule is provisioned."""

    def exists(self, rule: "Rule", wiki: str, language: str) -> bool: ...


# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Rule:
    """One configured farm interwiki prefix."""

    interwiki: str
    url_template: str
    subprefix: str = ""
    base_trans_only: bool = False
    url_template_int: Optional[str] = None
    db_name_template: Optional[str] = None
    db_name_template_int: Optional[str] = None
    exists_override: Optional[ExistenceChecker] = None
    name: str = ""


# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Title:
    interwiki: str
    dbkey: str
    namespace_text: str = ""


# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class MatchResult:
    wiki: str
    language: str = ""
    article: str = ""


# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Rewritten:
    url: str

    @property
    def rewritten(self) -> bool:
        return True


@dataclass(frozen=True)
class Declined:
    reason: str = ""

    @property
    def rewritten(self) -> bool:
        return False


Resolution = Union[Rewritten, Declined]


# -----------------------------------------------------------------------------
