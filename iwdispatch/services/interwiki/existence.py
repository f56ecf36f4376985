#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Existence checks — does the sub-wiki a title points at actually exist?

The default checker expands the rule's ``dbname`` / ``dbnameInt`` template
and looks the result up in the set of known local sub-wiki identifiers.
A rule may carry its own checker instead (``wikiExistsCallback``).
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Callable, Iterable

from .types import ExistenceChecker, Rule


# -----------------------------------------------------------------------------

def expand_dbname(template: str, wiki: str, language: str) -> str:
    return template.replace("$2", wiki).replace("$3", language)


# -----------------------------------------------------------------------------

class DbNameExistenceChecker:
    """Membership test of the expanded dbname template in *known*."""

    def __init__(self, known: Iterable[str] = ()) -> None:
        self._known = frozenset(known)

    def exists(self, rule: Rule, wiki: str, language: str) -> bool:
        if language:
            template = rule.db_name_template_int
        else:
            template = rule.db_name_template

        # No way to verify → do not block the rewrite
        if template is None:
            return True

        return expand_dbname(template, wiki, language) in self._known


# -----------------------------------------------------------------------------

class CallableExistenceChecker:
    """Adapts a plain ``fn(rule, wiki, language) -> bool`` to the checker interface."""

    def __init__(self, fn: Callable[[Rule, str, str], bool]) -> None:
        self._fn = fn

    def exists(self, rule: Rule, wiki: str, language: str) -> bool:
        return self._fn(rule, wiki, language) is True

    def __repr__(self) -> str:
        name = getattr(self._fn, "__qualname__", repr(self._fn))
        return f"CallableExistenceChecker({name})"


# -----------------------------------------------------------------------------

def checker_for(rule: Rule, default: ExistenceChecker) -> ExistenceChecker:
    """The checker that governs *rule*: its override, else *default*."""
    if rule.exists_override is not None:
        return rule.exists_override
    return default


# -----------------------------------------------------------------------------
