#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Interwiki dispatcher
====================
Turns a farm interwiki title into an external URL, or declines.

For each title the rule list is scanned in order; the first rule whose
interwiki prefix equals the title's prefix decides the outcome on its own:

  1. baseTransOnly rules decline for ``action=raw`` / ``action=render``
  2. the dbkey must decompose into [language.]wiki[:article]
  3. the sub-wiki must exist (dbname lookup or the rule's own checker)
  4. the URL template must be able to express the title

A decline is a normal result: the caller renders the title as an ordinary
interwiki link.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence

from .decomposer import decompose
from .existence import DbNameExistenceChecker, checker_for
from .types import Declined, ExistenceChecker, Resolution, Rewritten, Rule, Title
from .urls import build_url

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

_RAW_ACTION_RE = re.compile(r"(?:^|&)action=(?:render|raw)(?:&|$)", re.IGNORECASE)


def is_raw_action(query: str) -> bool:
    return bool(query) and _RAW_ACTION_RE.search(query) is not None


# -----------------------------------------------------------------------------

def resolve_rule(
    rule: Rule,
    title: Title,
    query: str,
    checker: ExistenceChecker,
) -> Resolution:
    """Resolve *title* against a single rule whose prefix already matched."""
    if rule.base_trans_only and is_raw_action(query):
        return Declined("transclusion-only rule")

    match = decompose(title.dbkey, rule.subprefix)
    if match is None:
        return Declined("dbkey does not match")

    if not checker_for(rule, checker).exists(rule, match.wiki, match.language):
        return Declined("unknown sub-wiki")

    url = build_url(rule, match, title.namespace_text, query)
    if url is None:
        return Declined("no language template")

    return Rewritten(url)


# -----------------------------------------------------------------------------

def resolve(
    title: Title,
    query: str,
    rules: Sequence[Rule],
    known_identifiers: Iterable[str] = (),
    checker: ExistenceChecker | None = None,
) -> Resolution:
    """
    Rewrite *title* with the first rule sharing its interwiki prefix.

    *checker* replaces the default dbname lookup over *known_identifiers*;
    a rule's own override still takes precedence over either.
    """
    for rule in rules:
        if rule.interwiki != title.interwiki:
            continue

        if checker is None:
            checker = DbNameExistenceChecker(known_identifiers)
        result = resolve_rule(rule, title, query, checker)
        if isinstance(result, Declined):
            log.debug("Declined %s:%s via %r: %s",
                      title.interwiki, title.dbkey, rule.name or rule.interwiki, result.reason)
        return result

    return Declined("no rule for prefix")


# -----------------------------------------------------------------------------

class InterwikiDispatcher:
    """
    Holds the active rule list.

    ``reload()`` installs a new tuple in one assignment, so a concurrent
    ``resolve()`` sees either the old list or the new one, never a mix.
    """

    def __init__(self, rules: Iterable[Rule] = ()) -> None:
        self._rules: tuple[Rule, ...] = tuple(rules)

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    @property
    def prefixes(self) -> frozenset[str]:
        return frozenset(r.interwiki for r in self._rules)

    def reload(self, rules: Iterable[Rule]) -> None:
        self._rules = tuple(rules)
        log.info("Interwiki rules reloaded (%d rules)", len(self._rules))

    def resolve(
        self,
        title: Title,
        query: str = "",
        known_identifiers: Iterable[str] = (),
    ) -> Resolution:
        return resolve(title, query, self._rules, known_identifiers)


# -----------------------------------------------------------------------------
