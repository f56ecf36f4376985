#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Interwiki link rewriter
=======================
Finds ``[[prefix:target]]`` / ``[[prefix:target|Label]]`` wikilinks whose
prefix belongs to a configured farm and turns the ones the dispatcher can
resolve into external anchors:

    [[farm:en.acme:Main Page|Acme]]
      → <a href="https://acme.example.org/en/wiki/Main_Page" class="extiw">Acme</a>

Links the dispatcher declines are left exactly as written so the host
renderer can still handle them.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import html
import re
from collections.abc import Callable, Iterable
from urllib.parse import quote

from iwdispatch.services.interwiki import InterwikiDispatcher, Rewritten, Title


# -----------------------------------------------------------------------------

_WIKILINK_RE = re.compile(r"\[\[([^\]|]+)(?:\|([^\]]+))?\]\]")
_WS_RE       = re.compile(r"[\s_]+")


# -----------------------------------------------------------------------------

def _to_dbkey(text: str) -> str:
    return _WS_RE.sub("_", text.strip()).strip("_")


def split_interwiki(target: str, prefixes: Iterable[str]) -> tuple[str, str] | None:
    """
    Split *target* into ``(prefix, rest)`` when it starts with one of
    *prefixes* (compared case-insensitively).  Returns the configured
    spelling of the prefix.
    """
    target = target.strip().lstrip(":")
    head, sep, rest = target.partition(":")
    if not sep:
        return None

    wanted = _WS_RE.sub("_", head.strip()).lower()
    for prefix in prefixes:
        if prefix.lower() == wanted:
            return prefix, rest
    return None


# -----------------------------------------------------------------------------

class InterwikiLinker:
    """
    Rewrite farm interwiki links in a piece of wikitext.

    Parameters
    ----------
    dispatcher : InterwikiDispatcher
        Source of the active rules.
    known_fn : callable
        ``() -> set[str]`` returning the current known sub-wiki identifiers.
    """

    def __init__(
        self,
        dispatcher: InterwikiDispatcher,
        known_fn: Callable[[], Iterable[str]] = frozenset,
    ) -> None:
        self._dispatcher = dispatcher
        self._known_fn = known_fn

    def rewrite(self, text: str, query: str = "") -> str:
        """Return *text* with resolvable farm links replaced by anchors."""
        if not text or "[[" not in text:
            return text

        prefixes = self._dispatcher.prefixes
        if not prefixes:
            return text
        known = frozenset(self._known_fn())

        def _replace(m: re.Match) -> str:
            split = split_interwiki(m.group(1), prefixes)
            if split is None:
                return m.group(0)

            prefix, rest = split
            page, _, fragment = rest.partition("#")
            title = Title(interwiki=prefix, dbkey=_to_dbkey(page))

            result = self._dispatcher.resolve(title, query, known)
            if not isinstance(result, Rewritten):
                return m.group(0)

            href = result.url
            if fragment.strip():
                href += "#" + quote(_to_dbkey(fragment), safe=";@$!*(),/~:.")
            label = (m.group(2) or m.group(1)).strip()
            return f'<a href="{html.escape(href)}" class="extiw">{html.escape(label)}</a>'

        return _WIKILINK_RE.sub(_replace, text)


# -----------------------------------------------------------------------------
