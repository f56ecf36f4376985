#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
URL template builder
====================
Templates use MediaWiki-style placeholders:

    $1  article path (URL-encoded)
    $2  wiki key
    $3  language code  (urlInt only)

e.g. ``https://$2.example.org/wiki/$1`` or ``https://$2.example.org/$3/wiki/$1``
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Optional
from urllib.parse import quote

from .types import MatchResult, Rule


# -----------------------------------------------------------------------------

# Characters wiki article paths keep literal after percent-encoding.
_PATH_SAFE = ";@$!*(),/~:"


# -----------------------------------------------------------------------------

def url_encode(text: str) -> str:
    """Percent-encode an article path the way wiki page URLs are written."""
    return quote(text, safe=_PATH_SAFE)


# -----------------------------------------------------------------------------

def append_query(url: str, query: str) -> str:
    """Append *query* to *url*, using ``?`` or ``&`` and keeping any ``#fragment`` last."""
    if not query:
        return url

    fragment = ""
    hash_pos = url.find("#")
    if hash_pos != -1:
        url, fragment = url[:hash_pos], url[hash_pos:]

    url += ("&" if "?" in url else "?") + query
    return url + fragment


# -----------------------------------------------------------------------------

def compose_article(article: str, namespace_text: str = "") -> str:
    # Titles reached through interwiki transclusion can still carry a namespace.
    if namespace_text:
        return f"{namespace_text}:{article}"
    return article


# -----------------------------------------------------------------------------

def build_url(
    rule: Rule,
    match: MatchResult,
    namespace_text: str = "",
    query: str = "",
) -> Optional[str]:
    """
    Expand the rule's URL template for *match*.

    Returns None when the title is language-qualified and the rule has no
    ``url_template_int`` to express it.
    """
    if match.language:
        template = rule.url_template_int
        if template is None:
            return None
        template = template.replace("$3", match.language)
    else:
        template = rule.url_template

    template = template.replace("$2", match.wiki)
    article = url_encode(compose_article(match.article, namespace_text))
    return append_query(template.replace("$1", article), query)


# -----------------------------------------------------------------------------
