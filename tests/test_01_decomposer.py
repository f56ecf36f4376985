#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for splitting farm dbkeys into language / wiki / article."""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest

from iwdispatch.services.interwiki import MatchResult, decompose


# ── Plain wiki keys ───────────────────────────────────────────────────────────

def test_wiki_and_article():
    assert decompose("acme:Main_Page") == MatchResult(wiki="acme", language="", article="Main_Page")


def test_wiki_only():
    m = decompose("acme")
    assert m is not None
    assert m.wiki == "acme"
    assert m.article == ""


def test_trailing_separator_gives_empty_article():
    assert decompose("acme:").article == ""


def test_article_keeps_inner_colons():
    assert decompose("acme:Help:Contents").article == "Help:Contents"


def test_repeated_separators_are_consumed():
    assert decompose("acme__::_Page").article == "Page"


def test_underscore_separates_wiki_from_article():
    m = decompose("acme_Page")
    assert (m.wiki, m.article) == ("acme", "Page")


def test_wiki_with_digits_and_hyphens():
    assert decompose("my-wiki2:Page").wiki == "my-wiki2"


# ── Language segment ──────────────────────────────────────────────────────────

def test_language_segment():
    assert decompose("en.acme:Main_Page") == MatchResult(wiki="acme", language="en", article="Main_Page")


def test_language_with_hyphen():
    assert decompose("pt-br.acme:Page").language == "pt-br"


def test_language_and_wiki_are_lowercased_article_is_not():
    m = decompose("EN.AcMe:Main_Page")
    assert m.language == "en"
    assert m.wiki == "acme"
    assert m.article == "Main_Page"


def test_one_letter_language_is_rejected():
    assert decompose("x.acme:Page") is None


def test_language_longer_than_twelve_is_rejected():
    assert decompose("abcdefghijklm.acme:Page") is None


def test_language_of_twelve_is_accepted():
    assert decompose("abcdefghijkl.acme:Page").language == "abcdefghijkl"


# ── Rejections ────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("dbkey", [
    "",
    "ac!me:Page",
    ":acme:Page",
    "acme.:Page",
    "ácme:Page",
    "a" * 51,
])
def test_non_matching_dbkeys(dbkey):
    assert decompose(dbkey) is None


def test_fifty_character_wiki_is_accepted():
    assert decompose("a" * 50 + ":Page").wiki == "a" * 50


# ── Subprefix ─────────────────────────────────────────────────────────────────

def test_subprefix_then_language_and_wiki():
    assert decompose("fb_en.acme:Page", "fb") == MatchResult(wiki="acme", language="en", article="Page")


def test_subprefix_with_colon_separator():
    assert decompose("fb:acme:Page", "fb").wiki == "acme"


def test_subprefix_is_case_insensitive():
    assert decompose("FB:acme:Page", "fb").wiki == "acme"


def test_missing_subprefix_is_rejected():
    assert decompose("acme:Page", "fb") is None


def test_subprefix_requires_a_separator():
    assert decompose("fbacme:Page", "fb") is None


def test_subprefix_is_literal():
    assert decompose("w+:acme", "w+").wiki == "acme"
    assert decompose("ww:acme", "w+") is None


def test_empty_subprefix_needs_no_leading_separator():
    assert decompose("acme:Page", "").wiki == "acme"
    assert decompose("_acme:Page", "") is None
