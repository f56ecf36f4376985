#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for rule dispatch and single-rule resolution."""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest

from iwdispatch.services.interwiki import (
    CallableExistenceChecker,
    Declined,
    InterwikiDispatcher,
    Rewritten,
    Rule,
    Title,
    resolve,
)
from iwdispatch.services.interwiki.dispatcher import is_raw_action


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

FARM = Rule(interwiki="farm", url_template="https://$2.example.org/wiki/$1")

FARM_INT = Rule(
    interwiki="farm",
    url_template="https://$2.example.org/wiki/$1",
    url_template_int="https://$2.example.org/$3/wiki/$1",
)


class SpyChecker:
    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.calls: list[tuple[str, str, str]] = []

    def exists(self, rule, wiki, language):
        self.calls.append((rule.interwiki, wiki, language))
        return self.answer


def _title(dbkey: str, prefix: str = "farm", ns: str = "") -> Title:
    return Title(interwiki=prefix, dbkey=dbkey, namespace_text=ns)


# =============================================================================
# End-to-end scenarios
# =============================================================================

def test_plain_title_is_rewritten():
    result = resolve(_title("acme:Main_Page"), "", [FARM])
    assert result == Rewritten("https://acme.example.org/wiki/Main_Page")
    assert result.rewritten is True


def test_language_title_without_int_template_declines():
    result = resolve(_title("en.acme:Main_Page"), "", [FARM])
    assert isinstance(result, Declined)
    assert result.rewritten is False


def test_language_title_with_int_template():
    result = resolve(_title("en.acme:Main_Page"), "", [FARM_INT])
    assert result == Rewritten("https://acme.example.org/en/wiki/Main_Page")


@pytest.mark.parametrize("dbkey", ["acme:Page", "en.acme:Page", "!!!", ""])
def test_trans_only_rule_declines_raw_requests(dbkey):
    rule = Rule(interwiki="farm", url_template="https://$2.example.org/wiki/$1", base_trans_only=True)
    assert isinstance(resolve(_title(dbkey), "action=raw", [rule]), Declined)


def test_trans_only_rule_rewrites_other_requests():
    rule = Rule(interwiki="farm", url_template="https://$2.example.org/wiki/$1", base_trans_only=True)
    result = resolve(_title("acme:Page"), "action=edit", [rule])
    assert result == Rewritten("https://acme.example.org/wiki/Page?action=edit")


def test_raw_query_on_unflagged_rule_is_rewritten():
    result = resolve(_title("acme:Page"), "action=raw", [FARM])
    assert result == Rewritten("https://acme.example.org/wiki/Page?action=raw")


def test_dbname_existence_check():
    rule = Rule(interwiki="farm", url_template="https://$2.example.org/wiki/$1", db_name_template="wiki_$2")
    known = {"wiki_acme"}
    assert resolve(_title("acme:Page"), "", [rule], known) == Rewritten("https://acme.example.org/wiki/Page")
    assert isinstance(resolve(_title("other:Page"), "", [rule], known), Declined)


# =============================================================================
# Raw / render detection
# =============================================================================

@pytest.mark.parametrize("query,expected", [
    ("action=raw", True),
    ("action=render", True),
    ("title=X&action=raw", True),
    ("action=raw&ctype=text/css", True),
    ("ACTION=RAW", True),
    ("action=rawx", False),
    ("xaction=raw", False),
    ("action=edit", False),
    ("", False),
])
def test_is_raw_action(query, expected):
    assert is_raw_action(query) is expected


# =============================================================================
# Dispatch policy
# =============================================================================

def test_no_rule_for_prefix_declines():
    assert isinstance(resolve(_title("acme:Page", prefix="other"), "", [FARM]), Declined)


def test_empty_rule_list_declines():
    assert isinstance(resolve(_title("acme:Page"), "", []), Declined)


def test_rules_with_other_prefixes_are_skipped():
    other = Rule(interwiki="zzz", url_template="https://zzz/$2/$1")
    assert resolve(_title("acme:Page"), "", [other, FARM]) == Rewritten("https://acme.example.org/wiki/Page")


def test_first_matching_rule_decides_even_when_it_declines():
    checked = Rule(interwiki="farm", url_template="https://first/$2/$1", db_name_template="wiki_$2")
    fallback = Rule(interwiki="farm", url_template="https://second/$2/$1")
    result = resolve(_title("acme:Page"), "", [checked, fallback], known_identifiers=set())
    assert isinstance(result, Declined)


def test_first_matching_rule_wins():
    first = Rule(interwiki="farm", url_template="https://first/$2/$1")
    second = Rule(interwiki="farm", url_template="https://second/$2/$1")
    assert resolve(_title("acme:Page"), "", [first, second]) == Rewritten("https://first/acme/Page")


def test_prefix_match_is_exact():
    assert isinstance(resolve(_title("acme:Page", prefix="Farm"), "", [FARM]), Declined)


def test_subprefix_rule():
    rule = Rule(
        interwiki="farm",
        subprefix="fb",
        url_template="https://$2.example.org/wiki/$1",
        url_template_int="https://$2.example.org/$3/wiki/$1",
    )
    assert resolve(_title("fb_en.acme:Page"), "", [rule]) == Rewritten("https://acme.example.org/en/wiki/Page")
    assert isinstance(resolve(_title("acme:Page"), "", [rule]), Declined)


# =============================================================================
# Existence checking
# =============================================================================

def test_mismatched_dbkey_never_consults_existence():
    spy = SpyChecker()
    result = resolve(_title("not a wiki!"), "", [FARM], checker=spy)
    assert isinstance(result, Declined)
    assert spy.calls == []


def test_checker_receives_lowercased_parts():
    spy = SpyChecker()
    resolve(_title("EN.Acme:Page"), "", [FARM_INT], checker=spy)
    assert spy.calls == [("farm", "acme", "en")]


def test_checker_false_declines():
    assert isinstance(resolve(_title("acme:Page"), "", [FARM], checker=SpyChecker(False)), Declined)


def test_rule_override_replaces_default():
    seen = []

    def only_acme(rule, wiki, language):
        seen.append(wiki)
        return wiki == "acme"

    rule = Rule(
        interwiki="farm",
        url_template="https://$2.example.org/wiki/$1",
        db_name_template="wiki_$2",
        exists_override=CallableExistenceChecker(only_acme),
    )
    # dbname lookup would reject everything: the known set is empty
    assert resolve(_title("acme:Page"), "", [rule], set()) == Rewritten("https://acme.example.org/wiki/Page")
    assert isinstance(resolve(_title("other:Page"), "", [rule], set()), Declined)
    assert seen == ["acme", "other"]


def test_language_title_declines_without_int_template_even_if_wiki_exists():
    spy = SpyChecker(True)
    assert isinstance(resolve(_title("en.acme:Page"), "", [FARM], checker=spy), Declined)


# =============================================================================
# Namespaces, queries, purity
# =============================================================================

def test_namespace_is_restored():
    result = resolve(_title("acme:Page", ns="Talk"), "", [FARM])
    assert result == Rewritten("https://acme.example.org/wiki/Talk:Page")


def test_query_is_appended():
    result = resolve(_title("acme:Page"), "oldid=12&diff=prev", [FARM])
    assert result == Rewritten("https://acme.example.org/wiki/Page?oldid=12&diff=prev")


def test_resolution_is_repeatable():
    title = _title("de.acme:Seite")
    first = resolve(title, "action=edit", [FARM_INT], {"x"})
    second = resolve(title, "action=edit", [FARM_INT], {"x"})
    assert first == second


# =============================================================================
# InterwikiDispatcher
# =============================================================================

def test_dispatcher_resolves_with_its_rules():
    dispatcher = InterwikiDispatcher([FARM])
    assert dispatcher.resolve(_title("acme:Page")) == Rewritten("https://acme.example.org/wiki/Page")
    assert dispatcher.prefixes == frozenset({"farm"})


def test_dispatcher_reload_swaps_rules():
    dispatcher = InterwikiDispatcher([FARM])
    before = dispatcher.rules
    replacement = Rule(interwiki="farm", url_template="https://new/$2/$1")

    dispatcher.reload([replacement])

    assert before == (FARM,)
    assert dispatcher.rules == (replacement,)
    assert dispatcher.resolve(_title("acme:Page")) == Rewritten("https://new/acme/Page")


def test_dispatcher_passes_known_identifiers():
    rule = Rule(interwiki="farm", url_template="https://$2/$1", db_name_template="$2wiki")
    dispatcher = InterwikiDispatcher([rule])
    assert isinstance(dispatcher.resolve(_title("acme:P")), Declined)
    assert dispatcher.resolve(_title("acme:P"), "", {"acmewiki"}) == Rewritten("https://acme/P")
