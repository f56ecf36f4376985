"""
Interwiki dispatch subsystem — farm title resolution.
"""

from .types import Declined, ExistenceChecker, MatchResult, Resolution, Rewritten, Rule, Title
from .decomposer import decompose
from .existence import CallableExistenceChecker, DbNameExistenceChecker
from .urls import append_query, build_url, url_encode
from .dispatcher import InterwikiDispatcher, resolve, resolve_rule
from .loader import RuleConfigError, load_rules, load_rules_file, rules_from_settings

__all__ = [
    "Declined",
    "ExistenceChecker",
    "MatchResult",
    "Resolution",
    "Rewritten",
    "Rule",
    "Title",
    "decompose",
    "CallableExistenceChecker",
    "DbNameExistenceChecker",
    "append_query",
    "build_url",
    "url_encode",
    "InterwikiDispatcher",
    "resolve",
    "resolve_rule",
    "RuleConfigError",
    "load_rules",
    "load_rules_file",
    "rules_from_settings",
]
