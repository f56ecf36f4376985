#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Rule loading — turns the ``IWD_PREFIXES`` configuration into Rule values.

The configuration is a mapping of farm name → rule record:

    {
      "wikigg": {
        "interwiki": "wikigg",
        "url": "https://$2.wiki.gg/wiki/$1",
        "urlInt": "https://$2.wiki.gg/$3/wiki/$1",
        "dbname": "$2_en",
        "dbnameInt": "$2_$3"
      }
    }

Mapping order is rule order.  Problems are reported here, at load time, so a
bad record never reaches the resolver.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from iwdispatch.schemas import RuleConfig
from .existence import CallableExistenceChecker
from .types import Rule

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

class RuleConfigError(ValueError):
    """Raised when the interwiki rule configuration is unusable."""


# -----------------------------------------------------------------------------

def rule_from_config(name: str, cfg: RuleConfig) -> Rule:
    override = None
    if cfg.wiki_exists_callback is not None:
        override = CallableExistenceChecker(cfg.wiki_exists_callback)

    return Rule(
        name=name,
        interwiki=cfg.interwiki,
        subprefix=cfg.subprefix,
        base_trans_only=cfg.base_trans_only,
        url_template=cfg.url,
        url_template_int=cfg.url_int,
        db_name_template=cfg.dbname,
        db_name_template_int=cfg.dbname_int,
        exists_override=override,
    )


# -----------------------------------------------------------------------------

def load_rules(mapping: Mapping[str, Any]) -> tuple[Rule, ...]:
    """Validate every record in *mapping* and return the rules in order."""
    rules: list[Rule] = []
    seen: dict[str, str] = {}

    for name, raw in mapping.items():
        try:
            cfg = raw if isinstance(raw, RuleConfig) else RuleConfig.model_validate(raw)
        except ValidationError as exc:
            raise RuleConfigError(f"Invalid interwiki rule '{name}': {exc}") from exc

        if cfg.interwiki in seen:
            log.warning(
                "Interwiki rule '%s' reuses prefix '%s' of rule '%s' and will never be used",
                name, cfg.interwiki, seen[cfg.interwiki],
            )
        else:
            seen[cfg.interwiki] = name

        rules.append(rule_from_config(name, cfg))

    log.info("Loaded %d interwiki rule(s)", len(rules))
    return tuple(rules)


# -----------------------------------------------------------------------------

def load_rules_file(path: Path) -> dict[str, Any]:
    """Read a JSON rule mapping from *path*."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise RuleConfigError(f"Cannot read interwiki rules file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise RuleConfigError(f"Malformed interwiki rules file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise RuleConfigError(f"Interwiki rules file {path} must contain a JSON object")
    return data


# -----------------------------------------------------------------------------

def rules_from_settings(settings) -> tuple[Rule, ...]:
    """Merge the rules file (if any) with ``IWD_PREFIXES``; env entries win by name."""
    merged: dict[str, Any] = {}
    if settings.iwd_prefixes_file is not None:
        merged.update(load_rules_file(settings.iwd_prefixes_file))
    merged.update(settings.iwd_prefixes)
    return load_rules(merged)


# -----------------------------------------------------------------------------
