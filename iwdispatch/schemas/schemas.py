"""
Pydantic v2 schemas for configuration records, request validation and
response serialisation.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ImportString, field_validator


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Shared
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class OKResponse(BaseModel):
    ok: bool = True
    message: str = "success"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Interwiki rule configuration
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RuleConfig(BaseModel):
    """
    One farm entry of the ``IWD_PREFIXES`` mapping.

    Accepts both the snake_case field names and the camelCase keys used by
    existing farm configs (``baseTransOnly``, ``urlInt``, ``dbnameInt``,
    ``wikiExistsCallback``).
    """
    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    interwiki: str = Field(..., min_length=1, max_length=64)
    url: str = Field(..., min_length=1)
    subprefix: str = Field(default="", max_length=64)
    base_trans_only: bool = Field(default=False, alias="baseTransOnly")
    url_int: Optional[str] = Field(default=None, alias="urlInt")
    dbname: Optional[str] = None
    dbname_int: Optional[str] = Field(default=None, alias="dbnameInt")
    wiki_exists_callback: Optional[ImportString] = Field(default=None, alias="wikiExistsCallback")

    @field_validator("url", "url_int")
    @classmethod
    def has_article_placeholder(cls, v: str | None) -> str | None:
        if v is not None and "$1" not in v:
            raise ValueError("URL template must contain the $1 article placeholder")
        return v

    @field_validator("wiki_exists_callback")
    @classmethod
    def is_callable(cls, v: Any) -> Any:
        if v is not None and not callable(v):
            raise ValueError("wikiExistsCallback must name a callable")
        return v


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Interwiki API
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RuleResponse(BaseModel):
    name: str
    interwiki: str
    subprefix: str
    base_trans_only: bool
    url: str
    url_int: Optional[str]
    dbname: Optional[str]
    dbname_int: Optional[str]
    custom_exists_check: bool


# -----------------------------------------------------------------------------

class ResolveRequest(BaseModel):
    interwiki: str = Field(..., min_length=1, max_length=64)
    dbkey: str = Field(default="", max_length=4096)
    namespace: str = Field(default="", max_length=255)
    query: str = Field(default="", max_length=4096)

    @field_validator("query")
    @classmethod
    def strip_leading_qmark(cls, v: str) -> str:
        return v[1:] if v.startswith("?") else v


class ResolveResponse(BaseModel):
    rewritten: bool
    url: Optional[str] = None


# -----------------------------------------------------------------------------

class RenderRequest(BaseModel):
    content: str = Field(default="", max_length=1_000_000)
    query: str = Field(default="", max_length=4096)


class RenderResponse(BaseModel):
    html: str


# -----------------------------------------------------------------------------

class ReloadResponse(BaseModel):
    ok: bool = True
    rule_count: int


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Sub-wiki registry
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class LocalWikiCreate(BaseModel):
    dbname: str = Field(..., min_length=1, max_length=128, pattern=r"^[a-z0-9_-]+$")


class LocalWikiResponse(BaseModel):
    id: str
    dbname: str
    created_at: datetime

    model_config = {"from_attributes": True}
