from iwdispatch.schemas.schemas import (
    OKResponse,
    RuleConfig, RuleResponse,
    ResolveRequest, ResolveResponse,
    RenderRequest, RenderResponse,
    ReloadResponse,
    LocalWikiCreate, LocalWikiResponse,
)

__all__ = [
    "OKResponse",
    "RuleConfig", "RuleResponse",
    "ResolveRequest", "ResolveResponse",
    "RenderRequest", "RenderResponse",
    "ReloadResponse",
    "LocalWikiCreate", "LocalWikiResponse",
]
