from iwdispatch.models.models import LocalWiki

__all__ = ["LocalWiki"]
