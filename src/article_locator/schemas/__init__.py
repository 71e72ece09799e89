"""
Shared value types.

These are the only models passed between the extractor, the index store,
the builder and the lookup service.
"""

from .article_record import ArticleRecord
from .lookup_result import LookupResult, LookupStatus

__all__ = [
    "ArticleRecord",
    "LookupResult",
    "LookupStatus",
]
