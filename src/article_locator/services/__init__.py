"""Index building, lookup and OS integration services."""

from article_locator.services.index_builder import IndexBuilder
from article_locator.services.lookup import LookupService
from article_locator.services.macro import build_double_click_macro
from article_locator.services.opener import open_lookup_result, open_path

__all__ = [
    "IndexBuilder",
    "LookupService",
    "build_double_click_macro",
    "open_lookup_result",
    "open_path",
]
