"""
Identifier extractors.

Provides:
- extract_from_path: strict grammar for indexed document paths
- extract_from_query: loose grammar for typed/spreadsheet input
"""

from .identifiers import (
    DEFAULT_EXTENSIONS,
    extract_article,
    extract_from_path,
    extract_from_query,
    extract_print_version,
)

__all__ = [
    "DEFAULT_EXTENSIONS",
    "extract_article",
    "extract_from_path",
    "extract_from_query",
    "extract_print_version",
]
