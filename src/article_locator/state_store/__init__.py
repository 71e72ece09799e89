"""
Article index store (SQLite-based).

Single-file index of (article, print version, file path) rows. Content is
always the complete result of the last successful scan; mutations are staged
on a scratch copy and published by atomic replace.
"""

from .snapshot import snapshot_swap
from .sqlite_store import IndexStore

__all__ = [
    "IndexStore",
    "snapshot_swap",
]
