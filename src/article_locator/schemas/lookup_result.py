"""
Lookup outcome types.
"""

from dataclasses import dataclass, field
from enum import Enum


class LookupStatus(str, Enum):
    """Outcome of resolving an article/version pair."""

    FOUND = "FOUND"  # Exact match, paths holds the files
    FOUND_DIRECTORY = "FOUND_DIRECTORY"  # Article-only fallback, directory holds the folder
    NOT_FOUND = "NOT_FOUND"
    INVALID_INPUT = "INVALID_INPUT"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"


@dataclass
class LookupResult:
    """Result of a lookup."""

    status: LookupStatus
    article_id: str = ""
    print_version: str = ""
    paths: list[str] = field(default_factory=list)
    directory: str | None = None
    # True when an automatic rebuild ran while resolving
    rebuilt: bool = False
    message: str = ""

    @property
    def found(self) -> bool:
        """Return True for an exact match or a directory fallback."""
        return self.status in (LookupStatus.FOUND, LookupStatus.FOUND_DIRECTORY)

    @property
    def targets(self) -> list[str]:
        """Paths to open for this result: the files, or the fallback folder."""
        if self.status == LookupStatus.FOUND:
            return list(self.paths)
        if self.status == LookupStatus.FOUND_DIRECTORY and self.directory:
            return [self.directory]
        return []
