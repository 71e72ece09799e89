"""
Indexed article record.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ArticleRecord:
    """One indexed document file.

    Frozen so scan results can be collected into a set. The storage row id is
    not part of the record; it only orders rows inside the index file.
    """

    article_id: str
    print_version: str
    file_path: str

    def as_row(self) -> tuple[str, str, str]:
        """Column values in Articles table order."""
        return (self.article_id, self.print_version, self.file_path)
