"""
Exception hierarchy.

Only storage and configuration problems are exceptions. Lookup outcomes
(not found, invalid input) are reported through ``LookupStatus`` instead.
"""


class ArticleLocatorError(Exception):
    """Base exception for all article locator errors."""

    pass


class StorageUnavailableError(ArticleLocatorError):
    """Raised when the index file cannot be read or written."""

    def __init__(self, message: str, db_path: str | None = None):
        super().__init__(message)
        self.db_path = db_path


class ConfigValidationError(ArticleLocatorError):
    """Raised when configuration validation fails."""

    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors
