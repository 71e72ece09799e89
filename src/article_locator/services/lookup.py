"""Lookup service.

Resolves an article/print version pair against the index:

1. Build the index first if it does not exist yet.
2. Exact query; a hit ends the lookup.
3. On a miss, rebuild once more (files may have been added since the last
   scan, even right after a bootstrap) and query again.
4. Still nothing: look for any version of the article and answer with its
   folder instead of a file.

Storage failures never abort the chain; they only turn the final miss into
STORAGE_UNAVAILABLE instead of NOT_FOUND.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

from article_locator.errors import StorageUnavailableError
from article_locator.extractors import extract_from_query
from article_locator.schemas import ArticleRecord, LookupResult, LookupStatus
from article_locator.services.index_builder import IndexBuilder
from article_locator.state_store import IndexStore

if TYPE_CHECKING:
    from article_locator.config import Config


class LookupService:
    """Orchestrates index queries, rebuild-on-miss and the article-only fallback.

    Rebuilds are serialized by a lock so concurrent callers never interleave
    repopulations; queries run without it against the last published snapshot.

    Usage:
        service = LookupService.from_config(config)
        result = service.resolve("12345", "007")
    """

    def __init__(
        self,
        store: IndexStore,
        builder: IndexBuilder,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the lookup service.

        Args:
            store: Index store to query.
            builder: Builder used for bootstrap and rebuild-on-miss.
            logger: Logger to report through (defaults to the module logger).
        """
        self.store = store
        self.builder = builder
        self.logger = logger or logging.getLogger(__name__)
        self._rebuild_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Config, logger: logging.Logger | None = None) -> LookupService:
        """Wire store and builder from configuration."""
        store = IndexStore(config.index.db_path, logger=logger)
        builder = IndexBuilder.from_config(config, store, logger=logger)
        return cls(store, builder, logger=logger)

    def rebuild(self) -> frozenset[ArticleRecord]:
        """Rebuild the whole index now."""
        with self._rebuild_lock:
            return self.builder.rebuild()

    def _query(
        self, query: Callable[..., list[str]], *args: str
    ) -> tuple[list[str], bool]:
        """Run a store query. Returns (paths, storage_failed)."""
        try:
            return query(*args), False
        except StorageUnavailableError as e:
            self.logger.warning(f"Index unavailable, treating as no results: {e}")
            return [], True

    def resolve(self, article_id: str, print_version: str) -> LookupResult:
        """Resolve an article/print version pair to files or a folder."""
        article_id = (article_id or "").strip()
        print_version = (print_version or "").strip()

        if not article_id or not print_version:
            message = "Article and print version must both be given"
            self.logger.error(
                f"{message} (article={article_id!r}, print_version={print_version!r})"
            )
            return LookupResult(
                status=LookupStatus.INVALID_INPUT,
                article_id=article_id,
                print_version=print_version,
                message=message,
            )

        rebuilt = False
        storage_failed = False

        if not self.store.exists():
            self.logger.warning(f"Index does not exist: {self.store.db_path}, building it")
            self.rebuild()
            rebuilt = True

        paths, failed = self._query(self.store.query_exact, article_id, print_version)
        storage_failed |= failed

        if not paths:
            self.logger.warning(
                f"No match for {article_id}/{print_version}, rebuilding index and retrying"
            )
            self.rebuild()
            rebuilt = True
            paths, failed = self._query(self.store.query_exact, article_id, print_version)
            storage_failed |= failed

        if paths:
            self.logger.info(f"Found {len(paths)} file(s) for {article_id}/{print_version}")
            return LookupResult(
                status=LookupStatus.FOUND,
                article_id=article_id,
                print_version=print_version,
                paths=paths,
                rebuilt=rebuilt,
            )

        fallback, failed = self._query(self.store.query_by_article, article_id)
        storage_failed |= failed

        if fallback:
            directory = os.path.dirname(fallback[0])
            self.logger.warning(
                f"No exact match for {article_id}/{print_version}, "
                f"falling back to article folder {directory}"
            )
            return LookupResult(
                status=LookupStatus.FOUND_DIRECTORY,
                article_id=article_id,
                print_version=print_version,
                directory=directory,
                rebuilt=rebuilt,
                message="Print version not indexed, showing article folder",
            )

        status = LookupStatus.STORAGE_UNAVAILABLE if storage_failed else LookupStatus.NOT_FOUND
        message = (
            "Index could not be read"
            if storage_failed
            else f"Nothing indexed for article {article_id}"
        )
        self.logger.warning(f"{message} ({article_id}/{print_version})")
        return LookupResult(
            status=status,
            article_id=article_id,
            print_version=print_version,
            rebuilt=rebuilt,
            message=message,
        )

    def resolve_text(self, text: str) -> LookupResult:
        """Parse free-form input (e.g. a spreadsheet cell) and resolve it."""
        article_id, print_version = extract_from_query(text)
        if not article_id:
            message = f"Could not extract article and print version from {text!r}"
            self.logger.error(message)
            return LookupResult(status=LookupStatus.INVALID_INPUT, message=message)

        self.logger.debug(f"Parsed {text!r} as article={article_id}, print_version={print_version}")
        return self.resolve(article_id, print_version)
