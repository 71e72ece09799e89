"""Index builder.

Walks the document root, derives a record from every candidate path and hands
the complete set to the index store. Path parsing is fanned out to a bounded
thread pool; each task only parses its own path, and results are gathered
into one set at a single join point.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import TYPE_CHECKING

from article_locator.errors import StorageUnavailableError
from article_locator.extractors import DEFAULT_EXTENSIONS, extract_from_path
from article_locator.schemas import ArticleRecord

if TYPE_CHECKING:
    from article_locator.config import Config
    from article_locator.state_store import IndexStore


class IndexBuilder:
    """Full-scan index builder.

    A rebuild always replaces the whole index; there is no incremental mode.
    A root that is missing or not a directory leaves the current index alone,
    so an unmounted share does not wipe the last good snapshot.

    Usage:
        builder = IndexBuilder(store, root_directory="/srv/documents")
        records = builder.rebuild()
    """

    def __init__(
        self,
        store: IndexStore,
        root_directory: Path | str = ".",
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
        max_workers: int = 8,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            store: Index store that receives the scan results.
            root_directory: Default tree to scan.
            extensions: Document extensions to pick up (with leading dot).
            max_workers: Upper bound for the parsing thread pool.
            logger: Logger to report through (defaults to the module logger).
        """
        self.store = store
        self.root_directory = Path(root_directory)
        self.extensions = tuple(ext.lower() for ext in extensions)
        self.max_workers = max(1, max_workers)
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_config(
        cls, config: Config, store: IndexStore, logger: logging.Logger | None = None
    ) -> IndexBuilder:
        """Build from the ``index`` section of the configuration."""
        return cls(
            store=store,
            root_directory=config.index.root_directory,
            extensions=config.index.extensions,
            max_workers=config.index.max_workers,
            logger=logger,
        )

    def iter_candidates(self, root: Path) -> Iterator[str]:
        """Yield absolute paths of every file under ``root`` with a document extension."""

        def on_error(error: OSError) -> None:
            self.logger.warning(f"Cannot read {error.filename}: {error.strerror}")

        for dirpath, _dirnames, filenames in os.walk(root, onerror=on_error):
            for filename in filenames:
                if os.path.splitext(filename)[1].lower() in self.extensions:
                    yield os.path.join(dirpath, filename)

    def _extract(self, path: str) -> ArticleRecord | None:
        # Undecodable names (legacy codepage shares) come back from os.walk with
        # surrogate escapes and cannot be stored as TEXT.
        path.encode("utf-8")
        return extract_from_path(path, self.extensions)

    def scan(self, root: Path | str | None = None) -> frozenset[ArticleRecord]:
        """Scan ``root`` (default: the configured root) and return its records.

        Raises:
            FileNotFoundError: If root is missing or not a directory.
        """
        root_path = Path(os.path.abspath(root if root is not None else self.root_directory))
        if not root_path.is_dir():
            raise FileNotFoundError(f"Document root is not a directory: {root_path}")

        candidates = list(self.iter_candidates(root_path))
        self.logger.info(f"Scanning {len(candidates)} candidate file(s) under {root_path}")

        records: set[ArticleRecord] = set()
        skipped = 0

        if candidates:
            workers = min(self.max_workers, len(candidates))
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = {
                    executor.submit(self._extract, path): path
                    for path in candidates
                }
                for future in as_completed(futures):
                    path = futures[future]
                    try:
                        record = future.result()
                    except Exception as e:
                        self.logger.warning(f"Failed to parse {path!r}: {e}")
                        skipped += 1
                        continue

                    if record is None:
                        self.logger.debug(f"No article/print version in path, skipping: {path}")
                        skipped += 1
                    else:
                        records.add(record)

        self.logger.info(f"Scan complete: indexed={len(records)}, skipped={skipped}")
        return frozenset(records)

    def rebuild(self, root: Path | str | None = None) -> frozenset[ArticleRecord]:
        """Scan and replace the whole index with the result.

        Failures are logged and swallowed: a bad root leaves the index as it
        was, a storage failure leaves the previous snapshot published.

        Returns:
            The scanned records (empty if the root could not be scanned).
        """
        try:
            records = self.scan(root)
        except FileNotFoundError as e:
            self.logger.error(f"Index not rebuilt: {e}")
            return frozenset()

        try:
            self.store.replace_all(records)
        except StorageUnavailableError as e:
            self.logger.error(f"Index not rebuilt, scan of {len(records)} record(s) discarded: {e}")

        return records
