"""
SQLite-based article index.

Tables:
- Articles: one row per indexed document file

Every mutation runs against a scratch copy of the index file and is published
with an atomic replace (see ``snapshot.snapshot_swap``). Readers open the live
file read-only and therefore see either the previous or the next snapshot,
never a half-written one.
"""

import logging
import sqlite3
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path

from ..errors import StorageUnavailableError
from ..schemas import ArticleRecord
from .snapshot import snapshot_swap


class IndexStore:
    """
    Persistent article index.

    Provides:
    - Lazy creation of the index file and its schema
    - Full clear and bulk insert (the only ways records change)
    - Exact (article + version) and article-only queries

    Mutations are serialized by an instance lock; queries take no lock.
    Storage failures are logged here and raised as StorageUnavailableError.
    """

    TABLE = "Articles"

    def __init__(self, db_path: Path | str, logger: logging.Logger | None = None):
        """
        Initialize the index store. Nothing is created on disk until the first
        mutation.

        Args:
            db_path: Path to the SQLite index file
            logger: Logger to report through (defaults to the module logger)
        """
        self.db_path = Path(db_path)
        self.logger = logger or logging.getLogger(__name__)
        self._write_lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Connections
    # -------------------------------------------------------------------------

    def _connect(self, path: Path) -> sqlite3.Connection:
        """Open a read/write connection (used on scratch copies only)."""
        conn = sqlite3.connect(str(path))
        conn.row_factory = sqlite3.Row
        return conn

    def _connect_read_only(self) -> sqlite3.Connection:
        """Open the live index read-only."""
        uri = self.db_path.resolve().as_uri() + "?mode=ro"
        conn = sqlite3.connect(uri, uri=True)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _transaction(self, path: Path) -> Iterator[sqlite3.Connection]:
        """Context manager for database transactions."""
        conn = self._connect(path)
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    @contextmanager
    def _mutation(
        self, operation: str, copy_existing: bool = True
    ) -> Iterator[sqlite3.Connection]:
        """Run one transaction on a scratch copy and publish it on commit.

        With ``copy_existing=False`` the scratch file starts empty, so a corrupt
        live file does not carry over into the next snapshot.

        Caller must hold ``_write_lock``.
        """
        try:
            with snapshot_swap(self.db_path, copy_existing=copy_existing) as scratch:
                with self._transaction(scratch) as conn:
                    yield conn
        except (sqlite3.Error, OSError, UnicodeError) as e:
            self.logger.exception(f"Index {operation} failed (db={self.db_path}): {e}")
            raise StorageUnavailableError(
                f"Index {operation} failed: {e}", db_path=str(self.db_path)
            ) from e

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {self.TABLE} (
                Id INTEGER PRIMARY KEY AUTOINCREMENT,
                ArticleName TEXT NOT NULL,
                PrintVersionName TEXT NOT NULL,
                FilePath TEXT NOT NULL
            )
        """
        )

    def _has_schema(self) -> bool:
        conn = self._connect_read_only()
        try:
            row = conn.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table' AND name = ?",
                (self.TABLE,),
            ).fetchone()
            return row is not None
        finally:
            conn.close()

    def _insert(self, conn: sqlite3.Connection, records: list[ArticleRecord]) -> None:
        conn.executemany(
            f"INSERT INTO {self.TABLE} (ArticleName, PrintVersionName, FilePath) VALUES (?, ?, ?)",
            [record.as_row() for record in records],
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def exists(self) -> bool:
        """Check whether the index file has been created."""
        return self.db_path.is_file()

    def ensure_initialized(self) -> None:
        """Create the index file and schema if absent. Never overwrites data."""
        with self._write_lock:
            if self.exists():
                try:
                    if self._has_schema():
                        return
                except sqlite3.Error as e:
                    self.logger.exception(f"Cannot inspect index (db={self.db_path}): {e}")
                    raise StorageUnavailableError(
                        f"Cannot inspect index: {e}", db_path=str(self.db_path)
                    ) from e

            with self._mutation("initialization") as conn:
                self._create_schema(conn)
            self.logger.info(f"Index created: {self.db_path}")

    def clear(self) -> None:
        """Remove all records, keeping the schema. No-op without an index file."""
        with self._write_lock:
            if not self.exists():
                self.logger.debug(f"Nothing to clear, no index at {self.db_path}")
                return

            with self._mutation("clear") as conn:
                self._create_schema(conn)
                conn.execute(f"DELETE FROM {self.TABLE}")
            self.logger.debug(f"Index cleared: {self.db_path}")

    def bulk_insert(self, records: Iterable[ArticleRecord]) -> int:
        """
        Append records in a single transaction (all or nothing).

        Returns:
            Number of records inserted
        """
        records = list(records)
        with self._write_lock:
            with self._mutation("insert") as conn:
                self._create_schema(conn)
                self._insert(conn, records)
        self.logger.debug(f"Inserted {len(records)} record(s) into {self.db_path}")
        return len(records)

    def replace_all(self, records: Iterable[ArticleRecord]) -> int:
        """
        Clear, initialize and insert, published as one snapshot.

        The new snapshot is built from an empty file, so this also replaces a
        live file that is corrupt or not an index at all. Readers see the old
        index until the new one is complete; they never observe the empty
        state between clear and insert.

        Returns:
            Number of records now in the index
        """
        records = list(records)
        with self._write_lock:
            with self._mutation("rebuild", copy_existing=False) as conn:
                self._create_schema(conn)
                conn.execute(f"DELETE FROM {self.TABLE}")
                self._insert(conn, records)
        self.logger.info(f"Index replaced with {len(records)} record(s): {self.db_path}")
        return len(records)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def _select_paths(self, where: str, params: tuple[str, ...]) -> list[str]:
        if not self.exists():
            self.logger.debug(f"No index at {self.db_path}, query returns nothing")
            return []

        try:
            conn = self._connect_read_only()
            try:
                rows = conn.execute(
                    f"SELECT FilePath FROM {self.TABLE} WHERE {where} ORDER BY Id",
                    params,
                ).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            self.logger.exception(
                f"Index query failed (db={self.db_path}, where={where}, params={params}): {e}"
            )
            raise StorageUnavailableError(
                f"Index query failed: {e}", db_path=str(self.db_path)
            ) from e

        return [row["FilePath"] for row in rows if row["FilePath"]]

    def query_exact(self, article_id: str, print_version: str) -> list[str]:
        """File paths whose article and print version both match."""
        return self._select_paths(
            "ArticleName = ? AND PrintVersionName = ?", (article_id, print_version)
        )

    def query_by_article(self, article_id: str) -> list[str]:
        """File paths of every version of an article."""
        return self._select_paths("ArticleName = ?", (article_id,))

    def count(self) -> int:
        """Number of indexed records (0 without an index file)."""
        if not self.exists():
            return 0

        try:
            conn = self._connect_read_only()
            try:
                row = conn.execute(f"SELECT COUNT(*) FROM {self.TABLE}").fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            self.logger.exception(f"Index count failed (db={self.db_path}): {e}")
            raise StorageUnavailableError(
                f"Index count failed: {e}", db_path=str(self.db_path)
            ) from e

        return int(row[0])
