"""Test fixtures and utilities."""

from pathlib import Path

import pytest

from article_locator.config import Config, IndexConfig, LoggingConfig
from article_locator.services import IndexBuilder, LookupService
from article_locator.state_store import IndexStore

from fixtures import build_document_tree, build_undecodable_file


@pytest.fixture
def temp_db(tmp_path) -> Path:
    """Temporary index path for testing."""
    return tmp_path / "index" / "test_articles.db"


@pytest.fixture
def doc_root(tmp_path) -> Path:
    """Empty document root."""
    root = tmp_path / "documents"
    root.mkdir()
    return root


@pytest.fixture
def make_documents(doc_root):
    """Factory creating files under the document root.

    Returns the created paths as strings, the way the builder records them.
    """

    def _make(*relative_paths: str) -> list[str]:
        return [str(p) for p in build_document_tree(doc_root, relative_paths)]

    return _make


@pytest.fixture
def undecodable_document(doc_root) -> bytes:
    """A non-UTF-8 file name next to the article 12345 documents."""
    try:
        return build_undecodable_file(doc_root / "12345")
    except OSError as e:
        pytest.skip(f"Filesystem rejects non-UTF-8 names: {e}")


@pytest.fixture
def store(temp_db) -> IndexStore:
    """Index store on a path that does not exist yet."""
    return IndexStore(temp_db)


@pytest.fixture
def builder(store, doc_root) -> IndexBuilder:
    """Builder scanning the document root with a small pool."""
    return IndexBuilder(store, root_directory=doc_root, max_workers=4)


@pytest.fixture
def service(store, builder) -> LookupService:
    """Lookup service over the temporary store and document root."""
    return LookupService(store, builder)


@pytest.fixture
def config(doc_root, temp_db) -> Config:
    """Configuration pointing at the temporary root and index, no log file."""
    return Config(
        index=IndexConfig(root_directory=doc_root, db_path=temp_db, max_workers=2),
        logging=LoggingConfig(file=None),
    )
