# ABOUTME: Shared pytest fixtures for shelfie tests.
# ABOUTME: Provides a temporary inventory database, its store and its barcode cache.

import sqlite3
from collections.abc import Iterator
from pathlib import Path

import pytest

from shelfie.db.barcode_cache import BarcodeCache
from shelfie.db.connection import open_store
from shelfie.db.store import MetadataStore


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "inventory.db"


@pytest.fixture
def conn(db_path: Path) -> Iterator[sqlite3.Connection]:
    """An open inventory database with the schema applied."""
    connection = open_store(db_path)
    yield connection
    connection.close()


@pytest.fixture
def store(conn: sqlite3.Connection) -> MetadataStore:
    return MetadataStore(conn)


@pytest.fixture
def barcode_cache(conn: sqlite3.Connection) -> BarcodeCache:
    return BarcodeCache(conn)
