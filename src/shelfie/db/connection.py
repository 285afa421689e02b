# ABOUTME: SQLite connection factory for the shelfie inventory store.
# ABOUTME: Creates the file on first use, applies the schema, and sets WAL and foreign keys.

import sqlite3
from pathlib import Path

from shelfie.config import DEFAULT_DB_PATH
from shelfie.db.schema import SCHEMA_V1, SCHEMA_VERSION

# Cascading deletes of attachments and link rows rely on foreign_keys.
_PRAGMAS = ("PRAGMA journal_mode=WAL", "PRAGMA foreign_keys=ON")


def _applied_version(conn: sqlite3.Connection) -> int:
    """Schema version recorded in the database, 0 for a fresh file."""
    has_table = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = 'schema_version'"
    ).fetchone()
    if has_table is None:
        return 0
    return conn.execute("SELECT MAX(version) FROM schema_version").fetchone()[0] or 0


def open_store(path: Path | None = None) -> sqlite3.Connection:
    """Open the inventory database, creating it and its schema when missing.

    Rows come back as sqlite3.Row. The caller owns the connection and
    closes it.

    Args:
        path: Database file. Defaults to ~/.shelfie/inventory.db.
    """
    target = path or DEFAULT_DB_PATH
    target.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(target)
    conn.row_factory = sqlite3.Row
    for pragma in _PRAGMAS:
        conn.execute(pragma)

    if _applied_version(conn) < SCHEMA_VERSION:
        conn.executescript(SCHEMA_V1)
    return conn
