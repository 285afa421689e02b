# ABOUTME: Barcode-keyed cache of raw product names returned by search providers.
# ABOUTME: Entries have no expiry; one entry per normalized barcode.

import sqlite3

from shelfie.barcode.types import BarcodeCacheEntry


class BarcodeCache:
    """Reads and writes BarcodeCacheEntry rows."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def get(self, barcode: str) -> BarcodeCacheEntry | None:
        row = self._conn.execute(
            "SELECT barcode, provider FROM barcode_cache WHERE barcode = ?", (barcode,)
        ).fetchone()
        if row is None:
            return None
        names = self._conn.execute(
            "SELECT name FROM barcode_cache_names WHERE barcode = ? ORDER BY position",
            (barcode,),
        ).fetchall()
        return BarcodeCacheEntry(
            barcode=row["barcode"],
            provider=row["provider"],
            raw_names=[name["name"] for name in names],
        )

    def add(self, entry: BarcodeCacheEntry) -> None:
        """Persist an entry and its names in one transaction.

        Raises:
            sqlite3.IntegrityError: If the barcode is already cached.
        """
        with self._conn:
            self._conn.execute(
                "INSERT INTO barcode_cache (barcode, provider) VALUES (?, ?)",
                (entry.barcode, entry.provider),
            )
            self._conn.executemany(
                "INSERT INTO barcode_cache_names (barcode, position, name) VALUES (?, ?, ?)",
                [(entry.barcode, i, name) for i, name in enumerate(entry.raw_names)],
            )

    def count(self) -> int:
        return self._conn.execute("SELECT COUNT(*) FROM barcode_cache").fetchone()[0]
