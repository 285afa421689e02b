# ABOUTME: Storage operations for inventory items and their cached metadata records.
# ABOUTME: Upserts swap a record's fields, attachments and people links in one transaction.

import sqlite3

from shelfie.db.mapping import (
    ItemRecord,
    record_to_row,
    row_to_attachment,
    row_to_contributor,
    row_to_item,
    row_to_record,
)
from shelfie.metadata.types import Contributor, MetadataRecord, SourceType, unique_attachments

# (people table, link table, link column)
_AUTHORS = ("authors", "metadata_authors", "author_id")
_PUBLISHERS = ("publishers", "metadata_publishers", "publisher_id")


class MetadataStore:
    """Wraps a sqlite3 connection and provides typed access to items and metadata."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    # --- Items ---

    def add_item(self, name: str, type_: SourceType, barcode: str | None = None) -> int:
        """Add an inventory item and return its row ID."""
        with self._conn:
            cursor = self._conn.execute(
                "INSERT INTO items (name, type, barcode) VALUES (?, ?, ?)",
                (name, type_.value, barcode),
            )
        return cursor.lastrowid  # type: ignore[return-value]

    def get_item(self, item_id: int) -> ItemRecord | None:
        cursor = self._conn.execute("SELECT * FROM items WHERE id = ?", (item_id,))
        row = cursor.fetchone()
        return row_to_item(row) if row else None

    # --- Metadata ---

    def get_for_item(self, item_id: int) -> MetadataRecord | None:
        """Return the item's metadata record with people and attachments, or None."""
        row = self._conn.execute(
            "SELECT * FROM metadata WHERE item_id = ?", (item_id,)
        ).fetchone()
        if row is None:
            return None

        metadata_id = row["id"]
        attachments = self._conn.execute(
            "SELECT * FROM attachments WHERE metadata_id = ? ORDER BY position",
            (metadata_id,),
        ).fetchall()
        return row_to_record(
            row,
            authors=self._people(_AUTHORS, metadata_id),
            publishers=self._people(_PUBLISHERS, metadata_id),
            attachments=[row_to_attachment(a) for a in attachments],
        )

    def upsert_for_item(self, item_id: int, record: MetadataRecord) -> MetadataRecord:
        """Create or fully replace the item's metadata record.

        An existing record keeps its row but every non-key field is
        overwritten, its attachments are deleted and recreated, and its
        author/publisher links are reset. Shared authors and publishers are
        reused by name and never deleted. Runs in a single transaction.

        Returns:
            The stored record as read back from the database.

        Raises:
            sqlite3.Error: If the write fails; nothing is changed in that case.
        """
        row = record_to_row(record)

        with self._conn:
            existing = self._conn.execute(
                "SELECT id FROM metadata WHERE item_id = ?", (item_id,)
            ).fetchone()

            if existing is not None:
                metadata_id = existing["id"]
                set_clause = ", ".join(f"{column} = ?" for column in row)
                self._conn.execute(
                    f"UPDATE metadata SET {set_clause} WHERE id = ?",
                    [*row.values(), metadata_id],
                )
                for table in ("attachments", "metadata_authors", "metadata_publishers"):
                    self._conn.execute(
                        f"DELETE FROM {table} WHERE metadata_id = ?", (metadata_id,)
                    )
            else:
                columns = ", ".join(["item_id", *row.keys()])
                placeholders = ", ".join("?" for _ in range(len(row) + 1))
                cursor = self._conn.execute(
                    f"INSERT INTO metadata ({columns}) VALUES ({placeholders})",
                    [item_id, *row.values()],
                )
                metadata_id = cursor.lastrowid

            self._link_people(_AUTHORS, metadata_id, record.authors)
            self._link_people(_PUBLISHERS, metadata_id, record.publishers)
            for position, attachment in enumerate(unique_attachments(record.attachments)):
                self._conn.execute(
                    "INSERT INTO attachments "
                    "(metadata_id, kind, title, duration, url, position) "
                    "VALUES (?, ?, ?, ?, ?, ?)",
                    (
                        metadata_id,
                        attachment.kind.value,
                        attachment.title,
                        attachment.duration,
                        attachment.url,
                        position,
                    ),
                )

        stored = self.get_for_item(item_id)
        if stored is None:
            raise sqlite3.DatabaseError(f"Metadata for item {item_id} missing after write")
        return stored

    def delete_for_item(self, item_id: int) -> bool:
        """Drop the item's metadata record and attachments; shared people stay.

        Returns:
            True if a record was deleted.
        """
        with self._conn:
            cursor = self._conn.execute("DELETE FROM metadata WHERE item_id = ?", (item_id,))
        return cursor.rowcount > 0

    def list_authors(self) -> list[Contributor]:
        """All known authors, alphabetically."""
        cursor = self._conn.execute("SELECT name, image_url FROM authors ORDER BY name")
        return [row_to_contributor(row) for row in cursor.fetchall()]

    def list_publishers(self) -> list[Contributor]:
        """All known publishers, alphabetically."""
        cursor = self._conn.execute("SELECT name, image_url FROM publishers ORDER BY name")
        return [row_to_contributor(row) for row in cursor.fetchall()]

    def _people(self, kind: tuple[str, str, str], metadata_id: int) -> list[Contributor]:
        table, link_table, link_column = kind
        cursor = self._conn.execute(
            f"SELECT p.name, p.image_url FROM {table} p "
            f"JOIN {link_table} l ON p.id = l.{link_column} "
            "WHERE l.metadata_id = ? "
            "ORDER BY l.position",
            (metadata_id,),
        )
        return [row_to_contributor(row) for row in cursor.fetchall()]

    def _link_people(
        self, kind: tuple[str, str, str], metadata_id: int, people: list[Contributor]
    ) -> None:
        """Connect people to a record, creating any name not seen before."""
        table, link_table, link_column = kind
        for position, person in enumerate(people):
            if not person.name:
                continue
            self._conn.execute(
                f"INSERT OR IGNORE INTO {table} (name, image_url) VALUES (?, ?)",
                (person.name, person.image_url),
            )
            self._conn.execute(
                f"INSERT OR IGNORE INTO {link_table} (metadata_id, {link_column}, position) "
                f"SELECT ?, id, ? FROM {table} WHERE name = ?",
                (metadata_id, position, person.name),
            )
