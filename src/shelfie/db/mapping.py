# ABOUTME: Converts between metadata dataclasses and SQLite row dictionaries.
# ABOUTME: Handles enum and timestamp serialization for metadata, attachments and items.

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from shelfie.metadata.types import (
    Attachment,
    AttachmentKind,
    Contributor,
    MetadataRecord,
    SourceType,
)


@dataclass
class ItemRecord:
    """An inventory item as far as metadata resolution is concerned."""

    id: int
    name: str
    type: SourceType
    barcode: str | None
    date_added: str


def record_to_row(record: MetadataRecord) -> dict[str, Any]:
    """Convert a MetadataRecord's scalar fields to a dict suitable for INSERT/UPDATE.

    Authors, publishers and attachments live in their own tables.
    """
    if record.source_type is None or record.source_query is None:
        raise ValueError("source_type and source_query are required to store a record")
    return {
        "title": record.title,
        "duration": record.duration,
        "page_count": record.page_count,
        "track_count": record.track_count,
        "description": record.description,
        "release_date": record.release_date,
        "image_url": record.image_url,
        "source_type": record.source_type.value,
        "source_query": record.source_query,
        "last_fetched": (record.last_fetched or datetime.now()).isoformat(timespec="seconds"),
    }


def row_to_record(
    row: Any,
    authors: list[Contributor],
    publishers: list[Contributor],
    attachments: list[Attachment],
) -> MetadataRecord:
    """Build a MetadataRecord from a metadata row and its related rows."""
    return MetadataRecord(
        title=row["title"],
        authors=authors,
        publishers=publishers,
        duration=row["duration"],
        page_count=row["page_count"],
        track_count=row["track_count"],
        description=row["description"],
        release_date=row["release_date"],
        image_url=row["image_url"],
        attachments=attachments,
        source_type=SourceType(row["source_type"]),
        source_query=row["source_query"],
        last_fetched=datetime.fromisoformat(row["last_fetched"]),
    )


def row_to_contributor(row: Any) -> Contributor:
    return Contributor(name=row["name"], image_url=row["image_url"])


def row_to_attachment(row: Any) -> Attachment:
    return Attachment(
        kind=AttachmentKind(row["kind"]),
        url=row["url"],
        title=row["title"],
        duration=row["duration"],
    )


def row_to_item(row: Any) -> ItemRecord:
    return ItemRecord(
        id=row["id"],
        name=row["name"],
        type=SourceType(row["type"]),
        barcode=row["barcode"],
        date_added=row["date_added"],
    )
