# ABOUTME: Core metadata data structures shared by catalog adapters and storage.
# ABOUTME: MetadataRecord is the normalized result every catalog adapter produces.

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class SourceType(str, Enum):
    """Content type of an inventory item, one catalog per type."""

    BOOKS = "books"
    MOVIES = "movies"
    GAMES = "games"
    BOARDGAMES = "boardgames"
    MUSIC = "music"


class AttachmentKind(str, Enum):
    IMAGE = "image"
    AUDIO = "audio"
    BOOK = "book"


@dataclass(frozen=True)
class Contributor:
    """An author or publisher. Shared across records, unique by name."""

    name: str
    image_url: str | None = None


@dataclass(frozen=True)
class Attachment:
    """Media attached to a record: screenshots, track previews, reader links."""

    kind: AttachmentKind
    url: str
    title: str | None = None
    duration: int | None = None


@dataclass
class MetadataRecord:
    """Normalized catalog metadata for one inventory item.

    Adapters fill in what their catalog exposes and leave the rest as None.
    Durations are in seconds. release_date keeps the source's own format.
    """

    title: str | None = None
    authors: list[Contributor] = field(default_factory=list)
    publishers: list[Contributor] = field(default_factory=list)
    duration: int | None = None
    page_count: int | None = None
    track_count: int | None = None
    description: str | None = None
    release_date: str | None = None
    image_url: str | None = None
    attachments: list[Attachment] = field(default_factory=list)
    source_type: SourceType | None = None
    source_query: str | None = None
    last_fetched: datetime | None = None

    @property
    def author(self) -> str:
        """Convenience property: joined author names for display."""
        return ", ".join(a.name for a in self.authors)


def unique_attachments(attachments: list[Attachment]) -> list[Attachment]:
    """Drop attachments whose URL was already seen, keeping first occurrences."""
    seen: set[str] = set()
    result = []
    for attachment in attachments:
        if attachment.url in seen:
            continue
        seen.add(attachment.url)
        result.append(attachment)
    return result
