# ABOUTME: Unit tests for the shared metadata data structures.
# ABOUTME: Covers defaults, the joined author display, and attachment de-duplication.

from shelfie.metadata.types import (
    Attachment,
    AttachmentKind,
    Contributor,
    MetadataRecord,
    SourceType,
    unique_attachments,
)


class TestMetadataRecord:
    def test_defaults(self) -> None:
        record = MetadataRecord()
        assert record.title is None
        assert record.authors == []
        assert record.attachments == []
        assert record.source_type is None

    def test_author_joins_names(self) -> None:
        record = MetadataRecord(
            title="Good Omens",
            authors=[Contributor("Terry Pratchett"), Contributor("Neil Gaiman")],
        )
        assert record.author == "Terry Pratchett, Neil Gaiman"

    def test_lists_are_not_shared(self) -> None:
        first, second = MetadataRecord(), MetadataRecord()
        first.authors.append(Contributor("Frank Herbert"))
        assert second.authors == []


class TestSourceType:
    def test_values(self) -> None:
        assert [t.value for t in SourceType] == ["books", "movies", "games", "boardgames", "music"]

    def test_compares_to_strings(self) -> None:
        assert SourceType("music") is SourceType.MUSIC
        assert SourceType.MUSIC == "music"


class TestUniqueAttachments:
    def test_keeps_first_occurrence(self) -> None:
        first = Attachment(kind=AttachmentKind.IMAGE, url="https://x/a.jpg", title="first")
        attachments = [
            first,
            Attachment(kind=AttachmentKind.IMAGE, url="https://x/b.jpg"),
            Attachment(kind=AttachmentKind.IMAGE, url="https://x/a.jpg", title="second"),
        ]
        result = unique_attachments(attachments)
        assert result == [first, attachments[1]]

    def test_empty(self) -> None:
        assert unique_attachments([]) == []
