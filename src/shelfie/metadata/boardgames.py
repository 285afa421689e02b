# ABOUTME: BoardGameGeek catalog adapter for the "boardgames" content type.
# ABOUTME: XML API2 search by primary name, then thing details for designers and publishers.

import html

from shelfie.matching.similarity import closest_match
from shelfie.metadata.bgg_xml import XmlNode, parse_xml, tag_is
from shelfie.metadata.http import HttpClient
from shelfie.metadata.types import (
    Attachment,
    AttachmentKind,
    Contributor,
    MetadataRecord,
    SourceType,
)

_BGG_BASE = "https://boardgamegeek.com/xmlapi2"


def primary_name(item: XmlNode) -> str | None:
    name = item.find(tag_is("name", "primary"))
    return name.attrs.get("value") if name else None


def decode_description(raw: str | None) -> str | None:
    """Decode HTML entities in a BGG description; literal ``&#10;`` becomes a newline."""
    if not raw:
        return None
    return html.unescape(raw).replace("&#10;", "\n")


def _link_values(item: XmlNode, link_type: str) -> list[Contributor]:
    return [
        Contributor(name=link.attrs["value"])
        for link in item.find_all(tag_is("link", link_type))
        if link.attrs.get("value")
    ]


def parse_thing(item: XmlNode) -> MetadataRecord:
    """Map a ``thing`` item node onto a MetadataRecord.

    Designers become authors. The box image is both the cover and the
    single image attachment.
    """
    description = item.find(tag_is("description"))
    year = item.find(tag_is("yearpublished"))
    image = item.find(tag_is("image"))
    image_url = image.text if image else None
    return MetadataRecord(
        title=primary_name(item),
        authors=_link_values(item, "boardgamedesigner"),
        publishers=_link_values(item, "boardgamepublisher"),
        description=decode_description(description.text if description else None),
        release_date=year.attrs.get("value") if year else None,
        image_url=image_url,
        attachments=(
            [Attachment(kind=AttachmentKind.IMAGE, url=image_url)] if image_url else []
        ),
    )


class BoardGameGeekAdapter:
    """Board game catalog backed by the BoardGameGeek XML API2."""

    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    @property
    def name(self) -> str:
        return "boardgamegeek"

    @property
    def source_type(self) -> SourceType:
        return SourceType.BOARDGAMES

    def fetch(self, name: str, barcode: str | None = None) -> MetadataRecord | None:
        search = parse_xml(
            self._http.get_text(
                f"{_BGG_BASE}/search", params={"query": name, "type": "boardgame"}
            )
        )
        items = list(search.find_all(tag_is("item")))
        if not items:
            return None

        best = items[closest_match(name, items, key=lambda i: primary_name(i) or "") or 0]
        game_id = best.attrs.get("id")
        if not game_id:
            return None

        details = parse_xml(
            self._http.get_text(f"{_BGG_BASE}/thing", params={"id": game_id, "stats": "1"})
        )
        game = details.find(tag_is("item"))
        return parse_thing(game) if game else None
