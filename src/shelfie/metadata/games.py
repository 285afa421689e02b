# ABOUTME: RAWG catalog adapter for the "games" (video games) content type.
# ABOUTME: Picks the closest title from a game search; screenshots become image attachments.

from typing import Any

from shelfie.matching.similarity import closest_match
from shelfie.metadata.http import HttpClient
from shelfie.metadata.types import Attachment, AttachmentKind, MetadataRecord, SourceType

_RAWG_GAMES_URL = "https://api.rawg.io/api/games"


def parse_game(game: dict[str, Any]) -> MetadataRecord:
    """Map a RAWG search result onto a MetadataRecord.

    RAWG does not expose developers or publishers in search results, so
    authors and publishers stay empty.
    """
    screenshots = [
        Attachment(kind=AttachmentKind.IMAGE, url=shot["image"])
        for shot in game.get("short_screenshots") or []
        if shot.get("image")
    ]
    return MetadataRecord(
        title=game.get("name"),
        release_date=game.get("released"),
        image_url=game.get("background_image"),
        attachments=screenshots,
    )


class RawgAdapter:
    """Video game catalog backed by the RAWG API."""

    def __init__(self, http_client: HttpClient, api_key: str = "") -> None:
        self._http = http_client
        self._api_key = api_key

    @property
    def name(self) -> str:
        return "rawg"

    @property
    def source_type(self) -> SourceType:
        return SourceType.GAMES

    def fetch(self, name: str, barcode: str | None = None) -> MetadataRecord | None:
        data = self._http.get(_RAWG_GAMES_URL, params={"search": name, "key": self._api_key})
        results = data.get("results") or []
        if not results:
            return None
        best = results[closest_match(name, results, key=lambda g: g.get("name", "")) or 0]
        return parse_game(best)
