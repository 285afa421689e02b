# ABOUTME: Deezer catalog adapter for the "music" content type (albums).
# ABOUTME: UPC lookup first when a barcode is known, then album search by closest title.

import logging
from typing import Any

from shelfie.matching.similarity import closest_match
from shelfie.metadata.http import HttpClient, MetadataFetchError
from shelfie.metadata.types import (
    Attachment,
    AttachmentKind,
    Contributor,
    MetadataRecord,
    SourceType,
)

logger = logging.getLogger(__name__)

_DEEZER_BASE = "https://api.deezer.com"


def _is_album(payload: Any) -> bool:
    # Deezer answers 200 with an "error" object for unknown ids.
    return isinstance(payload, dict) and "error" not in payload and "id" in payload


def parse_album(album: dict[str, Any]) -> MetadataRecord:
    """Map a Deezer album payload onto a MetadataRecord, one audio attachment per track."""
    label = album.get("label")
    tracks = (album.get("tracks") or {}).get("data") or []
    return MetadataRecord(
        title=album.get("title"),
        authors=[
            Contributor(name=c["name"], image_url=c.get("picture_xl"))
            for c in album.get("contributors") or []
        ],
        publishers=[Contributor(name=label)] if label else [],
        duration=album.get("duration"),
        track_count=album.get("nb_tracks"),
        release_date=album.get("release_date"),
        image_url=album.get("cover_big"),
        attachments=[
            Attachment(
                kind=AttachmentKind.AUDIO,
                url=track["preview"],
                title=track.get("title"),
                duration=track.get("duration"),
            )
            for track in tracks
            if track.get("preview")
        ],
    )


class DeezerAdapter:
    """Music catalog backed by the public Deezer API."""

    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    @property
    def name(self) -> str:
        return "deezer"

    @property
    def source_type(self) -> SourceType:
        return SourceType.MUSIC

    def fetch(self, name: str, barcode: str | None = None) -> MetadataRecord | None:
        if barcode:
            album = self._lookup_upc(barcode)
            if album is not None:
                return parse_album(album)

        data = self._http.get(f"{_DEEZER_BASE}/search/album", params={"q": name})
        hits = data.get("data") or []
        if not hits:
            return None

        if barcode:
            album = self._match_upc_in_hits(hits, barcode)
            if album is not None:
                return parse_album(album)

        best = hits[closest_match(name, hits, key=lambda a: a.get("title", "")) or 0]
        album = self._album(best["id"])
        return parse_album(album) if album is not None else None

    def _album(self, album_id: Any) -> dict[str, Any] | None:
        payload = self._http.get(f"{_DEEZER_BASE}/album/{album_id}")
        return payload if _is_album(payload) else None

    def _lookup_upc(self, barcode: str) -> dict[str, Any] | None:
        try:
            return self._album(f"upc:{barcode}")
        except MetadataFetchError as exc:
            logger.info("Deezer UPC lookup failed for %s: %s", barcode, exc)
            return None

    def _match_upc_in_hits(
        self, hits: list[dict[str, Any]], barcode: str
    ) -> dict[str, Any] | None:
        """Expand search hits in order and return the first whose UPC is the barcode."""
        for hit in hits:
            album = self._album(hit["id"])
            if album is not None and album.get("upc") == barcode:
                return album
        return None
