# ABOUTME: Google Books catalog adapter for the "books" content type.
# ABOUTME: ISBN or title search, year-aware edition ranking, and best cover resolution.

import logging
import re
from typing import Any

from shelfie.matching.similarity import closest_match, distance
from shelfie.metadata.http import HttpClient, MetadataFetchError
from shelfie.metadata.types import (
    Attachment,
    AttachmentKind,
    Contributor,
    MetadataRecord,
    SourceType,
)

logger = logging.getLogger(__name__)

_VOLUMES_URL = "https://www.googleapis.com/books/v1/volumes"
_MAX_COVER_ZOOM = 6
_YEAR_TOLERANCE = 1
_DEFAULT_LANGUAGES = ("fr", "en")

# "Dune (1965)" -> query "Dune", year 1965
_REQUESTED_YEAR_RE = re.compile(r"\s*\((\d{4})\)")
_PUBLISHED_YEAR_RE = re.compile(r"^(\d{4})")
_ZOOM_RE = re.compile(r"zoom=\d+")


def split_requested_year(name: str) -> tuple[str, int | None]:
    """Split a trailing or embedded "(YYYY)" year out of a book name."""
    match = _REQUESTED_YEAR_RE.search(name)
    if not match:
        return name.strip(), None
    stripped = (name[: match.start()] + name[match.end() :]).strip()
    return stripped or name.strip(), int(match.group(1))


def _published_year(volume_info: dict[str, Any]) -> int | None:
    match = _PUBLISHED_YEAR_RE.match(volume_info.get("publishedDate") or "")
    return int(match.group(1)) if match else None


def _isbns(volume_info: dict[str, Any]) -> set[str]:
    return {
        entry.get("identifier", "")
        for entry in volume_info.get("industryIdentifiers") or []
        if entry.get("type") in ("ISBN_10", "ISBN_13")
    }


def rank_editions(
    items: list[dict[str, Any]],
    title: str,
    year: int | None,
    languages: tuple[str, ...] = _DEFAULT_LANGUAGES,
) -> list[dict[str, Any]]:
    """Order candidate volumes best first for a year-qualified request.

    Sort key: publish year within one year of the request, then language
    preference (``languages`` order, others last), then ascending title edit
    distance, then response order.
    """
    wanted = title.lower()

    def sort_key(pair: tuple[int, dict[str, Any]]) -> tuple[int, int, int, int]:
        index, item = pair
        info = item.get("volumeInfo", {})
        published = _published_year(info)
        year_matches = (
            year is not None
            and published is not None
            and abs(published - year) <= _YEAR_TOLERANCE
        )
        year_rank = 0 if year_matches else 1
        language = info.get("language")
        language_rank = languages.index(language) if language in languages else len(languages)
        title_rank = distance(wanted, (info.get("title") or "").lower())
        return year_rank, language_rank, title_rank, index

    return [item for _, item in sorted(enumerate(items), key=sort_key)]


def parse_volume(volume: dict[str, Any]) -> MetadataRecord:
    """Map a Google Books volume onto a MetadataRecord (cover not yet resolved)."""
    info = volume.get("volumeInfo", {})
    publisher = info.get("publisher")
    reader_link = (volume.get("accessInfo") or {}).get("webReaderLink")
    return MetadataRecord(
        title=info.get("title"),
        authors=[Contributor(name=author) for author in info.get("authors") or []],
        publishers=[Contributor(name=publisher)] if publisher else [],
        page_count=info.get("pageCount"),
        description=info.get("description"),
        release_date=info.get("publishedDate"),
        image_url=(info.get("imageLinks") or {}).get("thumbnail"),
        attachments=(
            [Attachment(kind=AttachmentKind.BOOK, url=reader_link)] if reader_link else []
        ),
    )


class GoogleBooksAdapter:
    """Books catalog backed by the Google Books volumes API.

    A barcode is treated as an ISBN and searched with ``isbn:``. Without a
    year in the name, the closest title wins; with one, editions are ranked
    by :func:`rank_editions`.
    """

    def __init__(
        self,
        http_client: HttpClient,
        api_key: str = "",
        languages: tuple[str, ...] = _DEFAULT_LANGUAGES,
    ) -> None:
        self._http = http_client
        self._api_key = api_key
        self._languages = languages

    @property
    def name(self) -> str:
        return "googlebooks"

    @property
    def source_type(self) -> SourceType:
        return SourceType.BOOKS

    def fetch(self, name: str, barcode: str | None = None) -> MetadataRecord | None:
        title, year = split_requested_year(name)
        params = {"q": f"isbn:{barcode}" if barcode else title}
        if self._api_key:
            params["key"] = self._api_key

        data = self._http.get(_VOLUMES_URL, params=params)
        items = data.get("items") or []
        if not items:
            return None

        best = self._select(items, title, year, barcode)
        record = parse_volume(best)
        if record.image_url:
            record.image_url = self._best_cover_url(record.image_url)
        return record

    def _select(
        self,
        items: list[dict[str, Any]],
        title: str,
        year: int | None,
        barcode: str | None,
    ) -> dict[str, Any]:
        if barcode:
            for item in items:
                if barcode in _isbns(item.get("volumeInfo", {})):
                    return item
        if year is not None:
            return rank_editions(items, title, year, self._languages)[0]
        index = closest_match(title, items, key=lambda i: i["volumeInfo"].get("title", ""))
        return items[index or 0]

    def _best_cover_url(self, thumbnail_url: str) -> str:
        """Return the highest zoom variant of the thumbnail that answers 200.

        Probes zoom levels from the maximum down to 0 and falls back to the
        thumbnail itself when none responds.
        """
        if not _ZOOM_RE.search(thumbnail_url):
            return thumbnail_url
        for zoom in range(_MAX_COVER_ZOOM, -1, -1):
            candidate = _ZOOM_RE.sub(f"zoom={zoom}", thumbnail_url)
            try:
                status = self._http.head(candidate)
            except MetadataFetchError as exc:
                logger.debug("Cover probe failed at zoom %d: %s", zoom, exc)
                continue
            if status == 200:
                return candidate
        return thumbnail_url
