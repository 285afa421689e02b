# ABOUTME: TMDB catalog adapter for the "movies" content type.
# ABOUTME: Searches movies, then pulls details and credits for the closest title.

from typing import Any

from shelfie.matching.similarity import closest_match
from shelfie.metadata.http import HttpClient
from shelfie.metadata.types import (
    Attachment,
    AttachmentKind,
    Contributor,
    MetadataRecord,
    SourceType,
)

_TMDB_BASE = "https://api.themoviedb.org/3"
_POSTER_BASE = "https://image.tmdb.org/t/p/w780"
_BACKDROP_BASE = "https://image.tmdb.org/t/p/w1280"


def _image_url(base: str, path: str | None) -> str | None:
    return f"{base}{path}" if path else None


def parse_movie(
    movie: dict[str, Any], details: dict[str, Any], credits: dict[str, Any]
) -> MetadataRecord:
    """Map a TMDB search hit plus its details and credits onto a MetadataRecord.

    Directors become authors and production companies become publishers.
    TMDB runtimes are in minutes and are stored as seconds.
    """
    directors = [
        Contributor(
            name=person["name"],
            image_url=_image_url(_POSTER_BASE, person.get("profile_path")),
        )
        for person in credits.get("crew") or []
        if person.get("job") == "Director"
    ]
    companies = [
        Contributor(
            name=company["name"],
            image_url=_image_url(_POSTER_BASE, company.get("logo_path")),
        )
        for company in details.get("production_companies") or []
    ]
    runtime = details.get("runtime")
    backdrop = _image_url(_BACKDROP_BASE, movie.get("backdrop_path"))

    return MetadataRecord(
        title=movie.get("title"),
        authors=directors,
        publishers=companies,
        duration=runtime * 60 if runtime else None,
        description=details.get("overview") or None,
        release_date=details.get("release_date") or movie.get("release_date") or None,
        image_url=_image_url(_POSTER_BASE, movie.get("poster_path")),
        attachments=[Attachment(kind=AttachmentKind.IMAGE, url=backdrop)] if backdrop else [],
    )


class TmdbAdapter:
    """Movies catalog backed by The Movie Database API."""

    def __init__(self, http_client: HttpClient, api_key: str = "") -> None:
        self._http = http_client
        self._api_key = api_key

    @property
    def name(self) -> str:
        return "tmdb"

    @property
    def source_type(self) -> SourceType:
        return SourceType.MOVIES

    def fetch(self, name: str, barcode: str | None = None) -> MetadataRecord | None:
        data = self._http.get(
            f"{_TMDB_BASE}/search/movie", params={"query": name, "api_key": self._api_key}
        )
        results = data.get("results") or []
        if not results:
            return None

        best = results[closest_match(name, results, key=lambda m: m.get("title", "")) or 0]
        movie_id = best["id"]
        details = self._http.get(
            f"{_TMDB_BASE}/movie/{movie_id}", params={"api_key": self._api_key}
        )
        credits = self._http.get(
            f"{_TMDB_BASE}/movie/{movie_id}/credits", params={"api_key": self._api_key}
        )
        return parse_movie(best, details, credits)
