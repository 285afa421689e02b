# ABOUTME: Unit tests for the Google Books catalog adapter.
# ABOUTME: Covers ISBN short-circuit, year-aware edition ranking, cover probing, and parsing.

from shelfie.metadata.books import (
    GoogleBooksAdapter,
    parse_volume,
    rank_editions,
    split_requested_year,
)
from shelfie.metadata.http import MetadataFetchError
from shelfie.metadata.provider import CatalogAdapter
from shelfie.metadata.types import AttachmentKind, SourceType
from tests.fixtures.catalog_responses import (
    DUNE_THUMBNAIL,
    GOOGLE_BOOKS_DUNE_EDITIONS,
    GOOGLE_BOOKS_DUNE_LANGUAGES,
    GOOGLE_BOOKS_DUNE_SEARCH,
    GOOGLE_BOOKS_EMPTY,
)
from tests.fixtures.fake_http import FakeHttpClient


def _adapter(responses: dict, head_statuses: dict | None = None) -> tuple[GoogleBooksAdapter, FakeHttpClient]:
    http = FakeHttpClient(responses, head_statuses)
    return GoogleBooksAdapter(http), http


class TestGoogleBooksAdapterProtocol:
    def test_satisfies_protocol(self) -> None:
        adapter, _ = _adapter({})
        assert isinstance(adapter, CatalogAdapter)
        assert adapter.source_type is SourceType.BOOKS


class TestSplitRequestedYear:
    """Tests for pulling a "(YYYY)" year out of a book name."""

    def test_trailing_year(self) -> None:
        assert split_requested_year("Dune (1965)") == ("Dune", 1965)

    def test_embedded_year(self) -> None:
        assert split_requested_year("Dune (1965) poche") == ("Dune poche", 1965)

    def test_no_year(self) -> None:
        assert split_requested_year("  Dune ") == ("Dune", None)

    def test_non_year_parentheses_are_kept(self) -> None:
        assert split_requested_year("Dune (Tome 1)") == ("Dune (Tome 1)", None)


class TestRankEditions:
    """Tests for year and language aware ordering."""

    def test_year_match_beats_closer_title(self) -> None:
        ranked = rank_editions(GOOGLE_BOOKS_DUNE_EDITIONS["items"], "Dune", 1965)
        assert ranked[0]["id"] == "1965ed"

    def test_year_tolerance_is_one(self) -> None:
        ranked = rank_editions(GOOGLE_BOOKS_DUNE_EDITIONS["items"], "Dune", 1966)
        assert ranked[0]["id"] == "1965ed"

    def test_preferred_language_breaks_year_ties(self) -> None:
        ranked = rank_editions(GOOGLE_BOOKS_DUNE_LANGUAGES["items"], "Dune", 1965)
        assert [item["id"] for item in ranked] == ["fr", "en", "de"]

    def test_language_preference_is_configurable(self) -> None:
        ranked = rank_editions(
            GOOGLE_BOOKS_DUNE_LANGUAGES["items"], "Dune", 1965, languages=("en",)
        )
        assert ranked[0]["id"] == "en"


class TestParseVolume:
    def test_maps_fields(self) -> None:
        record = parse_volume(GOOGLE_BOOKS_DUNE_SEARCH["items"][1])

        assert record.title == "Dune"
        assert record.author == "Frank Herbert"
        assert [p.name for p in record.publishers] == ["Chilton Books"]
        assert record.page_count == 412
        assert record.release_date == "1965-08-01"
        assert record.image_url == DUNE_THUMBNAIL
        assert [a.kind for a in record.attachments] == [AttachmentKind.BOOK]

    def test_sparse_volume(self) -> None:
        record = parse_volume({"id": "x", "volumeInfo": {"title": "Dune"}})
        assert record.title == "Dune"
        assert record.authors == []
        assert record.publishers == []
        assert record.attachments == []
        assert record.image_url is None


class TestGoogleBooksFetch:
    """Tests for GoogleBooksAdapter.fetch."""

    def test_closest_title_without_year(self) -> None:
        adapter, http = _adapter({"/books/v1/volumes": GOOGLE_BOOKS_DUNE_SEARCH})
        record = adapter.fetch("Dune")

        assert record is not None
        assert record.title == "Dune"
        assert http.params_for("/volumes")["q"] == "Dune"

    def test_isbn_barcode_short_circuits_title_matching(self) -> None:
        """The volume carrying the ISBN wins even against an exact title."""
        adapter, http = _adapter({"/books/v1/volumes": GOOGLE_BOOKS_DUNE_SEARCH})
        record = adapter.fetch("Dune Messiah", barcode="9780801950773")

        assert record is not None
        assert record.title == "Dune"
        assert http.params_for("/volumes")["q"] == "isbn:9780801950773"

    def test_year_in_name_ranks_editions(self) -> None:
        adapter, http = _adapter({"/books/v1/volumes": GOOGLE_BOOKS_DUNE_EDITIONS})
        record = adapter.fetch("Dune (1965)")

        assert record is not None
        assert record.release_date == "1965"
        assert http.params_for("/volumes")["q"] == "Dune"

    def test_no_items_returns_none(self) -> None:
        adapter, _ = _adapter({"/books/v1/volumes": GOOGLE_BOOKS_EMPTY})
        assert adapter.fetch("Nothing At All") is None

    def test_api_key_is_sent_when_configured(self) -> None:
        http = FakeHttpClient({"/books/v1/volumes": GOOGLE_BOOKS_EMPTY})
        GoogleBooksAdapter(http, api_key="secret").fetch("Dune")
        assert http.params_for("/volumes")["key"] == "secret"


class TestCoverProbing:
    """Tests for picking the largest cover that exists."""

    def test_highest_answering_zoom_wins(self) -> None:
        adapter, http = _adapter(
            {"/books/v1/volumes": GOOGLE_BOOKS_DUNE_SEARCH}, head_statuses={"zoom=4": 200}
        )
        record = adapter.fetch("Dune")

        assert record is not None
        assert "zoom=4" in record.image_url
        assert [url.split("zoom=")[1][0] for url in http.urls("HEAD")] == ["6", "5", "4"]

    def test_falls_back_to_thumbnail(self) -> None:
        adapter, http = _adapter({"/books/v1/volumes": GOOGLE_BOOKS_DUNE_SEARCH})
        record = adapter.fetch("Dune")

        assert record is not None
        assert record.image_url == DUNE_THUMBNAIL
        assert len(http.urls("HEAD")) == 7

    def test_probe_errors_are_skipped(self) -> None:
        adapter, _ = _adapter(
            {"/books/v1/volumes": GOOGLE_BOOKS_DUNE_SEARCH},
            head_statuses={"zoom=6": MetadataFetchError("boom"), "zoom=5": 200},
        )
        record = adapter.fetch("Dune")

        assert record is not None
        assert "zoom=5" in record.image_url
