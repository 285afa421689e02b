# ABOUTME: Unit tests for the web search providers behind barcode resolution.
# ABOUTME: Each provider returns titles or None and never raises past search().

import pytest

from shelfie.barcode.provider import QuotaCheckedProvider, SearchProvider
from shelfie.barcode.serp import (
    AvesApiProvider,
    DataForSeoProvider,
    SerpApiProvider,
    TrajectSerpProvider,
    default_providers,
)
from shelfie.config import Settings
from shelfie.metadata.http import MetadataFetchError
from tests.fixtures.fake_http import FakeHttpClient
from tests.fixtures.serp_responses import (
    AVES_SEARCH_FAILED,
    AVES_SEARCH_PS5,
    DATAFORSEO_SEARCH_PS5,
    DATAFORSEO_UNAUTHORIZED,
    PS5_TITLES,
    SERPAPI_ACCOUNT_EMPTY,
    SERPAPI_ACCOUNT_OK,
    SERPAPI_SEARCH_ERROR,
    SERPAPI_SEARCH_PS5,
    TRAJECT_ACCOUNT_EMPTY,
    TRAJECT_ACCOUNT_OK,
    TRAJECT_SEARCH_EMPTY,
    TRAJECT_SEARCH_PS5,
)

QUERY = "0711719541035 (site:fnac.com OR site:amazon.fr)"


def _traject(responses: dict) -> tuple[TrajectSerpProvider, FakeHttpClient]:
    http = FakeHttpClient(responses)
    return TrajectSerpProvider("Value Serp", "https://api.valueserp.com", http, "k"), http


class TestDefaultProviders:
    def test_priority_order(self) -> None:
        providers = default_providers(FakeHttpClient(), Settings())
        assert [p.name for p in providers] == [
            "SerpWow",
            "Value Serp",
            "Scale Serp",
            "Serp API",
            "AvesAPI",
            "DataForSEO",
        ]

    def test_all_satisfy_protocol(self) -> None:
        for provider in default_providers(FakeHttpClient(), Settings()):
            assert isinstance(provider, SearchProvider)

    def test_quota_checked_providers(self) -> None:
        checked = [
            p.name
            for p in default_providers(FakeHttpClient(), Settings())
            if isinstance(p, QuotaCheckedProvider)
        ]
        assert checked == ["SerpWow", "Value Serp", "Scale Serp", "Serp API"]


class TestTrajectSerpProvider:
    """SerpWow, Value Serp and Scale Serp share one API shape."""

    def test_returns_titles(self) -> None:
        provider, http = _traject({"/account": TRAJECT_ACCOUNT_OK, "/search": TRAJECT_SEARCH_PS5})

        assert provider.search(QUERY) == PS5_TITLES
        params = http.params_for("/search")
        assert params["q"] == QUERY
        assert params["gl"] == "fr"
        assert params["api_key"] == "k"

    def test_no_credits_skips_search(self) -> None:
        provider, http = _traject(
            {"/account": TRAJECT_ACCOUNT_EMPTY, "/search": TRAJECT_SEARCH_PS5}
        )
        assert provider.search(QUERY) is None
        assert http.urls() == ["https://api.valueserp.com/account"]

    def test_failed_account_request_skips_search(self) -> None:
        provider, _ = _traject({"/account": {"request_info": {"success": False}}})
        assert provider.available_quota() is False
        assert provider.search(QUERY) is None

    def test_account_http_error(self) -> None:
        provider, _ = _traject({"/account": MetadataFetchError("HTTP 401")})
        assert provider.search(QUERY) is None

    def test_empty_results(self) -> None:
        provider, _ = _traject({"/account": TRAJECT_ACCOUNT_OK, "/search": TRAJECT_SEARCH_EMPTY})
        assert provider.search(QUERY) is None

    def test_search_http_error(self) -> None:
        provider, _ = _traject(
            {"/account": TRAJECT_ACCOUNT_OK, "/search": MetadataFetchError("HTTP 503")}
        )
        assert provider.search(QUERY) is None

    def test_malformed_payload(self) -> None:
        provider, _ = _traject(
            {"/account": TRAJECT_ACCOUNT_OK, "/search": {"request_info": {"success": True}, "organic_results": "oops"}}
        )
        assert provider.search(QUERY) is None

    def test_untitled_results_are_dropped(self) -> None:
        provider, _ = _traject(
            {
                "/account": TRAJECT_ACCOUNT_OK,
                "/search": {
                    "request_info": {"success": True},
                    "organic_results": [{"title": ""}, {"link": "x"}, {"title": "PS5"}],
                },
            }
        )
        assert provider.search(QUERY) == ["PS5"]


class TestSerpApiProvider:
    def test_returns_titles(self) -> None:
        http = FakeHttpClient({"/account": SERPAPI_ACCOUNT_OK, "/search.json": SERPAPI_SEARCH_PS5})
        assert SerpApiProvider(http, "k").search(QUERY) == PS5_TITLES

    def test_exhausted_plan_skips_search(self) -> None:
        http = FakeHttpClient({"/account": SERPAPI_ACCOUNT_EMPTY})
        assert SerpApiProvider(http, "k").search(QUERY) is None
        assert http.urls() == ["https://serpapi.com/account"]

    def test_error_field(self) -> None:
        http = FakeHttpClient({"/account": SERPAPI_ACCOUNT_OK, "/search.json": SERPAPI_SEARCH_ERROR})
        assert SerpApiProvider(http, "k").search(QUERY) is None


class TestAvesApiProvider:
    def test_returns_titles(self) -> None:
        http = FakeHttpClient({"avesapi.com/search": AVES_SEARCH_PS5})
        assert AvesApiProvider(http, "k").search(QUERY) == PS5_TITLES
        assert http.params_for("avesapi.com")["apikey"] == "k"

    def test_unsuccessful_request(self) -> None:
        http = FakeHttpClient({"avesapi.com/search": AVES_SEARCH_FAILED})
        assert AvesApiProvider(http, "k").search(QUERY) is None

    def test_has_no_quota_check(self) -> None:
        assert not isinstance(AvesApiProvider(FakeHttpClient(), "k"), QuotaCheckedProvider)


class TestDataForSeoProvider:
    def test_returns_titles(self) -> None:
        http = FakeHttpClient({"api.dataforseo.com": DATAFORSEO_SEARCH_PS5})
        assert DataForSeoProvider(http, "dXNlcjpwYXNz").search(QUERY) == PS5_TITLES

        body = http.params_for("api.dataforseo.com")
        assert body[0]["keyword"] == QUERY
        assert body[0]["language_code"] == "fr"

    def test_unauthorized(self) -> None:
        http = FakeHttpClient({"api.dataforseo.com": DATAFORSEO_UNAUTHORIZED})
        assert DataForSeoProvider(http, "bad").search(QUERY) is None

    @pytest.mark.parametrize(
        "payload",
        [
            {"status_message": "Ok.", "tasks": []},
            {"status_message": "Ok.", "tasks": [{"result": None}]},
            {"status_message": "Ok.", "tasks": [{"result": [{"items": None}]}]},
        ],
    )
    def test_empty_shapes(self, payload: dict) -> None:
        http = FakeHttpClient({"api.dataforseo.com": payload})
        assert DataForSeoProvider(http, "k").search(QUERY) is None
