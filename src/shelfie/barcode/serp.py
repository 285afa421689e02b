# ABOUTME: Web search providers (SERP APIs) used to look up product titles for a barcode.
# ABOUTME: Each returns organic result titles or None; none of them raise past search().

import logging
from typing import Any

from shelfie.barcode.provider import SearchProvider
from shelfie.config import Settings
from shelfie.metadata.http import HttpClient, MetadataFetchError

logger = logging.getLogger(__name__)

# Upstream failures plus the shapes a malformed payload can fail with while being read.
_FAILURES = (MetadataFetchError, KeyError, TypeError, ValueError, AttributeError, IndexError)

# Searches are run against French Google, where the curated sites live.
_GOOGLE_PARAMS = {
    "gl": "fr",
    "hl": "fr",
    "google_domain": "google.fr",
}


def _titles(results: Any) -> list[str] | None:
    """Non-empty titles from a list of result objects, or None when there are none."""
    titles = [r.get("title") for r in results or [] if isinstance(r, dict) and r.get("title")]
    return titles or None


class TrajectSerpProvider:
    """SerpWow, Value Serp and Scale Serp: one API shape, different hosts.

    Credits are checked on the account endpoint before every search.
    """

    def __init__(self, name: str, base_url: str, http_client: HttpClient, api_key: str) -> None:
        self._name = name
        self._base_url = base_url.rstrip("/")
        self._http = http_client
        self._api_key = api_key

    @property
    def name(self) -> str:
        return self._name

    def available_quota(self) -> bool:
        try:
            data = self._http.get(f"{self._base_url}/account", params={"api_key": self._api_key})
            if not data.get("request_info", {}).get("success"):
                return False
            return data.get("account_info", {}).get("topup_credits_remaining") != 0
        except _FAILURES as exc:
            logger.warning("[%s] account check failed: %s", self._name, exc)
            return False

    def search(self, query: str) -> list[str] | None:
        if not self.available_quota():
            logger.info("[%s] unavailable, skipping", self._name)
            return None
        params = {
            "api_key": self._api_key,
            "q": query,
            "engine": "google",
            "include_ai_overview": "false",
            "ads_optimized": "false",
            "output": "json",
            **_GOOGLE_PARAMS,
        }
        try:
            data = self._http.get(f"{self._base_url}/search", params=params)
            if not data.get("request_info", {}).get("success"):
                logger.warning("[%s] search request was not successful", self._name)
                return None
            return _titles(data.get("organic_results"))
        except _FAILURES as exc:
            logger.warning("[%s] search failed for %r: %s", self._name, query, exc)
            return None


class SerpApiProvider:
    """serpapi.com, with its own account endpoint and error field."""

    _BASE_URL = "https://serpapi.com"

    def __init__(self, http_client: HttpClient, api_key: str) -> None:
        self._http = http_client
        self._api_key = api_key

    @property
    def name(self) -> str:
        return "Serp API"

    def available_quota(self) -> bool:
        try:
            data = self._http.get(f"{self._BASE_URL}/account", params={"api_key": self._api_key})
            return data.get("plan_searches_left") != 0
        except _FAILURES as exc:
            logger.warning("[%s] account check failed: %s", self.name, exc)
            return False

    def search(self, query: str) -> list[str] | None:
        if not self.available_quota():
            logger.info("[%s] unavailable, skipping", self.name)
            return None
        params = {
            "api_key": self._api_key,
            "q": query,
            "engine": "google",
            "output": "json",
            **_GOOGLE_PARAMS,
        }
        try:
            data = self._http.get(f"{self._BASE_URL}/search.json", params=params)
            if data.get("error"):
                logger.warning("[%s] search error: %s", self.name, data["error"])
                return None
            return _titles(data.get("organic_results"))
        except _FAILURES as exc:
            logger.warning("[%s] search failed for %r: %s", self.name, query, exc)
            return None


class AvesApiProvider:
    """avesapi.com. No account endpoint; failures show up in the search response."""

    _SEARCH_URL = "https://api.avesapi.com/search"

    def __init__(self, http_client: HttpClient, api_key: str) -> None:
        self._http = http_client
        self._api_key = api_key

    @property
    def name(self) -> str:
        return "AvesAPI"

    def search(self, query: str) -> list[str] | None:
        params = {
            "apikey": self._api_key,
            "query": query,
            "num": "10",
            "type": "web",
            "output": "json",
            "device": "desktop",
            **_GOOGLE_PARAMS,
        }
        try:
            data = self._http.get(self._SEARCH_URL, params=params)
            if data.get("error") or not data.get("request", {}).get("success"):
                logger.warning("[%s] search request was not successful", self.name)
                return None
            return _titles(data.get("result", {}).get("organic_results"))
        except _FAILURES as exc:
            logger.warning("[%s] search failed for %r: %s", self.name, query, exc)
            return None


class DataForSeoProvider:
    """DataForSEO live Google organic endpoint (POST, basic auth)."""

    _SEARCH_URL = "https://api.dataforseo.com/v3/serp/google/organic/live/advanced"

    def __init__(self, http_client: HttpClient, api_key: str) -> None:
        self._http = http_client
        self._api_key = api_key

    @property
    def name(self) -> str:
        return "DataForSEO"

    def search(self, query: str) -> list[str] | None:
        task = {
            "keyword": query,
            "location_code": 2250,
            "language_code": "fr",
            "device": "desktop",
            "os": "windows",
            "depth": 100,
            "group_organic_results": True,
            "load_async_ai_overview": False,
        }
        headers = {"Authorization": f"Basic {self._api_key}"}
        try:
            data = self._http.post(self._SEARCH_URL, json=[task], headers=headers)
            if data.get("status_message") != "Ok.":
                logger.warning("[%s] search status: %s", self.name, data.get("status_message"))
                return None
            results = (data.get("tasks") or [{}])[0].get("result") or []
            return _titles([item for result in results for item in result.get("items") or []])
        except _FAILURES as exc:
            logger.warning("[%s] search failed for %r: %s", self.name, query, exc)
            return None


def default_providers(http_client: HttpClient, settings: Settings) -> list[SearchProvider]:
    """The provider chain in priority order."""
    return [
        TrajectSerpProvider(
            "SerpWow", "https://api.serpwow.com/live", http_client, settings.serpwow_api_key
        ),
        TrajectSerpProvider(
            "Value Serp", "https://api.valueserp.com", http_client, settings.value_serp_api_key
        ),
        TrajectSerpProvider(
            "Scale Serp", "https://api.scaleserp.com", http_client, settings.scale_serp_api_key
        ),
        SerpApiProvider(http_client, settings.serp_api_key),
        AvesApiProvider(http_client, settings.aves_api_key),
        DataForSeoProvider(http_client, settings.data_for_seo_api_key),
    ]
