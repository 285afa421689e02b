# ABOUTME: SearchProvider protocol for the web search services behind barcode resolution.
# ABOUTME: Providers are interchangeable and tried in a fixed order until one returns titles.

from typing import Protocol, runtime_checkable


@runtime_checkable
class SearchProvider(Protocol):
    """A web search service returning result titles for a query.

    ``search`` must not raise: quota exhaustion, HTTP failures and malformed
    payloads all come back as None so the next provider can be tried.
    """

    @property
    def name(self) -> str: ...

    def search(self, query: str) -> list[str] | None: ...


@runtime_checkable
class QuotaCheckedProvider(SearchProvider, Protocol):
    """A provider whose account has a credit balance that can run out."""

    def available_quota(self) -> bool: ...
