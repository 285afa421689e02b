# ABOUTME: Data structures for barcode name resolution.
# ABOUTME: The persisted cache entry and the lookup result handed back to callers.

from dataclasses import dataclass, field


@dataclass(frozen=True)
class BarcodeCacheEntry:
    """Raw search result titles for one barcode, as returned by one provider."""

    barcode: str
    provider: str
    raw_names: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class BarcodeLookup:
    """A resolved barcode: where the names came from and the reduced product name.

    ``clean_name`` may be empty when the raw names reduce to nothing; that is
    still a resolved barcode, unlike a lookup returning None.
    """

    barcode: str
    provider: str
    raw_names: list[str]
    clean_name: str
