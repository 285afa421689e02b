# ABOUTME: Barcode name resolution: cache lookup, provider chain, and product name reduction.
# ABOUTME: The first provider returning titles wins and is cached for good.

import logging
import sqlite3

from shelfie.barcode.provider import SearchProvider
from shelfie.barcode.query import build_search_query, normalize_barcode
from shelfie.barcode.types import BarcodeCacheEntry, BarcodeLookup
from shelfie.db.barcode_cache import BarcodeCache
from shelfie.matching.product_name import clean_listing_title, extract_product_name

logger = logging.getLogger(__name__)


class BarcodeCacheError(Exception):
    """Raised when the barcode cache cannot be read or written.

    When a provider already answered, its entry is kept on ``entry`` so
    callers can still use the titles.
    """

    def __init__(self, message: str, entry: BarcodeCacheEntry | None = None) -> None:
        super().__init__(message)
        self.entry = entry


class BarcodeResolver:
    """Resolves barcodes to product names through an ordered provider chain.

    Providers are tried in list order. A barcode that resolved once is
    served from the cache forever; a barcode no provider could resolve is
    not cached, so the next call walks the chain again.
    """

    def __init__(self, providers: list[SearchProvider], cache: BarcodeCache) -> None:
        self._providers = list(providers)
        self._cache = cache

    def resolve(self, barcode: str) -> BarcodeCacheEntry | None:
        """Return raw titles for a barcode, from cache or from the first provider with results.

        Raises:
            ValueError: If the barcode has no digits.
            BarcodeCacheError: If the cache cannot be read or written. A
                provider result that could not be saved is on ``entry``.
        """
        code = normalize_barcode(barcode)
        if not code:
            raise ValueError(f"Not a barcode: {barcode!r}")

        try:
            cached = self._cache.get(code)
        except sqlite3.Error as exc:
            raise BarcodeCacheError(f"Could not read barcode cache for {code}") from exc
        if cached is not None:
            logger.info("Barcode %s served from cache (%s)", code, cached.provider)
            return cached

        query = build_search_query(code)
        for provider in self._providers:
            names = provider.search(query)
            if not names:
                logger.info("[%s] no results for barcode %s", provider.name, code)
                continue

            entry = BarcodeCacheEntry(barcode=code, provider=provider.name, raw_names=names)
            logger.info("Barcode %s resolved by %s (%d titles)", code, provider.name, len(names))
            return self._store(entry)

        logger.warning("No provider could resolve barcode %s", code)
        return None

    def _store(self, entry: BarcodeCacheEntry) -> BarcodeCacheEntry:
        """Cache a fresh entry, deferring to one another resolve wrote first."""
        try:
            self._cache.add(entry)
            return entry
        except sqlite3.IntegrityError:
            logger.info("Barcode %s cached concurrently, using stored entry", entry.barcode)
        except sqlite3.Error as exc:
            logger.error("Could not cache barcode %s: %s", entry.barcode, exc)
            raise BarcodeCacheError(f"Could not cache barcode {entry.barcode}", entry) from exc

        try:
            stored = self._cache.get(entry.barcode)
        except sqlite3.Error as exc:
            message = f"Could not read barcode cache for {entry.barcode}"
            raise BarcodeCacheError(message, entry) from exc
        return stored if stored is not None else entry

    def resolve_name(self, barcode: str) -> BarcodeLookup | None:
        """Resolve a barcode and reduce its raw titles to one clean product name.

        Returns None when the barcode is not recognized. A recognized barcode
        whose titles reduce to nothing has an empty ``clean_name``.
        """
        entry = self.resolve(barcode)
        if entry is None:
            return None
        return to_lookup(entry)


def to_lookup(entry: BarcodeCacheEntry) -> BarcodeLookup:
    """Reduce an entry's raw titles to one clean product name."""
    cleaned = [clean_listing_title(name) for name in entry.raw_names]
    return BarcodeLookup(
        barcode=entry.barcode,
        provider=entry.provider,
        raw_names=entry.raw_names,
        clean_name=extract_product_name(cleaned),
    )
