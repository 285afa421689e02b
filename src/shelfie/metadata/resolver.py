# ABOUTME: Catalog metadata resolution: dispatch by content type, soft failure, cached storage.
# ABOUTME: preview() never raises for upstream problems; resolve_and_store() caches per item.

import logging
import sqlite3
from datetime import datetime

from shelfie.config import Settings
from shelfie.db.store import MetadataStore
from shelfie.metadata.boardgames import BoardGameGeekAdapter
from shelfie.metadata.books import GoogleBooksAdapter
from shelfie.metadata.games import RawgAdapter
from shelfie.metadata.http import HttpClient, MetadataFetchError
from shelfie.metadata.movies import TmdbAdapter
from shelfie.metadata.music import DeezerAdapter
from shelfie.metadata.provider import CatalogAdapter
from shelfie.metadata.types import MetadataRecord, SourceType, unique_attachments

logger = logging.getLogger(__name__)

# Shapes a malformed upstream payload can fail with while being mapped.
_PAYLOAD_ERRORS = (KeyError, TypeError, ValueError, AttributeError, IndexError)


class MetadataStorageError(Exception):
    """Raised when resolved metadata could not be saved.

    The resolved record is kept on ``record`` so callers can still show it.
    """

    def __init__(self, message: str, record: MetadataRecord | None = None) -> None:
        super().__init__(message)
        self.record = record


def default_adapters(http_client: HttpClient, settings: Settings) -> list[CatalogAdapter]:
    """One adapter per content type, configured from settings."""
    return [
        GoogleBooksAdapter(http_client, api_key=settings.google_books_api_key),
        TmdbAdapter(http_client, api_key=settings.tmdb_api_key),
        RawgAdapter(http_client, api_key=settings.rawg_api_key),
        BoardGameGeekAdapter(http_client),
        DeezerAdapter(http_client),
    ]


class MetadataResolver:
    """Resolves free-text item names to normalized catalog metadata.

    Exactly one adapter serves each content type; there is no fallback
    across types. A store is only needed for resolve_and_store().
    """

    def __init__(
        self, adapters: list[CatalogAdapter], store: MetadataStore | None = None
    ) -> None:
        self._adapters = {adapter.source_type: adapter for adapter in adapters}
        self._store = store

    def preview(
        self, name: str, type_: SourceType | str, barcode: str | None = None
    ) -> MetadataRecord | None:
        """Look up metadata without storing it.

        Returns None for an unknown type, an empty result, or any upstream
        failure (network, status, malformed payload). Failures are logged.
        """
        try:
            source_type = SourceType(type_)
        except ValueError:
            logger.warning("No catalog for content type %r", type_)
            return None

        adapter = self._adapters.get(source_type)
        if adapter is None:
            logger.warning("No catalog configured for %s", source_type.value)
            return None

        try:
            record = adapter.fetch(name, barcode or None)
        except MetadataFetchError as exc:
            logger.warning("%s lookup failed for %r: %s", adapter.name, name, exc)
            return None
        except _PAYLOAD_ERRORS as exc:
            logger.warning(
                "%s returned a malformed payload for %r: %r", adapter.name, name, exc
            )
            return None

        if record is None:
            logger.info("%s found nothing for %r", adapter.name, name)
            return None

        record.source_type = source_type
        record.source_query = name
        record.last_fetched = datetime.now().replace(microsecond=0)
        record.attachments = unique_attachments(record.attachments)
        return record

    def resolve_and_store(
        self,
        item_id: int,
        name: str,
        type_: SourceType | str,
        barcode: str | None = None,
        force_refresh: bool = False,
    ) -> MetadataRecord | None:
        """Return the item's metadata, fetching and storing it when needed.

        Without ``force_refresh`` an existing record is returned as stored and
        no catalog is queried. Otherwise a fresh lookup replaces the stored
        record entirely. When the lookup finds nothing, None is returned and
        any existing record is left as it was.

        Raises:
            MetadataStorageError: If the store cannot be read or written.
        """
        if self._store is None:
            raise MetadataStorageError("No metadata store configured")

        if not force_refresh:
            try:
                cached = self._store.get_for_item(item_id)
            except sqlite3.Error as exc:
                raise MetadataStorageError(f"Could not read metadata for item {item_id}") from exc
            if cached is not None:
                logger.debug("Metadata cache hit for item %d", item_id)
                return cached

        record = self.preview(name, type_, barcode)
        if record is None:
            return None

        try:
            return self._store.upsert_for_item(item_id, record)
        except sqlite3.Error as exc:
            logger.error("Storing metadata for item %d failed: %s", item_id, exc)
            raise MetadataStorageError(
                f"Could not store metadata for item {item_id}", record=record
            ) from exc
