# ABOUTME: CatalogAdapter protocol defining the contract for per-type metadata catalogs.
# ABOUTME: Each content type (books, movies, games, boardgames, music) has exactly one adapter.

from typing import Protocol, runtime_checkable

from shelfie.metadata.types import MetadataRecord, SourceType


@runtime_checkable
class CatalogAdapter(Protocol):
    """Protocol for external metadata catalogs.

    ``fetch`` searches the catalog, picks the best candidate for ``name``
    (or the one whose identifier equals ``barcode``) and returns it
    normalized. It returns None when the catalog has no candidates and may
    raise MetadataFetchError or payload errors, which the resolver absorbs.
    """

    @property
    def name(self) -> str: ...

    @property
    def source_type(self) -> SourceType: ...

    def fetch(self, name: str, barcode: str | None = None) -> MetadataRecord | None: ...
