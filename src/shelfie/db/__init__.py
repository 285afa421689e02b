# ABOUTME: Public API for the shelfie storage layer.
# ABOUTME: Exports connection management, the metadata store, and the barcode cache.

from shelfie.db.barcode_cache import BarcodeCache
from shelfie.db.connection import open_store
from shelfie.db.mapping import ItemRecord
from shelfie.db.store import MetadataStore

__all__ = [
    "BarcodeCache",
    "ItemRecord",
    "MetadataStore",
    "open_store",
]
