# ABOUTME: Builds the resolvers the CLI commands use from settings and a database connection.
# ABOUTME: Kept separate so tests can substitute adapters and providers.

import sqlite3
from pathlib import Path

from shelfie.barcode.resolver import BarcodeResolver
from shelfie.barcode.serp import default_providers
from shelfie.config import Settings
from shelfie.db.barcode_cache import BarcodeCache
from shelfie.db.connection import open_store
from shelfie.db.store import MetadataStore
from shelfie.metadata.http import HttpClient, ShelfieHttpClient
from shelfie.metadata.resolver import MetadataResolver, default_adapters


def create_http_client(settings: Settings) -> ShelfieHttpClient:
    """A client for one command run; the command closes it when done."""
    return ShelfieHttpClient(timeout=settings.http_timeout)


def open_settings_store(settings: Settings, db_path: Path | None) -> sqlite3.Connection:
    """Open the database given on the command line, else the configured one."""
    return open_store(db_path or settings.db_path)


def create_metadata_resolver(
    settings: Settings, http_client: HttpClient, store: MetadataStore | None = None
) -> MetadataResolver:
    return MetadataResolver(default_adapters(http_client, settings), store=store)


def create_barcode_resolver(
    settings: Settings, http_client: HttpClient, conn: sqlite3.Connection
) -> BarcodeResolver:
    return BarcodeResolver(default_providers(http_client, settings), BarcodeCache(conn))
