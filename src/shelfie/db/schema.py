# ABOUTME: SQL DDL statements for the shelfie inventory database schema.
# ABOUTME: Items, their metadata records, shared authors/publishers, attachments, barcode cache.

SCHEMA_VERSION = 1

SCHEMA_V1 = """
-- Inventory items; metadata resolution only needs name, type and barcode
CREATE TABLE items (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    name        TEXT NOT NULL,
    type        TEXT NOT NULL,
    barcode     TEXT,
    date_added  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

-- At most one metadata record per item
CREATE TABLE metadata (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    item_id       INTEGER NOT NULL UNIQUE REFERENCES items(id) ON DELETE CASCADE,
    title         TEXT,
    duration      INTEGER,
    page_count    INTEGER,
    track_count   INTEGER,
    description   TEXT,
    release_date  TEXT,
    image_url     TEXT,
    source_type   TEXT NOT NULL,
    source_query  TEXT NOT NULL,
    last_fetched  TEXT NOT NULL
);

-- Shared across records, deduplicated by name, never cascade-deleted
CREATE TABLE authors (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    name       TEXT NOT NULL UNIQUE,
    image_url  TEXT
);

CREATE TABLE publishers (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    name       TEXT NOT NULL UNIQUE,
    image_url  TEXT
);

CREATE TABLE metadata_authors (
    metadata_id  INTEGER NOT NULL REFERENCES metadata(id) ON DELETE CASCADE,
    author_id    INTEGER NOT NULL REFERENCES authors(id),
    position     INTEGER NOT NULL,
    PRIMARY KEY (metadata_id, author_id)
);

CREATE TABLE metadata_publishers (
    metadata_id   INTEGER NOT NULL REFERENCES metadata(id) ON DELETE CASCADE,
    publisher_id  INTEGER NOT NULL REFERENCES publishers(id),
    position      INTEGER NOT NULL,
    PRIMARY KEY (metadata_id, publisher_id)
);

-- Owned by a metadata record
CREATE TABLE attachments (
    id           INTEGER PRIMARY KEY AUTOINCREMENT,
    metadata_id  INTEGER NOT NULL REFERENCES metadata(id) ON DELETE CASCADE,
    kind         TEXT NOT NULL,
    title        TEXT,
    duration     INTEGER,
    url          TEXT NOT NULL,
    position     INTEGER NOT NULL
);

CREATE INDEX idx_attachments_metadata ON attachments(metadata_id);

-- Barcode resolution cache, permanent once written
CREATE TABLE barcode_cache (
    barcode     TEXT PRIMARY KEY,
    provider    TEXT NOT NULL,
    created_at  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

CREATE TABLE barcode_cache_names (
    barcode   TEXT NOT NULL REFERENCES barcode_cache(barcode) ON DELETE CASCADE,
    position  INTEGER NOT NULL,
    name      TEXT NOT NULL,
    PRIMARY KEY (barcode, position)
);

-- Schema versioning for future migrations
CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""
