from __future__ import annotations

SCHEMA_VERSION_SQL = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    applied_at TEXT NOT NULL
);
"""

SCHEMA_MIGRATIONS_SQL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE,
    applied_at TEXT NOT NULL,
    notes TEXT
);
"""

SCHEMA_LISTINGS_SQL = """
CREATE TABLE IF NOT EXISTS listings (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    external_id TEXT NOT NULL UNIQUE,
    external_key TEXT,
    title TEXT NOT NULL,
    description TEXT,
    price REAL,
    address TEXT,
    city TEXT,
    state TEXT,
    postal_code TEXT,
    beds INTEGER,
    baths REAL,
    sqft INTEGER,
    year_built INTEGER,
    property_type TEXT,
    property_subtype TEXT,
    latitude REAL,
    longitude REAL,
    status TEXT,
    source_status TEXT,
    mls_status TEXT,
    original_list_price REAL,
    days_on_market INTEGER,
    listing_contract_date TEXT,
    modification_timestamp TEXT,
    photo_count INTEGER,
    virtual_tour_url TEXT,
    listing_agent_key TEXT,
    listing_office_name TEXT,
    featured INTEGER NOT NULL DEFAULT 0,
    luxury INTEGER NOT NULL DEFAULT 0,
    images TEXT NOT NULL DEFAULT '[]',
    architectural_style TEXT,
    secondary_style TEXT,
    style_confidence REAL,
    style_analyzed INTEGER NOT NULL DEFAULT 0,
    is_external_listing INTEGER NOT NULL DEFAULT 0,
    last_synced_at TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_listings_external_key ON listings (external_key);
CREATE INDEX IF NOT EXISTS idx_listings_modification ON listings (modification_timestamp);
"""

SCHEMA_LISTING_MEDIA_SQL = """
CREATE TABLE IF NOT EXISTS listing_media (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    external_media_key TEXT NOT NULL UNIQUE,
    external_key TEXT NOT NULL,
    external_id TEXT,
    media_url TEXT NOT NULL,
    media_type TEXT,
    media_object_id TEXT,
    short_description TEXT,
    long_description TEXT,
    sequence INTEGER NOT NULL DEFAULT 0,
    modification_timestamp TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_listing_media_external_key ON listing_media (external_key);
"""

SCHEMA_SYNC_RUNS_SQL = """
CREATE TABLE IF NOT EXISTS sync_runs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    sync_type TEXT NOT NULL,
    status TEXT NOT NULL,
    records_processed INTEGER NOT NULL DEFAULT 0,
    records_created INTEGER NOT NULL DEFAULT 0,
    records_updated INTEGER NOT NULL DEFAULT 0,
    error_message TEXT,
    started_at TEXT NOT NULL,
    completed_at TEXT
);
CREATE INDEX IF NOT EXISTS idx_sync_runs_started_at ON sync_runs (started_at);
"""
