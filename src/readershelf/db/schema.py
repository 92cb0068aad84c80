# ABOUTME: SQL DDL for the subset of the Sony Reader catalog that readershelf touches.
# ABOUTME: The device owns this schema; the DDL is used to build blank catalogs for testing.

DEVICE_SCHEMA = """
-- Book records, keyed naturally by file_path
CREATE TABLE books (
    _id            INTEGER PRIMARY KEY,
    title          TEXT,
    author         TEXT,
    source_id      INTEGER,
    added_date     INTEGER,
    modified_date  INTEGER,
    file_path      TEXT,
    file_name      TEXT,
    file_size      INTEGER,
    mime_type      TEXT,
    prevent_delete INTEGER
);

-- Shelves
CREATE TABLE collection (
    _id       INTEGER PRIMARY KEY,
    title     TEXT,
    source_id INTEGER
);

-- Shelf membership join table
CREATE TABLE collections (
    _id           INTEGER PRIMARY KEY,
    collection_id INTEGER,
    content_id    INTEGER
);
"""
