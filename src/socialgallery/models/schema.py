"""
Database schema definitions for socialgallery application.

The gallery persists two JSON documents (the user profile and the image
collection) in a single key-value table.
"""

KV_TABLE_NAME = "kv_store"

KV_TABLE_SCHEMA = f"""
CREATE TABLE IF NOT EXISTS {KV_TABLE_NAME} (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
);
"""

KV_REQUIRED_COLUMNS = {"key", "value", "updated_at"}

SELECT_VALUE_STATEMENT = f"SELECT value FROM {KV_TABLE_NAME} WHERE key = ?"

UPSERT_VALUE_STATEMENT = f"""
INSERT INTO {KV_TABLE_NAME} (key, value, updated_at)
VALUES (?, ?, CURRENT_TIMESTAMP)
ON CONFLICT (key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
"""

DELETE_VALUE_STATEMENT = f"DELETE FROM {KV_TABLE_NAME} WHERE key = ?"


def get_schema_statements() -> list[str]:
    """
    Get all database schema creation statements.

    Returns:
        List of SQL statements to create the key-value table
    """
    return [KV_TABLE_SCHEMA]


def validate_schema_compatibility() -> bool:
    """Check that the table definition declares every column the store reads."""
    schema_lower = KV_TABLE_SCHEMA.lower()
    return all(column in schema_lower for column in KV_REQUIRED_COLUMNS)
