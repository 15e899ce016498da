"""
SQLite database setup for request logs and the lookup cache.
"""

import sqlite3
from pathlib import Path

from core.config import DB_PATH


def get_connection(db_path: Path | None = None) -> sqlite3.Connection:
    """Get a database connection, creating the parent directory if needed."""
    path = Path(db_path or DB_PATH)
    path.parent.mkdir(parents=True, exist_ok=True)
    return sqlite3.connect(path)


def create_schema(conn: sqlite3.Connection):
    """Create all tables and indexes if they don't exist."""
    cursor = conn.cursor()

    # API request logging table
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS api_requests (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            request_id TEXT UNIQUE NOT NULL,
            timestamp TEXT NOT NULL,
            endpoint TEXT NOT NULL,
            method TEXT NOT NULL,
            client_ip TEXT,
            authorized INTEGER,
            status_code INTEGER NOT NULL,
            error_code TEXT,
            error_message TEXT,
            processing_time_ms INTEGER NOT NULL,
            events_returned INTEGER
        )
    """)

    # Lookup table cache (serialized mappings with absolute expiry)
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS lookup_cache (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            expires_at REAL NOT NULL
        )
    """)

    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_api_requests_timestamp ON api_requests(timestamp)"
    )
    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_api_requests_status ON api_requests(status_code)"
    )
    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_lookup_cache_expires ON lookup_cache(expires_at)"
    )

    conn.commit()
