"""SQLite file backing the planner's string key-value store.

Events and settings live as JSON strings in one ``kv_store`` table. The
schema revision is tracked with ``PRAGMA user_version``.
"""

import logging
import sqlite3
from pathlib import Path

from planner.errors import StorageError

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

KV_STORE_DDL = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
)
"""


def connect(db_path: str | Path) -> sqlite3.Connection:
    """Open the database in WAL mode, creating its directory if needed."""
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    return conn


def schema_version(conn: sqlite3.Connection) -> int:
    return conn.execute("PRAGMA user_version").fetchone()[0]


def init_schema(conn: sqlite3.Connection) -> bool:
    """Create the key-value table on a fresh file.

    Returns True when the schema was written, False when it was already
    current. A file stamped by a newer planner raises StorageError.
    """
    version = schema_version(conn)
    if version > SCHEMA_VERSION:
        raise StorageError(
            f"Database schema v{version} is newer than supported v{SCHEMA_VERSION}"
        )
    if version == SCHEMA_VERSION:
        return False
    with conn:
        conn.execute(KV_STORE_DDL)
        conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
    logger.info("Initialized planner database schema v%d", SCHEMA_VERSION)
    return True


def open_database(db_path: str | Path) -> sqlite3.Connection:
    conn = connect(db_path)
    init_schema(conn)
    return conn
