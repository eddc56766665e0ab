"""
LessonStore - Durable key-value records in ~/.agrilearn/offline.db.

Holds the named JSON blobs the offline cache relies on:
- The cached lesson array
- The deferred-sync queue array

Values are opaque strings; serialization belongs to the caller.
"""

import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional

from agrilearn.config import DEFAULT_DATA_DIR, DEFAULT_DB_NAME


DEFAULT_STORE_DB = DEFAULT_DATA_DIR / DEFAULT_DB_NAME

LESSONS_KEY = "agrilearn_lessons_cache"
SYNC_QUEUE_KEY = "agrilearn_sync_queue"


class LessonStore:
    """
    Key-value records in a SQLite database.

    Each method opens its own connection, so a write is on disk by the time
    the call returns. sqlite3 errors propagate to the caller.
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize the store.

        Args:
            db_path: Path to the database (default: ~/.agrilearn/offline.db)
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_STORE_DB
        self._ensure_database()

    def _ensure_database(self):
        """Create database and table if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS records (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def get(self, key: str) -> Optional[str]:
        """Return the stored value for `key`, or None if absent."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "SELECT value FROM records WHERE key = ?", (key,)
            )
            row = cursor.fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def set(self, key: str, value: str):
        """Insert or overwrite the value for `key`."""
        conn = self._get_connection()
        try:
            now = datetime.now().isoformat()
            conn.execute(
                """INSERT INTO records (key, value, updated_at)
                   VALUES (?, ?, ?)
                   ON CONFLICT(key) DO UPDATE SET
                     value = excluded.value,
                     updated_at = excluded.updated_at""",
                (key, value, now)
            )
            conn.commit()
        finally:
            conn.close()

    def delete(self, key: str):
        """Remove `key` if present."""
        conn = self._get_connection()
        try:
            conn.execute("DELETE FROM records WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()

    def keys(self) -> list[str]:
        """List stored record names."""
        conn = self._get_connection()
        try:
            cursor = conn.execute("SELECT key FROM records ORDER BY key")
            return [row["key"] for row in cursor.fetchall()]
        finally:
            conn.close()
