"""SQLite storage backend."""

import sqlite3
import threading
from typing import Iterator, Optional

from .base import StorageBackend


class SQLiteBackend(StorageBackend):
    """SQLite storage backend.

    Keeps one row per key in a SQLite database file, so separate processes
    (or separate backend instances) pointing at the same file share data.

    Example:
        backend = SQLiteBackend()
        backend.connect(path="settings.db")

        # Or in-memory
        backend.connect(path=":memory:")
    """

    def __init__(self):
        self._conn: Optional[sqlite3.Connection] = None
        self._path: Optional[str] = None
        # Debounced writes arrive from timer threads
        self._lock = threading.Lock()

    def connect(self, path: str = ":memory:", **kwargs) -> None:
        """Connect to SQLite database.

        Args:
            path: Database file path, or ":memory:" for in-memory database
        """
        self._path = path
        self._conn = sqlite3.connect(path, check_same_thread=False)
        self._create_tables()

    def _create_tables(self) -> None:
        """Create the items table if it doesn't exist."""
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS items (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
            """
        )
        self._conn.commit()

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise RuntimeError("SQLiteBackend is not connected; call connect() first")
        return self._conn

    def close(self) -> None:
        """Close the database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            row = self._connection().execute(
                "SELECT value FROM items WHERE key = ?", (key,)
            ).fetchone()
        return None if row is None else row[0]

    def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Storage values must be str, got {type(value).__name__}")
        with self._lock:
            conn = self._connection()
            conn.execute(
                "INSERT OR REPLACE INTO items (key, value) VALUES (?, ?)",
                (key, value),
            )
            conn.commit()

    def remove_item(self, key: str) -> bool:
        with self._lock:
            conn = self._connection()
            cursor = conn.execute("DELETE FROM items WHERE key = ?", (key,))
            conn.commit()
        return cursor.rowcount > 0

    def keys(self) -> Iterator[str]:
        with self._lock:
            rows = self._connection().execute(
                "SELECT key FROM items ORDER BY key"
            ).fetchall()
        for row in rows:
            yield row[0]
