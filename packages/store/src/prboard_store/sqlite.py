"""SQLiteStore — local file-based store, the default backend.

Why SQLite as the local store:
- Batteries included: ships with Python, no extra dependencies.
- Survives across sessions, like the browser storage the dashboard state
  used to live in.
- Safe to share between a `--watch` session and a `prboard pin` call in
  another terminal: every write is its own committed transaction.

Schema:
  kv — one row per persisted record, keyed by record name.
"""

from __future__ import annotations

import logging
import sqlite3

from prboard_store.base import BaseStore

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
    key         TEXT PRIMARY KEY,
    value       TEXT NOT NULL,
    updated_at  TEXT DEFAULT CURRENT_TIMESTAMP
);
"""


class SQLiteStore(BaseStore):
    """Stores records in a local SQLite database file.

    The database file path defaults to `.prboard.db` in the current working
    directory. Configure via .prboard.yml: `store_path: /path/to/prboard.db`.
    """

    def __init__(self, db_path: str = ".prboard.db"):
        # Writers serialise themselves (see PinStore); the connection itself
        # may be touched from more than one thread.
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.executescript(_SCHEMA)
        self._conn.commit()

    def get(self, key: str) -> str | None:
        row = self._conn.execute("SELECT value FROM kv WHERE key=?", (key,)).fetchone()
        return row["value"] if row is not None else None

    def set(self, key: str, value: str) -> None:
        self._conn.execute(
            """
            INSERT INTO kv (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP)
            ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at
            """,
            (key, value),
        )
        self._conn.commit()

    def delete(self, key: str) -> None:
        self._conn.execute("DELETE FROM kv WHERE key=?", (key,))
        self._conn.commit()

    def close(self) -> None:
        self._conn.close()
