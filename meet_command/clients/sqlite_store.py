"""SQLite-backed substitute for the S3 object store during local development."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class SQLiteObjectStore:
    """Key-value byte store using a single table keyed by object key."""

    def __init__(self, db_path: str) -> None:
        self._db_path = Path(db_path)
        if self._db_path.parent and not self._db_path.parent.exists():
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self._db_path, check_same_thread=False)

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS objects (
                    key TEXT PRIMARY KEY,
                    body BLOB NOT NULL
                )
                """
            )

    def get(self, key: str) -> Optional[bytes]:
        try:
            with self._connect() as conn:
                row = conn.execute("SELECT body FROM objects WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error:
            logger.exception("Failed to read %s from SQLite store", key)
            return None
        if not row:
            return None
        return bytes(row[0])

    def put(self, key: str, data: bytes) -> bool:
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO objects (key, body)
                    VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET body = excluded.body
                    """,
                    (key, sqlite3.Binary(data)),
                )
        except sqlite3.Error:
            logger.exception("Failed to write %s to SQLite store", key)
            return False
        return True


__all__ = ["SQLiteObjectStore"]
