"""SQLite-backed key-value storage for the serialized credential pair."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional


class SQLiteBackend:
    """Simple key-value store using a single table keyed by ``key``."""

    def __init__(self, db_path: str) -> None:
        self._db_path = Path(db_path)
        if self._db_path.parent and not self._db_path.parent.exists():
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_records (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )

    def get(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM kv_records WHERE key = ?",
                (key,),
            ).fetchone()
        if not row:
            return None
        return row["value"]

    def set(self, key: str, value: str) -> None:
        if not key:
            raise ValueError("Storage key must not be empty")
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO kv_records (key, value)
                VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (key, value),
            )

    def delete(self, key: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM kv_records WHERE key = ?", (key,))


__all__ = ["SQLiteBackend"]
