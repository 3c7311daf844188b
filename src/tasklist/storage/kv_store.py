# src/tasklist/storage/kv_store.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import sqlite3
import time
from pathlib import Path

from ..tasks.task_errors import PersistenceWriteError

logger = logging.getLogger(__name__)


class SqliteKeyValueStore:
    """
    SQLite-backed string key-value store.

    Schema: one `kv` table (key -> value), created if missing.

    Thread-safety:
    - each method opens its own SQLite connection, so the async wrappers can
      run the blocking calls in worker threads concurrently
    """

    def __init__(self, db_path: str | Path = "tasklist.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        try:
            total = self.count_keys()
        except Exception:
            total = -1
        logger.info("SqliteKeyValueStore ready db=%s keys=%s", self._db_path, total)

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(Exception):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    # ---- sync API ----

    def count_keys(self) -> int:
        conn = self._get_conn()
        try:
            (n,) = conn.execute("SELECT COUNT(*) FROM kv").fetchone()
            return int(n)
        finally:
            conn.close()

    def read(self, key: str) -> str | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            return None if row is None else str(row["value"])
        finally:
            conn.close()

    def write(self, key: str, value: str) -> None:
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise PersistenceWriteError(f"cannot open {self._db_path}: {e}") from e
        try:
            conn.execute(
                """
                INSERT INTO kv(key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (key, value, time.time()),
            )
            conn.commit()
            logger.debug("kv write key=%s bytes=%s", key, len(value))
        except sqlite3.Error as e:
            raise PersistenceWriteError(f"kv write failed key={key}: {e}") from e
        finally:
            conn.close()

    # ---- KeyValueStorage port ----

    async def get_item(self, key: str) -> str | None:
        return await asyncio.to_thread(self.read, key)

    async def set_item(self, key: str, value: str) -> None:
        await asyncio.to_thread(self.write, key, value)
