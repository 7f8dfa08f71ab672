from __future__ import annotations

from typing import Optional

from .connection import DatabaseConnection
from .mysql_base import db_cursor, fetchall, fetchone
from .store import KeyValueStore


class MySQLKeyValueStore(KeyValueStore):
    """Key-value store kept in a single `kv_store` table (see `bootstrap.ensure_kv_table`)."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT v FROM kv_store WHERE k=%s", (key,))
            row = fetchone(cur)
            if not row:
                return None
            return row["v"]

    def set(self, key: str, value: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO kv_store(k, v) VALUES(%s, %s)
                ON DUPLICATE KEY UPDATE v=VALUES(v)
                """,
                (key, value),
            )

    def remove(self, key: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM kv_store WHERE k=%s", (key,))

    def keys(self) -> list[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT k FROM kv_store ORDER BY k")
            return [r["k"] for r in fetchall(cur)]
