from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator, Optional

from ..database.connection import DatabaseConnection
from .base import KeyValueStore

TABLE_NAME = "kv_store"


class MySQLKeyValueStore(KeyValueStore):
    """Partitions kept as rows of the ``kv_store`` table (see database/schema.sql).

    Every call opens its own connection and commits (or rolls back) before
    returning.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def _cursor(self) -> Iterator:
        conn = self._conn_factory.connect()
        cur = conn.cursor()
        try:
            yield cur
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            cur.close()
            conn.close()

    def get(self, key: str) -> Optional[str]:
        with self._cursor() as cur:
            cur.execute(f"SELECT payload FROM {TABLE_NAME} WHERE storage_key=%s", (key,))
            row = cur.fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        with self._cursor() as cur:
            cur.execute(
                f"""
                INSERT INTO {TABLE_NAME}(storage_key, payload)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE payload=VALUES(payload)
                """,
                (key, value),
            )

    def remove(self, key: str) -> None:
        with self._cursor() as cur:
            cur.execute(f"DELETE FROM {TABLE_NAME} WHERE storage_key=%s", (key,))

    def keys(self) -> Iterable[str]:
        with self._cursor() as cur:
            cur.execute(f"SELECT storage_key FROM {TABLE_NAME} ORDER BY storage_key")
            return [row[0] for row in cur.fetchall()]
