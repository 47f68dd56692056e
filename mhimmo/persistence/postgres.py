"""PostgreSQL backend: key-value slots in a single JSONB table."""

import json
import logging

from mhimmo.exceptions import StorageError

logger = logging.getLogger(__name__)


class PostgresBackend:
    """Remote durable key-value slots.

    Each slot is one row of ``table`` (``key TEXT PRIMARY KEY, value JSONB``);
    writes are upserts, so concurrent writers resolve by last write wins.
    """

    def __init__(self, connection_string: str, table: str = "kv_store") -> None:
        import psycopg

        if not table.isidentifier():
            raise StorageError(f"Invalid table name {table!r}")

        self.table = table
        try:
            self.conn = psycopg.connect(connection_string)
        except psycopg.Error as e:
            raise StorageError(f"Failed to connect to PostgreSQL: {e}") from e
        self._ensure_table()

    def _ensure_table(self) -> None:
        with self.conn.cursor() as cur:
            cur.execute(
                f"CREATE TABLE IF NOT EXISTS {self.table} ("
                "key TEXT PRIMARY KEY, value JSONB NOT NULL, "
                "updated_at TIMESTAMPTZ NOT NULL DEFAULT now())"
            )
        self.conn.commit()

    def get(self, key: str) -> str | None:
        with self.conn.cursor() as cur:
            cur.execute(f"SELECT value FROM {self.table} WHERE key = %s", (key,))
            row = cur.fetchone()
        if row is None:
            return None
        value = row[0]
        # psycopg decodes JSONB to Python objects
        return value if isinstance(value, str) else json.dumps(value, ensure_ascii=False)

    def set(self, key: str, value: str) -> None:
        with self.conn.cursor() as cur:
            cur.execute(
                f"INSERT INTO {self.table} (key, value, updated_at) "
                "VALUES (%s, %s::jsonb, now()) "
                "ON CONFLICT (key) DO UPDATE SET value = EXCLUDED.value, updated_at = now()",
                (key, value),
            )
        self.conn.commit()
        logger.debug("Upserted slot %s", key)

    def delete(self, key: str) -> None:
        with self.conn.cursor() as cur:
            cur.execute(f"DELETE FROM {self.table} WHERE key = %s", (key,))
        self.conn.commit()

    def keys(self) -> list[str]:
        with self.conn.cursor() as cur:
            cur.execute(f"SELECT key FROM {self.table} ORDER BY key")
            return [row[0] for row in cur.fetchall()]

    def close(self) -> None:
        """Close the connection."""
        self.conn.close()
