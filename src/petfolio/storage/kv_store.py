"""
Local key-value persistence for petfolio.

Each content document is stored as JSON text under its own key in a single
DuckDB table. The store knows nothing about entity semantics.
"""

import json
from typing import Any

import duckdb

from ..errors import StorageError
from ..logging_config import get_logger

logger = get_logger(__name__)

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS kv_store (
    key VARCHAR PRIMARY KEY,
    value VARCHAR NOT NULL
)
"""

UPSERT_SQL = """
INSERT INTO kv_store (key, value) VALUES (?, ?)
ON CONFLICT (key) DO UPDATE SET value = excluded.value
"""


class KeyValueStore:
    """
    Synchronous JSON document store backed by DuckDB.

    Writes are applied immediately; there is no atomicity across keys.
    """

    def __init__(self, db_path: str = ":memory:"):
        """
        Initialize the store.

        Args:
            db_path: Path to the DuckDB database file, or ":memory:"
        """
        self.db_path = db_path
        self._connection: duckdb.DuckDBPyConnection | None = None

    def connect(self) -> duckdb.DuckDBPyConnection:
        """
        Get or create the database connection, creating the table on first use.

        Returns:
            DuckDB connection object
        """
        if self._connection is None:
            try:
                self._connection = duckdb.connect(self.db_path)
                self._connection.execute(CREATE_TABLE_SQL)
            except duckdb.Error as e:
                raise StorageError(
                    f"Failed to open key-value store at {self.db_path}: {e}",
                    code="kv_store_open_failed",
                    details={"db_path": self.db_path},
                    original_exception=e,
                ) from e
            logger.info("kv_store_connected", db_path=self.db_path)

        return self._connection

    def close(self) -> None:
        """Close the database connection."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
            logger.info("kv_store_closed", db_path=self.db_path)

    def read_raw(self, key: str) -> str | None:
        """
        Read the serialized text stored under ``key``.

        Returns:
            The stored text, or None if the key is absent
        """
        try:
            row = self.connect().execute("SELECT value FROM kv_store WHERE key = ?", [key]).fetchone()
        except duckdb.Error as e:
            raise StorageError(
                f"Failed to read key '{key}': {e}",
                code="kv_read_failed",
                details={"key": key},
                original_exception=e,
            ) from e
        return row[0] if row else None

    def write_raw(self, key: str, text: str) -> None:
        """Store ``text`` verbatim under ``key``."""
        try:
            self.connect().execute(UPSERT_SQL, [key, text])
        except duckdb.Error as e:
            raise StorageError(
                f"Failed to write key '{key}': {e}",
                code="kv_write_failed",
                details={"key": key},
                original_exception=e,
            ) from e

    def read(self, key: str) -> Any | None:
        """
        Read and parse the JSON document under ``key``.

        Malformed JSON is logged and reported as absent so callers fall back
        to their default value.

        Args:
            key: Namespace key

        Returns:
            The parsed JSON value, or None if absent or unparseable
        """
        text = self.read_raw(key)
        if text is None:
            return None

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning("kv_corrupt_value", key=key, error=str(e), length=len(text))
            return None

    def write(self, key: str, value: Any) -> None:
        """
        Serialize ``value`` as JSON and store it under ``key``.

        Args:
            key: Namespace key
            value: Any JSON-serializable value
        """
        self.write_raw(key, json.dumps(value, ensure_ascii=False))
        logger.debug("kv_written", key=key)

    def remove(self, key: str) -> None:
        """Delete ``key``; removing an absent key is a no-op."""
        try:
            self.connect().execute("DELETE FROM kv_store WHERE key = ?", [key])
        except duckdb.Error as e:
            raise StorageError(
                f"Failed to remove key '{key}': {e}",
                code="kv_remove_failed",
                details={"key": key},
                original_exception=e,
            ) from e
        logger.debug("kv_removed", key=key)

    def keys(self) -> list[str]:
        """List every stored key in sorted order."""
        rows = self.connect().execute("SELECT key FROM kv_store ORDER BY key").fetchall()
        return [row[0] for row in rows]

    def __enter__(self) -> "KeyValueStore":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        self.close()
