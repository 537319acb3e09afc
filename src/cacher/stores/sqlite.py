"""
SQLite-based cache store.

Provides persistent caching of serialized result sets with TTL-based
expiration and per-entity purging.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator, Optional

from cacher.core.config import default_db_path
from cacher.core.exceptions import CacheBackendError
from cacher.core.keys import entity_prefix
from cacher.stores.base import CacheStore

_LIKE_ESCAPE = "\\"


def _like_prefix(prefix: str) -> str:
    """Turn a literal key prefix into a LIKE pattern."""
    escaped = (
        prefix.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )
    return escaped + "%"


class SQLiteCacheStore(CacheStore):
    """SQLite-backed cache store.

    Entries written with a duration of 0 never expire.
    """

    def __init__(
        self,
        db_path: Optional[Path] = None,
        default_duration: int | str | None = None,
    ):
        """Initialize the cache store.

        Args:
            db_path: Path to SQLite database file. Defaults to
                ``CACHER_DB_PATH`` or ~/.cacher/cache.db
            default_duration: Default lifetime for cached entries.
        """
        super().__init__(default_duration)
        if db_path is None:
            db_path = default_db_path()

        self.db_path = Path(db_path)

        # Ensure parent directory exists
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._init_db()

    def _init_db(self) -> None:
        """Initialize the cache database schema."""
        try:
            with self._connection() as conn:
                conn.executescript("""
                    CREATE TABLE IF NOT EXISTS cache (
                        key TEXT PRIMARY KEY,
                        value BLOB NOT NULL,
                        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                        expires_at TIMESTAMP
                    );

                    CREATE INDEX IF NOT EXISTS idx_expires
                    ON cache(expires_at);
                """)
        except sqlite3.Error as e:
            raise CacheBackendError("initialization", str(e))

    @contextmanager
    def _connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection context manager.

        Yields:
            sqlite3.Connection that auto-commits on success.
        """
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise CacheBackendError("connect", str(e))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise CacheBackendError("database operation", str(e))
        finally:
            conn.close()

    def get(self, key: str) -> bytes | None:
        with self._connection() as conn:
            row = conn.execute(
                """
                SELECT value FROM cache
                WHERE key = ?
                AND (expires_at IS NULL OR expires_at > datetime('now'))
                """,
                (key,),
            ).fetchone()
        return bytes(row["value"]) if row else None

    def set(self, key: str, value: bytes, duration: int | None = None) -> None:
        ttl = self._resolve_duration(duration)
        with self._connection() as conn:
            if ttl > 0:
                conn.execute(
                    """
                    INSERT OR REPLACE INTO cache (key, value, expires_at)
                    VALUES (?, ?, datetime('now', ? || ' seconds'))
                    """,
                    (key, sqlite3.Binary(value), f"+{ttl}"),
                )
            else:
                conn.execute(
                    "INSERT OR REPLACE INTO cache (key, value, expires_at) VALUES (?, ?, NULL)",
                    (key, sqlite3.Binary(value)),
                )

    def delete(self, key: str) -> bool:
        with self._connection() as conn:
            cursor = conn.execute("DELETE FROM cache WHERE key = ?", (key,))
            return cursor.rowcount > 0

    def purge_all(self, entity: str) -> int:
        return self.invalidate(entity_prefix(entity))

    def invalidate(self, prefix: str) -> int:
        """Delete every entry whose key starts with ``prefix``.

        Args:
            prefix: Literal key prefix; LIKE wildcards in it are escaped.

        Returns:
            Number of entries deleted.
        """
        with self._connection() as conn:
            cursor = conn.execute(
                "DELETE FROM cache WHERE key LIKE ? ESCAPE ?",
                (_like_prefix(prefix), _LIKE_ESCAPE),
            )
            return cursor.rowcount

    def cleanup(self) -> int:
        """Remove expired entries.

        Returns:
            Number of entries removed.
        """
        with self._connection() as conn:
            cursor = conn.execute(
                "DELETE FROM cache WHERE expires_at IS NOT NULL"
                " AND expires_at <= datetime('now')"
            )
            return cursor.rowcount

    def clear(self) -> int:
        """Clear all cache entries.

        Returns:
            Number of entries removed.
        """
        with self._connection() as conn:
            return conn.execute("DELETE FROM cache").rowcount

    def stats(self) -> dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dict with cache statistics including size and entry counts.
        """
        with self._connection() as conn:
            total = conn.execute("SELECT COUNT(*) FROM cache").fetchone()[0]

            valid = conn.execute(
                """
                SELECT COUNT(*) FROM cache
                WHERE expires_at IS NULL OR expires_at > datetime('now')
                """
            ).fetchone()[0]

            # Live entries grouped by entity (the key segment before ':')
            entities = conn.execute(
                """
                SELECT
                    SUBSTR(key, 1, INSTR(key || ':', ':') - 1) as entity,
                    COUNT(*) as count
                FROM cache
                WHERE expires_at IS NULL OR expires_at > datetime('now')
                GROUP BY entity
                ORDER BY entity
                """
            ).fetchall()

        db_size = self.db_path.stat().st_size if self.db_path.exists() else 0

        return {
            "total_entries": total,
            "valid_entries": valid,
            "expired_entries": total - valid,
            "db_size_bytes": db_size,
            "db_path": str(self.db_path),
            "entries_by_entity": {row["entity"]: row["count"] for row in entities},
        }
