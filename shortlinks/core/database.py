"""Database module for the Short Links Service.

This module handles SQLite database operations and provides
dependency injection for FastAPI endpoints.
"""

import sqlite3
import logging
import threading
from typing import Optional

from .config import settings
from .errors import AliasExistsError, AliasNotFoundError, StorageError

logger = logging.getLogger(__name__)


class Database:
    """SQLite-backed URL store.

    Alias uniqueness is enforced by the ``UNIQUE`` constraint on
    ``url.alias``, so a single ``INSERT`` both checks and claims an alias.
    """

    def __init__(self, db_path: Optional[str] = None):
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file. Use ":memory:" for in-memory database.
        """
        if db_path:
            self.db_path = db_path
        else:
            self.db_path = settings.database_url
        self._connection: Optional[sqlite3.Connection] = None
        # Requests run store calls from a thread pool and share one connection.
        self._lock = threading.RLock()

    def _get_connection(self) -> sqlite3.Connection:
        """Create or return the database connection.

        Returns:
            SQLite connection.
        """
        if self._connection is None:
            self._connection = sqlite3.connect(
                self.db_path,
                check_same_thread=False,
            )
            self._connection.row_factory = sqlite3.Row
        return self._connection

    def close(self) -> None:
        """Close database connection."""
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    def init_db(self) -> None:
        """Initialize database tables."""
        create_table_sql = """
        CREATE TABLE IF NOT EXISTS url (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            alias TEXT NOT NULL UNIQUE,
            url TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
        """
        create_index_sql = "CREATE INDEX IF NOT EXISTS idx_alias ON url(alias)"
        with self._lock:
            conn = self._get_connection()
            try:
                cursor = conn.cursor()
                cursor.execute(create_table_sql)
                cursor.execute(create_index_sql)
                conn.commit()
                logger.info("Database initialized successfully")
            except sqlite3.Error as e:
                logger.error(f"Database initialization failed: {e}")
                raise StorageError(f"Database initialization failed: {e}") from e

    def execute(
        self, query: str, params: tuple = (), fetch: bool = False
    ) -> Optional[list[dict]]:
        """Execute a SQL query.

        Args:
            query: SQL query string.
            params: Query parameters.
            fetch: Whether to fetch results.

        Returns:
            Query results if fetch=True, None otherwise.
        """
        with self._lock:
            conn = self._get_connection()
            try:
                cursor = conn.cursor()
                cursor.execute(query, params)
                if fetch:
                    results = cursor.fetchall()
                    return [dict(row) for row in results]
                conn.commit()
                return None
            except sqlite3.Error as e:
                conn.rollback()
                logger.error(f"Query execution failed: {e}")
                raise

    def save_url(self, url: str, alias: str) -> int:
        """Bind a URL to an alias.

        Args:
            url: The target URL.
            alias: The alias to claim.

        Returns:
            Id of the created row.

        Raises:
            AliasExistsError: The alias is already bound.
            StorageError: Any other database failure.
        """
        query = "INSERT INTO url (url, alias) VALUES (?, ?)"
        with self._lock:
            conn = self._get_connection()
            try:
                cursor = conn.cursor()
                cursor.execute(query, (url, alias))
                conn.commit()
            except sqlite3.IntegrityError as e:
                conn.rollback()
                if "UNIQUE" in str(e).upper():
                    raise AliasExistsError(alias) from e
                logger.error(f"Save failed for alias {alias}: {e}")
                raise StorageError(f"Failed to save url: {e}") from e
            except sqlite3.Error as e:
                logger.error(f"Save failed for alias {alias}: {e}")
                raise StorageError(f"Failed to save url: {e}") from e
            link_id = cursor.lastrowid
        logger.debug(f"Saved alias {alias} with id {link_id}")
        return link_id

    def get_url(self, alias: str) -> str:
        """Get the URL bound to an alias.

        Args:
            alias: The alias to look up.

        Returns:
            The bound URL.

        Raises:
            AliasNotFoundError: Nothing is bound to the alias.
            StorageError: Any other database failure.
        """
        query = "SELECT url FROM url WHERE alias = ?"
        try:
            results = self.execute(query, (alias,), fetch=True)
        except sqlite3.Error as e:
            raise StorageError(f"Failed to get url: {e}") from e
        if not results:
            raise AliasNotFoundError(alias)
        return results[0]["url"]


# Global database instance
db = Database()


def get_db() -> Database:
    """Get database instance for dependency injection.

    Returns:
        Database instance.
    """
    return db


def get_test_db() -> Database:
    """Get a fresh in-memory database for testing.

    Returns:
        In-memory Database instance.
    """
    test_db = Database(":memory:")
    test_db.init_db()
    return test_db
