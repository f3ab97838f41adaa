"""
SQLite store handle and simple migration system.

The application opens exactly one :class:`Database` at startup, keeps
it on ``app.state`` and closes it on shutdown.  Services receive the
handle explicitly instead of reaching for a module level connection.

Two collections are stored, ``users`` and ``exercises``.  Records are
identified by opaque 24 character hex ids generated here; the
``seq`` column only records insertion order so listings are
deterministic.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import secrets
import sqlite3
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from .config import resolve_project_path
from .errors import StoreUnavailableError

logger = logging.getLogger(__name__)

MEMORY_URL = ":memory:"

MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            seq INTEGER PRIMARY KEY AUTOINCREMENT,
            id TEXT NOT NULL UNIQUE,
            username TEXT
        );

        CREATE TABLE IF NOT EXISTS exercises (
            seq INTEGER PRIMARY KEY AUTOINCREMENT,
            id TEXT NOT NULL UNIQUE,
            user_id TEXT NOT NULL,
            description TEXT,
            duration REAL,
            date TEXT NOT NULL
        );
        """,
    ),
    # Migration 2: Index for the logs query (user filter plus date range)
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_exercises_user_date
        ON exercises(user_id, date);
        """,
    ),
]


def generate_id() -> str:
    """Return a new opaque record identifier."""
    return secrets.token_hex(12)


def resolve_database_path(database_url: str) -> str:
    """Turn a connection string into something ``sqlite3.connect`` accepts.

    ``sqlite:///`` prefixes are stripped.  Relative paths are resolved
    against the project root; ``:memory:`` is passed through.
    """
    url = database_url
    if url.startswith("sqlite:///"):
        url = url[len("sqlite:///"):]
    if url == MEMORY_URL:
        return url
    return resolve_project_path(url)


def _connection_hint(exc: sqlite3.Error) -> str:
    if isinstance(exc, sqlite3.OperationalError):
        return "Check that the database directory exists and is writable."
    if isinstance(exc, sqlite3.DatabaseError):
        return "The file exists but is not a SQLite database."
    return "An unexpected error occurred."


class Database:
    """Handle around a single SQLite connection.

    Access to the connection is serialised with a lock so the handle can
    be shared by every request the server is handling.
    """

    def __init__(self, database_url: str):
        self.database_url = database_url
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    def connect(self) -> bool:
        """Open the connection and apply pending migrations.

        Connection failures are logged and swallowed so the server can
        still start; every later operation then raises
        :class:`StoreUnavailableError`.  Returns ``True`` on success.
        """
        path = resolve_database_path(self.database_url)
        conn = None
        try:
            conn = sqlite3.connect(path, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            self._apply_migrations(conn)
        except sqlite3.Error as exc:
            if conn is not None:
                conn.close()
            logger.error("Error connecting to database %s: %s", path, exc)
            logger.error(_connection_hint(exc))
            return False
        self._conn = conn
        logger.info("Connected to database %s", path)
        return True

    def close(self) -> None:
        """Close the connection.  Safe to call more than once."""
        with self._lock:
            if self._conn is None:
                return
            self._conn.close()
            self._conn = None
        logger.info("Disconnected from database")

    @contextmanager
    def cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor, committing on success and rolling back on error."""
        with self._lock:
            if self._conn is None:
                raise StoreUnavailableError("Database is not connected")
            cursor = self._conn.cursor()
            try:
                yield cursor
                self._conn.commit()
            except Exception:
                self._conn.rollback()
                raise
            finally:
                cursor.close()

    @staticmethod
    def _apply_migrations(conn: sqlite3.Connection) -> None:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
            )
            cursor.execute("SELECT MAX(version) AS version FROM migrations")
            row = cursor.fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in MIGRATIONS:
                if version > current_version:
                    cursor.executescript(sql)
                    cursor.execute(
                        "INSERT INTO migrations (version) VALUES (?)", (version,)
                    )
                    current_version = version
            conn.commit()
        finally:
            cursor.close()
