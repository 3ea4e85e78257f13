"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), applying migrations on application start
(``init_db``) and a liveness check used by the health endpoint
(``check_database``).  SQLite is used as a lightweight embedded store
for blog posts; to switch to another DBMS you would replace the
connection logic and adapt SQL syntax accordingly.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .config import settings

logger = logging.getLogger(__name__)


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the ``devhub_api`` package.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # devhub_api/
    return str((base_dir / db_url).resolve())


def fold_text(value: Optional[str]) -> Optional[str]:
    """Case-fold ``value`` for case-insensitive matching; NULL stays NULL."""
    return value.casefold() if value is not None else None


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  No type detection is enabled; timestamps come back as the
    ISO strings they were stored as.

    ``check_same_thread`` is disabled because the blog service opens a
    connection in a worker thread and closes it there as well; a
    connection is never shared between two threads at once.
    """
    conn = sqlite3.connect(get_database_path(), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    # SQLite's LOWER() only folds ASCII; text filters call fold() instead.
    conn.create_function("fold", 1, fold_text, deterministic=True)
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: blog posts
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS posts (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            slug TEXT NOT NULL UNIQUE,
            content TEXT NOT NULL DEFAULT '',
            excerpt TEXT,
            published INTEGER NOT NULL DEFAULT 0,
            author TEXT,
            tags TEXT NOT NULL DEFAULT '[]',
            created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
            updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
        );
        """,
    ),
    # Migration 2: list queries filter on the published flag and order by
    # creation time.
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_posts_created_at ON posts(created_at);
        CREATE INDEX IF NOT EXISTS idx_posts_published ON posts(published);
        """,
    ),
]


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any newer entries of
    ``MIGRATIONS``.  If you add a migration, append it with an
    incremented version number.
    """
    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                logger.info("Applying database migration %s", version)
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version


def check_database() -> bool:
    """Return ``True`` if the database answers a trivial query."""
    try:
        with get_cursor() as cursor:
            cursor.execute("SELECT 1").fetchone()
        return True
    except sqlite3.Error as exc:
        logger.error("Database health check failed: %s", exc)
        return False
