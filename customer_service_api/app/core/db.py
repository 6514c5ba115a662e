"""
SQLite database integration and simple migration system.

This module provides ``get_connection`` for obtaining a database
connection, ``get_cursor`` as a committing context manager and
``init_db`` which applies migrations on application start.  SQLite
serves as the durable store for customer records; switching to
another DBMS means replacing the connection logic here and adapting
the SQL in ``repositories.customer_repository``.

Applied migration versions are stored in the ``migrations`` table and
new migrations are executed in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .config import settings

logger = logging.getLogger(__name__)


# Each entry is (version, script).  Append new migrations with an
# incremented version number; never edit one that has shipped.
MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: customers table
    (
        1,
        """
        -- AUTOINCREMENT guarantees a customer_id is never handed out
        -- twice, even after the row holding it has been deleted.
        CREATE TABLE IF NOT EXISTS customers (
            customer_id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT,
            email TEXT,
            mobile_number TEXT NOT NULL,
            branch_address TEXT,
            created_at TIMESTAMP NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now')),
            created_by TEXT NOT NULL,
            updated_at TIMESTAMP,
            updated_by TEXT
        );
        """,
    ),
    # Migration 2: natural key uniqueness and search support
    (
        2,
        """
        CREATE UNIQUE INDEX IF NOT EXISTS ux_customers_mobile_number ON customers(mobile_number);
        CREATE INDEX IF NOT EXISTS idx_customers_name ON customers(name);
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    Absolute values of ``settings.database_url`` are used as is;
    relative ones are resolved against the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def _casefold(value: Optional[str]) -> Optional[str]:
    return value.casefold() if value is not None else None


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  Timestamps are returned as stored (ISO strings); pydantic
    parses them when rows are turned into entities.

    The connection also gets a ``casefold(text)`` SQL function.  The
    built-in ``lower()`` only folds ASCII letters, so names such as
    "Алёна" or "Émile" need Python's Unicode case folding to be
    compared case-insensitively.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    conn.create_function("casefold", 1, _casefold, deterministic=True)
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Yield a cursor, commit on success and always close the connection."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def init_db() -> None:
    """Create the database if needed and apply pending migrations."""
    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                logger.info("Applied migration %s", version)
                current_version = version
