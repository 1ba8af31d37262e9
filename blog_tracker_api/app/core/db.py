"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), applying migrations on application start
(``init_db``) and a cursor context manager.  SQLite backs the travel
tracker; to switch to another DBMS you would replace the connection
logic and adapt the SQL accordingly.

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


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: country lookup table
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS countries (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            country_code CHAR(2) NOT NULL UNIQUE,
            country_name TEXT NOT NULL
        );
        CREATE INDEX IF NOT EXISTS idx_countries_name ON countries(country_name);
        """,
    ),
    # Migration 2: visited countries.  AUTOINCREMENT keeps ids strictly
    # increasing and never reuses the id of a deleted row.
    (
        2,
        """
        CREATE TABLE IF NOT EXISTS visited_countries (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            country_code CHAR(2) NOT NULL UNIQUE,
            created_at TIMESTAMP NOT NULL,
            updated_at TIMESTAMP NOT NULL
        );
        """,
    ),
    # Migration 3: seed the lookup table
    (
        3,
        """
        INSERT OR IGNORE INTO countries (country_code, country_name) VALUES
            ('AR', 'Argentina'),
            ('AU', 'Australia'),
            ('AT', 'Austria'),
            ('BE', 'Belgium'),
            ('BR', 'Brazil'),
            ('CA', 'Canada'),
            ('CL', 'Chile'),
            ('CN', 'China'),
            ('CO', 'Colombia'),
            ('HR', 'Croatia'),
            ('CZ', 'Czechia'),
            ('DK', 'Denmark'),
            ('EG', 'Egypt'),
            ('FI', 'Finland'),
            ('FR', 'France'),
            ('DE', 'Germany'),
            ('GR', 'Greece'),
            ('HU', 'Hungary'),
            ('IS', 'Iceland'),
            ('IN', 'India'),
            ('ID', 'Indonesia'),
            ('IE', 'Ireland'),
            ('IL', 'Israel'),
            ('IT', 'Italy'),
            ('JP', 'Japan'),
            ('KE', 'Kenya'),
            ('MY', 'Malaysia'),
            ('MX', 'Mexico'),
            ('MA', 'Morocco'),
            ('NL', 'Netherlands'),
            ('NZ', 'New Zealand'),
            ('NE', 'Niger'),
            ('NG', 'Nigeria'),
            ('NO', 'Norway'),
            ('PE', 'Peru'),
            ('PH', 'Philippines'),
            ('PL', 'Poland'),
            ('PT', 'Portugal'),
            ('RO', 'Romania'),
            ('SA', 'Saudi Arabia'),
            ('SG', 'Singapore'),
            ('ZA', 'South Africa'),
            ('KR', 'South Korea'),
            ('ES', 'Spain'),
            ('SE', 'Sweden'),
            ('CH', 'Switzerland'),
            ('TH', 'Thailand'),
            ('TR', 'Turkey'),
            ('UA', 'Ukraine'),
            ('AE', 'United Arab Emirates'),
            ('GB', 'United Kingdom'),
            ('US', 'United States of America'),
            ('VN', 'Vietnam');
        """,
    ),
]


def get_database_path(database_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    If the configured URL is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = database_url or settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # blog_tracker_api/
    return str((base_dir / db_url).resolve())


def get_connection(db_path: Optional[str] = None, timeout: Optional[float] = None) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory to access columns by name and
    waits at most ``timeout`` seconds (``settings.database_timeout``
    by default) for a locked database before raising
    ``sqlite3.OperationalError``.
    """
    path = db_path or get_database_path()
    conn = sqlite3.connect(
        path,
        timeout=settings.database_timeout if timeout is None else timeout,
    )
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor(db_path: Optional[str] = None, timeout: Optional[float] = None) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection(db_path, timeout)
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def init_db(db_path: Optional[str] = None, timeout: Optional[float] = None) -> int:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  Returns the schema version after migrating.
    """
    with get_cursor(db_path, timeout) as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                logger.info("Applying migration %s", version)
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
    return current_version
