"""
Service layer for the travel tracker.

Visited countries are stored in SQLite.  A submitted country name is
resolved through the ``countries`` lookup table with a
case-insensitive substring match (an exact name wins over a partial
one), and each country code can be recorded only once.

The duplicate check and the insert run inside one ``BEGIN IMMEDIATE``
transaction, and the ``UNIQUE`` constraint on
``visited_countries.country_code`` backs it up, so concurrent requests
cannot record the same country twice.

All queries use parameterized statements.  Any ``sqlite3`` failure is
logged with full detail and surfaced as ``BackingStoreError``, whose
message is safe to show to users.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, List, Mapping, Optional

from blog_tracker_api.app.core.db import get_connection
from blog_tracker_api.app.core.errors import (
    BackingStoreError,
    DuplicateEntryError,
    NotFoundError,
    UnknownCountryError,
    ValidationError,
    ValidationFailedError,
)
from blog_tracker_api.app.schemas.country import CountryRead, VisitedCountryRead
from blog_tracker_api.app.services.validation import validate

logger = logging.getLogger(__name__)

COUNTRY_FIELDS = frozenset({"country"})
DUPLICATE_MESSAGE = "Country already added."

_VISITED_SELECT = """
    SELECT v.id, v.country_code, c.country_name, v.created_at, v.updated_at
    FROM visited_countries v
    LEFT JOIN countries c ON c.country_code = v.country_code
"""


def _like_pattern(text: str) -> str:
    escaped = text.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class VisitedCountryService:
    """CRUD operations for visited countries backed by SQLite."""

    def __init__(self, db_path: str, timeout: Optional[float] = None) -> None:
        self.db_path = db_path
        self.timeout = timeout

    @contextmanager
    def _connection(self, operation: str) -> Iterator[sqlite3.Connection]:
        """Yield a connection; uncommitted work is rolled back on close."""
        try:
            conn = get_connection(self.db_path, self.timeout)
        except sqlite3.Error as exc:
            logger.exception("Could not open tracker database for %s", operation)
            raise BackingStoreError() from exc
        try:
            yield conn
        except sqlite3.Error as exc:
            logger.exception("Database error during %s", operation)
            raise BackingStoreError() from exc
        finally:
            conn.close()

    async def list_visited(self) -> List[VisitedCountryRead]:
        """Return visited countries, most recently added first."""
        with self._connection("list_visited") as conn:
            rows = conn.execute(_VISITED_SELECT + " ORDER BY v.id DESC").fetchall()
            return [self._row_to_visited(row) for row in rows]

    async def get_visited(self, visited_id: int) -> Optional[VisitedCountryRead]:
        with self._connection("get_visited") as conn:
            row = self._fetch_visited(conn, visited_id)
            return self._row_to_visited(row) if row else None

    async def add_visited(self, fields: Mapping[str, Optional[str]]) -> VisitedCountryRead:
        """Resolve a country name and record its code as visited.

        Raises ``MissingFieldError``/``BlankFieldError`` for empty
        input, ``UnknownCountryError`` when no country matches and
        ``DuplicateEntryError`` when the country is already recorded.
        """
        validated = validate(fields, COUNTRY_FIELDS)
        with self._connection("add_visited") as conn:
            conn.execute("BEGIN IMMEDIATE")
            country = self._resolve(conn, validated["country"])
            self._ensure_not_visited(conn, country.country_code)
            now = datetime.now(timezone.utc).isoformat()
            try:
                cursor = conn.execute(
                    """
                    INSERT INTO visited_countries (country_code, created_at, updated_at)
                    VALUES (?, ?, ?)
                    """,
                    (country.country_code, now, now),
                )
            except sqlite3.IntegrityError as exc:
                raise DuplicateEntryError(country.country_code, DUPLICATE_MESSAGE) from exc
            visited_id = cursor.lastrowid
            conn.commit()
            logger.info("Marked %s as visited (id %s)", country.country_code, visited_id)
            return self._row_to_visited(self._fetch_visited(conn, visited_id))

    async def update_visited(self, visited_id: int, fields: Mapping[str, Optional[str]]) -> VisitedCountryRead:
        """Point an existing record at another country.

        Raises ``NotFoundError`` for an unknown id.  Invalid input
        raises ``ValidationFailedError`` carrying the unchanged record.
        ``UnknownCountryError`` and ``DuplicateEntryError`` behave as in
        ``add_visited``; re-submitting the record's own country is
        allowed.
        """
        with self._connection("update_visited") as conn:
            conn.execute("BEGIN IMMEDIATE")
            row = self._fetch_visited(conn, visited_id)
            if row is None:
                raise NotFoundError(visited_id, f"Visited country {visited_id} not found")
            current = self._row_to_visited(row)
            try:
                validated = validate(fields, COUNTRY_FIELDS)
            except ValidationError as exc:
                raise ValidationFailedError(current, exc) from exc
            country = self._resolve(conn, validated["country"])
            self._ensure_not_visited(conn, country.country_code, exclude_id=visited_id)
            updated_at = max(datetime.now(timezone.utc), current.created_at)
            try:
                conn.execute(
                    "UPDATE visited_countries SET country_code = ?, updated_at = ? WHERE id = ?",
                    (country.country_code, updated_at.isoformat(), visited_id),
                )
            except sqlite3.IntegrityError as exc:
                raise DuplicateEntryError(country.country_code, DUPLICATE_MESSAGE) from exc
            conn.commit()
            logger.info("Updated visited country %s to %s", visited_id, country.country_code)
            return self._row_to_visited(self._fetch_visited(conn, visited_id))

    async def delete_visited(self, visited_id: int) -> VisitedCountryRead:
        """Remove a visited country and return it.  Raises ``NotFoundError``."""
        with self._connection("delete_visited") as conn:
            conn.execute("BEGIN IMMEDIATE")
            row = self._fetch_visited(conn, visited_id)
            if row is None:
                raise NotFoundError(visited_id, f"Visited country {visited_id} not found")
            conn.execute("DELETE FROM visited_countries WHERE id = ?", (visited_id,))
            conn.commit()
            logger.info("Deleted visited country %s (%s)", visited_id, row["country_code"])
            return self._row_to_visited(row)

    async def search_countries(self, query: str = "", limit: int = 10) -> List[CountryRead]:
        """Return lookup rows whose name contains ``query``, exact matches first."""
        needle = query.strip().lower()
        with self._connection("search_countries") as conn:
            rows = conn.execute(
                """
                SELECT id, country_code, country_name FROM countries
                WHERE LOWER(country_name) LIKE ? ESCAPE '\\'
                ORDER BY LOWER(country_name) = ? DESC, country_name ASC
                LIMIT ?
                """,
                (_like_pattern(needle), needle, limit),
            ).fetchall()
            return [CountryRead(**dict(row)) for row in rows]

    @staticmethod
    def _resolve(conn: sqlite3.Connection, name: str) -> CountryRead:
        needle = name.lower()
        row = conn.execute(
            """
            SELECT id, country_code, country_name FROM countries
            WHERE LOWER(country_name) LIKE ? ESCAPE '\\'
            ORDER BY LOWER(country_name) = ? DESC, id ASC
            LIMIT 1
            """,
            (_like_pattern(needle), needle),
        ).fetchone()
        if row is None:
            raise UnknownCountryError(name)
        return CountryRead(**dict(row))

    @staticmethod
    def _ensure_not_visited(conn: sqlite3.Connection, country_code: str, exclude_id: Optional[int] = None) -> None:
        row = conn.execute(
            "SELECT id FROM visited_countries WHERE country_code = ?",
            (country_code,),
        ).fetchone()
        if row is not None and row["id"] != exclude_id:
            raise DuplicateEntryError(country_code, DUPLICATE_MESSAGE)

    @staticmethod
    def _fetch_visited(conn: sqlite3.Connection, visited_id: int) -> Optional[sqlite3.Row]:
        return conn.execute(_VISITED_SELECT + " WHERE v.id = ?", (visited_id,)).fetchone()

    @staticmethod
    def _row_to_visited(row: sqlite3.Row) -> VisitedCountryRead:
        """Convert a database row to a VisitedCountryRead schema instance."""
        return VisitedCountryRead(
            id=row["id"],
            country_code=row["country_code"],
            country_name=row["country_name"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
