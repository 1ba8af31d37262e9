"""
In-memory entry store.

``EntryStore`` owns a collection of ``Entry`` records and is the only
way to mutate it.  Every mutation runs validation first and happens
under a single lock, so id allocation and the collection update are
atomic as a pair.  Callers only ever receive copies; nothing outside
the store holds a reference to a live entry.

New entries are prepended, so ``list`` returns the most recently
created entry first.
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import AbstractSet, Callable, List, Mapping, Optional

from blog_tracker_api.app.core.errors import (
    DuplicateEntryError,
    NotFoundError,
    ValidationError,
    ValidationFailedError,
)
from blog_tracker_api.app.schemas.entry import Entry
from blog_tracker_api.app.services.identifiers import IdentifierAllocator
from blog_tracker_api.app.services.validation import validate


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EntryStore:
    """Validated CRUD over an in-memory list of entries.

    Parameters
    ----------
    required : set of str
        Field names that must be present and non-blank.
    natural_key : Optional[str]
        Name of a field whose value must be unique (case-insensitive)
        among live entries.  ``None`` disables duplicate detection.
    clock : callable
        Returns the current time; injectable for tests.
    allocator : Optional[IdentifierAllocator]
        Source of ids.  A fresh allocator starting at 1 by default.
    """

    def __init__(
        self,
        required: AbstractSet[str],
        natural_key: Optional[str] = None,
        clock: Callable[[], datetime] = utcnow,
        allocator: Optional[IdentifierAllocator] = None,
    ) -> None:
        self.required = frozenset(required)
        self.natural_key = natural_key
        self._clock = clock
        self._allocator = allocator or IdentifierAllocator()
        self._entries: List[Entry] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def list(self) -> List[Entry]:
        """Return a snapshot of all live entries, newest first."""
        with self._lock:
            return [entry.model_copy(deep=True) for entry in self._entries]

    def get(self, entry_id: int) -> Optional[Entry]:
        with self._lock:
            entry = self._find(entry_id)
            return entry.model_copy(deep=True) if entry is not None else None

    def create(self, fields: Mapping[str, Optional[str]]) -> Entry:
        """Validate ``fields`` and insert a new entry at the front.

        Validation errors are raised unchanged and nothing is inserted.
        Raises ``DuplicateEntryError`` if the natural key is taken.
        """
        validated = validate(fields, self.required)
        with self._lock:
            self._check_unique(validated)
            now = self._clock()
            entry = Entry(
                id=self._allocator.next(),
                fields=validated,
                created_at=now,
                updated_at=now,
            )
            self._entries.insert(0, entry)
            return entry.model_copy(deep=True)

    def update(self, entry_id: int, fields: Mapping[str, Optional[str]]) -> Entry:
        """Replace the mutable fields of an existing entry.

        Raises ``NotFoundError`` for an unknown id.  Invalid input
        raises ``ValidationFailedError`` carrying the entry exactly as
        stored, which is left untouched.
        """
        with self._lock:
            entry = self._find(entry_id)
            if entry is None:
                raise NotFoundError(entry_id)
            try:
                validated = validate(fields, self.required)
            except ValidationError as exc:
                raise ValidationFailedError(entry.model_copy(deep=True), exc) from exc
            self._check_unique(validated, exclude_id=entry_id)
            entry.fields = validated
            # updated_at never precedes created_at, even if the clock steps back
            entry.updated_at = max(self._clock(), entry.created_at)
            return entry.model_copy(deep=True)

    def delete(self, entry_id: int) -> Entry:
        """Remove an entry and return it; ids are never reused."""
        with self._lock:
            for index, entry in enumerate(self._entries):
                if entry.id == entry_id:
                    del self._entries[index]
                    return entry
            raise NotFoundError(entry_id)

    def _find(self, entry_id: int) -> Optional[Entry]:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def _check_unique(self, fields: Mapping[str, str], exclude_id: Optional[int] = None) -> None:
        if self.natural_key is None:
            return
        key = fields.get(self.natural_key)
        if key is None:
            return
        for entry in self._entries:
            if entry.id == exclude_id:
                continue
            existing = entry.fields.get(self.natural_key)
            if existing is not None and existing.casefold() == key.casefold():
                raise DuplicateEntryError(key)
