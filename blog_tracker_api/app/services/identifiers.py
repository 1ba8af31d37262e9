"""Identifier allocation for in-memory stores."""


class IdentifierAllocator:
    """Issue strictly increasing integer ids, never reusing one.

    Not thread safe on its own; ``EntryStore`` only calls ``next``
    while holding its write lock.
    """

    def __init__(self, start: int = 1) -> None:
        self._next = start

    def next(self) -> int:
        allocated = self._next
        self._next += 1
        return allocated
