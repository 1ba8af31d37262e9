"""
Error taxonomy shared by the entry stores.

Every store operation either returns a value or raises one of the
exceptions below.  The HTTP layer maps them onto status codes; none of
them is fatal to the process.
"""

from typing import Any, Optional

MISSING_FIELD_MESSAGE = "All fields are required. Please fill out the entire form."
BLANK_FIELD_MESSAGE = "Fields cannot be empty or contain only whitespace."
GENERIC_FAILURE_MESSAGE = "Something went wrong. Please try again later."


class StoreError(Exception):
    """Base class for all entry store errors."""

    message = "Store error"

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(StoreError):
    """Raised when submitted fields do not satisfy the required set."""

    def __init__(self, field: str, message: Optional[str] = None) -> None:
        self.field = field
        super().__init__(message)


class MissingFieldError(ValidationError):
    message = MISSING_FIELD_MESSAGE


class BlankFieldError(ValidationError):
    message = BLANK_FIELD_MESSAGE


class ValidationFailedError(StoreError):
    """Raised by updates whose input failed validation.

    ``entry`` is the stored entry as it was before the attempted
    update, so callers can redisplay the last known good values next
    to ``error``.
    """

    def __init__(self, entry: Any, error: ValidationError) -> None:
        self.entry = entry
        self.error = error
        super().__init__(error.message)


class NotFoundError(StoreError):
    def __init__(self, entry_id: Any, message: Optional[str] = None) -> None:
        self.entry_id = entry_id
        super().__init__(message or f"Entry {entry_id} not found")


class DuplicateEntryError(StoreError):
    def __init__(self, key: str, message: Optional[str] = None) -> None:
        self.key = key
        super().__init__(message or f"Entry with key '{key}' already exists")


class UnknownCountryError(StoreError):
    message = "Country not found."

    def __init__(self, query: str) -> None:
        self.query = query
        super().__init__()


class BackingStoreError(StoreError):
    """Raised when the backing database fails or times out.

    The original exception is chained; ``message`` is safe to show to
    end users.
    """

    message = GENERIC_FAILURE_MESSAGE
