"""
Presentation helpers for entries.

The HTTP layer calls these directly when it builds response views; the
stores stay unaware of how dates or excerpts are displayed.
"""

from datetime import datetime

DEFAULT_EXCERPT_LENGTH = 150


def format_date(value: datetime) -> str:
    """Format a timestamp like ``October 19, 2026 at 10:05 AM``."""
    return f"{value:%B} {value.day}, {value:%Y} at {value:%I:%M %p}"


def create_excerpt(content: str, max_length: int = DEFAULT_EXCERPT_LENGTH) -> str:
    """Shorten ``content`` to ``max_length`` characters followed by an ellipsis.

    Content that already fits is returned unchanged.
    """
    if len(content) <= max_length:
        return content
    return content[:max_length].strip() + "..."
