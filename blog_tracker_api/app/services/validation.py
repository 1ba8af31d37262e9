"""
Field validation for user-submitted entries.

Transport input is untyped: any field may be absent, ``None`` or a
string padded with whitespace.  ``validate`` is the boundary between
that input and the store; nothing reaches a store without passing
through it.
"""

from typing import AbstractSet, Dict, Mapping, Optional

from blog_tracker_api.app.core.errors import BlankFieldError, MissingFieldError


def validate(fields: Mapping[str, Optional[str]], required: AbstractSet[str]) -> Dict[str, str]:
    """Check ``fields`` against the ``required`` names and return trimmed values.

    Missing fields are reported before blank ones, and required names
    are checked in sorted order so a given input always reports the
    same field.  Non-required values are trimmed and passed through;
    non-required ``None`` values are dropped.

    Raises
    ------
    MissingFieldError
        A required name is absent or ``None``.
    BlankFieldError
        A required value is empty after trimming whitespace.
    """
    ordered = sorted(required)
    for name in ordered:
        if fields.get(name) is None:
            raise MissingFieldError(name)
    for name in ordered:
        if not fields[name].strip():
            raise BlankFieldError(name)

    validated: Dict[str, str] = {}
    for name, value in fields.items():
        if value is None:
            continue
        validated[name] = value.strip()
    return validated
