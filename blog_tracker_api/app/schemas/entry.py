"""
Pydantic model for a stored entry.

``Entry`` is the domain-neutral record owned by the stores: an
allocated ``id``, the validated string ``fields`` and two timestamps.
Domain schemas (posts, visited countries) are views built from it.
"""

from datetime import datetime
from typing import Dict

from pydantic import BaseModel, Field


class Entry(BaseModel):
    id: int
    fields: Dict[str, str] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime
