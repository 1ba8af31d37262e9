"""
Pydantic models for the travel tracker.

Users submit a country *name*; the service resolves it to an ISO
3166 alpha-2 code through the ``countries`` lookup table and stores
the code in ``visited_countries``.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class CountryInput(BaseModel):
    """Schema for marking a country as visited."""

    country: Optional[str] = Field(None, description="Full or partial country name", examples=["France"])


class CountryRead(BaseModel):
    """A row of the country lookup table."""

    id: int
    country_code: str
    country_name: str


class VisitedCountryRead(BaseModel):
    id: int
    country_code: str
    country_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class VisitedCountryList(BaseModel):
    """Tracker overview: the visited codes, their count and full records."""

    countries: List[str]
    total: int
    entries: List[VisitedCountryRead]
