"""
Pydantic schema definitions for API payloads.

Each domain (posts, countries) defines its own Pydantic models for
request and response bodies.  ``Entry`` is the store-level record the
domain views are built from.
"""
