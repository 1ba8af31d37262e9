"""
Top-level router for version 1 of the API.

This router aggregates the domain routers (posts, countries) under a
unified prefix.  When new domains are introduced, update this file to
include their routers.
"""

from fastapi import APIRouter

from .endpoints import countries, posts

router = APIRouter()

router.include_router(posts.router, prefix="/posts", tags=["posts"])
router.include_router(countries.router, prefix="/countries", tags=["countries"])
