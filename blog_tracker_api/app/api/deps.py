"""
FastAPI dependencies giving routes access to the application's stores.

Stores are constructed once in ``create_app`` and kept on
``app.state``; routes never reach them through module globals.
"""

from fastapi import Request

from blog_tracker_api.app.core.config import Settings
from blog_tracker_api.app.services.country_service import VisitedCountryService
from blog_tracker_api.app.services.post_service import PostService


def get_post_service(request: Request) -> PostService:
    return request.app.state.post_service


def get_country_service(request: Request) -> VisitedCountryService:
    return request.app.state.country_service


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
