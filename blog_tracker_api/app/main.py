"""
Main entrypoint for the Blog & Travel Tracker API.

This module assembles the FastAPI application, sets up logging,
constructs the stores and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn blog_tracker_api.app.main:app --reload

Each application owns its own stores: the in-memory post store and
the SQLite-backed tracker are created here and exposed to routes via
``app.state``.
"""

import logging
from typing import Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core import middleware
from .core.config import Settings, settings
from .core.db import get_database_path, init_db
from .core.logging_config import setup_logging
from .services.country_service import VisitedCountryService
from .services.post_service import PostService


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the module-level ``settings``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or settings
    # Initialise logging before anything else so that the setup below
    # can log.
    setup_logging(app_settings.log_level, app_settings.log_file or None)

    app = FastAPI(title=app_settings.project_name, version=app_settings.api_version)

    db_path = get_database_path(app_settings.database_url)
    app.state.settings = app_settings
    app.state.post_service = PostService()
    app.state.country_service = VisitedCountryService(db_path, timeout=app_settings.database_timeout)

    middleware.install(app, app_settings)
    app.include_router(v1_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if needed and applies migrations.
        version = init_db(db_path, timeout=app_settings.database_timeout)
        logging.getLogger(__name__).info(
            "Tracker database %s at schema version %s; posts are kept in memory",
            db_path,
            version,
        )

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
