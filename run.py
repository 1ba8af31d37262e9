"""Entry point for the Blog & Travel Tracker API.

Launches the FastAPI application with Uvicorn.  Host, port and the
rest of the configuration are read from environment variables (see
``blog_tracker_api/app/core/config.py``).

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from blog_tracker_api.app.core.config import settings
from blog_tracker_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info("Starting server on http://%s:%s", settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
