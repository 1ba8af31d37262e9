"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables so that the service can be configured the same
way under Docker, systemd or a plain shell.  Defaults are provided for
all fields.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Blog & Travel Tracker API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional path of a log file.  Empty means console logging only.
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite database that backs the travel tracker.  A
    # relative path is resolved relative to the project root by the
    # ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "travel_tracker.db")

    # Seconds a connection waits for a locked database before giving up.
    database_timeout: float = float(os.getenv("DATABASE_TIMEOUT", "5.0"))

    # Maximum number of characters shown in post excerpts.
    excerpt_length: int = int(os.getenv("EXCERPT_LENGTH", "150"))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Value of the ``X-Powered-By`` header attached to every response.
    powered_by: str = os.getenv("POWERED_BY", "FastAPI-Blog-Tracker")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
