"""
Application package initializer.

The project is organised into logical pieces: ``core`` holds
configuration, logging, database access and the error taxonomy;
``services`` the entry stores; ``schemas`` the Pydantic models; and
``api`` the versioned routers under ``api/<version>/``.
"""

from .main import app, create_app  # noqa: F401
