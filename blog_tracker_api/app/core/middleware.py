"""
HTTP middleware and application-wide exception handlers.

``install`` registers a request logger that records each request
with its status and duration, stamps the ``X-Powered-By`` header on
every response, and maps ``BackingStoreError`` and unexpected
exceptions onto generic JSON errors.  Internal details only appear in
responses when ``settings.debug`` is enabled.
"""

import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .config import Settings
from .errors import GENERIC_FAILURE_MESSAGE, BackingStoreError

logger = logging.getLogger("blog_tracker_api.requests")


def install(app: FastAPI, app_settings: Settings) -> None:
    """Attach middleware and exception handlers to ``app``."""

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        client = request.client.host if request.client else "-"
        logger.info("%s %s from %s", request.method, request.url.path, client)
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            response = _server_error(exc, app_settings)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        response.headers["X-Powered-By"] = app_settings.powered_by
        return response

    @app.exception_handler(BackingStoreError)
    async def backing_store_error_handler(request: Request, exc: BackingStoreError) -> JSONResponse:
        # The service layer already logged the underlying database error.
        content = {"detail": exc.message}
        if app_settings.debug and exc.__cause__ is not None:
            content["error"] = repr(exc.__cause__)
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=content)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _server_error(exc, app_settings)


def _server_error(exc: Exception, app_settings: Settings) -> JSONResponse:
    content = {"detail": GENERIC_FAILURE_MESSAGE}
    if app_settings.debug:
        content["error"] = repr(exc)
    response = JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)
    response.headers["X-Powered-By"] = app_settings.powered_by
    return response
