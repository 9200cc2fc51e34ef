"""
Main entrypoint for the Warga API.

This module assembles the FastAPI application: it sets up logging,
builds the shared ``Database`` handle, registers the error handlers
that produce the ``{success, message, data|error}`` envelope and
includes the versioned routers.  The app is instantiated at import
time as ``app`` so it can be served directly::

    uvicorn warga_api.app.main:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.db import Database
from .core.exceptions import WargaAPIError
from .core.logging_config import setup_logging
from .schemas.common import ErrorResponse, MessageResponse


logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, error: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(message=message, error=error).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{location}: {first.get('msg')}" if location else str(first.get("msg"))


def register_exception_handlers(app: FastAPI) -> None:
    """Map every failure onto the JSON envelope.  Stack traces never leave the server."""

    @app.exception_handler(WargaAPIError)
    async def handle_api_error(request: Request, exc: WargaAPIError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.error)
        else:
            logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return _error_response(exc.status_code, exc.message, exc.error)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _first_validation_message(exc)
        logger.warning("%s %s invalid payload: %s", request.method, request.url.path, message)
        return _error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", str(exc))


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Settings to use instead of the environment-derived defaults.
    database : Optional[Database]
        Database handle to use; by default one is built from
        ``settings.database_url``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so that startup can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.db = database or Database(settings.database_url)

    register_exception_handlers(app)
    app.include_router(v1_router, prefix=settings.api_prefix)

    @app.get("/health", response_model=MessageResponse, tags=["health"])
    async def health() -> MessageResponse:
        return MessageResponse(message="OK")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if needed and applies migrations.
        app.state.db.init_db()
        logger.info("Database ready at %s", app.state.db.path)

    return app


# Created at import time so that uvicorn can discover it.
app = create_app()
