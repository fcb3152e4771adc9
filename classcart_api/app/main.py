"""
Main entrypoint for the ClassCart API.

This module assembles the FastAPI application: logging, CORS, request
logging, lesson image serving, error translation and the API routers.
``create_app`` builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn classcart_api.app.main:app --reload

The database handle is created here and stored on ``app.state.store``.
It is connected in the startup hook; if the database cannot be reached
the hook raises and the server does not start.
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.db import DataStore
from .core.errors import ClassCartError, StoreConnectionError, StoreError
from .core.logging_config import REQUEST_LOGGER_NAME, setup_logging

logger = logging.getLogger(__name__)
request_logger = logging.getLogger(REQUEST_LOGGER_NAME)


def _error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message, **extra})


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ClassCartError)
    async def handle_classcart_error(request: Request, exc: ClassCartError) -> JSONResponse:
        if isinstance(exc, StoreError):
            return _error_response(exc.status_code, exc.message, error=exc.detail)
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Malformed JSON or wrongly typed fields are client errors (400).
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
        else:
            message = "Invalid request"
        return _error_response(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            if request.url.path.startswith("/images/"):
                return _error_response(404, "Image not found", requestedPath=request.url.path)
            return _error_response(404, "Route not found", requestedPath=request.url.path)
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(500, "Internal server error")


def create_app(app_settings: Optional[Settings] = None, store: Optional[DataStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Configuration to use; defaults to the module-level settings.
    store : Optional[DataStore]
        Data store handed to the services.  A ``DataStore`` for the
        configured MongoDB URI is built when omitted.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or default_settings
    setup_logging(
        app_settings.log_level,
        app_settings.log_file or None,
        request_level=app_settings.request_log_level,
    )

    app = FastAPI(title=app_settings.project_name, version=app_settings.api_version)
    app.state.settings = app_settings
    app.state.store = store if store is not None else DataStore(app_settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        if request.url.path.startswith("/images/"):
            request_logger.info("[IMAGE] %s %s", request.method, request.url.path)
        else:
            request_logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    images_dir = Path(app_settings.images_dir)
    if images_dir.is_dir():
        app.mount("/images", StaticFiles(directory=images_dir), name="images")
    else:
        logger.warning("Image directory %s not found; /images is disabled", images_dir.resolve())

    _register_exception_handlers(app)
    app.include_router(v1_router)

    @app.on_event("startup")
    async def startup_event() -> None:
        try:
            await app.state.store.connect()
        except StoreConnectionError:
            logger.critical("Failed to start server: database unavailable", exc_info=True)
            raise

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        await app.state.store.close()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
