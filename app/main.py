# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Task Store API.
# It wires the Store, its guard and persistence into a FastAPI application
# with CORS, exception handlers and routers.
#
# Usage:
#   uvicorn app.main:app
#   python -m app            # binds to API_HOST:API_PORT (127.0.0.1:8080)
# =============================================================================

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import Settings, settings as default_settings
from app.exceptions import (
    TaskStoreException,
    application_error_handler,
    taskstore_exception_handler,
    validation_exception_handler,
)
from app.routers import health, tasks, users
from core.guard import StoreGuard
from lib.persistence import JsonFilePersistence
from lib.utils import ApplicationError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if default_settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup: load the persisted store (or start empty) and wrap it in the
    guard that every request goes through.
    """
    settings: Settings = app.state.settings

    logger.info(f"Starting Task Store API in {settings.ENVIRONMENT} mode")

    persistence = JsonFilePersistence(settings.DB_PATH)
    store = persistence.load_or_empty()
    app.state.guard = StoreGuard(
        store,
        persistence,
        lock_timeout=settings.LOCK_TIMEOUT_SECONDS,
        strict_persistence=settings.STRICT_PERSISTENCE,
    )
    logger.info(f"Serving {store!r} from {persistence.path}")

    yield

    logger.info("Shutting down Task Store API")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use; defaults to the environment-loaded ones

    Returns:
        FastAPI: Configured app. The store is loaded when the app starts.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Task Store API",
        description="CRUD over tasks plus a minimal user registry, "
                    "persisted to a single JSON file.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # -------------------------------------------------------------------------
    # Middleware
    # -------------------------------------------------------------------------

    # Only local front-ends (and file:// pages, which send Origin: null)
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=settings.CORS_ORIGIN_REGEX,
        allow_credentials=True,
        allow_methods=settings.cors_methods_list,
        allow_headers=settings.cors_headers_list,
        max_age=settings.CORS_MAX_AGE,
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------

    app.add_exception_handler(TaskStoreException, taskstore_exception_handler)
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.exception_handler(Exception)
    async def handle_general_exception(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.exception(f"Unexpected error: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            }
        )

    # -------------------------------------------------------------------------
    # Routers
    # -------------------------------------------------------------------------

    app.include_router(tasks.router, tags=["Tasks"])
    app.include_router(users.router, tags=["Users"])
    app.include_router(health.router, tags=["Health"])

    return app


app = create_app()


def run() -> None:
    """Start the server on the configured address."""
    uvicorn.run(
        app,
        host=default_settings.API_HOST,
        port=default_settings.API_PORT,
        log_level="debug" if default_settings.DEBUG else "info",
    )


if __name__ == "__main__":
    run()
