"""
Main entrypoint for the Exercise Tracker API.

This module assembles the FastAPI application, sets up logging and
includes the API router.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``, e.g.::

    uvicorn exercise_tracker_api.app.main:app --reload

The database handle is opened in the application lifespan, stored on
``app.state.db`` and closed again on shutdown.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.db import Database
from .core.logging_config import setup_logging

VIEWS_DIR = Path(__file__).parent / "views"
PUBLIC_DIR = Path(__file__).parent / "public"

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database handle on startup and close it on shutdown."""
    db: Database = app.state.db
    # A failed connection is logged inside connect(); keep serving anyway.
    db.connect()
    yield
    db.close()
    logger.info("Database connection closed due to application termination")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Settings to use instead of the ones read from the environment.
        Tests pass a ``Settings`` pointing at an in-memory database.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so that the handlers below
    # can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = Database(settings.database_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def index() -> FileResponse:
        """Landing page."""
        return FileResponse(VIEWS_DIR / "index.html")

    @app.get("/health")
    async def health() -> dict:
        """Health check endpoint."""
        return {
            "status": "healthy" if app.state.db.is_connected else "degraded",
            "version": settings.api_version,
        }

    # Mounted last so the routes above take precedence over files in
    # ``public/`` served from the site root.
    if PUBLIC_DIR.exists():
        app.mount("/", StaticFiles(directory=PUBLIC_DIR), name="public")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
