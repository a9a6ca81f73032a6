"""
Main entrypoint for the Query Tracker API.

This module assembles the FastAPI application: it sets up logging,
registers the error handlers, adds CORS and includes the routers.
The ``create_app`` function builds and configures the app, which is
then instantiated at module import time as ``app``, e.g.::

    uvicorn query_tracker_api.app.main:app --reload

The query store is created from the settings unless one is passed in.
It is connected when the application starts and closed when it stops.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.db import QueryStore
from .core.exceptions import register_exception_handlers
from .core.logging_config import setup_logging
from .services.form_data_service import FormDataService

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[QueryStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the process‑wide settings.
    store : Optional[QueryStore]
        Store to serve requests from.  Defaults to a SQLite store built
        from ``settings.database_url``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so that the code below can
    # safely log messages.
    setup_logging(settings.log_level, settings.log_file or None)

    store = store or QueryStore.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        store.connect()
        if settings.seed_demo_data:
            FormDataService(store).seed_demo_data()
        try:
            yield
        finally:
            store.close()

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(api_router, prefix=settings.api_prefix_normalized)
    logger.debug("Application created with database %s", settings.database_url)
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
