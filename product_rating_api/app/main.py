"""
Main entrypoint for the Product Rating API.

This module assembles the FastAPI application, sets up logging, builds
the product store and service, and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn product_rating_api.app.main:app --reload

Tests call ``create_app`` directly and pass their own store, id
factory and clock.  Without an injected store the one selected by the
settings is created (and migrated) when the application starts.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.db import get_database_path
from .core.logging_config import setup_logging
from .services.product_service import ProductService
from .services.product_store import (
    InMemoryProductStore,
    ProductStore,
    SqliteProductStore,
)

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> ProductStore:
    """Create the store selected by ``settings.store_backend``."""
    if settings.store_backend == "memory":
        return InMemoryProductStore()
    if settings.store_backend == "sqlite":
        return SqliteProductStore(get_database_path(settings.database_url))
    raise ValueError(f"Unknown store backend: {settings.store_backend!r}")


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[ProductStore] = None,
    id_factory: Optional[Callable[[], str]] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use; defaults to the module-level settings.
    store : Optional[ProductStore]
        Store to use instead of the one selected by the settings.
    id_factory, clock : optional callables
        Passed through to ``ProductService``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.settings = settings
    app.state.product_service = None
    if store is not None:
        app.state.product_service = ProductService(store, id_factory=id_factory, clock=clock)

    app.include_router(v1_router, prefix="/api/v1")

    # The configured store is built on startup, not here, so importing
    # the module-level ``app`` never touches the filesystem.
    @app.on_event("startup")
    async def startup_event() -> None:
        if app.state.product_service is None:
            app.state.product_service = ProductService(
                build_store(settings), id_factory=id_factory, clock=clock
            )
        logger.info("Using %s", type(app.state.product_service.store).__name__)

    @app.get("/health", tags=["health"])
    def health() -> dict:
        return {"status": "ok"}

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
