"""
Main entrypoint for the Finance Ledger API.

This module assembles the FastAPI application, sets up logging, wires
the stores and services and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn finance_ledger_api.app.main:app --reload
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .dependencies import Dependencies, build_dependencies


def create_app(config: Optional[Settings] = None, deps: Optional[Dependencies] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    config : Optional[Settings]
        Settings to use; defaults to the environment‑derived module
        instance.
    deps : Optional[Dependencies]
        Pre‑built collaborators.  When omitted they are built from
        ``config``.

    Returns
    -------
    FastAPI
        A configured application.  Migrations run when the app starts
        serving, not at construction time.
    """
    config = config or default_settings
    # Initialise logging before anything else so that imports below can
    # safely log messages.
    setup_logging(config.log_level, config.log_file)

    deps = deps or build_dependencies(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        deps.database.init()
        yield

    app = FastAPI(
        title=config.project_name,
        version=config.api_version,
        debug=config.debug,
        lifespan=lifespan,
    )
    app.state.deps = deps
    register_exception_handlers(app)
    app.include_router(v1_router, prefix="/api/v1")
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
