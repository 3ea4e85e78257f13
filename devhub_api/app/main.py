"""
Main entrypoint for the DevHub API.

This module assembles the FastAPI application, sets up logging, wires
the GitHub service and its cache, and includes the versioned routers.
The ``create_app`` function builds and configures the app, which is
then instantiated at module import time as ``app``::

    uvicorn devhub_api.app.main:app --reload

Each app instance owns its own ``TTLCache`` and ``GitHubService``
(reachable as ``app.state.github_service``).  Startup applies database
migrations; shutdown empties the cache and closes the HTTP session.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.v1.router import router as v1_router
from .core.cache import TTLCache
from .core.config import settings
from .core.db import init_db
from .core.logging_config import setup_logging
from .services.github_service import GitHubService

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Logging first so that everything below can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials="*" not in settings.cors_origin_list,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    )

    app.state.github_service = GitHubService(
        TTLCache(ttl=settings.github_cache_ttl_seconds),
        base_url=settings.github_api_base,
        timeout=settings.github_timeout_seconds,
        user_agent=settings.github_user_agent,
    )

    app.include_router(v1_router, prefix=settings.api_prefix)

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if it does not exist and brings the
        # schema up to date.
        init_db()
        logger.info("%s %s started", settings.project_name, settings.api_version)

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        service: GitHubService = app.state.github_service
        service.clear_cache()
        service.close()

    return app


app = create_app()
