"""
Main FastAPI application entry point.

``create_app`` builds the application from Settings; the module-level
``app`` is what uvicorn serves:

    uvicorn storefront_auth.main:app

Lifespan:
- Startup: create the Database (bounded pool), optionally create tables,
  start the session reaper
- Shutdown: stop the reaper, dispose the pool
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront_auth.core.config import Settings, get_settings
from storefront_auth.core.container import build_database, get_logger
from storefront_auth.infrastructure.jobs import SessionReaper
from storefront_auth.presentation.routers.api.middleware import RequestIdMiddleware
from storefront_auth.presentation.routers.api.v1.auth import router as auth_router
from storefront_auth.presentation.routers.api.v1.errors import (
    register_exception_handlers,
)
from storefront_auth.presentation.routers.system import index_router, system_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    settings: Settings = app.state.settings
    logger = get_logger()

    database = build_database(settings)
    if settings.db_create_tables:
        await database.create_all()
    app.state.database = database

    reaper = SessionReaper(
        database,
        logger,
        interval_seconds=settings.session_reaper_interval_seconds,
        retention_days=settings.session_retention_days,
    )
    if settings.session_reaper_interval_seconds > 0:
        reaper.start()
    app.state.session_reaper = reaper

    logger.info(
        "application_started",
        environment=settings.environment.value,
        version=settings.app_version,
    )
    try:
        yield
    finally:
        await reaper.stop()
        await database.close()
        logger.info("application_stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Settings to use (defaults to the cached environment
            settings).

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Authentication and session service for the storefront API",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Wire request id middleware (request correlation)
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-Id"],
    )

    # Register global exception handlers (error envelope)
    register_exception_handlers(app)

    app.include_router(system_router)
    app.include_router(index_router, prefix=settings.api_prefix)
    app.include_router(auth_router, prefix=settings.api_prefix)

    return app


app = create_app()
