"""
Main FastAPI application entry point.

Wires the session lifecycle HTTP surface: token rotation, session
management, health, RFC 9457 error handling and request tracing. The
lifespan creates tables outside production and runs the expired-row
reaper as a background task.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.core.config import settings
from src.core.container import get_database, get_logger, get_reaper
from src.presentation.routers.api.middleware.trace_middleware import TraceMiddleware
from src.presentation.routers.api.v1 import v1_router
from src.presentation.routers.api.v1.errors import register_exception_handlers
from src.presentation.routers.system import system_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Handles startup and shutdown events:
    - Startup: create tables (development/testing), start the reaper
    - Shutdown: stop the reaper, dispose the connection pool

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    logger = get_logger()
    database = get_database()

    if not settings.is_production:
        await database.create_all()

    reaper = get_reaper()
    if settings.reaper_enabled:
        reaper.start()

    logger.info(
        "application_started",
        environment=settings.environment.value,
        reaper_enabled=settings.reaper_enabled,
    )

    yield

    await reaper.stop()
    await database.close()
    logger.info("application_stopped")


# Initialize FastAPI application with settings and lifespan
app = FastAPI(
    title=settings.app_name,
    description="Session and refresh token lifecycle management",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug,
    lifespan=lifespan,
)

# Wire trace middleware (request correlation)
app.add_middleware(TraceMiddleware)

# Register global exception handlers (RFC 9457 error responses)
register_exception_handlers(app)

app.include_router(system_router)
app.include_router(v1_router)
