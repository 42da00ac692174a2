"""System router for non-versioned application endpoints.

Provides root and health endpoints that are not part of the versioned API
contract. These endpoints are side-effect free.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.core.config import settings
from src.core.container import get_database
from src.infrastructure.persistence.database import Database


system_router = APIRouter(tags=["System"])


@system_router.get("/")
async def root() -> dict[str, str]:
    """Root endpoint - basic status check.

    Returns:
        dict[str, str]: Service name, status and version.
    """
    return {
        "message": settings.app_name,
        "status": "operational",
        "version": settings.app_version,
    }


@system_router.get("/health")
async def health(database: Database = Depends(get_database)) -> JSONResponse:
    """Health check endpoint for monitoring and load balancers.

    Reports unhealthy (503) when the session store cannot be reached.

    Args:
        database: Database manager (injected).

    Returns:
        JSONResponse: Health status and database reachability.
    """
    database_ok = await database.check_connection()
    if not database_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "database": "unavailable"},
        )
    return JSONResponse(content={"status": "healthy", "database": "ok"})
