"""System router for non-resource endpoints.

Provides the API index and health check. These endpoints are lightweight
and side-effect free.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from storefront_auth.core.config import Settings
from storefront_auth.core.container import get_app_settings, get_database
from storefront_auth.infrastructure.persistence.database import Database

system_router = APIRouter(tags=["System"])
index_router = APIRouter(tags=["System"])

AppSettings = Annotated[Settings, Depends(get_app_settings)]

_AUTH_ENDPOINTS = [
    ("POST", "/auth/register"),
    ("POST", "/auth/login"),
    ("POST", "/auth/refresh"),
    ("POST", "/auth/logout"),
    ("POST", "/auth/logout-all"),
    ("GET", "/auth/sessions"),
    ("DELETE", "/auth/sessions/{id}"),
    ("POST", "/auth/sessions/cleanup"),
    ("GET", "/auth/me"),
]


@index_router.get("/")
async def api_index(settings: AppSettings) -> dict[str, Any]:
    """API index listing the available endpoints."""
    return {
        "success": True,
        "message": settings.app_name,
        "data": {
            "version": settings.app_version,
            "endpoints": [
                f"{method} {settings.api_prefix}{path}"
                for method, path in _AUTH_ENDPOINTS
            ],
        },
    }


@system_router.get("/health")
async def health(
    settings: AppSettings,
    database: Annotated[Database, Depends(get_database)],
) -> JSONResponse:
    """Health check endpoint for monitoring and load balancers.

    Returns:
        200 when the database answers, 503 otherwise.
    """
    database_ok = await database.check_connection()
    return JSONResponse(
        status_code=(
            status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE
        ),
        content={
            "status": "healthy" if database_ok else "unhealthy",
            "database": "connected" if database_ok else "unavailable",
            "version": settings.app_version,
        },
    )

