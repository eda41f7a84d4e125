"""System endpoints (health and version)."""

from fastapi import APIRouter

from t212_dashboard.core.config import settings

system_router = APIRouter(tags=["System"])


@system_router.get("/")
async def root() -> dict[str, str]:
    return {
        "message": settings.app_name,
        "status": "operational",
        "version": settings.app_version,
    }


@system_router.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint for monitoring and load balancers."""
    return {"status": "healthy"}
