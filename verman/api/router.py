"""Main API router configuration."""

from fastapi import APIRouter

from verman.api.routes import health, packages


def create_router() -> APIRouter:
    """Create the main API router with all routes.

    Returns:
        Configured APIRouter.
    """
    router = APIRouter()

    # Health check routes
    router.include_router(
        health.router,
        tags=["health"],
    )

    # Package routes
    router.include_router(
        packages.router,
        prefix="/packages",
        tags=["packages"],
    )

    return router
