"""Health check routes."""

from fastapi import APIRouter, Depends, Response, status

from verman.api.deps import get_registry
from verman.exceptions import StorageError
from verman.services.registry import Registry

router = APIRouter()


@router.get("/health")
def health_check() -> dict:
    """Health check endpoint.

    Returns:
        Health status.
    """
    return {"status": "healthy"}


@router.head("/health", include_in_schema=False)
def health_check_head() -> Response:
    """Health check for HEAD requests."""
    return Response(status_code=status.HTTP_200_OK)


@router.get("/ready")
def readiness_check(
    response: Response,
    registry: Registry = Depends(get_registry),
) -> dict:
    """Readiness check endpoint.

    Checks that the repository root is reachable.

    Args:
        response: FastAPI response, used to set the status code.
        registry: Registry instance.

    Returns:
        Readiness status with details.
    """
    try:
        repository = registry.ready()
    except StorageError:
        repository = False

    if not repository:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {
        "status": "ready" if repository else "not_ready",
        "details": {"repository": repository},
    }
