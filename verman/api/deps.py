"""FastAPI dependencies for dependency injection."""

from fastapi import Request

from verman.services.registry import Registry


def get_registry(request: Request) -> Registry:
    """Get the registry from application state.

    Args:
        request: FastAPI request.

    Returns:
        Registry instance.
    """
    return request.app.state.registry
