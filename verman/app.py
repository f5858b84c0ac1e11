"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from verman import __version__
from verman.api import create_router
from verman.config import Settings, get_settings
from verman.exceptions import RegistryException
from verman.services.registry import Registry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Args:
        app: FastAPI application.

    Yields:
        None.
    """
    logger.info(f"verman started, serving {app.state.registry!r}")
    yield
    logger.info("verman stopped")


def create_app(
    settings: Settings | None = None,
    registry: Registry | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings override.
        registry: Optional registry override; built from settings if omitted.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="verman",
        description="Read-only package version registry",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        debug=settings.debug,
    )
    app.state.registry = registry if registry is not None else settings.build_registry()

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add exception handlers
    @app.exception_handler(RegistryException)
    async def registry_error_handler(
        request: Request,
        exc: RegistryException,
    ) -> JSONResponse:
        """Handle registry errors.

        Args:
            request: FastAPI request.
            exc: Registry error.

        Returns:
            JSON error response.
        """
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": str(exc)},
        )

    # Include API router
    app.include_router(create_router(), prefix="/api/v1")

    return app


# Create default application instance
app = create_app()
