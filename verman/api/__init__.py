"""HTTP API for verman."""

from verman.api.router import create_router

__all__ = ["create_router"]
