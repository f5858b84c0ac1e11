"""Services for verman."""

from verman.services.registry import FsRegistry, Registry, build_location

__all__ = [
    "FsRegistry",
    "Registry",
    "build_location",
]
