"""verman: read-only package version registry over a directory tree."""

from verman.exceptions import (
    InvalidConstraintError,
    InvalidLocationError,
    PathNotFoundError,
    RegistryException,
    StorageError,
    VersionNotFoundError,
)
from verman.models import (
    AllVersions,
    File,
    GetQuery,
    LatestVersion,
    Package,
    PackageQuery,
    Version,
    VersionExpression,
    VersionSelector,
    select_versions,
)
from verman.services import FsRegistry, Registry
from verman.storage import DirectoryStore, DirEntry, LocalDirectoryStore, MemoryDirectoryStore

__version__ = "0.1.0"

__all__ = [
    "AllVersions",
    "DirEntry",
    "DirectoryStore",
    "File",
    "FsRegistry",
    "GetQuery",
    "InvalidConstraintError",
    "InvalidLocationError",
    "LatestVersion",
    "LocalDirectoryStore",
    "MemoryDirectoryStore",
    "Package",
    "PackageQuery",
    "PathNotFoundError",
    "Registry",
    "RegistryException",
    "StorageError",
    "Version",
    "VersionExpression",
    "VersionNotFoundError",
    "VersionSelector",
    "select_versions",
]
