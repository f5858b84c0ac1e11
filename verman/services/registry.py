"""Package registry over a directory store.

The repository layout is ``<root>/<package>/<version>/<files>``, with an
optional ``<root>/<package>/latest`` file holding the version-range
expression that defines the latest version(s) of the package.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from operator import itemgetter
from typing import Optional
from urllib.parse import quote, urlsplit, urlunsplit

from verman.exceptions import (
    InvalidConstraintError,
    InvalidLocationError,
    PathNotFoundError,
    VersionNotFoundError,
)
from verman.models.package import (
    File,
    GetQuery,
    LatestVersion,
    Package,
    PackageQuery,
    Version,
    VersionExpression,
    VersionSelector,
)
from verman.resolver.semver import (
    VersionConstraint,
    parse_constraint,
    sort_versions,
    try_parse_version,
)
from verman.storage.base import ROOT, DirectoryStore, join_path

logger = logging.getLogger(__name__)

LATEST_FILE = "latest"
DEFAULT_BASE_URI = "file://"


class Registry(ABC):
    """Read-only package registry."""

    @abstractmethod
    def list(self, query: Optional[PackageQuery] = None) -> list[Package]:
        """List packages and the versions matching a query.

        Args:
            query: Package name filter and version selector; None lists
                every version of every package.

        Returns:
            Packages with at least one matching version.
        """
        ...

    @abstractmethod
    def get(self, query: GetQuery) -> Package:
        """Get the files of one exact package version.

        Args:
            query: Exact package name and version number.

        Returns:
            Package holding the requested version and its files.
        """
        ...

    @abstractmethod
    def ready(self) -> bool:
        """Check whether the repository can be served.

        Returns:
            True if the repository root is reachable.

        Raises:
            StorageError: If the check itself fails.
        """
        ...


def _is_segment(value: str) -> bool:
    return bool(value) and value not in (".", "..") and "/" not in value and "\x00" not in value


def build_location(base_uri: str, directory: str, file_name: str) -> str:
    """Build the URI of a file inside a store directory.

    Args:
        base_uri: URI the store root is published under, e.g. "file://".
        directory: Store path of the directory holding the file.
        file_name: Name of the file.

    Returns:
        Fully qualified URI of the file.

    Raises:
        InvalidLocationError: If the base URI or file name is malformed.
    """
    base = urlsplit(base_uri)
    if not base.scheme:
        raise InvalidLocationError(f"Base URI '{base_uri}' has no scheme")
    if not _is_segment(file_name):
        raise InvalidLocationError(f"Cannot build a location for file name '{file_name}'")

    path = join_path(directory, file_name)
    if path.startswith(".."):
        raise InvalidLocationError(f"Location of '{path}' escapes the repository")
    quoted = "/".join(quote(segment, safe="+") for segment in path.split("/"))
    return urlunsplit(base._replace(path=f"{base.path.rstrip('/')}/{quoted}"))


class FsRegistry(Registry):
    """Registry resolving queries against a directory store.

    Attributes:
        store: Directory store holding the repository.
        root: Store path of the repository root.
        base_uri: URI prefix used for file locations.
    """

    def __init__(
        self,
        store: DirectoryStore,
        root: str = ROOT,
        base_uri: str = DEFAULT_BASE_URI,
    ) -> None:
        """Initialize the registry.

        Args:
            store: Directory store holding the repository.
            root: Store path of the repository root.
            base_uri: URI prefix used for file locations.
        """
        self.store = store
        self.root = join_path(root)
        self.base_uri = base_uri

    def __repr__(self) -> str:
        return f"FsRegistry(store={self.store!r}, root={self.root!r}, base_uri={self.base_uri!r})"

    def ready(self) -> bool:
        return self.store.exists(self.root)

    def list(self, query: Optional[PackageQuery] = None) -> list[Package]:
        """List packages and the versions matching a query.

        Directory names that are not versions are skipped, and packages
        left without any matching version are omitted.

        Args:
            query: Package name filter and version selector.

        Returns:
            Matching packages, in directory listing order.

        Raises:
            InvalidConstraintError: If the expression or a ``latest`` file
                cannot be parsed.
            PathNotFoundError: If the repository root does not exist.
            StorageError: If reading the store fails.
        """
        query = query or PackageQuery()

        # Parsed up front so a bad expression fails before any traversal.
        constraint = None
        if isinstance(query.selector, VersionExpression):
            constraint = parse_constraint(query.selector.expression)

        results = []
        for entry in self.store.list_directory(self.root):
            if not entry.is_dir:
                continue
            if query.name is not None and query.name != entry.name:
                continue

            numbers = self._resolve_versions(entry.name, query.selector, constraint)
            if not numbers:
                logger.debug(f"Package {entry.name} has no matching versions")
                continue

            results.append(
                Package(
                    name=entry.name,
                    versions=tuple(Version(number=number) for number in numbers),
                )
            )
        return results

    def _resolve_versions(
        self,
        package_name: str,
        selector: VersionSelector,
        constraint: Optional[VersionConstraint],
    ) -> list[str]:
        """Return the version directory names of a package matching the selector."""
        package_path = join_path(self.root, package_name)
        entries = self.store.list_directory(package_path)

        latest = isinstance(selector, LatestVersion)
        if latest:
            constraint = self._read_latest_constraint(package_path)

        candidates = []
        for entry in entries:
            if not entry.is_dir:
                continue
            parsed = try_parse_version(entry.name)
            if parsed is None:
                logger.debug(f"Skipping non-version directory {package_path}/{entry.name}")
                continue
            if constraint is not None and not constraint.check(parsed):
                continue
            candidates.append((entry.name, parsed))

        if latest and constraint is None:
            candidates = sort_versions(candidates, key=itemgetter(1))[-1:]
            if candidates:
                logger.debug(f"Latest version of {package_name} is {candidates[0][0]}")

        return [name for name, _ in candidates]

    def _read_latest_constraint(self, package_path: str) -> Optional[VersionConstraint]:
        """Parse the ``latest`` file of a package, or None if it has none."""
        latest_path = join_path(package_path, LATEST_FILE)
        try:
            content = self.store.read_file(latest_path)
        except PathNotFoundError:
            return None

        try:
            expression = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidConstraintError(repr(content), f"{latest_path} is not valid UTF-8") from e

        logger.debug(f"Resolving latest version from {latest_path}: {expression!r}")
        return parse_constraint(expression)

    def get(self, query: GetQuery) -> Package:
        """Get the files of one exact package version.

        The name and version are matched verbatim against directory names.

        Args:
            query: Exact package name and version number.

        Returns:
            Package with a single version listing its files.

        Raises:
            VersionNotFoundError: If the version directory does not exist.
            InvalidLocationError: If a file location cannot be built.
            StorageError: If reading the store fails.
        """
        if not (_is_segment(query.package_name) and _is_segment(query.version_number)):
            raise VersionNotFoundError(query.package_name, query.version_number)

        version_path = join_path(self.root, query.package_name, query.version_number)
        if not self.store.exists(version_path):
            raise VersionNotFoundError(query.package_name, query.version_number, path=version_path)

        files = []
        for entry in self.store.list_directory(version_path):
            if entry.is_dir:
                continue
            files.append(
                File(
                    name=entry.name,
                    location=build_location(self.base_uri, version_path, entry.name),
                )
            )

        return Package(
            name=query.package_name,
            versions=(Version(number=query.version_number, files=tuple(files)),),
        )
