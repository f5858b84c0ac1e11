"""Package-related data models."""

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class File:
    """A file available inside a package version directory.

    Attributes:
        name: File name.
        location: URI reference identifying the file's full path.
    """

    name: str
    location: str

    def to_dict(self) -> dict:
        return {"name": self.name, "location": self.location}


@dataclass(frozen=True)
class Version:
    """A package version.

    Attributes:
        number: Original version directory name.
        files: Files of the version, only populated by ``Registry.get``.
    """

    number: str
    files: tuple[File, ...] = ()

    def to_dict(self) -> dict:
        return {
            "number": self.number,
            "files": [f.to_dict() for f in self.files],
        }


@dataclass(frozen=True)
class Package:
    """A package and the versions that matched a query.

    Attributes:
        name: Package name.
        versions: Matching versions, in resolution order.
    """

    name: str
    versions: tuple[Version, ...] = ()

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "versions": [v.to_dict() for v in self.versions],
        }


@dataclass(frozen=True)
class AllVersions:
    """Select every parsable version."""


@dataclass(frozen=True)
class VersionExpression:
    """Select versions satisfying a version-range expression.

    Attributes:
        expression: Range expression, e.g. ">=1.0.0" or "^2.1".
    """

    expression: str


@dataclass(frozen=True)
class LatestVersion:
    """Select the latest version of a package.

    The ``latest`` sentinel file of the package decides when present,
    otherwise the greatest parsable version is used.
    """


VersionSelector = Union[AllVersions, VersionExpression, LatestVersion]


def select_versions(
    expression: Optional[str] = None,
    latest: bool = False,
) -> VersionSelector:
    """Build a selector from loose ``expression``/``latest`` inputs.

    ``latest`` takes precedence over an expression, and an empty or missing
    expression selects all versions.

    Args:
        expression: Optional range expression.
        latest: Whether the latest version is requested.

    Returns:
        The matching selector variant.
    """
    if latest:
        return LatestVersion()
    if expression:
        return VersionExpression(expression)
    return AllVersions()


@dataclass(frozen=True)
class PackageQuery:
    """Query for ``Registry.list``.

    Attributes:
        name: Exact package name, or None for every package.
        selector: Version selector applied to each package.
    """

    name: Optional[str] = None
    selector: VersionSelector = field(default_factory=AllVersions)


@dataclass(frozen=True)
class GetQuery:
    """Query for ``Registry.get``.

    Attributes:
        package_name: Exact package name.
        version_number: Exact version directory name.
    """

    package_name: str
    version_number: str
