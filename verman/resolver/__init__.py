"""Version resolution module for verman."""

from verman.resolver.semver import (
    Comparator,
    VersionConstraint,
    parse_constraint,
    parse_version,
    sort_versions,
    try_parse_version,
)

__all__ = [
    "Comparator",
    "VersionConstraint",
    "parse_constraint",
    "parse_version",
    "sort_versions",
    "try_parse_version",
]
