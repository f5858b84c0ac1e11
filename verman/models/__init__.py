"""Data models for verman."""

from verman.models.package import (
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

__all__ = [
    "AllVersions",
    "File",
    "GetQuery",
    "LatestVersion",
    "Package",
    "PackageQuery",
    "Version",
    "VersionExpression",
    "VersionSelector",
    "select_versions",
]
