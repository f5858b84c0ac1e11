"""Package routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from verman.api.deps import get_registry
from verman.models.package import GetQuery, Package, PackageQuery, select_versions
from verman.services.registry import Registry

router = APIRouter()


class FileInfo(BaseModel):
    """File response.

    Attributes:
        name: File name.
        location: URI of the file.
    """

    name: str
    location: str


class VersionResponse(BaseModel):
    """Version response.

    Attributes:
        number: Version directory name.
        files: Files of the version (only filled for a single version).
    """

    number: str
    files: list[FileInfo] = []


class PackageResponse(BaseModel):
    """Package response.

    Attributes:
        name: Package name.
        versions: Matching versions.
    """

    name: str
    versions: list[VersionResponse]

    @classmethod
    def from_package(cls, package: Package) -> "PackageResponse":
        return cls.model_validate(package.to_dict())


class PackageListResponse(BaseModel):
    """Response for package list.

    Attributes:
        packages: Matching packages.
        total: Number of packages.
    """

    packages: list[PackageResponse]
    total: int


@router.get("", response_model=PackageListResponse)
def list_packages(
    name: Optional[str] = Query(None, description="Exact package name"),
    version: Optional[str] = Query(None, description="Version-range expression"),
    latest: bool = Query(False, description="Only the latest version(s)"),
    registry: Registry = Depends(get_registry),
) -> PackageListResponse:
    """List packages and their matching versions.

    Args:
        name: Exact package name filter.
        version: Version-range expression, ignored when latest is set.
        latest: Resolve the latest version(s) of each package.
        registry: Registry instance.

    Returns:
        Matching packages.
    """
    query = PackageQuery(name=name, selector=select_versions(version, latest))
    packages = [PackageResponse.from_package(p) for p in registry.list(query)]
    return PackageListResponse(packages=packages, total=len(packages))


@router.get("/{name}/{version}", response_model=PackageResponse)
def get_package_version(
    name: str,
    version: str,
    registry: Registry = Depends(get_registry),
) -> PackageResponse:
    """Get the files of a package version.

    Args:
        name: Package name.
        version: Exact version directory name.
        registry: Registry instance.

    Returns:
        Package with the requested version and its files.
    """
    package = registry.get(GetQuery(package_name=name, version_number=version))
    return PackageResponse.from_package(package)
