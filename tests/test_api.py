"""Tests for the HTTP API."""

from pathlib import Path

from fastapi.testclient import TestClient

from verman.app import create_app
from verman.config import Settings
from verman.exceptions import StorageError
from verman.services.registry import FsRegistry
from verman.storage.memory import MemoryDirectoryStore


def test_health_check(client: TestClient) -> None:
    """Test health check endpoint.

    Args:
        client: Test client.
    """
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_health_check_head(client: TestClient) -> None:
    """Test health check HEAD endpoint.

    Args:
        client: Test client.
    """
    response = client.head("/api/v1/health")
    assert response.status_code == 200


def test_readiness_check(client: TestClient) -> None:
    """Test readiness with an existing repository.

    Args:
        client: Test client.
    """
    response = client.get("/api/v1/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready", "details": {"repository": True}}


def test_readiness_check_missing_repository(tmp_path: Path) -> None:
    """Test readiness when the repository root is missing.

    Args:
        tmp_path: Temporary directory.
    """
    settings = Settings(_env_file=None, repository_root=tmp_path / "missing")
    with TestClient(create_app(settings)) as client:
        response = client.get("/api/v1/ready")
    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"


def test_list_packages(client: TestClient) -> None:
    """Test listing every package.

    Args:
        client: Test client.
    """
    response = client.get("/api/v1/packages")
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert [p["name"] for p in data["packages"]] == ["cat", "dog"]
    dog = data["packages"][1]
    assert [v["number"] for v in dog["versions"]] == ["1.0.0", "1.0.1", "2.0.0"]
    assert all(v["files"] == [] for v in dog["versions"])


def test_list_packages_latest(client: TestClient) -> None:
    """Test listing the latest versions.

    Args:
        client: Test client.
    """
    response = client.get("/api/v1/packages", params={"latest": "true"})
    assert response.status_code == 200
    versions = {p["name"]: [v["number"] for v in p["versions"]] for p in response.json()["packages"]}
    assert versions == {"cat": ["1.0.0"], "dog": ["2.0.0"]}


def test_list_packages_with_constraint(client: TestClient) -> None:
    """Test listing by name and version expression.

    Args:
        client: Test client.
    """
    response = client.get("/api/v1/packages", params={"name": "cat", "version": "=2.0.0"})
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["packages"][0]["versions"] == [{"number": "2.0.0", "files": []}]


def test_list_packages_latest_overrides_expression(client: TestClient) -> None:
    """Test that latest wins over a version expression.

    Args:
        client: Test client.
    """
    response = client.get(
        "/api/v1/packages",
        params={"name": "dog", "version": "1.0.0", "latest": "true"},
    )
    assert response.json()["packages"][0]["versions"][0]["number"] == "2.0.0"


def test_list_packages_invalid_constraint(client: TestClient) -> None:
    """Test that a malformed expression is a client error.

    Args:
        client: Test client.
    """
    response = client.get("/api/v1/packages", params={"version": ">=banana"})
    assert response.status_code == 400
    assert "banana" in response.json()["detail"]


def test_list_packages_unknown(client: TestClient) -> None:
    """Test listing a package that does not exist.

    Args:
        client: Test client.
    """
    response = client.get("/api/v1/packages", params={"name": "bird"})
    assert response.status_code == 200
    assert response.json() == {"packages": [], "total": 0}


def test_get_package_version(client: TestClient, repository_dir: Path) -> None:
    """Test getting the files of a version.

    Args:
        client: Test client.
        repository_dir: Repository root directory.
    """
    response = client.get("/api/v1/packages/cat/1.0.0")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "cat"
    assert len(data["versions"]) == 1
    files = data["versions"][0]["files"]
    assert [f["name"] for f in files] == ["file.txt"]
    expected = f"{repository_dir.resolve().as_uri()}/cat/1.0.0/file.txt"
    assert files[0]["location"] == expected


def test_get_package_version_not_found(client: TestClient) -> None:
    """Test getting a version that does not exist.

    Args:
        client: Test client.
    """
    response = client.get("/api/v1/packages/cat/9.9.9")
    assert response.status_code == 404
    assert response.json() == {"detail": "Version '9.9.9' of package 'cat' not found"}


def test_custom_registry() -> None:
    """Test serving an injected registry."""
    registry = FsRegistry(
        MemoryDirectoryStore({"tool/0.1.0/tool.tar.gz": b""}),
        base_uri="https://downloads.example.com",
    )
    app = create_app(Settings(_env_file=None), registry=registry)
    with TestClient(app) as client:
        response = client.get("/api/v1/packages/tool/0.1.0")
    assert response.json()["versions"][0]["files"] == [
        {"name": "tool.tar.gz", "location": "https://downloads.example.com/tool/0.1.0/tool.tar.gz"},
    ]


class UnreachableStore(MemoryDirectoryStore):
    """Memory store whose existence checks fail."""

    def exists(self, path: str) -> bool:
        raise StorageError("connection refused", operation="exists")


def test_readiness_check_storage_error() -> None:
    """Test readiness when the store cannot be checked."""
    app = create_app(Settings(_env_file=None), registry=FsRegistry(UnreachableStore()))
    with TestClient(app) as client:
        response = client.get("/api/v1/ready")
    assert response.status_code == 503
    assert response.json() == {"status": "not_ready", "details": {"repository": False}}
