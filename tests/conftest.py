"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from verman.app import create_app
from verman.config import Settings
from verman.services.registry import FsRegistry
from verman.storage.memory import MemoryDirectoryStore

REPOSITORY = {
    "dog/1.0.0/file.txt": b"woof",
    "dog/1.0.1/file.txt": b"woof!",
    "dog/2.0.0/file.txt": b"woof woof",
    "cat/latest": b"1.0.0",
    "cat/1.0.0/file.txt": b"meow",
    "cat/2.0.0/file.txt": b"mew2",
}


def write_repository(root: Path, files: dict[str, bytes]) -> Path:
    """Write a path -> content mapping below a directory.

    Args:
        root: Target directory.
        files: File paths and contents.

    Returns:
        The target directory.
    """
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    return root


@pytest.fixture
def store() -> MemoryDirectoryStore:
    """In-memory store holding the dog/cat repository."""
    return MemoryDirectoryStore(REPOSITORY)


@pytest.fixture
def registry(store: MemoryDirectoryStore) -> FsRegistry:
    """Registry over the in-memory repository."""
    return FsRegistry(store)


@pytest.fixture
def repository_dir(tmp_path: Path) -> Path:
    """The dog/cat repository written to disk.

    Args:
        tmp_path: Pytest temporary path fixture.

    Returns:
        Repository root directory.
    """
    return write_repository(tmp_path / "repository", REPOSITORY)


@pytest.fixture
def test_settings(repository_dir: Path) -> Settings:
    """Create test settings pointing at the on-disk repository.

    Args:
        repository_dir: Repository root directory.

    Returns:
        Test settings.
    """
    return Settings(
        _env_file=None,
        repository_root=repository_dir,
        host="127.0.0.1",
        port=8000,
        debug=True,
        cors_origins=["http://localhost:3000"],
    )


@pytest.fixture
def app(test_settings: Settings):
    """Create test application.

    Args:
        test_settings: Test settings.

    Returns:
        FastAPI application.
    """
    return create_app(test_settings)


@pytest.fixture
def client(app) -> TestClient:
    """Create test client with lifespan.

    Args:
        app: FastAPI application.

    Returns:
        Test client.
    """
    with TestClient(app) as client:
        yield client
