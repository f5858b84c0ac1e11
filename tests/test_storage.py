"""Tests for directory stores."""

from pathlib import Path

import pytest

from conftest import REPOSITORY
from verman.exceptions import PathNotFoundError, StorageError
from verman.storage.base import DirEntry, join_path
from verman.storage.local import LocalDirectoryStore
from verman.storage.memory import MemoryDirectoryStore


def test_join_path() -> None:
    """Test store path normalization."""
    assert join_path(".", "cat", "1.0.0") == "cat/1.0.0"
    assert join_path("cat/", "./1.0.0") == "cat/1.0.0"
    assert join_path(".") == "."
    assert join_path() == "."


class TestMemoryDirectoryStore:
    """Tests for MemoryDirectoryStore."""

    def test_list_root(self, store: MemoryDirectoryStore) -> None:
        """Test listing the implied root directory.

        Args:
            store: In-memory store.
        """
        assert store.list_directory(".") == [
            DirEntry(name="cat", is_dir=True),
            DirEntry(name="dog", is_dir=True),
        ]

    def test_list_mixed_entries(self, store: MemoryDirectoryStore) -> None:
        """Test that files and directories are told apart.

        Args:
            store: In-memory store.
        """
        entries = store.list_directory("cat")
        assert [(e.name, e.is_dir) for e in entries] == [
            ("1.0.0", True),
            ("2.0.0", True),
            ("latest", False),
        ]

    def test_list_missing(self, store: MemoryDirectoryStore) -> None:
        """Test listing a directory that does not exist.

        Args:
            store: In-memory store.
        """
        with pytest.raises(PathNotFoundError):
            store.list_directory("bird")
        with pytest.raises(PathNotFoundError):
            store.list_directory("cat/latest")

    def test_read_file(self, store: MemoryDirectoryStore) -> None:
        """Test reading file contents.

        Args:
            store: In-memory store.
        """
        assert store.read_file("cat/latest") == b"1.0.0"
        assert store.read_file("./dog/2.0.0/file.txt") == b"woof woof"

    def test_read_errors(self, store: MemoryDirectoryStore) -> None:
        """Test reading missing files and directories.

        Args:
            store: In-memory store.
        """
        with pytest.raises(PathNotFoundError):
            store.read_file("dog/latest")
        with pytest.raises(StorageError):
            store.read_file("dog/1.0.0")

    def test_exists(self, store: MemoryDirectoryStore) -> None:
        """Test existence checks.

        Args:
            store: In-memory store.
        """
        assert store.exists(".")
        assert store.exists("cat/1.0.0")
        assert store.exists("cat/1.0.0/file.txt")
        assert not store.exists("cat/3.0.0")

    def test_str_content_and_empty_directory(self) -> None:
        """Test text contents and declared empty directories."""
        store = MemoryDirectoryStore({"pkg/latest": "^1.0", "pkg/1.0.0/": None})
        assert store.read_file("pkg/latest") == b"^1.0"
        assert store.list_directory("pkg/1.0.0") == []

    @pytest.mark.parametrize(
        "files",
        [
            {"a": b"x", "a/b": b"y"},
            {"a/b": b"y", "a": b"x"},
            {"../escape": b"x"},
        ],
    )
    def test_invalid_layout(self, files: dict) -> None:
        """Test layouts that cannot form a directory tree.

        Args:
            files: Store contents.
        """
        with pytest.raises(ValueError):
            MemoryDirectoryStore(files)


class TestLocalDirectoryStore:
    """Tests for LocalDirectoryStore."""

    def test_list_directory(self, repository_dir: Path) -> None:
        """Test listing on disk, sorted by name.

        Args:
            repository_dir: Repository root directory.
        """
        store = LocalDirectoryStore(repository_dir)
        assert [e.name for e in store.list_directory(".")] == ["cat", "dog"]
        entries = store.list_directory("cat")
        assert [(e.name, e.is_dir) for e in entries] == [
            ("1.0.0", True),
            ("2.0.0", True),
            ("latest", False),
        ]

    def test_matches_memory_store(self, repository_dir: Path) -> None:
        """Test that both stores expose the same tree.

        Args:
            repository_dir: Repository root directory.
        """
        local = LocalDirectoryStore(repository_dir)
        memory = MemoryDirectoryStore(REPOSITORY)
        for path in ["cat", "dog", "dog/1.0.1"]:
            assert local.list_directory(path) == memory.list_directory(path)

    def test_list_errors(self, repository_dir: Path) -> None:
        """Test listing missing paths, files and paths outside the root.

        Args:
            repository_dir: Repository root directory.
        """
        store = LocalDirectoryStore(repository_dir)
        with pytest.raises(PathNotFoundError):
            store.list_directory("bird")
        with pytest.raises(PathNotFoundError):
            store.list_directory("cat/latest")
        with pytest.raises(PathNotFoundError):
            store.list_directory("../")

    def test_missing_root(self, tmp_path: Path) -> None:
        """Test a store whose root does not exist.

        Args:
            tmp_path: Temporary directory.
        """
        store = LocalDirectoryStore(tmp_path / "nowhere")
        with pytest.raises(PathNotFoundError):
            store.list_directory(".")
        assert not store.exists(".")

    def test_read_file(self, repository_dir: Path) -> None:
        """Test reading files on disk.

        Args:
            repository_dir: Repository root directory.
        """
        store = LocalDirectoryStore(repository_dir)
        assert store.read_file("cat/latest") == b"1.0.0"
        with pytest.raises(PathNotFoundError):
            store.read_file("dog/latest")
        with pytest.raises(StorageError) as exc_info:
            store.read_file("dog/1.0.0")
        assert exc_info.value.operation == "read_file"

    def test_exists(self, repository_dir: Path) -> None:
        """Test existence checks on disk.

        Args:
            repository_dir: Repository root directory.
        """
        store = LocalDirectoryStore(repository_dir)
        assert store.exists("cat/1.0.0")
        assert store.exists("cat/1.0.0/file.txt")
        assert not store.exists("cat/3.0.0")
        assert not store.exists("../repository")
