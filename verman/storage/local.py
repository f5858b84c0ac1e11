"""Directory store backed by the local filesystem."""

import logging
from pathlib import Path

from verman.exceptions import PathNotFoundError, StorageError
from verman.storage.base import DirectoryStore, DirEntry, join_path

logger = logging.getLogger(__name__)


class LocalDirectoryStore(DirectoryStore):
    """Directory store reading a directory tree on the local filesystem.

    Attributes:
        root: Filesystem directory that store paths are relative to.
    """

    def __init__(self, root: Path | str) -> None:
        """Initialize the store.

        Args:
            root: Filesystem directory that store paths are relative to.
        """
        self.root = Path(root).expanduser()

    def _resolve(self, path: str) -> Path:
        """Map a store path to a filesystem path below the root."""
        normalized = join_path(path)
        if normalized.startswith("..") or normalized.startswith("/"):
            raise PathNotFoundError(path)
        return self.root / normalized

    def list_directory(self, path: str) -> list[DirEntry]:
        target = self._resolve(path)
        try:
            entries = [DirEntry(name=child.name, is_dir=child.is_dir()) for child in target.iterdir()]
        except (FileNotFoundError, NotADirectoryError) as e:
            raise PathNotFoundError(path) from e
        except OSError as e:
            logger.error(f"Failed to list {target}: {e}")
            raise StorageError(str(e), operation="list_directory") from e
        return sorted(entries, key=lambda entry: entry.name)

    def read_file(self, path: str) -> bytes:
        target = self._resolve(path)
        try:
            return target.read_bytes()
        except FileNotFoundError as e:
            raise PathNotFoundError(path) from e
        except OSError as e:
            logger.error(f"Failed to read {target}: {e}")
            raise StorageError(str(e), operation="read_file") from e

    def exists(self, path: str) -> bool:
        try:
            target = self._resolve(path)
        except PathNotFoundError:
            return False
        try:
            return target.exists()
        except OSError as e:
            raise StorageError(str(e), operation="exists") from e

    def __repr__(self) -> str:
        return f"LocalDirectoryStore(root={str(self.root)!r})"
