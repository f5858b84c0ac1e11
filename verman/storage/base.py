"""Abstract base class for directory stores."""

import posixpath
from abc import ABC, abstractmethod
from dataclasses import dataclass

ROOT = "."


@dataclass(frozen=True)
class DirEntry:
    """Entry of a directory listing.

    Attributes:
        name: Entry name (a single path segment).
        is_dir: Whether the entry is a directory.
    """

    name: str
    is_dir: bool


def join_path(*segments: str) -> str:
    """Join store path segments into a normalized POSIX path.

    Args:
        segments: Path segments, relative to the store root.

    Returns:
        Normalized path; ``"."`` for the root itself.
    """
    return posixpath.normpath(posixpath.join(*segments)) if segments else ROOT


class DirectoryStore(ABC):
    """Abstract base class for directory stores.

    A directory store exposes a read-only tree of directories and files
    addressed by POSIX-style paths relative to its root. Every
    implementation raises ``PathNotFoundError`` for absent paths and
    ``StorageError`` for any other failure.
    """

    @abstractmethod
    def list_directory(self, path: str) -> list[DirEntry]:
        """List the immediate entries of a directory.

        Args:
            path: Directory path in the store.

        Returns:
            Entries ordered by name.

        Raises:
            PathNotFoundError: If the directory does not exist.
            StorageError: If listing fails.
        """
        ...

    @abstractmethod
    def read_file(self, path: str) -> bytes:
        """Read the whole content of a file.

        Args:
            path: File path in the store.

        Returns:
            File content.

        Raises:
            PathNotFoundError: If the file does not exist.
            StorageError: If reading fails.
        """
        ...

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check if a path exists in the store.

        Args:
            path: Path in the store.

        Returns:
            True if the path exists, False otherwise.

        Raises:
            StorageError: If the check itself fails.
        """
        ...
