"""In-memory directory store."""

from typing import Mapping, Optional, Union

from verman.exceptions import PathNotFoundError, StorageError
from verman.storage.base import ROOT, DirectoryStore, DirEntry, join_path


class MemoryDirectoryStore(DirectoryStore):
    """Directory store over a mapping of file paths to contents.

    Parent directories are implied by the file paths. A key ending in
    ``/`` declares an empty directory.

    Example:
        >>> store = MemoryDirectoryStore({"dog/1.0.0/file.txt": b"woof"})
        >>> [e.name for e in store.list_directory("dog")]
        ['1.0.0']
    """

    def __init__(self, files: Optional[Mapping[str, Union[bytes, str, None]]] = None) -> None:
        """Initialize the store.

        Args:
            files: Mapping of file paths to contents; str contents are
                encoded as UTF-8.

        Raises:
            ValueError: If a path is used both as a file and a directory.
        """
        self._files: dict[str, bytes] = {}
        self._children: dict[str, dict[str, bool]] = {ROOT: {}}

        for raw_path, content in (files or {}).items():
            is_dir = raw_path.endswith("/")
            path = join_path(raw_path)
            if path == ROOT:
                continue
            if path.startswith("..") or path.startswith("/"):
                raise ValueError(f"path '{raw_path}' escapes the store root")

            if is_dir:
                self._add_directory(path)
            else:
                if path in self._children:
                    raise ValueError(f"path '{path}' is already a directory")
                if isinstance(content, str):
                    content = content.encode("utf-8")
                self._files[path] = content or b""
                self._add_entry(path, is_dir=False)

    def _add_directory(self, path: str) -> None:
        if path in self._files:
            raise ValueError(f"path '{path}' is already a file")
        if path in self._children:
            return
        self._children[path] = {}
        self._add_entry(path, is_dir=True)

    def _add_entry(self, path: str, is_dir: bool) -> None:
        parent, _, name = path.rpartition("/")
        parent = parent or ROOT
        if parent != ROOT:
            self._add_directory(parent)
        self._children[parent][name] = is_dir

    def list_directory(self, path: str) -> list[DirEntry]:
        children = self._children.get(join_path(path))
        if children is None:
            raise PathNotFoundError(path)
        return [DirEntry(name=name, is_dir=is_dir) for name, is_dir in sorted(children.items())]

    def read_file(self, path: str) -> bytes:
        normalized = join_path(path)
        if normalized in self._children:
            raise StorageError(f"'{path}' is a directory", operation="read_file")
        try:
            return self._files[normalized]
        except KeyError:
            raise PathNotFoundError(path) from None

    def exists(self, path: str) -> bool:
        normalized = join_path(path)
        return normalized in self._files or normalized in self._children
