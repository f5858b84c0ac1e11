"""Storage module for verman."""

from verman.storage.base import DirectoryStore, DirEntry, join_path
from verman.storage.local import LocalDirectoryStore
from verman.storage.memory import MemoryDirectoryStore

__all__ = [
    "DirectoryStore",
    "DirEntry",
    "LocalDirectoryStore",
    "MemoryDirectoryStore",
    "join_path",
]
