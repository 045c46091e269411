"""File-system capability consumed by the extractors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from fnmatch import fnmatchcase
from pathlib import Path
from typing import List, Sequence


class FileSystem(ABC):
    """Read-only view of the files snippet sources live in."""

    @abstractmethod
    def file_exists(self, path: str) -> bool:
        """Return True when ``path`` names an existing file."""

    @abstractmethod
    def directory_exists(self, path: str) -> bool:
        """Return True when ``path`` names an existing directory."""

    @abstractmethod
    def list_directories(self, path: str, pattern: str) -> Sequence[str]:
        """Return the sub-directories of ``path`` whose name matches ``pattern``.

        Returned entries are ``path`` joined with the directory name.
        """

    @abstractmethod
    def read_text(self, path: str) -> str:
        """Return the file contents; raises ``FileNotFoundError`` when missing."""


class LocalFileSystem(FileSystem):
    """Disk-backed file system resolving relative paths against ``root``."""

    def __init__(self, root: Path | str = ".") -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def file_exists(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def directory_exists(self, path: str) -> bool:
        return self._resolve(path).is_dir()

    def list_directories(self, path: str, pattern: str) -> Sequence[str]:
        directory = self._resolve(path)
        if not directory.is_dir():
            return []
        matches: List[str] = []
        for child in sorted(directory.iterdir()):
            if child.is_dir() and fnmatchcase(child.name, pattern):
                matches.append(str(Path(path) / child.name))
        return matches

    def read_text(self, path: str) -> str:
        return self._resolve(path).read_text(encoding="utf-8")

    def _resolve(self, path: str) -> Path:
        candidate = Path(path)
        if candidate.is_absolute():
            return candidate
        return self._root / candidate


__all__ = ["FileSystem", "LocalFileSystem"]
