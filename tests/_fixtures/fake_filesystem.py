"""In-memory file system used to drive extractors in tests."""

from __future__ import annotations

import textwrap
from collections import Counter
from fnmatch import fnmatchcase
from typing import Dict, List, Mapping, Sequence

from snippetlink.filesystem import FileSystem


class FakeFileSystem(FileSystem):
    """Stores `path -> contents` entries; directories exist implicitly."""

    def __init__(self, files: Mapping[str, str] | None = None) -> None:
        self._files: Dict[str, str] = {}
        self.reads: Counter[str] = Counter()
        if files:
            self.write(files)

    def add_file(self, path: str, content: str) -> None:
        self._files[_normalise(path)] = content

    def write(self, files: Mapping[str, str]) -> None:
        """Add dedented `path -> contents` entries, like a source tree on disk."""
        for path, content in files.items():
            self.add_file(path, textwrap.dedent(content).lstrip("\n"))

    def file_exists(self, path: str) -> bool:
        return _normalise(path) in self._files

    def directory_exists(self, path: str) -> bool:
        prefix = _normalise(path).rstrip("/") + "/"
        return any(key.startswith(prefix) for key in self._files)

    def list_directories(self, path: str, pattern: str) -> Sequence[str]:
        base = _normalise(path).rstrip("/")
        prefix = base + "/"
        found = set()
        for key in self._files:
            if not key.startswith(prefix):
                continue
            remainder = key[len(prefix) :]
            if "/" not in remainder:
                continue
            segment = remainder.split("/", 1)[0]
            if fnmatchcase(segment, pattern):
                found.add(f"{base}/{segment}")
        return sorted(found)

    def read_text(self, path: str) -> str:
        key = _normalise(path)
        if key not in self._files:
            raise FileNotFoundError(f"File not found: {path}")
        self.reads[key] += 1
        return self._files[key]


def _normalise(path: str) -> str:
    return path.replace("\\", "/")


__all__ = ["FakeFileSystem"]
