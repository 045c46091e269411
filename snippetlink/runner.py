"""Drives the Markdown processor over every documentation file in a repository."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from fnmatch import fnmatchcase
from pathlib import Path
from typing import List, Optional, Sequence

from .config import DocumentsConfig, SnippetLinkConfig, load_config
from .extractors import discover_extractors
from .filesystem import FileSystem, LocalFileSystem
from .logging import get_logger
from .processor import MarkdownProcessor
from .renderers import discover_renderers
from .result import Failure

_LOGGER = get_logger("runner")


class DocumentStatus(str, Enum):
    UPDATED = "Updated"
    NO_CHANGES = "No changes"
    NO_SNIPPETS = "No snippets"
    FAILED = "Failed"


@dataclass
class DocumentReport:
    """Outcome of processing a single documentation file."""

    path: Path
    status: DocumentStatus
    error: Optional[str] = None

    @property
    def stale(self) -> bool:
        """True when the document differs from what the sources would produce."""
        return self.status is DocumentStatus.UPDATED


class SnippetLinkRunner:
    """Coordinates document discovery, snippet refresh and persistence."""

    def __init__(
        self,
        root: Path | str,
        config: SnippetLinkConfig | None = None,
        file_system: FileSystem | None = None,
        processor: MarkdownProcessor | None = None,
    ) -> None:
        self._root = Path(root).resolve()
        self._config = config or load_config(self._root)
        if processor is None:
            fs = file_system or LocalFileSystem(self._root)
            # One set of extractors per run so the parse cache spans all documents.
            processor = MarkdownProcessor(
                discover_extractors(fs, self._config.extractors.enabled),
                discover_renderers(self._config.renderers.enabled),
            )
        self._processor = processor

    @property
    def root(self) -> Path:
        return self._root

    def discover(self) -> List[Path]:
        return discover_documents(self._root, self._config.documents)

    def run(self, *, write: bool = True) -> List[DocumentReport]:
        """Process every discovered document; persist changes when ``write`` is set."""
        reports = [self.process_document(path, write=write) for path in self.discover()]
        failed = sum(1 for report in reports if report.status is DocumentStatus.FAILED)
        updated = sum(1 for report in reports if report.stale)
        _LOGGER.info(
            "Processed %d document(s): %d updated, %d failed", len(reports), updated, failed
        )
        return reports

    def process_document(self, path: Path, *, write: bool = True) -> DocumentReport:
        try:
            with path.open(encoding="utf-8", newline="") as handle:
                original = handle.read()
        except UnicodeDecodeError as exc:
            _LOGGER.warning("Skipping %s: not valid UTF-8", path)
            return DocumentReport(
                path=path,
                status=DocumentStatus.FAILED,
                error=f"Document '{path.name}' is not valid UTF-8: {exc.reason} at byte {exc.start}.",
            )

        outcome, rendered = self._processor.process_text(original)

        if isinstance(outcome, Failure):
            _LOGGER.debug("Failed to refresh %s", path)
            return DocumentReport(path=path, status=DocumentStatus.FAILED, error=outcome.message)
        if not outcome.value:
            return DocumentReport(path=path, status=DocumentStatus.NO_SNIPPETS)
        if rendered == original:
            return DocumentReport(path=path, status=DocumentStatus.NO_CHANGES)

        if write:
            with path.open("w", encoding="utf-8", newline="") as handle:
                handle.write(rendered)
            _LOGGER.debug("Wrote %s", path)
        return DocumentReport(path=path, status=DocumentStatus.UPDATED)


def discover_documents(root: Path, documents: DocumentsConfig) -> List[Path]:
    """Return documentation files under ``root`` matching the include patterns."""
    found: List[Path] = []
    for current, dirnames, filenames in os.walk(root):
        rel_dir = Path(current).relative_to(root).as_posix()
        dirnames[:] = sorted(
            name
            for name in dirnames
            if not _is_excluded(_join(rel_dir, name), documents.exclude_paths, is_dir=True)
        )
        for filename in sorted(filenames):
            rel_path = _join(rel_dir, filename)
            if _is_excluded(rel_path, documents.exclude_paths, is_dir=False):
                continue
            if any(
                fnmatchcase(filename, pattern) or fnmatchcase(rel_path, pattern)
                for pattern in documents.include
            ):
                found.append(root / rel_path)
    return found


def _join(rel_dir: str, name: str) -> str:
    return name if rel_dir in ("", ".") else f"{rel_dir}/{name}"


def _is_excluded(rel_path: str, patterns: Sequence[str], *, is_dir: bool) -> bool:
    for raw in patterns:
        directory_only = raw.endswith("/")
        pattern = raw.strip("/")
        if not pattern or (directory_only and not is_dir):
            continue
        if "/" in pattern:
            if fnmatchcase(rel_path, pattern):
                return True
        elif fnmatchcase(rel_path.rsplit("/", 1)[-1], pattern):
            return True
    return False


__all__ = [
    "DocumentReport",
    "DocumentStatus",
    "SnippetLinkRunner",
    "discover_documents",
]
