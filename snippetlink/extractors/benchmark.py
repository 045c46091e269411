"""Extractor for BenchmarkDotNet GitHub-flavoured report artifacts."""

from __future__ import annotations

import posixpath
from typing import Iterable, Optional, Tuple

from .base import Extractor
from .text import split_lines, trim_blank_lines
from ..logging import get_logger
from ..models import Fragment
from ..options import OptionError, QueryOptions
from ..result import Failure, Outcome, Success

_LOGGER = get_logger("extractors.benchmark")

_FENCE = "```"
_FRAMEWORK_PREFIX = "net"
_CONTENT_KIND = "markdown"


class BenchmarkDotNetExtractor(Extractor):
    """Reads ``<project>.<benchmark>-report-github.md`` from the newest target framework.

    The source names the benchmark project directory; reports are looked up
    under ``bin/Release/net*/BenchmarkDotNet.Artifacts/results``.
    """

    name = "BenchmarkDotNet"
    preferred_renderer = "raw"

    def can_handle(self, source: str, name: str, options: QueryOptions) -> Outcome[None]:
        report = self._report_path(source, name)
        if report is None or not self._fs.file_exists(report):
            return _not_found(report or _report_pattern(source, name))
        return Success()

    def extract(self, source: str, name: str, options: QueryOptions) -> Outcome[Fragment]:
        try:
            include_env = options.get_bool("env", False)
        except OptionError as exc:
            return Failure(f"Invalid option for snippet '{name}': {exc}")

        report = self._report_path(source, name)
        if report is None or not self._fs.file_exists(report):
            return _not_found(report or _report_pattern(source, name))

        try:
            content = self._fs.read_text(report)
        except FileNotFoundError:
            return _not_found(report)
        except UnicodeDecodeError as exc:
            return Failure(f"BenchmarkDotNet output file {report} is not valid UTF-8: {exc.reason}.")

        if not include_env:
            content = strip_environment(content)

        lines, _ = trim_blank_lines(split_lines(content))
        return Success(
            Fragment(
                source=source,
                name=name,
                content="\n".join(lines),
                content_kind=_CONTENT_KIND,
            )
        )

    def _report_path(self, source: str, name: str) -> Optional[str]:
        project = source.replace("\\", "/").rstrip("/")
        release = posixpath.join(project, "bin", "Release")
        if not self._fs.directory_exists(release):
            _LOGGER.debug("No release output at %s", release)
            return None

        framework = _latest_framework(self._fs.list_directories(release, f"{_FRAMEWORK_PREFIX}*"))
        if framework is None:
            _LOGGER.debug("No numbered target framework under %s", release)
            return None

        report_name = f"{posixpath.basename(project)}.{name}-report-github.md"
        return posixpath.join(
            framework.replace("\\", "/"), "BenchmarkDotNet.Artifacts", "results", report_name
        )


def _report_pattern(source: str, name: str) -> str:
    project = source.replace("\\", "/").rstrip("/")
    return posixpath.join(
        project,
        "bin",
        "Release",
        f"{_FRAMEWORK_PREFIX}*",
        "BenchmarkDotNet.Artifacts",
        "results",
        f"{posixpath.basename(project)}.{name}-report-github.md",
    )


def _not_found(report: str) -> Failure:
    return Failure(f"BenchmarkDotNet output file {report} not found.")


def _latest_framework(directories: Iterable[str]) -> Optional[str]:
    best: Optional[Tuple[float, str]] = None
    for directory in directories:
        version = _framework_version(directory)
        if version is None:
            continue
        if best is None or version > best[0]:
            best = (version, directory)
    return best[1] if best else None


def _framework_version(directory: str) -> Optional[float]:
    folder = posixpath.basename(directory.replace("\\", "/").rstrip("/"))
    if not folder.lower().startswith(_FRAMEWORK_PREFIX):
        return None
    try:
        return float(folder[len(_FRAMEWORK_PREFIX) :])
    except ValueError:
        return None


def strip_environment(content: str) -> str:
    """Drop the leading fenced environment block and the blank lines after it."""
    opening = content.find(_FENCE)
    if opening < 0:
        return content
    closing = content.find(_FENCE, opening + len(_FENCE))
    if closing < 0:
        return content
    remainder = content[closing + len(_FENCE) :]
    lines, _ = trim_blank_lines(split_lines(remainder))
    return "\n".join(lines)


__all__ = ["BenchmarkDotNetExtractor", "strip_environment"]
