"""Extractor plugin implementations and discovery utilities."""

from __future__ import annotations

from typing import Callable, List, Sequence

from .base import Extractor
from .benchmark import BenchmarkDotNetExtractor
from .csharp import CSharpExtractor
from ..filesystem import FileSystem
from ..plugins import discover_plugins

_ENTRY_POINT_GROUP = "snippetlink.extractors"

# Registration order is the probe order used when a directive names no importer.
_BUILTIN_FACTORIES: dict[str, Callable[[FileSystem], Extractor]] = {
    CSharpExtractor.name: CSharpExtractor,
    BenchmarkDotNetExtractor.name: BenchmarkDotNetExtractor,
}


def discover_extractors(
    file_system: FileSystem, enabled: Sequence[str] | None = None
) -> List[Extractor]:
    """Return instantiated extractors bound to ``file_system``."""
    return discover_plugins(
        _BUILTIN_FACTORIES,
        group=_ENTRY_POINT_GROUP,
        base=Extractor,
        enabled=enabled,
        args=(file_system,),
    )


__all__ = [
    "BenchmarkDotNetExtractor",
    "CSharpExtractor",
    "Extractor",
    "discover_extractors",
]
