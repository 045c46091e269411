"""Renderer plugin implementations and discovery utilities."""

from __future__ import annotations

from typing import Callable, List, Sequence

from .base import Renderer
from .code_block import CodeBlockRenderer
from .raw import RawRenderer
from ..plugins import discover_plugins

_ENTRY_POINT_GROUP = "snippetlink.renderers"

_BUILTIN_FACTORIES: dict[str, Callable[[], Renderer]] = {
    CodeBlockRenderer.name: CodeBlockRenderer,
    RawRenderer.name: RawRenderer,
}


def discover_renderers(enabled: Sequence[str] | None = None) -> List[Renderer]:
    """Return instantiated renderers, honoring optional enabled names."""
    return discover_plugins(
        _BUILTIN_FACTORIES,
        group=_ENTRY_POINT_GROUP,
        base=Renderer,
        enabled=enabled,
    )


__all__ = [
    "CodeBlockRenderer",
    "RawRenderer",
    "Renderer",
    "discover_renderers",
]
