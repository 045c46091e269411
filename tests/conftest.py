from __future__ import annotations

from typing import Callable, Mapping

import pytest

from snippetlink.extractors import discover_extractors
from snippetlink.processor import MarkdownProcessor
from snippetlink.renderers import discover_renderers
from tests._fixtures.fake_filesystem import FakeFileSystem


@pytest.fixture
def fake_fs() -> FakeFileSystem:
    """Provide an empty in-memory file system."""
    return FakeFileSystem()


@pytest.fixture
def make_processor(fake_fs: FakeFileSystem) -> Callable[[Mapping[str, str]], MarkdownProcessor]:
    """Return a factory that seeds `fake_fs` and wires the built-in plugins."""

    def _factory(files: Mapping[str, str] | None = None) -> MarkdownProcessor:
        if files:
            fake_fs.write(files)
        return MarkdownProcessor(discover_extractors(fake_fs), discover_renderers())

    return _factory
