"""Tests for the built-in fragment renderers."""

from __future__ import annotations

from snippetlink.models import Fragment
from snippetlink.options import QueryOptions
from snippetlink.renderers import CodeBlockRenderer, RawRenderer, discover_renderers


def _fragment(content: str = "int x = 1;", kind: str = "cs") -> Fragment:
    return Fragment(source="a.cs", name="x", content=content, content_kind=kind)


def test_code_block_uses_content_kind_as_language() -> None:
    rendered = CodeBlockRenderer().render(_fragment(), QueryOptions())
    assert rendered == "```cs\nint x = 1;\n```"


def test_code_block_language_can_be_overridden() -> None:
    rendered = CodeBlockRenderer().render(_fragment(), QueryOptions("lang=csharp"))
    assert rendered == "```csharp\nint x = 1;\n```"


def test_code_block_keeps_multiline_content() -> None:
    rendered = CodeBlockRenderer().render(_fragment("a();\nb();"), QueryOptions())
    assert rendered.splitlines() == ["```cs", "a();", "b();", "```"]


def test_raw_renderer_returns_content_verbatim() -> None:
    fragment = _fragment("| a | b |\n|---|---|", kind="markdown")
    assert RawRenderer().render(fragment, QueryOptions("lang=ignored")) == fragment.content


def test_discover_renderers_returns_builtins_in_order() -> None:
    names = [renderer.name for renderer in discover_renderers()]
    assert names[:2] == ["code-block", "raw"]


def test_discover_renderers_respects_enabled_filter() -> None:
    renderers = discover_renderers(["RAW"])
    assert len(renderers) == 1
    assert isinstance(renderers[0], RawRenderer)
