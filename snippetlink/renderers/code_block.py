"""Fenced code block renderer."""

from __future__ import annotations

from .base import Renderer
from ..models import Fragment
from ..options import QueryOptions

FENCE = "```"


class CodeBlockRenderer(Renderer):
    """Wraps fragment content in a fence tagged with its content kind."""

    name = "code-block"

    def render(self, fragment: Fragment, options: QueryOptions) -> str:
        language = options.get_str("lang") or fragment.content_kind
        return f"{FENCE}{language}\n{fragment.content}\n{FENCE}"
