"""Passthrough renderer for fragments that already are Markdown."""

from __future__ import annotations

from .base import Renderer
from ..models import Fragment
from ..options import QueryOptions


class RawRenderer(Renderer):
    name = "raw"

    def render(self, fragment: Fragment, options: QueryOptions) -> str:
        return fragment.content
