"""Line-oriented rewriting of snippet markers inside Markdown documents."""

from __future__ import annotations

import io
from typing import List, Optional, Sequence, TextIO, Tuple

from .directive import is_begin_marker, is_end_marker, parse_directive
from .extractors import Extractor
from .extractors.text import split_lines
from .logging import get_logger
from .models import Directive
from .options import QueryOptions
from .renderers import Renderer
from .result import Failure, Outcome, Success

_LOGGER = get_logger("processor")

_FENCE = "```"


class MarkdownProcessor:
    """Replaces the content between begin/end snippet markers with fresh fragments.

    The processor writes to the caller's buffer only; deciding whether a
    document is persisted is left to the caller.
    """

    def __init__(self, extractors: Sequence[Extractor], renderers: Sequence[Renderer]) -> None:
        self._extractors = list(extractors)
        self._renderers = list(renderers)

    def process(self, reader: TextIO, writer: TextIO) -> Outcome[bool]:
        """Copy ``reader`` to ``writer``, refreshing every managed snippet region.

        Returns ``Success(True)`` when at least one snippet was rewritten,
        ``Success(False)`` when the document holds no live snippet markers and a
        ``Failure`` listing every broken marker otherwise.
        """
        changed = False
        errors: List[str] = []
        newline: Optional[str] = None
        in_fence = False
        line_number = 0

        lines = iter(reader)
        for line in lines:
            line_number += 1
            if newline is None:
                newline = _line_ending(line) or None
            writer.write(line)

            if line.lstrip().startswith(_FENCE):
                in_fence = not in_fence
            if in_fence or not is_begin_marker(line):
                continue

            start_line = line_number
            rendered = self._resolve(line.strip())
            if isinstance(rendered, Failure):
                errors.append(f"Line {start_line}: {rendered.message}")
                continue

            end_marker: Optional[str] = None
            for existing in lines:
                line_number += 1
                if is_end_marker(existing):
                    end_marker = existing
                    break

            if end_marker is None:
                errors.append(
                    f"Line {start_line}: Missing end-snippet tag for snippet starting at line {start_line}."
                )
                continue

            eol = newline or "\n"
            for rendered_line in split_lines(rendered.value):
                writer.write(rendered_line + eol)
            writer.write(end_marker)
            changed = True

        if errors:
            return Failure("\n".join(errors))
        return Success(changed)

    def process_text(self, text: str) -> Tuple[Outcome[bool], str]:
        """Convenience wrapper around :meth:`process` for in-memory documents."""
        reader = io.StringIO(text)
        writer = io.StringIO()
        outcome = self.process(reader, writer)
        return outcome, writer.getvalue()

    def _resolve(self, marker: str) -> Outcome[str]:
        parsed = parse_directive(marker)
        if isinstance(parsed, Failure):
            return parsed
        directive: Directive = parsed.value
        extractor_options = QueryOptions(directive.extractor_query)

        selected = self._select_extractor(directive, extractor_options)
        if isinstance(selected, Failure):
            return selected
        extractor: Extractor = selected.value

        renderer = self._select_renderer(directive, extractor)
        if isinstance(renderer, Failure):
            return renderer

        fragment = extractor.extract(directive.source, directive.name, extractor_options)
        if isinstance(fragment, Failure):
            return fragment

        _LOGGER.debug(
            "Rendering '%s' from %s with %s/%s",
            directive.name,
            directive.source,
            extractor.name,
            renderer.value.name,
        )
        return Success(
            renderer.value.render(fragment.value, QueryOptions(directive.renderer_query))
        )

    def _select_extractor(
        self, directive: Directive, options: QueryOptions
    ) -> Outcome[Extractor]:
        if directive.extractor is not None:
            wanted = directive.extractor.lower()
            for extractor in self._extractors:
                if extractor.name.lower() == wanted:
                    return Success(extractor)
            return Failure(f"Unknown importer '{directive.extractor}'")

        reasons: List[str] = []
        for extractor in self._extractors:
            probe = extractor.can_handle(directive.source, directive.name, options)
            if isinstance(probe, Success):
                return Success(extractor)
            _LOGGER.debug("Importer %s declined %s: %s", extractor.name, directive.source, probe.message)
            reasons.append(probe.message)

        details = "\n".join(reasons)
        return Failure(
            f"No importer could handle the source file '{directive.source}':\n{details}"
        )

    def _select_renderer(self, directive: Directive, extractor: Extractor) -> Outcome[Renderer]:
        if directive.renderer is not None:
            renderer = self._find_renderer(directive.renderer)
            if renderer is None:
                return Failure(f"Unknown formatter '{directive.renderer}'")
            return Success(renderer)

        renderer = self._find_renderer(extractor.preferred_renderer)
        if renderer is None:
            return Failure(
                f"Formatter '{extractor.preferred_renderer}' preferred by importer "
                f"'{extractor.name}' is not registered"
            )
        return Success(renderer)

    def _find_renderer(self, name: str) -> Optional[Renderer]:
        wanted = name.lower()
        for renderer in self._renderers:
            if renderer.name.lower() == wanted:
                return renderer
        return None


def _line_ending(line: str) -> str:
    if line.endswith("\r\n"):
        return "\r\n"
    if line.endswith("\n"):
        return "\n"
    return ""


__all__ = ["MarkdownProcessor"]
