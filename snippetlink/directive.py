"""Parser for the ``<!-- begin-snippet: SOURCE NAME (params) -->`` marker line."""

from __future__ import annotations

from typing import Optional

from .models import Directive
from .result import Failure, Outcome, Success

BEGIN_MARKER = "<!-- begin-snippet: "
END_MARKER = "<!-- end-snippet -->"
_CLOSE = "-->"

_EXTRACTOR_KEY = "importer"
_RENDERER_KEY = "formatter"


def is_begin_marker(line: str) -> bool:
    """Return True when ``line`` opens a managed snippet region."""
    return line.lstrip().lower().startswith(BEGIN_MARKER.lower())


def is_end_marker(line: str) -> bool:
    """Return True when ``line`` closes a managed snippet region."""
    return line.strip().lower() == END_MARKER.lower()


def parse_directive(line: str) -> Outcome[Directive]:
    """Decode a begin-marker line into a :class:`Directive`."""
    if not line.lower().startswith(BEGIN_MARKER.lower()):
        return Failure(f"Snippet links need to start with '{BEGIN_MARKER}'")

    remainder = line[len(BEGIN_MARKER) :]

    if not remainder.endswith(_CLOSE):
        return Failure("Snippet link must end with ' -->'.")

    separator = remainder.find(" ")
    if separator < 1:
        return Failure("Snippet expects a source file followed by a space.")

    remainder = remainder[: -len(_CLOSE)].strip()
    source = remainder[:separator].lstrip()
    remainder = remainder[separator:].lstrip()

    # the name runs until whitespace, an opening bracket or the end of the line
    separator = _find_any(remainder, " (")
    if separator < 0:
        name = remainder
        remainder = ""
    else:
        name = remainder[:separator]
        remainder = remainder[separator:].strip()

    if not name:
        return Failure("Snippet name is missing.")

    extractor: Optional[str] = None
    extractor_query: Optional[str] = None
    renderer: Optional[str] = None
    renderer_query: Optional[str] = None

    if remainder:
        inner = remainder[1:-1]
        if (
            len(remainder) < 2
            or remainder[0] != "("
            or remainder[-1] != ")"
            or "(" in inner
            or ")" in inner
        ):
            return Failure("SnippetLink parameters must be enclosed in round brackets '()'.")

        for raw_param in inner.split(";"):
            param = raw_param.strip()
            colon = param.find(":")
            if colon < 1:
                return Failure(
                    "SnippetLink parameters must be in the format key:value[?queryString]."
                )

            key = param[:colon].strip()
            value_and_query = param[colon + 1 :].strip()
            query: Optional[str] = None

            question = value_and_query.find("?")
            if question < 0:
                value = value_and_query
            else:
                value = value_and_query[:question].strip()
                query = value_and_query[question + 1 :].strip()
                if not query:
                    return Failure(
                        f"Expected query string for SnippetLink parameter '{key}' following after '?'."
                    )

            if not value:
                return Failure(f"SnippetLink parameter '{key}' is missing a value.")

            lowered = key.lower()
            if lowered == _EXTRACTOR_KEY:
                extractor, extractor_query = value, query
            elif lowered == _RENDERER_KEY:
                renderer, renderer_query = value, query
            else:
                return Failure(
                    f"Unknown SnippetLink parameter key '{key}'. "
                    f"Expected '{_EXTRACTOR_KEY}' or '{_RENDERER_KEY}'."
                )

    return Success(
        Directive(
            source=source,
            name=name,
            extractor=extractor,
            extractor_query=extractor_query,
            renderer=renderer,
            renderer_query=renderer_query,
        )
    )


def _find_any(text: str, characters: str) -> int:
    for index, char in enumerate(text):
        if char in characters:
            return index
    return -1


__all__ = [
    "BEGIN_MARKER",
    "END_MARKER",
    "is_begin_marker",
    "is_end_marker",
    "parse_directive",
]
