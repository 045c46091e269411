"""Core data models shared across snippetlink components."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Directive:
    """Parsed contents of a ``<!-- begin-snippet: ... -->`` marker."""

    source: str
    name: str
    extractor: Optional[str] = None
    extractor_query: Optional[str] = None
    renderer: Optional[str] = None
    renderer_query: Optional[str] = None


@dataclass(frozen=True)
class Fragment:
    """Extracted and normalised snippet content plus where it came from."""

    source: str
    name: str
    content: str
    content_kind: str
    start_line: Optional[int] = None
    end_line: Optional[int] = None
