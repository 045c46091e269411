"""Keep code snippets embedded in Markdown documents in sync with their sources."""

from .directive import parse_directive
from .models import Directive, Fragment
from .processor import MarkdownProcessor
from .result import Failure, Outcome, Success

__all__ = [
    "Directive",
    "Failure",
    "Fragment",
    "MarkdownProcessor",
    "Outcome",
    "Success",
    "parse_directive",
]
