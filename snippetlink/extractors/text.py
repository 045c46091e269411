"""Line helpers shared by extractor implementations."""

from __future__ import annotations

from typing import List, Tuple

_INDENT_CHARS = " \t"


def split_lines(text: str) -> List[str]:
    """Split on ``\\n``/``\\r\\n`` only, unlike :meth:`str.splitlines`."""
    return [line.rstrip("\r") for line in text.split("\n")]


def trim_blank_lines(lines: List[str]) -> Tuple[List[str], int]:
    """Drop leading and trailing whitespace-only lines.

    Returns the remaining lines and how many lines were dropped from the top.
    """
    start = 0
    end = len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return lines[start:end], start


def indentation_of(line: str) -> int:
    return len(line) - len(line.lstrip(_INDENT_CHARS))


def dedent_lines(lines: List[str], anchor_column: int) -> List[str]:
    """Strip the common indentation, never more than ``anchor_column``.

    A line with less leading whitespace than the common width only loses its
    own indentation.
    """
    widths = [indentation_of(line) for line in lines if line.strip()]
    width = min([anchor_column, *widths]) if widths else 0
    if width <= 0:
        return list(lines)
    return [line[min(width, indentation_of(line)) :] for line in lines]


__all__ = ["dedent_lines", "indentation_of", "split_lines", "trim_blank_lines"]
