"""Tree-sitter powered C# snippet extractor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

import tree_sitter_c_sharp
from tree_sitter import Language, Node, Parser, Tree

from .base import Extractor
from .text import dedent_lines, split_lines, trim_blank_lines
from ..filesystem import FileSystem
from ..logging import get_logger
from ..models import Fragment
from ..options import OptionError, QueryOptions
from ..result import Failure, Outcome, Success

_LOGGER = get_logger("extractors.csharp")

CSHARP_LANGUAGE = Language(tree_sitter_c_sharp.language())

_EXTENSION = ".cs"
_CONTENT_KIND = "cs"

_COMMENT_BEGIN = "// begin-snippet: "
_COMMENT_END = "// end-snippet"

_DECLARATION_TYPES = {
    "class_declaration",
    "struct_declaration",
    "interface_declaration",
    "record_declaration",
    "record_struct_declaration",
    "enum_declaration",
    "method_declaration",
    "constructor_declaration",
    "property_declaration",
    "delegate_declaration",
}

# Member lists sit between a declaration and its members in the tree.
_CONTAINER_TYPES = {"declaration_list", "enum_member_declaration_list"}

_BODY_TYPES = {
    "block",
    "arrow_expression_clause",
    "accessor_list",
    "declaration_list",
    "enum_member_declaration_list",
}


class _Kind(Enum):
    NONE = "none"
    REGION = "region"
    COMMENT = "comment"
    SYMBOL = "symbol"


@dataclass
class _Match:
    kind: _Kind = _Kind.NONE
    start: int = -1
    end: int = -1
    anchor_column: int = 0


class CSharpExtractor(Extractor):
    """Extracts regions, comment-delimited blocks and symbols from C# files."""

    name = "cs"
    preferred_renderer = "code-block"

    def __init__(self, file_system: FileSystem) -> None:
        super().__init__(file_system)
        self._parser = Parser(CSHARP_LANGUAGE)
        self._parse_cache: Dict[str, Tuple[bytes, Tree]] = {}

    def can_handle(self, source: str, name: str, options: QueryOptions) -> Outcome[None]:
        if not source.lower().endswith(_EXTENSION):
            return Failure(f"'{source}' not end with {_EXTENSION}")
        if not self._fs.file_exists(source):
            return Failure(f"Source file '{source}' not found.")
        return Success()

    def extract(self, source: str, name: str, options: QueryOptions) -> Outcome[Fragment]:
        probe = self.can_handle(source, name, options)
        if isinstance(probe, Failure):
            return probe

        try:
            body_only = options.get_bool("body-only", False)
        except OptionError as exc:
            return Failure(f"Invalid option for snippet '{name}': {exc}")

        try:
            source_bytes, tree = self._parse(source)
        except FileNotFoundError:
            return Failure(f"Source file '{source}' not found.")
        except UnicodeError as exc:
            return Failure(f"Source file '{source}' is not valid UTF-8: {exc.reason}.")

        finder = _SnippetFinder(source_bytes, name, body_only)
        match = finder.find(tree.root_node)

        if match.kind is _Kind.NONE:
            return Failure(f"Snippet '{name}' not found in file '{source}'.")
        if match.end < 0:
            return Failure(
                f"Snippet '{name}' is missing its closing comment or region in '{source}'."
            )

        raw = source_bytes[match.start : match.end].decode("utf-8", errors="replace")
        first_line = source_bytes.count(b"\n", 0, match.start)
        lines, dropped = trim_blank_lines(split_lines(raw))
        first_line += dropped
        lines = dedent_lines(lines, match.anchor_column)

        _LOGGER.debug(
            "Matched %s snippet '%s' in %s (%d lines)", match.kind.value, name, source, len(lines)
        )
        return Success(
            Fragment(
                source=source,
                name=name,
                content="\n".join(lines),
                content_kind=_CONTENT_KIND,
                start_line=first_line,
                end_line=first_line + max(len(lines) - 1, 0),
            )
        )

    def _parse(self, source: str) -> Tuple[bytes, Tree]:
        cached = self._parse_cache.get(source)
        if cached is not None:
            _LOGGER.debug("Parse cache hit for %s", source)
            return cached
        source_bytes = self._fs.read_text(source).encode("utf-8")
        # preprocessor directives only parse when terminated by a newline
        if not source_bytes.endswith(b"\n"):
            source_bytes += b"\n"
        tree = self._parser.parse(source_bytes)
        self._parse_cache[source] = (source_bytes, tree)
        _LOGGER.debug("Parsed %s (%d bytes)", source, len(source_bytes))
        return source_bytes, tree


class _SnippetFinder:
    """Walks a syntax tree in document order looking for one snippet."""

    def __init__(self, source: bytes, snippet_name: str, body_only: bool) -> None:
        self._source = source
        self._name = snippet_name
        self._name_lower = snippet_name.lower()
        self._body_only = body_only
        self._depth = 0
        self._match = _Match()

    def find(self, root: Node) -> _Match:
        stack: List[Node] = [root]
        while stack and self._match.end < 0:
            node = stack.pop()
            self._visit(node)
            stack.extend(reversed(node.children))
        return self._match

    def _visit(self, node: Node) -> None:
        kind = self._match.kind
        node_type = node.type
        if node_type == "comment":
            self._visit_comment(node)
        elif "endregion" in node_type:
            if kind is _Kind.REGION:
                self._close(node)
        elif "region" in node_type:
            if kind in (_Kind.NONE, _Kind.REGION):
                self._open(node, _Kind.REGION, self._region_label(node))
        elif node_type in _DECLARATION_TYPES and kind is _Kind.NONE:
            self._visit_declaration(node)

    def _visit_comment(self, node: Node) -> None:
        text = self._text(node).strip()
        lowered = text.lower()
        kind = self._match.kind
        if lowered.startswith(_COMMENT_BEGIN) and kind in (_Kind.NONE, _Kind.COMMENT):
            self._open(node, _Kind.COMMENT, text[len(_COMMENT_BEGIN) :].strip())
        elif lowered.startswith(_COMMENT_END) and kind is _Kind.COMMENT:
            self._close(node)

    def _open(self, node: Node, kind: _Kind, label: str) -> None:
        match = self._match
        if match.kind is _Kind.NONE and label.lower().startswith(self._name_lower):
            match.kind = kind
            match.start = self._line_end(node.start_byte)
            match.anchor_column = self._column(node.start_byte)
        if match.kind is not _Kind.NONE:
            self._depth += 1

    def _close(self, node: Node) -> None:
        self._depth -= 1
        if self._depth == 0:
            if self._starts_line(node):
                self._match.end = self._line_start(node.start_byte)
            else:
                self._match.end = node.start_byte

    def _visit_declaration(self, node: Node) -> None:
        identifier = self._identifier(node)
        if not identifier or not self._name_lower.endswith(identifier.lower()):
            return
        if not self._path_matches(node):
            return

        if self._body_only:
            members = self._body_members(node)
            if members is None:
                return
            first, last = members
        else:
            first, last = node, node

        match = self._match
        match.kind = _Kind.SYMBOL
        match.start = self._attached_start(first)
        match.end = last.end_byte
        match.anchor_column = self._column(first.start_byte)

    def _path_matches(self, node: Node) -> bool:
        segments = self._name.split(".")
        current: Optional[Node] = node
        while segments:
            if current is None or current.type not in _DECLARATION_TYPES:
                return False
            identifier = self._identifier(current)
            if identifier is None or identifier.lower() != segments.pop().lower():
                return False
            current = self._enclosing(current)
        return True

    @staticmethod
    def _enclosing(node: Node) -> Optional[Node]:
        parent = node.parent
        while parent is not None and parent.type in _CONTAINER_TYPES:
            parent = parent.parent
        return parent

    def _identifier(self, node: Node) -> Optional[str]:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return None
        return self._text(name_node)

    def _body_members(self, node: Node) -> Optional[Tuple[Node, Node]]:
        body = self._body_node(node)
        if body is None:
            return None
        members = body.named_children
        if not members:
            return None
        return members[0], members[-1]

    @staticmethod
    def _body_node(node: Node) -> Optional[Node]:
        if node.type == "delegate_declaration":
            return None
        for field_name in ("body", "accessors"):
            body = node.child_by_field_name(field_name)
            if body is not None and body.type in _BODY_TYPES:
                return body
        for child in node.children:
            if child.type in _BODY_TYPES:
                return child
        return None

    def _attached_start(self, node: Node) -> int:
        """Return where ``node`` starts, widened over comments directly above it."""
        start_node = node
        sibling = node.prev_sibling
        while (
            sibling is not None
            and sibling.type == "comment"
            and self._starts_line(sibling)
            and not self._is_marker_comment(sibling)
            and self._source.count(b"\n", sibling.end_byte, start_node.start_byte) <= 1
        ):
            start_node = sibling
            sibling = sibling.prev_sibling
        if self._starts_line(start_node):
            return self._line_start(start_node.start_byte)
        return start_node.start_byte

    def _is_marker_comment(self, node: Node) -> bool:
        lowered = self._text(node).strip().lower()
        return lowered.startswith(_COMMENT_BEGIN) or lowered.startswith(_COMMENT_END)

    def _region_label(self, node: Node) -> str:
        line = self._source[node.start_byte : self._line_end(node.start_byte)]
        directive = line.decode("utf-8", errors="replace").strip().lstrip("#").lstrip()
        if directive.lower().startswith("region"):
            return directive[len("region") :].strip()
        return ""

    def _starts_line(self, node: Node) -> bool:
        prefix = self._source[self._line_start(node.start_byte) : node.start_byte]
        return not prefix.strip()

    def _line_start(self, position: int) -> int:
        return self._source.rfind(b"\n", 0, position) + 1

    def _line_end(self, position: int) -> int:
        index = self._source.find(b"\n", position)
        return len(self._source) if index < 0 else index

    def _column(self, position: int) -> int:
        return position - self._line_start(position)

    def _text(self, node: Node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


__all__ = ["CSharpExtractor", "CSHARP_LANGUAGE"]
