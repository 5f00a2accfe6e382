# SecureAI-Scan — Static analysis for LLM integration risks
# Copyright (C) 2026 SecureAI-Scan Contributors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

"""Tree-sitter adapter for the rule engine.

Wraps tree-sitter nodes with the small read-only interface the rules
need: node kind, text, 1-based line, and child / descendant traversal.
Rules never inspect raw tree-sitter types directly; they switch on the
NodeKind returned by classify_node().
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional

import tree_sitter_javascript as tsjs
import tree_sitter_typescript as tsts
from tree_sitter import Language, Parser

from secureai.scanner.coordinator import discover_source_files

logger = logging.getLogger(__name__)

# Module-level parsers (initialized once)
_TS_LANGUAGE = Language(tsts.language_typescript())
_TSX_LANGUAGE = Language(tsts.language_tsx())
_JS_LANGUAGE = Language(tsjs.language())

_PARSERS: dict[str, Parser] = {
    ".ts": Parser(_TS_LANGUAGE),
    ".tsx": Parser(_TSX_LANGUAGE),
    ".js": Parser(_JS_LANGUAGE),
    ".jsx": Parser(_JS_LANGUAGE),
    ".mjs": Parser(_JS_LANGUAGE),
    ".cjs": Parser(_JS_LANGUAGE),
}

# Extras that tree-sitter reports as named children
_SKIPPED_TYPES = frozenset({"comment", "html_comment"})


class NodeKind(str, Enum):
    """Tagged classification of syntax nodes used by the rules."""

    CALL = "call"
    FUNCTION_LIKE = "function_like"
    VARIABLE_DECL = "variable_decl"
    BINARY_OP = "binary_op"
    TEMPLATE_LITERAL = "template_literal"
    MEMBER_ACCESS = "member_access"
    OBJECT_LITERAL = "object_literal"
    ARRAY_LITERAL = "array_literal"
    IDENTIFIER = "identifier"
    OTHER = "other"


_FUNCTION_TYPES = frozenset({
    "function_declaration",
    "function_expression",
    "function",  # older tree-sitter-javascript releases
    "generator_function_declaration",
    "generator_function",
    "arrow_function",
    "method_definition",
})

_KIND_BY_TYPE: dict[str, NodeKind] = {
    "variable_declarator": NodeKind.VARIABLE_DECL,
    "binary_expression": NodeKind.BINARY_OP,
    "template_string": NodeKind.TEMPLATE_LITERAL,
    "member_expression": NodeKind.MEMBER_ACCESS,
    "object": NodeKind.OBJECT_LITERAL,
    "array": NodeKind.ARRAY_LITERAL,
    "identifier": NodeKind.IDENTIFIER,
    "shorthand_property_identifier": NodeKind.IDENTIFIER,
}


class SyntaxNode:
    """Lightweight read-only wrapper around a tree-sitter node."""

    __slots__ = ("_node", "_code")

    def __init__(self, ts_node, code_bytes: bytes):
        self._node = ts_node
        self._code = code_bytes

    @property
    def type(self) -> str:
        return self._node.type

    @property
    def text(self) -> str:
        return self._code[self._node.start_byte:self._node.end_byte].decode("utf8", errors="replace")

    @property
    def line(self) -> int:
        """1-based line number of the node start."""
        return self._node.start_point[0] + 1

    @property
    def parent(self) -> Optional["SyntaxNode"]:
        p = self._node.parent
        return SyntaxNode(p, self._code) if p is not None else None

    @property
    def named_children(self) -> list["SyntaxNode"]:
        """Named children, comments excluded."""
        return [
            SyntaxNode(c, self._code)
            for c in self._node.children
            if c.is_named and c.type not in _SKIPPED_TYPES
        ]

    @property
    def has_error(self) -> bool:
        return self._node.has_error

    def child_by_field(self, name: str) -> Optional["SyntaxNode"]:
        """Get child by tree-sitter field name."""
        c = self._node.child_by_field_name(name)
        if c is not None:
            return SyntaxNode(c, self._code)
        return None

    def descendants(self) -> Iterator["SyntaxNode"]:
        """Yield all named descendants in document (pre-)order."""
        stack = list(reversed(self.named_children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.named_children))

    def descendants_of_kind(self, kind: NodeKind) -> list["SyntaxNode"]:
        return [n for n in self.descendants() if classify_node(n) is kind]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SyntaxNode):
            return NotImplemented
        return (
            self._code is other._code
            and self._node.start_byte == other._node.start_byte
            and self._node.end_byte == other._node.end_byte
            and self._node.type == other._node.type
        )

    def __hash__(self) -> int:
        return hash((self._node.start_byte, self._node.end_byte, self._node.type))

    def __repr__(self) -> str:
        text = self.text
        if len(text) > 40:
            text = text[:40] + "..."
        return f"SyntaxNode({self.type}, line={self.line}, {text!r})"


def classify_node(node: SyntaxNode) -> NodeKind:
    """Map a node onto the closed set of kinds the rules reason about."""
    node_type = node.type
    if node_type == "call_expression":
        # Tagged templates (fn`...`) carry a template_string instead of arguments
        args = node.child_by_field("arguments")
        if args is not None and args.type == "arguments":
            return NodeKind.CALL
        return NodeKind.OTHER
    if node_type in _FUNCTION_TYPES:
        return NodeKind.FUNCTION_LIKE
    return _KIND_BY_TYPE.get(node_type, NodeKind.OTHER)


# ── Accessors for specific kinds ──


def call_callee(call: SyntaxNode) -> Optional[SyntaxNode]:
    return call.child_by_field("function")


def call_callee_text(call: SyntaxNode) -> str:
    """Lowercased callee text, e.g. 'openai.chat.completions.create'."""
    callee = call_callee(call)
    return callee.text.lower() if callee is not None else ""


def call_arguments(call: SyntaxNode) -> list[SyntaxNode]:
    args = call.child_by_field("arguments")
    if args is None or args.type != "arguments":
        return []
    return args.named_children


def _parameter_name(param: SyntaxNode) -> Optional[str]:
    """Return the bound identifier of a single parameter, if simple."""
    node = param
    # TS wraps parameters: required_parameter / optional_parameter (pattern: ...)
    if node.type in ("required_parameter", "optional_parameter"):
        pattern = node.child_by_field("pattern")
        if pattern is None:
            return None
        node = pattern
    if node.type == "assignment_pattern":
        left = node.child_by_field("left")
        if left is None:
            return None
        node = left
    if node.type == "rest_pattern":
        inner = [c for c in node.named_children if c.type == "identifier"]
        if not inner:
            return None
        node = inner[0]
    if node.type == "identifier":
        return node.text
    return None


def function_parameters(fn: SyntaxNode) -> list[str]:
    """Names of the simple (identifier) parameters of a function-like node."""
    single = fn.child_by_field("parameter")
    if single is not None:
        name = _parameter_name(single)
        return [name] if name else []

    params = fn.child_by_field("parameters")
    if params is None:
        return []
    names = []
    for param in params.named_children:
        name = _parameter_name(param)
        if name:
            names.append(name)
    return names


def declaration_name(decl: SyntaxNode) -> Optional[str]:
    name = decl.child_by_field("name")
    if name is None or name.type != "identifier":
        return None
    return name.text


def declaration_initializer(decl: SyntaxNode) -> Optional[SyntaxNode]:
    return decl.child_by_field("value")


def is_string_concatenation(node: SyntaxNode) -> bool:
    """True for a binary '+' expression."""
    if classify_node(node) is not NodeKind.BINARY_OP:
        return False
    operator = node.child_by_field("operator")
    return operator is not None and operator.type == "+"


def member_root(node: SyntaxNode) -> SyntaxNode:
    """Follow a member-access chain down to its root object."""
    current = node
    while classify_node(current) is NodeKind.MEMBER_ACCESS:
        obj = current.child_by_field("object")
        if obj is None:
            break
        current = obj
    return current


def member_property_name(node: SyntaxNode) -> str:
    prop = node.child_by_field("property")
    return prop.text if prop is not None else ""


def object_property_values(obj: SyntaxNode, name: str) -> list[SyntaxNode]:
    """Values of `name: value` pairs (quoted keys accepted) in an object literal."""
    values = []
    for child in obj.named_children:
        if child.type != "pair":
            continue
        key = child.child_by_field("key")
        value = child.child_by_field("value")
        if key is None or value is None:
            continue
        if key.text.strip("'\"") == name:
            values.append(value)
    return values


def identifiers_in(node: SyntaxNode) -> list[SyntaxNode]:
    """The node itself (if an identifier) plus all identifier descendants."""
    found = [node] if classify_node(node) is NodeKind.IDENTIFIER else []
    found.extend(node.descendants_of_kind(NodeKind.IDENTIFIER))
    return found


# ── Source units and corpus ──


@dataclass(frozen=True)
class SourceUnit:
    """One parsed source file; path is root-relative with POSIX separators."""

    path: str
    root: SyntaxNode
    lines: tuple[str, ...]


@dataclass
class SyntaxCorpus:
    """All parsed source files of one scan. Read-only for rules."""

    root_path: Path
    units: list[SourceUnit] = field(default_factory=list)

    @property
    def files(self) -> list[str]:
        return [u.path for u in self.units]


def parse_source(text: str, suffix: str = ".ts") -> SyntaxNode:
    """Parse source text with the grammar matching the file suffix."""
    parser = _PARSERS.get(suffix.lower(), _PARSERS[".ts"])
    code_bytes = text.encode("utf8")
    tree = parser.parse(code_bytes)
    return SyntaxNode(tree.root_node, code_bytes)


def parse_source_unit(text: str, rel_path: str) -> SourceUnit:
    suffix = Path(rel_path).suffix
    root = parse_source(text, suffix)
    if root.has_error:
        logger.debug("Syntax errors while parsing %s (partial tree kept)", rel_path)
    return SourceUnit(path=rel_path, root=root, lines=tuple(text.splitlines()))


def load_corpus(root_path: Path, extra_ignore: Optional[list[str]] = None) -> SyntaxCorpus:
    """Discover and parse every source file under root_path.

    Files that cannot be read are skipped; they are simply absent from
    the corpus.
    """
    root_path = Path(root_path).resolve()
    corpus = SyntaxCorpus(root_path=root_path)

    for rel_path in discover_source_files(root_path, extra_ignore):
        full_path = root_path / rel_path
        try:
            text = full_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.debug("Skipping unreadable file %s: %s", rel_path, e)
            continue
        corpus.units.append(parse_source_unit(text, rel_path.as_posix()))

    logger.debug("Parsed %d source files under %s", len(corpus.units), root_path)
    return corpus
