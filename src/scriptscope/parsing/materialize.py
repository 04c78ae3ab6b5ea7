"""Syntax tree materializer.

Copies a native tree-sitter tree into an owned, immutable ``SyntaxNode``
tree that no longer references parser memory. The copy is iterative so
deeply nested inputs cannot exhaust the interpreter's recursion limit.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from scriptscope.core.errors import InternalError, ParseError


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Zero-based row/column pair."""

    row: int
    column: int

    def shifted(self, origin: Position) -> Position:
        """Translate a block-relative position into document coordinates."""
        if origin.row == 0 and origin.column == 0:
            return self
        column = self.column + origin.column if self.row == 0 else self.column
        return Position(self.row + origin.row, column)

    def to_dict(self) -> dict[str, int]:
        return {"row": self.row, "column": self.column}


ORIGIN = Position(0, 0)


@dataclass(frozen=True, slots=True)
class SyntaxNode:
    """One node of a materialized syntax tree."""

    kind: str
    text: str
    start: Position
    end: Position
    children: tuple[SyntaxNode, ...] = field(default=(), repr=False)

    def find_child(self, *kinds: str) -> SyntaxNode | None:
        """First direct child whose kind is one of ``kinds``."""
        for child in self.children:
            if child.kind in kinds:
                return child
        return None

    def children_of(self, *kinds: str) -> list[SyntaxNode]:
        return [child for child in self.children if child.kind in kinds]

    def has_child(self, *kinds: str) -> bool:
        return any(child.kind in kinds for child in self.children)

    def walk(self) -> Iterator[SyntaxNode]:
        """Depth-first pre-order iteration (explicit stack)."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def to_dict(self) -> dict[str, Any]:
        """Serialize without recursion."""
        root: dict[str, Any] = {}
        stack: list[tuple[SyntaxNode, dict[str, Any]]] = [(self, root)]
        while stack:
            node, out = stack.pop()
            out["kind"] = node.kind
            out["text"] = node.text
            out["start"] = node.start.to_dict()
            out["end"] = node.end.to_dict()
            out["children"] = []
            for child in node.children:
                child_out: dict[str, Any] = {}
                out["children"].append(child_out)
                stack.append((child, child_out))
        return root


def _point(point: Any, origin: Position) -> Position:
    return Position(point[0], point[1]).shifted(origin)


def _decode(raw: bytes | None) -> str:
    if raw is None:
        return ""
    return raw.decode("utf-8", errors="replace")


def materialize(native_root: Any, origin: Position = ORIGIN) -> SyntaxNode:
    """Copy a native tree-sitter node (and its subtree) into SyntaxNodes.

    Args:
        native_root: ``tree_sitter.Node`` (usually ``tree.root_node``).
        origin: Document position of the parsed text's first byte.

    Raises:
        ParseError: If there is no root to copy.
    """
    if native_root is None:
        raise ParseError.parse_failed("<source>", "parser returned no root node")

    # Frames: (native node, its children, next child index); built children
    # accumulate in a parallel stack until their parent is finished.
    frames: list[tuple[Any, list[Any], int]] = [(native_root, list(native_root.children), 0)]
    built: list[list[SyntaxNode]] = [[]]

    while frames:
        node, children, index = frames[-1]
        if index < len(children):
            frames[-1] = (node, children, index + 1)
            child = children[index]
            if child is None:
                continue
            frames.append((child, list(child.children), 0))
            built.append([])
            continue

        frames.pop()
        copied = SyntaxNode(
            kind=node.type,
            text=_decode(node.text),
            start=_point(node.start_point, origin),
            end=_point(node.end_point, origin),
            children=tuple(built.pop()),
        )
        if not built:
            return copied
        built[-1].append(copied)

    raise InternalError.unexpected("materialize finished without a root", kind=native_root.type)
