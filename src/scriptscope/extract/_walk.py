"""Traversal and node helpers shared by the generic extractors."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Collection, Iterator
from dataclasses import dataclass
from typing import TypeVar

from scriptscope.core.logging import get_logger
from scriptscope.parsing.materialize import SyntaxNode

log = get_logger(__name__)

R = TypeVar("R")

_QUOTES = "'\"`"


@dataclass(frozen=True, slots=True)
class Visit:
    """A node reached by traversal plus the chain of nodes above it.

    The chain is a linked list of visits, so recording it costs O(1) per
    node and nothing is stored on the tree itself.
    """

    node: SyntaxNode
    parent: Visit | None = None

    @property
    def parent_node(self) -> SyntaxNode | None:
        return self.parent.node if self.parent is not None else None

    @property
    def parent_kind(self) -> str | None:
        return self.parent.node.kind if self.parent is not None else None

    def ancestors(self) -> Iterator[SyntaxNode]:
        """Nearest-first ancestor nodes (excluding the node itself)."""
        visit = self.parent
        while visit is not None:
            yield visit.node
            visit = visit.parent


def bfs(root: SyntaxNode) -> Iterator[Visit]:
    """Breadth-first traversal with a FIFO queue."""
    queue: deque[Visit] = deque([Visit(root)])
    while queue:
        visit = queue.popleft()
        yield visit
        for child in visit.node.children:
            queue.append(Visit(child, visit))


def collect(
    root: SyntaxNode,
    kinds: Collection[str],
    handler: Callable[[Visit], R | list[R] | None],
    extractor: str,
) -> list[R]:
    """Run ``handler`` on every node whose kind is in ``kinds``.

    A handler that raises is logged and skipped so one malformed subtree
    cannot abort extraction for the rest of the file.
    """
    results: list[R] = []
    for visit in bfs(root):
        node = visit.node
        if node.kind not in kinds:
            continue
        try:
            record = handler(visit)
        except Exception as e:
            log.warning(
                "extract_node_failed",
                extractor=extractor,
                kind=node.kind,
                row=node.start.row,
                column=node.start.column,
                error=str(e),
            )
            continue
        if record is None:
            continue
        if isinstance(record, list):
            results.extend(record)
        else:
            results.append(record)
    log.debug("extract_done", extractor=extractor, count=len(results))
    return results


# ----------------------------------------------------------------------
# Node helpers
# ----------------------------------------------------------------------


def child_text(node: SyntaxNode, *kinds: str) -> str | None:
    """Text of the first child matching ``kinds`` in priority order."""
    for kind in kinds:
        child = node.find_child(kind)
        if child is not None:
            return child.text
    return None


def strip_quotes(text: str) -> str:
    text = text.strip()
    if len(text) >= 2 and text[0] in _QUOTES and text[-1] == text[0]:
        return text[1:-1]
    return text


def squash(text: str) -> str:
    """Collapse runs of whitespace to single spaces."""
    return " ".join(text.split())


_PATTERN_KINDS = frozenset(
    {
        "identifier",
        "this",
        "object_pattern",
        "array_pattern",
        "rest_pattern",
        "assignment_pattern",
        "shorthand_property_identifier_pattern",
    }
)


def _pattern_name(pattern: SyntaxNode) -> str | None:
    if pattern.kind in ("identifier", "this", "shorthand_property_identifier_pattern"):
        return pattern.text
    if pattern.kind == "assignment_pattern":
        left = pattern.children[0] if pattern.children else None
        return _pattern_name(left) if left is not None else None
    if pattern.kind in ("rest_pattern", "object_pattern", "array_pattern"):
        return squash(pattern.text)
    return None


def parameter_names(params: SyntaxNode | None) -> list[str]:
    """Names of the parameters in a ``formal_parameters`` node."""
    if params is None:
        return []
    names: list[str] = []
    for child in params.children:
        if child.kind in ("required_parameter", "optional_parameter"):
            pattern = next((c for c in child.children if c.kind in _PATTERN_KINDS), None)
            name = _pattern_name(pattern) if pattern is not None else None
        elif child.kind in _PATTERN_KINDS:
            name = _pattern_name(child)
        else:
            continue
        if name:
            names.append(name)
    return names


def decorator_name(decorator: SyntaxNode) -> str | None:
    """``@Foo`` yields ``Foo``; ``@Foo(...)`` yields the callee ``Foo``."""
    ident = decorator.find_child("identifier", "member_expression")
    if ident is not None:
        return ident.text
    call = decorator.find_child("call_expression")
    if call is not None:
        callee = call.find_child("identifier", "member_expression")
        if callee is not None:
            return callee.text
    return None


def decorator_names(node: SyntaxNode) -> list[str]:
    """Names of decorators that are direct children of ``node``."""
    names: list[str] = []
    for decorator in node.children_of("decorator"):
        name = decorator_name(decorator)
        if name:
            names.append(name)
    return names


def visibility_of(node: SyntaxNode) -> str | None:
    """Visibility keyword from ``accessibility_modifier`` (or a bare keyword child)."""
    modifier = node.find_child("accessibility_modifier")
    if modifier is not None:
        return modifier.text.strip()
    for keyword in ("public", "private", "protected"):
        if node.has_child(keyword):
            return keyword
    return None


def type_parameter_names(node: SyntaxNode) -> list[str]:
    """Names declared in a direct ``type_parameters`` child."""
    params = node.find_child("type_parameters")
    if params is None:
        return []
    names: list[str] = []
    for param in params.children_of("type_parameter"):
        name = child_text(param, "type_identifier", "identifier")
        if name:
            names.append(name)
    return names
