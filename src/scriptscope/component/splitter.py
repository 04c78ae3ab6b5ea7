"""Single-file component splitter.

Parses a component document with the ``html`` dialect and cuts it into its
top-level blocks. Block contents are sliced from the document bytes, so the
script blocks can be handed to the script pipeline with their document
position as origin.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

from scriptscope.core.logging import get_logger
from scriptscope.parsing.dialects import HTML
from scriptscope.parsing.materialize import Position, SyntaxNode, materialize
from scriptscope.parsing.pool import ParserPool, get_parser_pool

log = get_logger(__name__)

ELEMENT_KINDS = frozenset({"element", "script_element", "style_element"})
DEFAULT_CSS_MODULE = "$style"

AttrValue = str | bool


@dataclass
class SFCBlock:
    """One top-level block.

    ``start``/``end`` delimit ``content`` (the text between the start and end
    tags) in document coordinates; ``node`` is the whole element.
    """

    type: str
    content: str
    start: Position
    end: Position
    attrs: dict[str, AttrValue] = field(default_factory=dict)
    node: SyntaxNode | None = field(default=None, repr=False)

    def _attr(self, name: str) -> str | None:
        value = self.attrs.get(name)
        return value if isinstance(value, str) and value else None

    @property
    def lang(self) -> str | None:
        return self._attr("lang")

    @property
    def src(self) -> str | None:
        return self._attr("src")

    @property
    def setup(self) -> bool:
        return "setup" in self.attrs

    @property
    def scoped(self) -> bool:
        return "scoped" in self.attrs

    @property
    def module(self) -> str | None:
        """CSS-module name; a bare ``module`` attribute means ``$style``."""
        if "module" not in self.attrs:
            return None
        return self._attr("module") or DEFAULT_CSS_MODULE


@dataclass
class SFCDescriptor:
    template: SFCBlock | None = None
    script: SFCBlock | None = None
    script_setup: SFCBlock | None = None
    styles: list[SFCBlock] = field(default_factory=list)
    custom_blocks: list[SFCBlock] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    root: SyntaxNode | None = field(default=None, repr=False)


# ----------------------------------------------------------------------
# Tree helpers
# ----------------------------------------------------------------------


def start_tag(element: SyntaxNode) -> SyntaxNode | None:
    return element.find_child("start_tag", "self_closing_tag")


def tag_name(element: SyntaxNode) -> str:
    tag = start_tag(element)
    if tag is None:
        return ""
    name = tag.find_child("tag_name")
    return name.text if name is not None else ""


def attribute_value(attribute: SyntaxNode) -> str | None:
    """Unquoted value of an ``attribute`` node; ``None`` for bare attributes."""
    for child in attribute.children:
        if child.kind == "attribute_value":
            return child.text
        if child.kind == "quoted_attribute_value":
            inner = child.find_child("attribute_value")
            return inner.text if inner is not None else ""
    return None


def attributes(element: SyntaxNode) -> list[tuple[str, str | None, SyntaxNode]]:
    """``(name, value, node)`` for each attribute of the element's start tag."""
    tag = start_tag(element)
    if tag is None:
        return []
    found = []
    for attribute in tag.children_of("attribute"):
        name = attribute.find_child("attribute_name")
        if name is not None:
            found.append((name.text, attribute_value(attribute), attribute))
    return found


class _Offsets:
    """Row/column to byte offset conversion for one document."""

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.line_starts = [0]
        for index, byte in enumerate(data):
            if byte == 0x0A:
                self.line_starts.append(index + 1)

    def offset(self, position: Position) -> int:
        if position.row >= len(self.line_starts):
            return len(self.data)
        return min(self.line_starts[position.row] + position.column, len(self.data))

    def slice(self, start: Position, end: Position) -> str:
        return self.data[self.offset(start) : self.offset(end)].decode("utf-8", errors="replace")


def _block(element: SyntaxNode, kind: str, offsets: _Offsets) -> SFCBlock:
    tag = start_tag(element)
    content_start = tag.end if tag is not None else element.start
    if tag is not None and tag.kind == "self_closing_tag":
        content_end = content_start
    else:
        end_tag = element.find_child("end_tag")
        content_end = end_tag.start if end_tag is not None else element.end
    attrs: dict[str, AttrValue] = {}
    for name, value, _ in attributes(element):
        attrs[name] = True if value is None else value
    return SFCBlock(
        type=kind,
        content=offsets.slice(content_start, content_end),
        start=content_start,
        end=content_end,
        attrs=attrs,
        node=element,
    )


# ----------------------------------------------------------------------
# Splitting
# ----------------------------------------------------------------------


def split_tree(root: SyntaxNode, document: str) -> SFCDescriptor:
    """Collect the top-level blocks of an already materialized document."""
    descriptor = SFCDescriptor(root=root)
    offsets = _Offsets(document.encode("utf-8"))

    for node in root.children:
        if node.kind == "ERROR":
            descriptor.warnings.append(f"syntax error at line {node.start.row + 1}, column {node.start.column + 1}")
            continue
        if node.kind not in ELEMENT_KINDS:
            continue
        name = tag_name(node)
        if name == "template":
            block = _block(node, "template", offsets)
            if descriptor.template is not None:
                descriptor.warnings.append(f"duplicate <template> block at line {node.start.row + 1} ignored")
                continue
            descriptor.template = block
        elif name == "script":
            block = _block(node, "script", offsets)
            if block.setup:
                if descriptor.script_setup is not None:
                    descriptor.warnings.append(f"duplicate <script setup> block at line {node.start.row + 1} ignored")
                    continue
                descriptor.script_setup = block
            else:
                if descriptor.script is not None:
                    descriptor.warnings.append(f"duplicate <script> block at line {node.start.row + 1} ignored")
                    continue
                descriptor.script = block
        elif name == "style":
            descriptor.styles.append(_block(node, "style", offsets))
        elif name:
            descriptor.custom_blocks.append(_block(node, name, offsets))

    if descriptor.template is None and descriptor.script is None and descriptor.script_setup is None:
        descriptor.warnings.append("component has no <template> or <script> block")
    if (
        descriptor.script is not None
        and descriptor.script_setup is not None
        and (descriptor.script.lang or "js") != (descriptor.script_setup.lang or "js")
    ):
        descriptor.warnings.append("<script> and <script setup> use different languages")
    return descriptor


async def split_async(document: str, pool: ParserPool | None = None) -> SFCDescriptor:
    """Parse ``document`` with the html dialect and split it into blocks."""
    pool = pool or get_parser_pool()
    handle = await pool.acquire(HTML.name)
    try:
        tree: Any = handle.parse(document.encode("utf-8"))
        root = materialize(tree.root_node)
    finally:
        try:
            pool.release(HTML.name, handle)
        except Exception as e:
            log.warning("parser_release_failed", dialect=HTML.name, error=str(e))
    descriptor = split_tree(root, document)
    for warning in descriptor.warnings:
        log.warning("component_split_warning", message=warning)
    return descriptor


def split(document: str) -> SFCDescriptor:
    """Synchronous wrapper around :func:`split_async`."""
    return asyncio.run(split_async(document))
