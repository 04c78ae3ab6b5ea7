"""Shared fixtures for extractor tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest
import tree_sitter

from scriptscope.parsing.dialects import get_dialect, load_language
from scriptscope.parsing.materialize import SyntaxNode, materialize


@pytest.fixture
def parse_tree() -> Callable[..., SyntaxNode]:
    """Materialize source with a plain parser (no pool)."""

    def _parse(source: str, dialect: str = "typescript") -> SyntaxNode:
        parser = tree_sitter.Parser(load_language(get_dialect(dialect)))
        return materialize(parser.parse(source.encode("utf-8")).root_node)

    return _parse
