"""Shared fixtures for component analysis tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest
import tree_sitter

from scriptscope.component.analyzer import ScriptAnalysis, analyze_script
from scriptscope.component.lowering import lower_program
from scriptscope.component.script_tree import Program
from scriptscope.parsing.dialects import get_dialect, load_language
from scriptscope.parsing.materialize import ORIGIN, Position


@pytest.fixture
def lower() -> Callable[..., Program]:
    """Lower a script into the typed tree with a plain parser."""

    def _lower(source: str, dialect: str = "typescript", origin: Position = ORIGIN) -> Program:
        parser = tree_sitter.Parser(load_language(get_dialect(dialect)))
        tree = parser.parse(source.encode("utf-8"))
        return lower_program(tree.root_node, origin)

    return _lower


@pytest.fixture
def analyze(lower: Callable[..., Program]) -> Callable[..., ScriptAnalysis]:
    def _analyze(source: str, *, script_setup: bool = False) -> ScriptAnalysis:
        return analyze_script(lower(source), script_setup=script_setup)

    return _analyze
