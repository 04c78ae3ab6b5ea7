"""Tests for the shared extraction traversal."""

from __future__ import annotations

from collections.abc import Callable

from structlog.testing import capture_logs

from scriptscope.extract._walk import Visit, bfs, collect
from scriptscope.parsing.materialize import SyntaxNode

Parse = Callable[..., SyntaxNode]


class TestCollect:
    """collect() tests."""

    def test_given_raising_handler_then_node_skipped_and_traversal_continues(self, parse_tree: Parse) -> None:
        """One failing node is logged and dropped; the remaining nodes still produce records."""
        # Given
        root = parse_tree("const a = 1;\nconst b = 2;\nconst c = 3;\n")

        def handler(visit: Visit) -> str:
            if "b" in visit.node.text:
                raise ValueError("malformed declaration")
            return visit.node.text

        # When
        with capture_logs() as logs:
            records = collect(root, {"lexical_declaration"}, handler, "test")

        # Then
        assert records == ["const a = 1;", "const c = 3;"]
        failures = [e for e in logs if e["event"] == "extract_node_failed"]
        assert len(failures) == 1
        assert failures[0]["log_level"] == "warning"
        assert failures[0]["extractor"] == "test"
        assert failures[0]["kind"] == "lexical_declaration"
        assert failures[0]["row"] == 1
        assert failures[0]["error"] == "malformed declaration"

    def test_given_list_results_then_flattened(self, parse_tree: Parse) -> None:
        root = parse_tree("let x = 1, y = 2;\n")

        names = collect(
            root,
            {"lexical_declaration"},
            lambda visit: [d.text.split(" ")[0] for d in visit.node.children_of("variable_declarator")],
            "test",
        )

        assert names == ["x", "y"]


class TestBfs:
    """bfs() traversal order."""

    def test_given_tree_then_parents_before_children(self, parse_tree: Parse) -> None:
        root = parse_tree("function f() { g() }\n")

        kinds = [visit.node.kind for visit in bfs(root)]

        assert kinds[0] == "program"
        assert kinds.index("function_declaration") < kinds.index("call_expression")
