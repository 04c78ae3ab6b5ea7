"""Tests for the syntax tree materializer."""

from __future__ import annotations

import pytest
import tree_sitter

from scriptscope.core.errors import ParseError
from scriptscope.parsing.dialects import TYPESCRIPT, load_language
from scriptscope.parsing.materialize import ORIGIN, Position, SyntaxNode, materialize


def _native_root(source: str) -> tree_sitter.Node:
    parser = tree_sitter.Parser(load_language(TYPESCRIPT))
    return parser.parse(source.encode("utf-8")).root_node


class TestPosition:
    def test_origin_shift_is_identity(self) -> None:
        assert Position(3, 4).shifted(ORIGIN) == Position(3, 4)

    def test_first_row_shifts_column(self) -> None:
        assert Position(0, 2).shifted(Position(5, 10)) == Position(5, 12)

    def test_later_rows_keep_column(self) -> None:
        assert Position(2, 2).shifted(Position(5, 10)) == Position(7, 2)


class TestMaterialize:
    def test_given_source_when_materialized_then_mirrors_native_tree(self) -> None:
        # Given
        native = _native_root("const a = 1;\nlet b = a;")

        # When
        root = materialize(native)

        # Then
        assert root.kind == "program"
        assert [c.kind for c in root.children] == ["lexical_declaration", "lexical_declaration"]
        assert root.children[1].start == Position(1, 0)
        assert root.children[0].text == "const a = 1;"

    def test_given_origin_when_materialized_then_positions_shifted(self) -> None:
        root = materialize(_native_root("x;"), Position(10, 4))
        assert root.children[0].start == Position(10, 4)

    def test_given_deep_nesting_when_materialized_then_no_recursion_error(self) -> None:
        """Nesting far beyond the interpreter recursion limit is copied iteratively."""
        depth = 3000
        root = materialize(_native_root("x = " + "[" * depth + "]" * depth + ";"))
        assert sum(1 for n in root.walk() if n.kind == "array") == depth

    def test_none_root_raises(self) -> None:
        with pytest.raises(ParseError):
            materialize(None)


class TestSyntaxNode:
    @pytest.fixture
    def tree(self) -> SyntaxNode:
        return materialize(_native_root("function f(a) { return a }"))

    def test_find_child(self, tree: SyntaxNode) -> None:
        fn = tree.find_child("function_declaration")
        assert fn is not None
        assert fn.find_child("identifier").text == "f"  # type: ignore[union-attr]
        assert tree.find_child("class_declaration") is None

    def test_children_of(self, tree: SyntaxNode) -> None:
        assert len(tree.children_of("function_declaration")) == 1

    def test_walk_is_preorder(self, tree: SyntaxNode) -> None:
        kinds = [n.kind for n in tree.walk()]
        assert kinds[0] == "program"
        assert kinds.index("function_declaration") < kinds.index("formal_parameters")

    def test_to_dict(self, tree: SyntaxNode) -> None:
        out = tree.to_dict()
        assert out["kind"] == "program"
        assert out["start"] == {"row": 0, "column": 0}
        assert out["children"][0]["kind"] == "function_declaration"
