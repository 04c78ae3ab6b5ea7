"""Module-level variable extraction."""

from __future__ import annotations

from scriptscope.extract._types import optional_annotation
from scriptscope.extract._walk import Visit, collect, decorator_names
from scriptscope.extract.models import VariableInfo
from scriptscope.parsing.materialize import SyntaxNode

DECLARATION_KINDS = frozenset({"lexical_declaration", "variable_declaration"})

# Node kinds accepted as a declarator's value text
VALUE_KINDS = frozenset(
    {
        "expression_statement",
        "assignment_expression",
        "string",
        "template_string",
        "number",
        "true",
        "false",
        "null",
        "undefined",
        "identifier",
        "member_expression",
        "array",
        "object",
        "unary_expression",
        "binary_expression",
        "ternary_expression",
        "call_expression",
        "new_expression",
        "await_expression",
        "arrow_function",
        "function_expression",
        "as_expression",
        "satisfies_expression",
        "parenthesized_expression",
        "regex",
    }
)


def _is_module_level(visit: Visit) -> tuple[bool, SyntaxNode | None]:
    """(is module level, enclosing export statement if any)."""
    parent = visit.parent
    if parent is None:
        return False, None
    if parent.node.kind == "program":
        return True, None
    if parent.node.kind == "export_statement" and parent.parent_kind == "program":
        return True, parent.node
    return False, None


def _value_text(declarator: SyntaxNode) -> str | None:
    seen_equals = False
    for child in declarator.children:
        if child.kind == "=":
            seen_equals = True
            continue
        if seen_equals and child.kind in VALUE_KINDS:
            return child.text.strip()
    return None


def _extract_declaration(visit: Visit) -> list[VariableInfo] | None:
    module_level, export = _is_module_level(visit)
    if not module_level:
        return None
    node = visit.node
    is_const = node.has_child("const")
    is_exported = export is not None
    decorators = decorator_names(node)
    records: list[VariableInfo] = []
    for declarator in node.children_of("variable_declarator"):
        name_node = declarator.children[0] if declarator.children else None
        if name_node is None or name_node.kind != "identifier":
            # Destructuring patterns have no single name
            continue
        records.append(
            VariableInfo(
                name=name_node.text,
                type=optional_annotation(declarator),
                value=_value_text(declarator),
                is_const=is_const,
                is_readonly=node.has_child("readonly"),
                is_exported=is_exported,
                scope="module" if is_exported else "local",
                decorators=decorators,
                start=declarator.start,
                end=declarator.end,
            )
        )
    return records


def extract_variables(root: SyntaxNode) -> list[VariableInfo]:
    """Variables declared at module level (directly or via ``export``)."""
    return collect(root, DECLARATION_KINDS, _extract_declaration, "variables")
