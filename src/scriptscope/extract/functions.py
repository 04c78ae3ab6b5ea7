"""Function extraction."""

from __future__ import annotations

from scriptscope.config.constants import ANONYMOUS_NAME
from scriptscope.extract._types import serialize_annotation
from scriptscope.extract._walk import Visit, collect, parameter_names
from scriptscope.extract.models import FunctionInfo
from scriptscope.parsing.materialize import SyntaxNode

FUNCTION_KINDS = frozenset(
    {
        "function_declaration",
        "function_expression",
        "generator_function_declaration",
        "generator_function",
        "arrow_function",
        "method_definition",
    }
)

# Inline callbacks are reported with their call; class methods with their class.
_EXCLUDED_PARENTS = frozenset({"arguments", "class_body"})

_NAMED_BY_IDENTIFIER = frozenset(
    {"function_declaration", "function_expression", "generator_function_declaration", "generator_function"}
)
_METHOD_NAME_KINDS = ("property_identifier", "private_property_identifier", "string", "computed_property_name")
_RETURN_ANNOTATIONS = ("type_annotation", "type_predicate_annotation", "asserts_annotation")


def _name_from_parent(parent: SyntaxNode | None) -> str | None:
    """Binding name for an unnamed function assigned to something."""
    if parent is None:
        return None
    if parent.kind == "variable_declarator":
        ident = parent.find_child("identifier")
        return ident.text if ident is not None else None
    if parent.kind == "pair":
        key = parent.find_child("property_identifier", "string", "number")
        return key.text.strip("'\"") if key is not None else None
    if parent.kind in ("public_field_definition", "field_definition"):
        key = parent.find_child("property_identifier", "private_property_identifier")
        return key.text if key is not None else None
    if parent.kind == "assignment_expression" and parent.children:
        return parent.children[0].text
    return None


def _function_name(visit: Visit) -> str:
    node = visit.node
    if node.kind in _NAMED_BY_IDENTIFIER:
        ident = node.find_child("identifier")
        if ident is not None:
            return ident.text
    elif node.kind == "method_definition":
        key = node.find_child(*_METHOD_NAME_KINDS)
        if key is not None:
            return key.text.strip("'\"")
    return _name_from_parent(visit.parent_node) or ANONYMOUS_NAME


def _parameters(node: SyntaxNode) -> list[str]:
    params = node.find_child("formal_parameters")
    if params is not None:
        return parameter_names(params)
    # `x => ...` has a bare identifier as its single parameter
    if node.kind == "arrow_function":
        ident = node.find_child("identifier")
        if ident is not None:
            return [ident.text]
    return []


def _extract_function(visit: Visit) -> FunctionInfo | None:
    if visit.parent_kind in _EXCLUDED_PARENTS:
        return None
    node = visit.node
    return FunctionInfo(
        name=_function_name(visit),
        kind=node.kind,
        parameters=_parameters(node),
        return_type=serialize_annotation(node.find_child(*_RETURN_ANNOTATIONS)),
        is_async=node.has_child("async"),
        is_generator=node.kind.startswith("generator_") or node.has_child("*"),
        start=node.start,
        end=node.end,
    )


def extract_functions(root: SyntaxNode) -> list[FunctionInfo]:
    """Functions, arrows and object methods outside call arguments and class bodies."""
    return collect(root, FUNCTION_KINDS, _extract_function, "functions")
