"""Top-level function call extraction."""

from __future__ import annotations

from scriptscope.extract._walk import Visit, collect
from scriptscope.extract.models import FunctionCallInfo
from scriptscope.parsing.materialize import SyntaxNode

# A call is top-level only when its immediate parent is one of these ...
TOP_LEVEL_PARENT_KINDS = frozenset(
    {
        "program",
        "export_statement",
        "lexical_declaration",
        "expression_statement",
    }
)

# ... and nothing above it is a call or a function body.
_ENCLOSING_KINDS = frozenset(
    {
        "call_expression",
        "function_declaration",
        "function_expression",
        "generator_function_declaration",
        "generator_function",
        "arrow_function",
        "method_definition",
    }
)

_ARGUMENT_TOKENS = frozenset({",", "(", ")"})


def is_top_level_call(visit: Visit) -> bool:
    if visit.parent is None:
        return True
    if visit.parent_kind not in TOP_LEVEL_PARENT_KINDS:
        return False
    return not any(ancestor.kind in _ENCLOSING_KINDS for ancestor in visit.ancestors())


def _callee_name(call: SyntaxNode) -> str | None:
    if not call.children:
        return None
    callee = call.children[0]
    if callee.kind == "identifier":
        return callee.text
    if callee.kind == "member_expression":
        prop = callee.find_child("property_identifier", "private_property_identifier")
        return prop.text if prop is not None else None
    return None


def _arguments(call: SyntaxNode) -> list[str]:
    args = call.find_child("arguments")
    if args is None:
        # Tagged templates carry a template string instead of an argument list
        template = call.find_child("template_string")
        return [template.text.strip()] if template is not None else []
    return [child.text.strip() for child in args.children if child.kind not in _ARGUMENT_TOKENS]


def _extract_call(visit: Visit) -> FunctionCallInfo | None:
    if not is_top_level_call(visit):
        return None
    node = visit.node
    name = _callee_name(node)
    if not name:
        return None
    return FunctionCallInfo(name=name, arguments=_arguments(node), start=node.start, end=node.end)


def extract_function_calls(root: SyntaxNode) -> list[FunctionCallInfo]:
    """Calls made at module level, excluding nested calls and callbacks."""
    return collect(root, ("call_expression",), _extract_call, "function_calls")
