"""Textual serialization of type annotations.

Most types serialize to their trimmed source text. Array, union,
intersection, tuple, function, conditional, infer, parenthesized and
generic forms are rebuilt from their parts so spacing and line breaks
inside them are normalized.
"""

from __future__ import annotations

from scriptscope.config.constants import UNKNOWN_TYPE
from scriptscope.extract._walk import squash
from scriptscope.parsing.materialize import SyntaxNode

_TOKENS = frozenset(
    {":", "?", "|", "&", ",", ";", "(", ")", "[", "]", "<", ">", "=>", "extends", "infer", "readonly"}
)
_ANNOTATION_KINDS = frozenset({"type_annotation", "type_predicate_annotation", "asserts_annotation"})


def _operands(node: SyntaxNode) -> list[SyntaxNode]:
    return [child for child in node.children if child.kind not in _TOKENS]


def _flatten(node: SyntaxNode, kind: str) -> list[SyntaxNode]:
    """Operands of a left-nested binary type (``A | B | C``)."""
    out: list[SyntaxNode] = []
    stack = [node]
    while stack:
        current = stack.pop()
        if current.kind != kind:
            out.append(current)
            continue
        stack.extend(reversed(_operands(current)))
    return out


def _render_parameter(param: SyntaxNode) -> str:
    pattern = next(
        (c for c in param.children if c.kind not in _ANNOTATION_KINDS and c.kind not in _TOKENS),
        None,
    )
    name = squash(pattern.text) if pattern is not None else "param"
    if param.kind == "optional_parameter":
        name += "?"
    annotation = param.find_child("type_annotation")
    if annotation is None:
        return name
    return f"{name}: {serialize_annotation(annotation)}"


def render_type(node: SyntaxNode) -> str:
    """Serialize a type node."""
    match node.kind:
        case "array_type":
            operands = _operands(node)
            if not operands:
                return node.text.strip()
            return f"{render_type(operands[0])}[]"
        case "readonly_type":
            operands = _operands(node)
            if not operands:
                return node.text.strip()
            return f"readonly {render_type(operands[0])}"
        case "union_type":
            return " | ".join(render_type(t) for t in _flatten(node, "union_type"))
        case "intersection_type":
            return " & ".join(render_type(t) for t in _flatten(node, "intersection_type"))
        case "tuple_type":
            return "[" + ", ".join(render_type(t) for t in _operands(node)) + "]"
        case "parenthesized_type":
            operands = _operands(node)
            if not operands:
                return node.text.strip()
            return f"({render_type(operands[0])})"
        case "function_type":
            params = node.find_child("formal_parameters")
            rendered = [
                _render_parameter(p)
                for p in (params.children if params is not None else ())
                if p.kind in ("required_parameter", "optional_parameter")
            ]
            returns = [c for c in _operands(node) if c.kind not in ("formal_parameters", "type_parameters")]
            ret = render_type(returns[-1]) if returns else UNKNOWN_TYPE
            return f"({', '.join(rendered)}) => {ret}"
        case "conditional_type":
            parts = _operands(node)
            if len(parts) != 4:
                return node.text.strip()
            check, extends, when_true, when_false = (render_type(p) for p in parts)
            return f"{check} extends {extends} ? {when_true} : {when_false}"
        case "infer_type":
            name = node.find_child("type_identifier")
            return f"infer {name.text}" if name is not None else node.text.strip()
        case "generic_type":
            name = node.find_child("type_identifier", "nested_type_identifier", "identifier")
            args = node.find_child("type_arguments")
            if name is None or args is None:
                return node.text.strip()
            return f"{name.text}<{', '.join(render_type(a) for a in _operands(args))}>"
        case _:
            return node.text.strip()


def serialize_annotation(annotation: SyntaxNode | None) -> str:
    """Serialize a ``type_annotation`` (leading ``:`` stripped).

    Returns ``"unknown"`` when there is no annotation or it has no type.
    """
    if annotation is None:
        return UNKNOWN_TYPE
    if annotation.kind not in _ANNOTATION_KINDS:
        return render_type(annotation)
    type_node = next((c for c in annotation.children if c.kind != ":"), None)
    if type_node is None:
        return UNKNOWN_TYPE
    return render_type(type_node)


def optional_annotation(node: SyntaxNode) -> str | None:
    """Serialized direct ``type_annotation`` child, or None when absent."""
    annotation = node.find_child("type_annotation")
    if annotation is None:
        return None
    return serialize_annotation(annotation)
