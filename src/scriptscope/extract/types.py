"""Module-level interface, type alias and enum extraction.

Only declarations whose direct parent is the program are reported, so
nested and exported declarations are skipped.
"""

from __future__ import annotations

from scriptscope.extract._types import render_type, serialize_annotation
from scriptscope.extract._walk import (
    Visit,
    child_text,
    collect,
    parameter_names,
    strip_quotes,
    type_parameter_names,
)
from scriptscope.extract.models import TypeInfo, TypeMethodInfo, TypePropertyInfo
from scriptscope.parsing.materialize import SyntaxNode

TYPE_KINDS = frozenset({"interface_declaration", "type_alias_declaration", "enum_declaration"})

_MEMBER_NAME_KINDS = ("property_identifier", "string", "number", "computed_property_name")
_BODY_KINDS = ("interface_body", "object_type")
_ALIAS_SKIP = frozenset({"type", "type_identifier", "type_parameters", "=", ";"})


def _members(body: SyntaxNode, info: TypeInfo) -> None:
    for member in body.children:
        name_node = member.find_child(*_MEMBER_NAME_KINDS)
        if name_node is None:
            continue
        name = strip_quotes(name_node.text)
        if member.kind == "property_signature":
            info.properties.append(
                TypePropertyInfo(
                    name=name,
                    type=serialize_annotation(member.find_child("type_annotation")),
                    is_optional=member.has_child("?"),
                    is_readonly=member.has_child("readonly"),
                    start=member.start,
                    end=member.end,
                )
            )
        elif member.kind == "method_signature":
            info.methods.append(
                TypeMethodInfo(
                    name=name,
                    parameters=parameter_names(member.find_child("formal_parameters")),
                    return_type=serialize_annotation(member.find_child("type_annotation")),
                    is_optional=member.has_child("?"),
                    start=member.start,
                    end=member.end,
                )
            )


def _interface(node: SyntaxNode, name: str) -> TypeInfo:
    info = TypeInfo(
        name=name,
        kind="interface",
        type_parameters=type_parameter_names(node),
        start=node.start,
        end=node.end,
    )
    clause = node.find_child("extends_type_clause", "extends_clause")
    if clause is not None:
        info.extends = [render_type(c) for c in clause.children if c.kind not in ("extends", ",")]
    body = node.find_child(*_BODY_KINDS)
    if body is not None:
        _members(body, info)
    return info


def _alias(node: SyntaxNode, name: str) -> TypeInfo:
    info = TypeInfo(
        name=name,
        kind="type",
        type_parameters=type_parameter_names(node),
        start=node.start,
        end=node.end,
    )
    value = next((c for c in node.children if c.kind not in _ALIAS_SKIP), None)
    if value is not None:
        info.type_body = render_type(value)
        if value.kind == "object_type":
            _members(value, info)
    return info


def _enum(node: SyntaxNode, name: str) -> TypeInfo:
    info = TypeInfo(name=name, kind="enum", start=node.start, end=node.end)
    body = node.find_child("enum_body")
    if body is None:
        return info
    for member in body.children:
        if member.kind in ("property_identifier", "string"):
            info.enum_members.append(strip_quotes(member.text))
        elif member.kind == "enum_assignment":
            key = member.find_child("property_identifier", "string")
            if key is not None:
                info.enum_members.append(strip_quotes(key.text))
    return info


def _extract_type(visit: Visit) -> TypeInfo | None:
    # Exported declarations sit under export_statement and are reported by the
    # export extractor instead
    if visit.parent_kind != "program":
        return None
    node = visit.node
    if node.kind == "enum_declaration":
        name = child_text(node, "identifier")
        return _enum(node, name) if name else None
    name = child_text(node, "type_identifier")
    if not name:
        return None
    if node.kind == "interface_declaration":
        return _interface(node, name)
    return _alias(node, name)


def extract_types(root: SyntaxNode) -> list[TypeInfo]:
    return collect(root, TYPE_KINDS, _extract_type, "types")
