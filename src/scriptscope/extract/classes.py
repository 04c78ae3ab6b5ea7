"""Class extraction."""

from __future__ import annotations

from scriptscope.extract._types import optional_annotation, serialize_annotation
from scriptscope.extract._walk import (
    Visit,
    child_text,
    collect,
    decorator_name,
    decorator_names,
    parameter_names,
    type_parameter_names,
    visibility_of,
)
from scriptscope.extract.models import AccessorInfo, ClassInfo, MethodInfo, PropertyInfo
from scriptscope.parsing.materialize import SyntaxNode

CLASS_KINDS = frozenset({"class_declaration", "abstract_class_declaration", "class_expression"})

_MEMBER_NAME_KINDS = (
    "property_identifier",
    "private_property_identifier",
    "computed_property_name",
    "string",
    "number",
)
_FIELD_KINDS = frozenset({"public_field_definition", "field_definition"})
_HERITAGE_SKIP = frozenset({"extends", "implements", ",", "type_arguments"})


def _member_name(member: SyntaxNode) -> str | None:
    key = member.find_child(*_MEMBER_NAME_KINDS)
    if key is None:
        return None
    return key.text.strip("'\"")


def _is_static(member: SyntaxNode) -> bool:
    return member.has_child("static", "static get")


def _heritage(node: SyntaxNode) -> tuple[str | None, list[str]]:
    heritage = node.find_child("class_heritage")
    if heritage is None:
        return None, []
    extends: str | None = None
    implements: list[str] = []
    extends_clause = heritage.find_child("extends_clause")
    if extends_clause is not None:
        value = next((c for c in extends_clause.children if c.kind not in _HERITAGE_SKIP), None)
        extends = value.text if value is not None else None
    elif heritage.has_child("extends"):
        # Plain-script grammar: `extends` and the expression sit directly here
        value = next((c for c in heritage.children if c.kind not in _HERITAGE_SKIP), None)
        extends = value.text if value is not None else None
    implements_clause = heritage.find_child("implements_clause")
    if implements_clause is not None:
        implements = [c.text for c in implements_clause.children if c.kind not in _HERITAGE_SKIP]
    return extends, implements


def _method(member: SyntaxNode, decorators: list[str]) -> MethodInfo | None:
    name = _member_name(member)
    if name is None:
        return None
    return MethodInfo(
        name=name,
        parameters=parameter_names(member.find_child("formal_parameters")),
        return_type=serialize_annotation(member.find_child("type_annotation")),
        type_parameters=type_parameter_names(member),
        decorators=decorators,
        is_static=_is_static(member),
        is_async=member.has_child("async"),
        is_abstract=member.kind == "abstract_method_signature" or member.has_child("abstract"),
        visibility=visibility_of(member),  # type: ignore[arg-type]
        start=member.start,
        end=member.end,
    )


def _accessor(member: SyntaxNode, decorators: list[str]) -> AccessorInfo | None:
    name = _member_name(member)
    if name is None:
        return None
    kind = "get" if member.has_child("get", "static get") else "set"
    if kind == "get":
        type_text = optional_annotation(member)
    else:
        params = member.find_child("formal_parameters")
        param = params.find_child("required_parameter", "optional_parameter") if params else None
        type_text = optional_annotation(param) if param is not None else None
    return AccessorInfo(
        name=name,
        accessor=kind,
        type=type_text,
        is_static=_is_static(member),
        decorators=decorators,
        start=member.start,
        end=member.end,
    )


def _property(member: SyntaxNode, decorators: list[str]) -> PropertyInfo | None:
    name = _member_name(member)
    if name is None:
        return None
    return PropertyInfo(
        name=name,
        type=optional_annotation(member),
        is_static=_is_static(member),
        is_abstract=member.has_child("abstract"),
        is_readonly=member.has_child("readonly"),
        visibility=visibility_of(member),  # type: ignore[arg-type]
        decorators=decorators,
        start=member.start,
        end=member.end,
    )


def _members(body: SyntaxNode, info: ClassInfo) -> None:
    # Decorators may precede a method as siblings inside the class body.
    pending: list[str] = []
    for member in body.children:
        if member.kind == "decorator":
            name = decorator_name(member)
            if name:
                pending.append(name)
            continue
        decorators = pending + decorator_names(member)
        pending = []
        if member.kind == "method_definition":
            if member.has_child("get", "set", "static get"):
                accessor = _accessor(member, decorators)
                if accessor is not None:
                    info.accessors.append(accessor)
            else:
                method = _method(member, decorators)
                if method is not None:
                    info.methods.append(method)
        elif member.kind == "abstract_method_signature":
            method = _method(member, decorators)
            if method is not None:
                info.methods.append(method)
        elif member.kind in _FIELD_KINDS:
            prop = _property(member, decorators)
            if prop is not None:
                info.properties.append(prop)


def _extract_class(visit: Visit) -> ClassInfo | None:
    node = visit.node
    name = child_text(node, "type_identifier", "identifier")
    if not name:
        return None
    extends, implements = _heritage(node)
    decorators = decorator_names(node)
    parent = visit.parent_node
    if parent is not None and parent.kind == "export_statement":
        # `@dec export class X` attaches the decorator to the export
        decorators = decorator_names(parent) + decorators
    info = ClassInfo(
        name=name,
        extends=extends,
        implements=implements,
        type_parameters=type_parameter_names(node),
        decorators=decorators,
        is_abstract=node.kind == "abstract_class_declaration" or node.has_child("abstract"),
        start=node.start,
        end=node.end,
    )
    body = node.find_child("class_body")
    if body is not None:
        _members(body, info)
    return info


def extract_classes(root: SyntaxNode) -> list[ClassInfo]:
    """Classes with their methods, properties and accessors."""
    return collect(root, CLASS_KINDS, _extract_class, "classes")
