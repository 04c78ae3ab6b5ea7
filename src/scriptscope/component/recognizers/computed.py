"""Computed values: ``computed()`` calls and the ``computed`` option."""

from __future__ import annotations

from scriptscope.component.models import ComputedInfo, ComputedPropertyInfo
from scriptscope.component.recognizers._util import (
    argument_at,
    call_named,
    find_member,
    member_name,
    member_value,
    optional_type,
    pattern_name,
    this_dependencies,
    unwrap,
    value_dependencies,
)
from scriptscope.component.script_tree import (
    ArrowFunctionExpression,
    FunctionExpression,
    ObjectExpression,
    ObjectMethod,
    ObjectProperty,
    Statement,
    VariableDeclaration,
    VariableDeclarator,
)

COMPUTED = frozenset({"computed"})


def computed_from_declarator(declarator: VariableDeclarator) -> ComputedInfo | None:
    call = call_named(declarator.init, COMPUTED)
    name = pattern_name(declarator.id)
    if call is None or name is None:
        return None
    getter = argument_at(call, 0)
    has_setter = isinstance(getter, ObjectExpression) and find_member(getter, "set") is not None
    if isinstance(getter, ObjectExpression):
        getter_member = find_member(getter, "get")
        body = getter_member if isinstance(getter_member, ObjectMethod) else member_value(getter, "get")
    else:
        body = getter
    type_ = optional_type(declarator.annotation)
    if type_ is None and call.type_arguments:
        type_ = optional_type(call.type_arguments[0])
    return ComputedInfo(
        name=name,
        type=type_,
        is_readonly=not has_setter,
        has_setter=has_setter,
        dependencies=value_dependencies(body),
        start=declarator.start,
        end=declarator.end,
    )


def recognize_computed(stmt: Statement) -> list[ComputedInfo]:
    match stmt:
        case VariableDeclaration(declarations=declarations):
            return [c for c in map(computed_from_declarator, declarations) if c is not None]
        case _:
            return []


def _computed_property(member: ObjectProperty | ObjectMethod, name: str) -> ComputedPropertyInfo | None:
    match member:
        case ObjectMethod(kind=kind):
            return ComputedPropertyInfo(
                name=name,
                dependencies=this_dependencies(member),
                is_getter=kind in ("method", "get"),
                is_setter=kind == "set",
                start=member.start,
                end=member.end,
            )
        case ObjectProperty(value=value):
            value = unwrap(value)
            if isinstance(value, (FunctionExpression, ArrowFunctionExpression)):
                return ComputedPropertyInfo(
                    name=name,
                    dependencies=this_dependencies(value),
                    is_getter=True,
                    start=member.start,
                    end=member.end,
                )
            if isinstance(value, ObjectExpression):
                getter = find_member(value, "get")
                return ComputedPropertyInfo(
                    name=name,
                    dependencies=this_dependencies(getter),
                    is_getter=getter is not None,
                    is_setter=find_member(value, "set") is not None,
                    start=member.start,
                    end=member.end,
                )
    return None


def recognize_computed_properties(options: ObjectExpression) -> list[ComputedPropertyInfo]:
    """Entries of the ``computed: {...}`` option; a getter/setter pair is one entry."""
    section = member_value(options, "computed")
    if not isinstance(section, ObjectExpression):
        return []
    found: dict[str, ComputedPropertyInfo] = {}
    for member in section.properties:
        if not isinstance(member, (ObjectProperty, ObjectMethod)):
            continue
        name = member_name(member)
        if name is None:
            continue
        info = _computed_property(member, name)
        if info is None:
            continue
        previous = found.get(name)
        if previous is not None:
            # `get x() {}` and `set x(v) {}` declare one computed property
            previous.is_getter = previous.is_getter or info.is_getter
            previous.is_setter = previous.is_setter or info.is_setter
            previous.dependencies.extend(d for d in info.dependencies if d not in previous.dependencies)
            continue
        found[name] = info
    return list(found.values())
