"""Options-only sections: ``data`` and ``mixins``."""

from __future__ import annotations

from scriptscope.component.models import DataPropertyInfo, MixinInfo
from scriptscope.component.recognizers._util import (
    argument_at,
    find_member,
    function_body,
    initial_value,
    literal_kind,
    member_name,
    member_value,
    type_string,
    unwrap,
)
from scriptscope.component.script_tree import (
    ArrayExpression,
    ArrowFunctionExpression,
    BlockStatement,
    CallExpression,
    Expression,
    FunctionExpression,
    Identifier,
    ObjectExpression,
    ObjectMethod,
    ObjectProperty,
    ReturnStatement,
    StringLiteral,
    TSAsExpression,
)


def _returned_object(fn: FunctionExpression | ArrowFunctionExpression | ObjectMethod) -> ObjectExpression | None:
    if isinstance(fn, ArrowFunctionExpression) and not isinstance(fn.body, BlockStatement):
        body = unwrap(fn.body)  # type: ignore[arg-type]
        return body if isinstance(body, ObjectExpression) else None
    for stmt in function_body(fn):
        match stmt:
            case ReturnStatement(argument=argument) if argument is not None:
                returned = unwrap(argument)
                return returned if isinstance(returned, ObjectExpression) else None
    return None


def data_object(options: ObjectExpression) -> ObjectExpression | None:
    """Object returned by ``data()``; a plain ``data: {...}`` object is accepted too."""
    member = find_member(options, "data")
    match member:
        case ObjectMethod() as method:
            return _returned_object(method)
        case ObjectProperty(value=value):
            inner = unwrap(value)
            if isinstance(inner, (FunctionExpression, ArrowFunctionExpression)):
                return _returned_object(inner)
            if isinstance(inner, ObjectExpression):
                return inner
    return None


def _data_type(value: Expression) -> str | None:
    # items: [] as Item[]
    if isinstance(value, TSAsExpression):
        return type_string(value.annotation)
    return literal_kind(unwrap(value))


def recognize_data_properties(options: ObjectExpression) -> list[DataPropertyInfo]:
    data = data_object(options)
    if data is None:
        return []
    found: list[DataPropertyInfo] = []
    for member in data.properties:
        if not isinstance(member, ObjectProperty):
            continue
        name = member_name(member)
        if name is None:
            continue
        found.append(
            DataPropertyInfo(
                name=name,
                type=_data_type(member.value),
                initial_value=initial_value(member.value),
                start=member.start,
                end=member.end,
            )
        )
    return found


def recognize_mixins(options: ObjectExpression) -> list[MixinInfo]:
    """``mixins: [Shared, 'named', require('./legacy')]``."""
    mixins = member_value(options, "mixins")
    if not isinstance(mixins, ArrayExpression):
        return []
    found: list[MixinInfo] = []
    for element in mixins.elements:
        match element:
            case Identifier(name=name):
                found.append(MixinInfo(name=name, start=element.start, end=element.end))
            case StringLiteral(value=source):
                found.append(MixinInfo(name=source, source=source, start=element.start, end=element.end))
            case CallExpression(callee=Identifier(name="require")) as call:
                source = argument_at(call, 0)
                if isinstance(source, StringLiteral):
                    found.append(
                        MixinInfo(name=source.value, source=source.value, start=element.start, end=element.end)
                    )
    return found
