"""Emitted event declarations: ``emits`` option and ``defineEmits``."""

from __future__ import annotations

from collections.abc import Mapping

from scriptscope.component.models import EmitInfo
from scriptscope.component.recognizers._util import (
    argument_at,
    call_named,
    member_name,
    member_value,
    parameter_labels,
    type_string,
    unwrap,
)
from scriptscope.component.script_tree import (
    ArrayExpression,
    CallExpression,
    CallSignature,
    Expression,
    ExpressionStatement,
    Identifier,
    LiteralType,
    ObjectExpression,
    ObjectMethod,
    ObjectProperty,
    PropertySignature,
    Statement,
    StringLiteral,
    TupleType,
    TypeLiteral,
    TypeReference,
    VariableDeclaration,
)

DEFINE_EMITS = frozenset({"defineEmits"})


def _from_array(array: ArrayExpression) -> list[EmitInfo]:
    emits: list[EmitInfo] = []
    for element in array.elements:
        match element:
            case StringLiteral(value=name) | Identifier(name=name) if name:
                emits.append(EmitInfo(name=name, start=element.start, end=element.end))
    return emits


def _from_object(obj: ObjectExpression) -> list[EmitInfo]:
    """``{ change: (value) => true, close: null }``; validator parameters are kept."""
    emits: list[EmitInfo] = []
    for member in obj.properties:
        match member:
            case ObjectProperty(value=value):
                name = member_name(member)
                params = parameter_labels(unwrap(value))
            case ObjectMethod():
                name = member_name(member)
                params = parameter_labels(member)
            case _:
                continue
        if name:
            emits.append(EmitInfo(name=name, parameters=params, start=member.start, end=member.end))
    return emits


def _event_name(signature: CallSignature) -> str | None:
    match signature.parameters:
        case (first, *_):
            match first.annotation:
                case LiteralType(kind="string", value=raw):
                    return raw.strip("'\"`")
    return None


def _from_type(literal: TypeLiteral) -> list[EmitInfo]:
    """Call signatures ``(e: 'change', id: number): void`` or the
    shorthand ``{ change: [id: number] }`` form."""
    emits: list[EmitInfo] = []
    for member in literal.members:
        match member:
            case CallSignature(parameters=params):
                name = _event_name(member)
                if name is None:
                    continue
                emits.append(
                    EmitInfo(
                        name=name,
                        parameters=[type_string(p.annotation) for p in params[1:]],
                        type=member.text or None,
                        start=member.start,
                        end=member.end,
                    )
                )
            case PropertySignature(name=name, annotation=TupleType(elements=elements)) if name:
                emits.append(
                    EmitInfo(
                        name=name,
                        parameters=[type_string(e) for e in elements],
                        type=member.text or None,
                        start=member.start,
                        end=member.end,
                    )
                )
    return emits


def emits_from_define_call(call: CallExpression, local_types: Mapping[str, TypeLiteral]) -> list[EmitInfo]:
    if call.type_arguments:
        match call.type_arguments[0]:
            case TypeLiteral() as literal:
                return _from_type(literal)
            case TypeReference(name=name, type_arguments=()) if name in local_types:
                return _from_type(local_types[name])
    return _runtime_emits(argument_at(call, 0))


def _runtime_emits(value: Expression | None) -> list[EmitInfo]:
    match value:
        case ArrayExpression() as array:
            return _from_array(array)
        case ObjectExpression() as obj:
            return _from_object(obj)
        case _:
            return []


def recognize_define_emits(stmt: Statement, local_types: Mapping[str, TypeLiteral]) -> list[EmitInfo]:
    match stmt:
        case VariableDeclaration(declarations=declarations):
            found: list[EmitInfo] = []
            for declarator in declarations:
                call = call_named(declarator.init, DEFINE_EMITS)
                if call is not None:
                    found.extend(emits_from_define_call(call, local_types))
            return found
        case ExpressionStatement(expression=expression):
            call = call_named(expression, DEFINE_EMITS)
            return emits_from_define_call(call, local_types) if call is not None else []
        case _:
            return []


def recognize_options_emits(options: ObjectExpression) -> list[EmitInfo]:
    return _runtime_emits(member_value(options, "emits"))
