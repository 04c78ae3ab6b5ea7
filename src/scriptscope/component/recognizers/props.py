"""Prop declarations: ``props`` option, ``defineProps`` and ``withDefaults``."""

from __future__ import annotations

from collections.abc import Mapping

from scriptscope.component.models import PropDefault, PropInfo
from scriptscope.component.recognizers._util import (
    argument_at,
    call_named,
    member_name,
    member_value,
    type_string,
    unwrap,
)
from scriptscope.component.script_tree import (
    ArrayExpression,
    ArrowFunctionExpression,
    BooleanLiteral,
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionExpression,
    Identifier,
    LiteralType,
    NullLiteral,
    NumericLiteral,
    ObjectExpression,
    ObjectMethod,
    ObjectProperty,
    PropertySignature,
    Statement,
    StringLiteral,
    TypeLiteral,
    TypeNode,
    TypeReference,
    UnionType,
    VariableDeclaration,
)

DEFINE_PROPS = frozenset({"defineProps"})
WITH_DEFAULTS = frozenset({"withDefaults"})
MODEL_PROP_PREFIXES = ("modelValue", "model")


def parse_default(value: Expression) -> PropDefault | None:
    match unwrap(value):
        case StringLiteral(value=v) | NumericLiteral(value=v):
            return PropDefault(type="primitive", value=v)
        case BooleanLiteral(value=v):
            return PropDefault(type="primitive", value="true" if v else "false")
        case NullLiteral():
            return PropDefault(type="primitive", value="null")
        case ArrayExpression():
            return PropDefault(type="array", is_factory=True, factory_expression="() => []")
        case ObjectExpression():
            return PropDefault(type="object", is_factory=True, factory_expression="() => ({})")
        case FunctionExpression() | ArrowFunctionExpression() as fn:
            return PropDefault(type="function", is_factory=True, factory_expression=fn.text or "() => default")
        case Identifier(name=name):
            return PropDefault(type="expression", value=name)
        case _:
            return None


def _constructor_type(value: Expression) -> str | None:
    """``String`` or ``[String, Number]`` runtime type declarations."""
    match unwrap(value):
        case Identifier(name=name):
            return name
        case ArrayExpression(elements=elements):
            names = [e.name for e in elements if isinstance(e, Identifier)]
            return " | ".join(names) if names else None
        case _:
            return None


def _declared_type(node: TypeNode | None) -> str | None:
    match node:
        case None:
            return None
        case LiteralType(kind="string" | "number" | "boolean", value=value):
            return value
        case UnionType(types=types):
            return " | ".join(_declared_type(t) or "unknown" for t in types)
        case _:
            return type_string(node)


def _is_model_name(name: str) -> bool:
    return name.startswith(MODEL_PROP_PREFIXES)


def _from_config(name: str, member: ObjectProperty, config: ObjectExpression) -> PropInfo:
    prop = PropInfo(name=name, start=member.start, end=member.end)
    for entry in config.properties:
        key = member_name(entry)  # type: ignore[arg-type]
        if key is None:
            continue
        if key == "validator":
            prop.validator = True
            prop.validator_expression = entry.text or "validator function"
            continue
        if isinstance(entry, ObjectMethod):
            if key == "default":
                prop.default = PropDefault(type="function", is_factory=True, factory_expression=entry.text)
            continue
        if not isinstance(entry, ObjectProperty):
            continue
        value = unwrap(entry.value)
        match key, value:
            case "type", _:
                prop.type = _constructor_type(value)
            case "default", _:
                prop.default = parse_default(value)
            case "required", BooleanLiteral(value=flag):
                prop.required = flag
            case "model", BooleanLiteral(value=flag):
                prop.is_model_prop = flag
            case "slots", BooleanLiteral(value=flag):
                prop.is_slots_prop = flag
    return prop


def props_from_object(obj: ObjectExpression) -> list[PropInfo]:
    """``{ title: String, count: { type: Number, default: 0 } }``."""
    props: list[PropInfo] = []
    for member in obj.properties:
        if not isinstance(member, ObjectProperty):
            continue
        name = member_name(member)
        if name is None:
            continue
        value = unwrap(member.value)
        if isinstance(value, ObjectExpression):
            prop = _from_config(name, member, value)
        else:
            prop = PropInfo(
                name=name,
                type=_constructor_type(value),
                required=True,
                start=member.start,
                end=member.end,
            )
        if _is_model_name(name):
            prop.is_model_prop = True
        if name == "slots":
            prop.is_slots_prop = True
        props.append(prop)
    return props


def props_from_array(array: ArrayExpression) -> list[PropInfo]:
    """``['title', 'count']``."""
    return [
        PropInfo(
            name=element.value,
            is_model_prop=_is_model_name(element.value),
            start=element.start,
            end=element.end,
        )
        for element in array.elements
        if isinstance(element, StringLiteral) and element.value
    ]


def props_from_type(literal: TypeLiteral) -> list[PropInfo]:
    """``defineProps<{ title: string; count?: number }>()``."""
    return [
        PropInfo(
            name=member.name,
            type=_declared_type(member.annotation),
            required=not member.optional,
            is_model_prop=_is_model_name(member.name),
            start=member.start,
            end=member.end,
        )
        for member in literal.members
        if isinstance(member, PropertySignature) and member.name
    ]


def _runtime_props(value: Expression | None) -> list[PropInfo]:
    match value:
        case ObjectExpression() as obj:
            return props_from_object(obj)
        case ArrayExpression() as array:
            return props_from_array(array)
        case _:
            return []


def _merge_defaults(props: list[PropInfo], defaults: Expression | None) -> list[PropInfo]:
    if not isinstance(defaults, ObjectExpression):
        return props
    by_name: dict[str, PropDefault] = {}
    for member in defaults.properties:
        if isinstance(member, ObjectProperty):
            name = member_name(member)
            parsed = parse_default(member.value)
            if name is not None and parsed is not None:
                by_name[name] = parsed
        elif isinstance(member, ObjectMethod):
            name = member_name(member)
            if name is not None:
                by_name[name] = PropDefault(type="function", is_factory=True, factory_expression=member.text)
    for prop in props:
        if prop.name in by_name:
            prop.default = by_name[prop.name]
    return props


def _type_argument(call: CallExpression, local_types: Mapping[str, TypeLiteral]) -> TypeLiteral | None:
    if not call.type_arguments:
        return None
    match call.type_arguments[0]:
        case TypeLiteral() as literal:
            return literal
        case TypeReference(name=name, type_arguments=()):
            return local_types.get(name)
        case _:
            return None


def props_from_define_call(call: CallExpression, local_types: Mapping[str, TypeLiteral]) -> list[PropInfo]:
    """``defineProps(...)``, optionally wrapped in ``withDefaults(defineProps(...), {...})``."""
    defaults: Expression | None = None
    if call_named(call, WITH_DEFAULTS) is not None:
        defaults = argument_at(call, 1)
        inner = call_named(argument_at(call, 0), DEFINE_PROPS)
        if inner is None:
            return []
        call = inner
    literal = _type_argument(call, local_types)
    if literal is not None:
        props = props_from_type(literal)
        if defaults is None:
            # defineProps<T>(undefined, defaults) is an older spelling of withDefaults
            defaults = argument_at(call, 1)
    else:
        props = _runtime_props(argument_at(call, 0))
    return _merge_defaults(props, defaults)


def recognize_define_props(stmt: Statement, local_types: Mapping[str, TypeLiteral]) -> list[PropInfo]:
    """Props declared by a ``defineProps`` macro in one statement."""
    macros = DEFINE_PROPS | WITH_DEFAULTS
    match stmt:
        case VariableDeclaration(declarations=declarations):
            found: list[PropInfo] = []
            for declarator in declarations:
                call = call_named(declarator.init, macros)
                if call is not None:
                    found.extend(props_from_define_call(call, local_types))
            return found
        case ExpressionStatement(expression=expression):
            call = call_named(expression, macros)
            return props_from_define_call(call, local_types) if call is not None else []
        case _:
            return []


def recognize_options_props(options: ObjectExpression) -> list[PropInfo]:
    """The ``props`` option of a component object."""
    return _runtime_props(member_value(options, "props"))
