"""``provide`` / ``inject`` calls."""

from __future__ import annotations

from scriptscope.component.models import InjectInfo, ProvideInfo
from scriptscope.component.recognizers._util import (
    REACTIVE_FUNCTIONS,
    REF_FUNCTIONS,
    argument_at,
    call_named,
    initial_value,
    pattern_name,
)
from scriptscope.component.script_tree import (
    CallExpression,
    Expression,
    ExpressionStatement,
    Identifier,
    Statement,
    StringLiteral,
    TemplateLiteral,
    VariableDeclaration,
)

PROVIDE = frozenset({"provide"})
INJECT = frozenset({"inject"})


def injection_key(key: Expression | None) -> tuple[str, bool] | None:
    """``(key, is_symbol)`` for ``'theme'``, ``ThemeKey`` or ``Symbol('theme')``."""
    match key:
        case StringLiteral(value=value):
            return value, False
        case TemplateLiteral(quasis=(only,), expressions=()):
            return only, False
        case Identifier(name=name):
            return name, False
        case CallExpression(callee=Identifier(name="Symbol")) as call:
            description = argument_at(call, 0)
            if isinstance(description, StringLiteral):
                return description.value, True
            return "Symbol()", True
        case _:
            return None


def _is_reactive_value(value: Expression | None) -> bool:
    return call_named(value, REF_FUNCTIONS | REACTIVE_FUNCTIONS) is not None


def _provide(call: CallExpression) -> ProvideInfo | None:
    if len(call.arguments) < 2:
        return None
    key = injection_key(argument_at(call, 0))
    if key is None:
        return None
    value = argument_at(call, 1)
    return ProvideInfo(
        key=key[0],
        value=initial_value(value),
        is_symbol_key=key[1],
        is_reactive=_is_reactive_value(value),
        start=call.start,
        end=call.end,
    )


def recognize_provide(stmt: Statement) -> list[ProvideInfo]:
    match stmt:
        case ExpressionStatement(expression=expression):
            call = call_named(expression, PROVIDE)
            info = _provide(call) if call is not None else None
            return [info] if info is not None else []
        case _:
            return []


def _inject(call: CallExpression, alias: str | None, node: Statement) -> InjectInfo | None:
    key = injection_key(argument_at(call, 0))
    if key is None:
        return None
    default = argument_at(call, 1)
    return InjectInfo(
        key=key[0],
        alias=alias,
        default=initial_value(default),
        is_symbol_key=key[1],
        is_reactive=_is_reactive_value(default),
        start=node.start,
        end=node.end,
    )


def recognize_inject(stmt: Statement) -> list[InjectInfo]:
    found: list[InjectInfo] = []
    match stmt:
        case VariableDeclaration(declarations=declarations):
            for declarator in declarations:
                call = call_named(declarator.init, INJECT)
                if call is None:
                    continue
                info = _inject(call, pattern_name(declarator.id), declarator)  # type: ignore[arg-type]
                if info is not None:
                    found.append(info)
        case ExpressionStatement(expression=expression):
            call = call_named(expression, INJECT)
            if call is not None:
                info = _inject(call, None, stmt)
                if info is not None:
                    found.append(info)
    return found
