"""``defineExpose({...})``."""

from __future__ import annotations

from collections.abc import Set

from scriptscope.component.models import ExposeInfo
from scriptscope.component.recognizers._util import (
    argument_at,
    call_named,
    callee_name,
    initial_value,
    is_function,
    literal_kind,
    member_name,
    unwrap,
)
from scriptscope.component.script_tree import (
    CallExpression,
    ExpressionStatement,
    Identifier,
    ObjectExpression,
    ObjectMethod,
    ObjectProperty,
    Statement,
)

DEFINE_EXPOSE = frozenset({"defineExpose"})
FUNCTION_FACTORIES = frozenset({"computed", "watch", "watchEffect"})


def _exposed(member: ObjectProperty | ObjectMethod, name: str, functions: Set[str]) -> ExposeInfo:
    if isinstance(member, ObjectMethod):
        return ExposeInfo(name=name, type="method", value_type="function", start=member.start, end=member.end)
    value = unwrap(member.value)
    is_method = is_function(value)
    match value:
        case CallExpression() as call if callee_name(call) in FUNCTION_FACTORIES:
            is_method = True
        case Identifier(name=ref) if ref in functions:
            is_method = True
    if is_method:
        return ExposeInfo(name=name, type="method", value_type="function", start=member.start, end=member.end)
    return ExposeInfo(
        name=name,
        type="property",
        value_type=literal_kind(value),
        initial_value=initial_value(value),
        start=member.start,
        end=member.end,
    )


def recognize_expose(stmt: Statement, functions: Set[str] = frozenset()) -> list[ExposeInfo]:
    """Members of the exposed object; ``functions`` names script-level
    functions so that ``defineExpose({ reset })`` reports a method."""
    match stmt:
        case ExpressionStatement(expression=expression):
            call = call_named(expression, DEFINE_EXPOSE)
            if call is None:
                return []
        case _:
            return []
    exposed = argument_at(call, 0)
    if not isinstance(exposed, ObjectExpression):
        return []
    found: list[ExposeInfo] = []
    for member in exposed.properties:
        if not isinstance(member, (ObjectProperty, ObjectMethod)):
            continue
        name = member_name(member)
        if name is not None:
            found.append(_exposed(member, name, functions))
    return found
