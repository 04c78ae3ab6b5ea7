"""Watchers: ``watch``, the ``watchEffect`` family and the ``watch`` option."""

from __future__ import annotations

from collections.abc import Iterator

from scriptscope.component.models import WatchEffectInfo, WatchInfo, WatchPropertyInfo
from scriptscope.component.recognizers._util import (
    argument_at,
    binding_names,
    boolean_member,
    call_named,
    find_member,
    flush_member,
    member_name,
    member_path,
    member_value,
    parameter_labels,
    pattern_name,
    referenced_names,
    unwrap,
    value_dependencies,
)
from scriptscope.component.script_tree import (
    ArrayExpression,
    ArrowFunctionExpression,
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionExpression,
    ObjectExpression,
    ObjectMethod,
    ObjectProperty,
    Parameter,
    Statement,
    StringLiteral,
    VariableDeclaration,
)

WATCH = frozenset({"watch"})
WATCH_EFFECTS = frozenset({"watchEffect", "watchPostEffect", "watchSyncEffect"})
ON_CLEANUP = "onCleanup"

_IMPLIED_FLUSH = {"watchPostEffect": "post", "watchSyncEffect": "sync"}


def _calls(stmt: Statement, names: frozenset[str]) -> Iterator[tuple[str | None, CallExpression, Statement]]:
    """``(declared name, call, node)`` for watcher calls in one statement."""
    match stmt:
        case ExpressionStatement(expression=expression):
            call = call_named(expression, names)
            if call is not None:
                yield None, call, stmt
        case VariableDeclaration(declarations=declarations):
            for declarator in declarations:
                call = call_named(declarator.init, names)
                if call is not None:
                    yield pattern_name(declarator.id), call, declarator  # type: ignore[misc]


def _source_dependencies(source: Expression | None) -> list[str]:
    match source:
        case None:
            return []
        case ArrayExpression(elements=elements):
            deps: list[str] = []
            for element in elements:
                deps.extend(_source_dependencies(unwrap(element)))  # type: ignore[arg-type]
            return deps
        case ArrowFunctionExpression(body=body) | FunctionExpression(body=body):
            # getter sources: () => props.id, () => count.value * 2
            path = member_path(body)  # type: ignore[arg-type]
            if path is not None:
                return [path]
            return value_dependencies(body)
        case _:
            path = member_path(source)
            return [path] if path is not None else []


def _watch(name: str | None, call: CallExpression, node: Statement) -> WatchInfo | None:
    if len(call.arguments) < 2:
        return None
    source = argument_at(call, 0)
    options = argument_at(call, 2)
    info = WatchInfo(
        name=name or "watch",
        dependencies=_source_dependencies(source),
        parameters=parameter_labels(argument_at(call, 1)),
        is_array_watch=isinstance(source, ArrayExpression),
        start=node.start,
        end=node.end,
    )
    if isinstance(options, ObjectExpression):
        info.is_deep = boolean_member(options, "deep") is True
        info.is_immediate = boolean_member(options, "immediate") is True
        info.flush = flush_member(options)  # type: ignore[assignment]
    return info


def recognize_watch(stmt: Statement) -> list[WatchInfo]:
    return [w for w in (_watch(*found) for found in _calls(stmt, WATCH)) if w is not None]


def _effect_params(callback: Expression | None) -> tuple[Parameter, ...]:
    match callback:
        case FunctionExpression(params=params) | ArrowFunctionExpression(params=params):
            return params
        case _:
            return ()


def _watch_effect(name: str | None, call: CallExpression, node: Statement) -> WatchEffectInfo:
    kind = call.callee.name  # type: ignore[union-attr]
    callback = argument_at(call, 0)
    options = argument_at(call, 1)
    params = _effect_params(callback)
    info = WatchEffectInfo(
        name=name or kind,
        parameters=parameter_labels(callback),
        flush=_IMPLIED_FLUSH.get(kind),  # type: ignore[arg-type]
        reactive_variables=referenced_names(getattr(callback, "body", None)),
        uses_on_cleanup=ON_CLEANUP in binding_names(params),
        start=node.start,
        end=node.end,
    )
    if isinstance(options, ObjectExpression):
        info.flush = flush_member(options) or info.flush  # type: ignore[assignment]
        info.on_track = find_member(options, "onTrack") is not None
        info.on_trigger = find_member(options, "onTrigger") is not None
    return info


def recognize_watch_effects(stmt: Statement) -> list[WatchEffectInfo]:
    return [_watch_effect(*found) for found in _calls(stmt, WATCH_EFFECTS)]


def _watch_property(name: str, member: ObjectProperty | ObjectMethod) -> WatchPropertyInfo | None:
    info = WatchPropertyInfo(name=name, dependencies=[name], start=member.start, end=member.end)
    if isinstance(member, ObjectMethod):
        info.parameters = parameter_labels(member)
        return info
    value = unwrap(member.value)
    match value:
        case FunctionExpression() | ArrowFunctionExpression():
            info.parameters = parameter_labels(value)
        case ObjectExpression():
            info.callback_type = "object"
            handler = find_member(value, "handler")
            if isinstance(handler, ObjectMethod):
                info.parameters = parameter_labels(handler)
            elif handler is not None:
                info.parameters = parameter_labels(unwrap(handler.value))
            info.is_deep = boolean_member(value, "deep") is True
            info.is_immediate = boolean_member(value, "immediate") is True
        case StringLiteral():
            # 'count': 'onCountChanged' names a method
            pass
        case _:
            return None
    return info


def recognize_watch_properties(options: ObjectExpression) -> list[WatchPropertyInfo]:
    section = member_value(options, "watch")
    if not isinstance(section, ObjectExpression):
        return []
    found: list[WatchPropertyInfo] = []
    for member in section.properties:
        if not isinstance(member, (ObjectProperty, ObjectMethod)):
            continue
        name = member_name(member)
        if name is None:
            continue
        info = _watch_property(name, member)
        if info is not None:
            found.append(info)
    return found
