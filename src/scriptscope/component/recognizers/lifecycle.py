"""Lifecycle hooks in both authoring styles."""

from __future__ import annotations

from scriptscope.component.models import LifecycleHookInfo
from scriptscope.component.recognizers._util import (
    argument_at,
    callee_name,
    member_name,
    parameter_labels,
    unwrap,
)
from scriptscope.component.script_tree import (
    ArrowFunctionExpression,
    CallExpression,
    ExpressionStatement,
    FunctionExpression,
    ObjectExpression,
    ObjectMethod,
    ObjectProperty,
    Statement,
    VariableDeclaration,
)

OPTIONS_HOOKS = frozenset(
    {
        "beforeCreate",
        "created",
        "beforeMount",
        "mounted",
        "beforeUpdate",
        "updated",
        "beforeDestroy",
        "destroyed",
        "beforeUnmount",
        "unmounted",
        "activated",
        "deactivated",
        "errorCaptured",
        "renderTracked",
        "renderTriggered",
        "serverPrefetch",
    }
)

COMPOSITION_HOOKS = frozenset(
    {
        "onBeforeMount",
        "onMounted",
        "onBeforeUpdate",
        "onUpdated",
        "onBeforeUnmount",
        "onUnmounted",
        "onActivated",
        "onDeactivated",
        "onErrorCaptured",
        "onRenderTracked",
        "onRenderTriggered",
        "onServerPrefetch",
    }
)


def hook_from_call(call: CallExpression) -> LifecycleHookInfo | None:
    """``onMounted(() => ...)`` or ``Vue.onMounted(...)``."""
    name = callee_name(call)
    if name not in COMPOSITION_HOOKS:
        return None
    return LifecycleHookInfo(
        name=name,  # type: ignore[arg-type]
        parameters=parameter_labels(argument_at(call, 0)),
        start=call.start,
        end=call.end,
    )


def recognize_composition_hooks(stmt: Statement) -> list[LifecycleHookInfo]:
    match stmt:
        case ExpressionStatement(expression=expression):
            match unwrap(expression):
                case CallExpression() as call:
                    hook = hook_from_call(call)
                    return [hook] if hook is not None else []
        case VariableDeclaration(declarations=declarations):
            # const stop = onMounted(...) is unusual but legal
            hooks = []
            for declarator in declarations:
                if declarator.init is None:
                    continue
                match unwrap(declarator.init):
                    case CallExpression() as call:
                        hook = hook_from_call(call)
                        if hook is not None:
                            hooks.append(hook)
            return hooks
    return []


def recognize_options_hooks(options: ObjectExpression) -> list[LifecycleHookInfo]:
    hooks: list[LifecycleHookInfo] = []
    for member in options.properties:
        match member:
            case ObjectMethod():
                params = parameter_labels(member)
            case ObjectProperty(value=value) if isinstance(unwrap(value), (FunctionExpression, ArrowFunctionExpression)):
                params = parameter_labels(unwrap(value))
            case _:
                continue
        name = member_name(member)
        if name in OPTIONS_HOOKS:
            hooks.append(LifecycleHookInfo(name=name, parameters=params, start=member.start, end=member.end))  # type: ignore[arg-type]
    return hooks
