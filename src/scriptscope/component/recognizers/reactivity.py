"""``ref``/``reactive`` family declarations."""

from __future__ import annotations

from scriptscope.component.models import ReactiveInfo, RefInfo
from scriptscope.component.recognizers._util import (
    REACTIVE_FUNCTIONS,
    REF_FUNCTIONS,
    argument_at,
    call_named,
    function_body,
    initial_value,
    optional_type,
)
from scriptscope.component.script_tree import (
    CallExpression,
    FunctionDeclaration,
    Identifier,
    Statement,
    VariableDeclaration,
    VariableDeclarator,
)

SHALLOW_FUNCTIONS = frozenset({"shallowRef", "shallowReactive", "shallowReadonly"})


def _declared_type(declarator: VariableDeclarator, call: CallExpression) -> str | None:
    # const n: Ref<number> = ref(0) wins over ref<number>(0)
    if declarator.annotation is not None:
        return optional_type(declarator.annotation)
    if call.type_arguments:
        return optional_type(call.type_arguments[0])
    return None


def _declarators(stmt: Statement) -> list[VariableDeclarator]:
    """Declarators of ``stmt`` and of declarations inside a function declaration's body."""
    match stmt:
        case VariableDeclaration(declarations=declarations):
            return list(declarations)
        case FunctionDeclaration() as fn:
            found: list[VariableDeclarator] = []
            for inner in function_body(fn):
                found.extend(_declarators(inner))
            return found
        case _:
            return []


def ref_from_declarator(declarator: VariableDeclarator) -> RefInfo | None:
    call = call_named(declarator.init, REF_FUNCTIONS)
    if call is None or not isinstance(declarator.id, Identifier):
        return None
    return RefInfo(
        name=declarator.id.name,
        type=_declared_type(declarator, call),
        initial_value=initial_value(argument_at(call, 0)),
        is_shallow=call.callee.name == "shallowRef",  # type: ignore[union-attr]
        start=declarator.start,
        end=declarator.end,
    )


def reactive_from_declarator(declarator: VariableDeclarator) -> ReactiveInfo | None:
    call = call_named(declarator.init, REACTIVE_FUNCTIONS)
    if call is None or not isinstance(declarator.id, Identifier):
        return None
    return ReactiveInfo(
        name=declarator.id.name,
        type=_declared_type(declarator, call),
        initial_value=initial_value(argument_at(call, 0)),
        is_shallow=call.callee.name in SHALLOW_FUNCTIONS,  # type: ignore[union-attr]
        start=declarator.start,
        end=declarator.end,
    )


def recognize_refs(stmt: Statement) -> list[RefInfo]:
    return [r for r in map(ref_from_declarator, _declarators(stmt)) if r is not None]


def recognize_reactives(stmt: Statement) -> list[ReactiveInfo]:
    return [r for r in map(reactive_from_declarator, _declarators(stmt)) if r is not None]


def is_reactive_declarator(declarator: VariableDeclarator) -> bool:
    return call_named(declarator.init, REF_FUNCTIONS | REACTIVE_FUNCTIONS) is not None
