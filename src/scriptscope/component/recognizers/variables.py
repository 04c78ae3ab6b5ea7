"""Plain script variables of the Composition style."""

from __future__ import annotations

from scriptscope.component.models import ScriptVariableInfo
from scriptscope.component.recognizers._util import (
    REACTIVE_FUNCTIONS,
    REF_FUNCTIONS,
    call_named,
    initial_value,
    is_function,
    optional_type,
    pattern_name,
    unwrap,
)
from scriptscope.component.script_tree import (
    ExportNamedDeclaration,
    Statement,
    VariableDeclaration,
    VariableDeclarator,
)

# Declarators initialised by these calls are reported by their own recognizers.
CLAIMED_CALLS = REF_FUNCTIONS | REACTIVE_FUNCTIONS | frozenset(
    {
        "computed",
        "watch",
        "watchEffect",
        "watchPostEffect",
        "watchSyncEffect",
        "inject",
        "defineProps",
        "withDefaults",
        "defineEmits",
    }
)


def _is_plain(declarator: VariableDeclarator) -> bool:
    if declarator.init is None:
        return True
    if is_function(unwrap(declarator.init)):
        return False
    return call_named(declarator.init, CLAIMED_CALLS) is None


def recognize_variables(stmt: Statement) -> list[ScriptVariableInfo]:
    match stmt:
        case ExportNamedDeclaration(declaration=VariableDeclaration() as declaration):
            return recognize_variables(declaration)
        case VariableDeclaration(kind=kind, declarations=declarations):
            found: list[ScriptVariableInfo] = []
            for declarator in declarations:
                name = pattern_name(declarator.id)
                if name is None or not _is_plain(declarator):
                    continue
                found.append(
                    ScriptVariableInfo(
                        name=name,
                        type=optional_type(declarator.annotation),
                        value=initial_value(declarator.init),
                        is_const=kind == "const",
                        start=declarator.start,
                        end=declarator.end,
                    )
                )
            return found
        case _:
            return []
