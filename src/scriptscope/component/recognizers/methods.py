"""Script-level functions and the ``methods`` option."""

from __future__ import annotations

from scriptscope.component.models import ScriptMethodInfo
from scriptscope.component.recognizers._util import (
    FunctionLike,
    member_name,
    member_value,
    optional_type,
    parameter_labels,
    unwrap,
)
from scriptscope.component.script_tree import (
    ArrowFunctionExpression,
    ExportNamedDeclaration,
    FunctionDeclaration,
    FunctionExpression,
    Identifier,
    Node,
    ObjectExpression,
    ObjectMethod,
    ObjectProperty,
    Statement,
    VariableDeclaration,
)


def method_info(name: str, fn: FunctionLike, node: Node) -> ScriptMethodInfo:
    return ScriptMethodInfo(
        name=name,
        parameters=parameter_labels(fn),
        return_type=optional_type(fn.return_type),
        is_async=fn.is_async,
        start=node.start,
        end=node.end,
    )


def recognize_methods(stmt: Statement) -> list[ScriptMethodInfo]:
    """``function f() {}`` and ``const f = () => {}`` declarations."""
    match stmt:
        case FunctionDeclaration(name=name) if name:
            return [method_info(name, stmt, stmt)]
        case VariableDeclaration(declarations=declarations):
            found: list[ScriptMethodInfo] = []
            for declarator in declarations:
                if declarator.init is None or not isinstance(declarator.id, Identifier):
                    continue
                fn = unwrap(declarator.init)
                if isinstance(fn, (FunctionExpression, ArrowFunctionExpression)):
                    found.append(method_info(declarator.id.name, fn, declarator))
            return found
        case ExportNamedDeclaration(declaration=declaration) if declaration is not None:
            return recognize_methods(declaration)
        case _:
            return []


def recognize_options_methods(options: ObjectExpression) -> list[ScriptMethodInfo]:
    section = member_value(options, "methods")
    if not isinstance(section, ObjectExpression):
        return []
    found: list[ScriptMethodInfo] = []
    for member in section.properties:
        name = member_name(member)
        if name is None:
            continue
        match member:
            case ObjectMethod():
                found.append(method_info(name, member, member))
            case ObjectProperty(value=value):
                fn = unwrap(value)
                if isinstance(fn, (FunctionExpression, ArrowFunctionExpression)):
                    found.append(method_info(name, fn, member))
    return found
