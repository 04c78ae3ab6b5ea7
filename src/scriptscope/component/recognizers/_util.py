"""Shared helpers for the component script recognizers."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, fields

from scriptscope.component.script_tree import (
    ArrayExpression,
    ArrayPattern,
    ArrayType,
    ArrowFunctionExpression,
    AssignmentPattern,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    ConditionalType,
    ExportDefaultDeclaration,
    Expression,
    ExpressionStatement,
    FunctionDeclaration,
    FunctionExpression,
    FunctionType,
    Identifier,
    IfStatement,
    InferType,
    InterfaceDeclaration,
    IntersectionType,
    LiteralType,
    LoopStatement,
    MemberExpression,
    Node,
    NullLiteral,
    NumericLiteral,
    ObjectExpression,
    ObjectMethod,
    ObjectPattern,
    ObjectProperty,
    Parameter,
    ParenthesizedExpression,
    ParenthesizedType,
    Pattern,
    Program,
    RestElement,
    SpreadElement,
    Statement,
    StringLiteral,
    TemplateLiteral,
    ThisExpression,
    TryStatement,
    TSAsExpression,
    TSNonNullExpression,
    TSSatisfiesExpression,
    TupleType,
    TypeAliasDeclaration,
    TypeKeyword,
    TypeLiteral,
    TypeNode,
    TypeReference,
    UnaryExpression,
    UnionType,
    VariableDeclaration,
)
from scriptscope.config.constants import UNKNOWN_TYPE

REF_FUNCTIONS = frozenset({"ref", "shallowRef", "toRef", "toRefs"})
REACTIVE_FUNCTIONS = frozenset({"reactive", "shallowReactive", "readonly", "shallowReadonly"})
COMPONENT_FACTORIES = frozenset({"defineComponent", "extend"})

DEFAULT_PARAM_NAME = "param"
TYPE_LITERAL_PLACEHOLDER = "{ ... }"

# Fields of typed nodes that hold type annotations rather than runtime code.
_TYPE_FIELDS = frozenset({"annotation", "return_type", "type_arguments"})

FunctionLike = FunctionExpression | ArrowFunctionExpression | ObjectMethod | FunctionDeclaration


# ----------------------------------------------------------------------
# Script scope
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class ScriptScope:
    """Where the recognizers look for each authoring style.

    Attributes:
        program: The lowered script block.
        options: The component options object, when the script declares one.
        setup: Statements of the options object's ``setup()`` body.
        script_setup: Whether the block is ``<script setup>``.
        local_types: Object-shaped interfaces and type aliases declared at
            the top level, for resolving ``defineProps<Props>()``.
    """

    program: Program
    options: ObjectExpression | None = None
    setup: tuple[Statement, ...] = ()
    script_setup: bool = False
    local_types: Mapping[str, TypeLiteral] = field(default_factory=dict)

    @property
    def has_setup_function(self) -> bool:
        return self.options is not None and setup_function(self.options) is not None

    @property
    def composition_statements(self) -> tuple[Statement, ...]:
        """Top-level statements followed by the ``setup()`` body."""
        return self.program.body + self.setup

    @classmethod
    def of(cls, program: Program, *, script_setup: bool = False) -> ScriptScope:
        options = next((o for o in map(component_options, program.body) if o is not None), None)
        setup: tuple[Statement, ...] = ()
        if options is not None:
            fn = setup_function(options)
            if fn is not None:
                setup = function_body(fn)
        return cls(
            program=program,
            options=options,
            setup=setup,
            script_setup=script_setup,
            local_types=local_object_types(program),
        )


def _options_argument(expr: Expression) -> ObjectExpression | None:
    match unwrap(expr):
        case ObjectExpression() as obj:
            return obj
        case CallExpression() as call if callee_name(call) in COMPONENT_FACTORIES:
            for arg in call.arguments:
                if isinstance(arg, SpreadElement):
                    continue
                inner = unwrap(arg)
                if isinstance(inner, ObjectExpression):
                    return inner
            return None
        case _:
            return None


def component_options(stmt: Statement) -> ObjectExpression | None:
    """Options object of ``export default {...}``, ``defineComponent({...})``,
    ``Vue.extend({...})`` or a variable bound to one of the factory calls."""
    match stmt:
        case ExportDefaultDeclaration(declaration=declaration):
            return _options_argument(declaration)  # type: ignore[arg-type]
        case VariableDeclaration(declarations=declarations):
            for declarator in declarations:
                match declarator.init:
                    case CallExpression() as call if callee_name(call) in COMPONENT_FACTORIES:
                        return _options_argument(call)
            return None
        case ExpressionStatement(expression=CallExpression() as call) if callee_name(call) == "extend":
            return _options_argument(call)
        case _:
            return None


def setup_function(options: ObjectExpression) -> FunctionLike | None:
    match find_member(options, "setup"):
        case ObjectMethod() as method:
            return method
        case ObjectProperty(value=value):
            inner = unwrap(value)
            if isinstance(inner, (FunctionExpression, ArrowFunctionExpression)):
                return inner
    return None


def local_object_types(program: Program) -> dict[str, TypeLiteral]:
    found: dict[str, TypeLiteral] = {}
    for stmt in program.body:
        declaration = getattr(stmt, "declaration", None) or stmt
        match declaration:
            case InterfaceDeclaration(name=name, body=body):
                found[name] = body
            case TypeAliasDeclaration(name=name, annotation=TypeLiteral() as body):
                found[name] = body
    return found


def nested_statements(statements: tuple[Statement, ...]) -> Iterator[Statement]:
    """Statements plus those inside nested blocks, conditionals, loops and try."""
    stack = list(reversed(statements))
    while stack:
        stmt = stack.pop()
        yield stmt
        match stmt:
            case BlockStatement(body=body):
                stack.extend(reversed(body))
            case IfStatement(consequent=consequent, alternate=alternate):
                if alternate is not None:
                    stack.append(alternate)
                stack.append(consequent)
            case LoopStatement(body=body):
                stack.append(body)
            case TryStatement(block=block, handler=handler, finalizer=finalizer):
                for part in (finalizer, handler, block):
                    if part is not None:
                        stack.append(part)


# ----------------------------------------------------------------------
# Expression helpers
# ----------------------------------------------------------------------


def unwrap(expr: Expression) -> Expression:
    """Strip ``as``, ``satisfies``, ``!`` and parentheses."""
    while True:
        match expr:
            case (
                TSAsExpression(expression=inner)
                | TSSatisfiesExpression(expression=inner)
                | TSNonNullExpression(expression=inner)
                | ParenthesizedExpression(expression=inner)
            ):
                expr = inner
            case _:
                return expr


def key_name(key: Expression) -> str | None:
    match key:
        case Identifier(name=name):
            return name
        case StringLiteral(value=value) | NumericLiteral(value=value):
            return value
        case _:
            return None


def member_name(member: ObjectProperty | ObjectMethod | SpreadElement) -> str | None:
    """Static name of an object-literal member; ``None`` for spreads and computed keys."""
    match member:
        case ObjectProperty(key=key, computed=False) | ObjectMethod(key=key, computed=False):
            return key_name(key)
        case _:
            return None


def find_member(obj: ObjectExpression, name: str) -> ObjectProperty | ObjectMethod | None:
    for member in obj.properties:
        if not isinstance(member, SpreadElement) and member_name(member) == name:
            return member
    return None


def member_value(obj: ObjectExpression, name: str) -> Expression | None:
    match find_member(obj, name):
        case ObjectProperty(value=value):
            return unwrap(value)
        case _:
            return None


def boolean_member(obj: ObjectExpression, name: str) -> bool | None:
    match member_value(obj, name):
        case BooleanLiteral(value=value):
            return value
        case _:
            return None


def flush_member(obj: ObjectExpression) -> str | None:
    match member_value(obj, "flush"):
        case StringLiteral(value="pre" | "post" | "sync" as value):
            return value
        case _:
            return None


def identifier_callee(call: CallExpression) -> str | None:
    match call.callee:
        case Identifier(name=name):
            return name
        case _:
            return None


def callee_name(call: CallExpression) -> str | None:
    """Name of ``name(...)`` or the last segment of ``obj.name(...)``."""
    match call.callee:
        case Identifier(name=name):
            return name
        case MemberExpression(property=Identifier(name=name), computed=False):
            return name
        case _:
            return None


def call_named(expr: Expression | None, names: frozenset[str]) -> CallExpression | None:
    """``expr`` as a plain call to one of ``names``, else ``None``."""
    if expr is None:
        return None
    match unwrap(expr):
        case CallExpression() as call if identifier_callee(call) in names:
            return call
        case _:
            return None


def argument_at(call: CallExpression, index: int) -> Expression | None:
    if index >= len(call.arguments):
        return None
    arg = call.arguments[index]
    if isinstance(arg, SpreadElement):
        return None
    return unwrap(arg)


def is_function(expr: Expression | None) -> bool:
    return isinstance(expr, (FunctionExpression, ArrowFunctionExpression))


def function_body(fn: FunctionLike) -> tuple[Statement, ...]:
    match fn.body:
        case BlockStatement(body=body):
            return body
        case _:
            return ()


def member_path(expr: Expression) -> str | None:
    """Dotted path of ``a.b.c``; ``None`` when any segment is dynamic."""
    match expr:
        case Identifier(name=name):
            return name
        case MemberExpression(object=obj, property=Identifier(name=prop), computed=False):
            base = member_path(obj)
            return f"{base}.{prop}" if base is not None else None
        case _:
            return None


def walk(root: Node | None) -> Iterator[Node]:
    """Pre-order walk over runtime code below ``root`` (explicit stack).

    Type annotations, non-computed object keys and non-computed member
    properties are skipped, so every ``Identifier`` yielded is a reference.
    """
    if root is None:
        return
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        yield node
        children: list[Node] = []
        for f in fields(node):
            if f.name in _TYPE_FIELDS or f.name in ("start", "end", "text"):
                continue
            if f.name in ("key", "property") and not getattr(node, "computed", True):
                continue
            value = getattr(node, f.name)
            if isinstance(value, Node):
                children.append(value)
            elif isinstance(value, tuple):
                children.extend(v for v in value if isinstance(v, Node))
        stack.extend(reversed(children))


def referenced_names(root: Node | None) -> list[str]:
    """Distinct identifiers referenced below ``root``, in source order."""
    names: dict[str, None] = {}
    for node in walk(root):
        if isinstance(node, Identifier) and node.name not in ("undefined", "super"):
            names.setdefault(node.name)
    return list(names)


def value_dependencies(root: Node | None) -> list[str]:
    """Reactive sources read below ``root``: ``x`` for ``x.value``, ``props.x`` paths."""
    deps: dict[str, None] = {}
    for node in walk(root):
        match node:
            case MemberExpression(object=Identifier(name=name), property=Identifier(name="value"), computed=False):
                deps.setdefault(name)
            case MemberExpression(object=Identifier(name="props"), property=Identifier(name=prop), computed=False):
                deps.setdefault(f"props.{prop}")
    return list(deps)


def this_dependencies(root: Node | None) -> list[str]:
    """Names read through ``this.name`` below ``root``."""
    deps: dict[str, None] = {}
    for node in walk(root):
        match node:
            case MemberExpression(object=ThisExpression(), property=Identifier(name=prop), computed=False):
                deps.setdefault(prop)
    return list(deps)


# ----------------------------------------------------------------------
# Rendering
# ----------------------------------------------------------------------


def _array_pattern_label(pattern: ArrayPattern) -> str:
    if not pattern.elements:
        return "[ ... ]"
    names = []
    for element in pattern.elements:
        match element:
            case Identifier(name=name):
                names.append(name)
            case RestElement(argument=Identifier(name=name)):
                names.append(f"...{name}")
            case _:
                names.append("...")
    return f"[{', '.join(names)}]"


def parameter_label(param: Parameter | Pattern) -> str:
    """Short display form of one parameter (``x``, ``...rest``, ``{ ... }``, ``x = ...``)."""
    pattern = param.pattern if isinstance(param, Parameter) else param
    match pattern:
        case Identifier(name=name):
            return name
        case ObjectPattern():
            return TYPE_LITERAL_PLACEHOLDER
        case ArrayPattern() as array:
            return _array_pattern_label(array)
        case RestElement(argument=Identifier(name=name)):
            return f"...{name}"
        case RestElement():
            return "...args"
        case AssignmentPattern(left=Identifier(name=name)):
            return f"{name} = ..."
        case AssignmentPattern(left=ObjectPattern()):
            return "{ ... } = ..."
        case AssignmentPattern(left=ArrayPattern() as array):
            return f"{_array_pattern_label(array)} = ..."
        case _:
            return UNKNOWN_TYPE


def parameter_labels(fn: Expression | ObjectMethod | FunctionDeclaration | None) -> list[str]:
    match fn:
        case FunctionExpression(params=params) | ArrowFunctionExpression(params=params):
            return [parameter_label(p) for p in params]
        case ObjectMethod(params=params) | FunctionDeclaration(params=params):
            return [parameter_label(p) for p in params]
        case _:
            return []


def binding_names(params: tuple[Parameter, ...]) -> list[str]:
    """Bound names of a parameter list, flattening one level of destructuring."""
    names: list[str] = []
    for param in params:
        pattern = param.pattern
        if isinstance(pattern, AssignmentPattern):
            pattern = pattern.left
        match pattern:
            case Identifier(name=name):
                names.append(name)
            case ObjectPattern(properties=properties):
                names.extend(p.key for p in properties if not isinstance(p, RestElement))
            case ArrayPattern(elements=elements):
                names.extend(e.name for e in elements if isinstance(e, Identifier))
            case RestElement(argument=Identifier(name=name)):
                names.append(name)
    return names


def pattern_name(pattern: Pattern) -> str | None:
    """Display name of a declarator target (``x``, ``{ ... }``, ``[ ... ]``)."""
    match pattern:
        case Identifier(name=name):
            return name
        case ObjectPattern():
            return TYPE_LITERAL_PLACEHOLDER
        case ArrayPattern():
            return "[ ... ]"
        case RestElement(argument=Identifier(name=name)):
            return f"...{name}"
        case RestElement():
            return "...args"
        case AssignmentPattern(left=Identifier(name=name)):
            return name
        case AssignmentPattern():
            return TYPE_LITERAL_PLACEHOLDER
        case _:
            return None


def initial_value(expr: Expression | SpreadElement | None) -> str | None:
    """Display form of an initializer: literals verbatim, shapes abbreviated."""
    match expr:
        case None:
            return None
        case StringLiteral(value=value) | NumericLiteral(value=value):
            return value
        case BooleanLiteral(value=value):
            return "true" if value else "false"
        case NullLiteral():
            return "null"
        case Identifier(name=name):
            return name
        case ObjectExpression():
            return "{}"
        case ArrayExpression():
            return "[]"
        case UnaryExpression(operator="void" | "delete"):
            return None
        case CallExpression():
            return "function()"
        case ArrowFunctionExpression():
            return "() => {}"
        case FunctionExpression():
            return "function() {}"
        case TemplateLiteral(quasis=(only,)):
            return only
        case (
            TSAsExpression(expression=inner)
            | TSSatisfiesExpression(expression=inner)
            | TSNonNullExpression(expression=inner)
            | ParenthesizedExpression(expression=inner)
        ):
            return initial_value(inner)
        case SpreadElement():
            return "..."
        case _:
            return "expression"


def literal_kind(expr: Expression | None) -> str | None:
    """JavaScript value kind of a literal initializer."""
    match expr:
        case StringLiteral() | TemplateLiteral(quasis=(_,)):
            return "string"
        case NumericLiteral():
            return "number"
        case BooleanLiteral():
            return "boolean"
        case NullLiteral():
            return "null"
        case ObjectExpression():
            return "object"
        case ArrayExpression():
            return "array"
        case _:
            return None


def type_string(node: TypeNode | None) -> str:
    """Readable rendering of a type annotation; ``unknown`` when absent."""
    match node:
        case None:
            return UNKNOWN_TYPE
        case TypeKeyword(name=name):
            return name
        case ArrayType(element=element):
            return f"{type_string(element)}[]"
        case TypeReference(name=name, type_arguments=()):
            return name
        case TypeReference(name=name, type_arguments=args):
            return f"{name}<{', '.join(type_string(a) for a in args)}>"
        case UnionType(types=types):
            return " | ".join(type_string(t) for t in types)
        case IntersectionType(types=types):
            return " & ".join(type_string(t) for t in types)
        case FunctionType(parameters=params, return_type=ret):
            names = ", ".join(
                p.pattern.name if isinstance(p.pattern, Identifier) else DEFAULT_PARAM_NAME for p in params
            )
            return f"({names}) => {type_string(ret) if ret is not None else 'void'}"
        case TypeLiteral():
            return TYPE_LITERAL_PLACEHOLDER
        case TupleType(elements=elements):
            return f"[{', '.join(type_string(e) for e in elements)}]"
        case ParenthesizedType(inner=inner):
            return f"({type_string(inner)})"
        case LiteralType(kind="string" | "number" | "boolean" | "null" | "undefined" as kind):
            return kind
        case LiteralType():
            return "literal"
        case InferType(name=name):
            return f"infer {name}"
        case ConditionalType(check=check, extends=extends, true_type=true_type, false_type=false_type):
            return (
                f"{type_string(check)} extends {type_string(extends)}"
                f" ? {type_string(true_type)} : {type_string(false_type)}"
            )
        case _:
            return UNKNOWN_TYPE


def optional_type(node: TypeNode | None) -> str | None:
    return type_string(node) if node is not None else None
