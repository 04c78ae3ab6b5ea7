"""Typed script tree used by the component semantic analyzer.

A closed set of frozen dataclasses covering the statements, expressions,
binding patterns and TypeScript type nodes that the recognizers care
about. Anything else lowers to one of the ``Unknown*`` / ``OtherType``
variants, so recognizers can pattern-match exhaustively and simply fall
through on shapes they do not understand.

Every node carries ``start``/``end`` in document coordinates and the raw
source ``text`` it was lowered from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, TypeAlias

from scriptscope.parsing.materialize import Position


@dataclass(frozen=True, kw_only=True)
class Node:
    start: Position
    end: Position
    text: str = field(default="", repr=False, compare=False)


# ----------------------------------------------------------------------
# Type nodes
# ----------------------------------------------------------------------


@dataclass(frozen=True, kw_only=True)
class TypeKeyword(Node):
    name: str  # string, number, boolean, any, void, ...


@dataclass(frozen=True, kw_only=True)
class TypeReference(Node):
    name: str
    type_arguments: tuple[TypeNode, ...] = ()


@dataclass(frozen=True, kw_only=True)
class ArrayType(Node):
    element: TypeNode


@dataclass(frozen=True, kw_only=True)
class UnionType(Node):
    types: tuple[TypeNode, ...]


@dataclass(frozen=True, kw_only=True)
class IntersectionType(Node):
    types: tuple[TypeNode, ...]


@dataclass(frozen=True, kw_only=True)
class FunctionType(Node):
    parameters: tuple[Parameter, ...] = ()
    return_type: TypeNode | None = None


@dataclass(frozen=True, kw_only=True)
class PropertySignature(Node):
    name: str
    annotation: TypeNode | None = None
    optional: bool = False
    readonly: bool = False


@dataclass(frozen=True, kw_only=True)
class CallSignature(Node):
    parameters: tuple[Parameter, ...] = ()
    return_type: TypeNode | None = None


@dataclass(frozen=True, kw_only=True)
class MethodSignature(Node):
    name: str
    parameters: tuple[Parameter, ...] = ()
    return_type: TypeNode | None = None
    optional: bool = False


TypeMember: TypeAlias = "PropertySignature | CallSignature | MethodSignature"


@dataclass(frozen=True, kw_only=True)
class TypeLiteral(Node):
    members: tuple[TypeMember, ...] = ()


@dataclass(frozen=True, kw_only=True)
class TupleType(Node):
    elements: tuple[TypeNode, ...] = ()


@dataclass(frozen=True, kw_only=True)
class ParenthesizedType(Node):
    inner: TypeNode


@dataclass(frozen=True, kw_only=True)
class LiteralType(Node):
    kind: Literal["string", "number", "boolean", "null", "undefined", "other"]
    value: str


@dataclass(frozen=True, kw_only=True)
class InferType(Node):
    name: str


@dataclass(frozen=True, kw_only=True)
class ConditionalType(Node):
    check: TypeNode
    extends: TypeNode
    true_type: TypeNode
    false_type: TypeNode


@dataclass(frozen=True, kw_only=True)
class OtherType(Node):
    kind: str


TypeNode: TypeAlias = (
    "TypeKeyword | TypeReference | ArrayType | UnionType | IntersectionType | FunctionType"
    " | TypeLiteral | TupleType | ParenthesizedType | LiteralType | InferType | ConditionalType"
    " | OtherType"
)


# ----------------------------------------------------------------------
# Expressions
# ----------------------------------------------------------------------


@dataclass(frozen=True, kw_only=True)
class Identifier(Node):
    name: str


@dataclass(frozen=True, kw_only=True)
class ThisExpression(Node):
    pass


@dataclass(frozen=True, kw_only=True)
class StringLiteral(Node):
    value: str


@dataclass(frozen=True, kw_only=True)
class NumericLiteral(Node):
    value: str  # raw source form


@dataclass(frozen=True, kw_only=True)
class BooleanLiteral(Node):
    value: bool


@dataclass(frozen=True, kw_only=True)
class NullLiteral(Node):
    pass


@dataclass(frozen=True, kw_only=True)
class RegExpLiteral(Node):
    pattern: str


@dataclass(frozen=True, kw_only=True)
class TemplateLiteral(Node):
    quasis: tuple[str, ...] = ()
    expressions: tuple[Expression, ...] = ()


@dataclass(frozen=True, kw_only=True)
class SpreadElement(Node):
    argument: Expression


@dataclass(frozen=True, kw_only=True)
class ObjectProperty(Node):
    key: Expression
    value: Expression
    computed: bool = False
    shorthand: bool = False


@dataclass(frozen=True, kw_only=True)
class ObjectMethod(Node):
    key: Expression
    kind: Literal["method", "get", "set"] = "method"
    params: tuple[Parameter, ...] = ()
    body: BlockStatement | None = None
    return_type: TypeNode | None = None
    is_async: bool = False
    is_generator: bool = False
    computed: bool = False


ObjectMember: TypeAlias = "ObjectProperty | ObjectMethod | SpreadElement"


@dataclass(frozen=True, kw_only=True)
class ObjectExpression(Node):
    properties: tuple[ObjectMember, ...] = ()


@dataclass(frozen=True, kw_only=True)
class ArrayExpression(Node):
    elements: tuple[Expression | SpreadElement, ...] = ()


@dataclass(frozen=True, kw_only=True)
class CallExpression(Node):
    callee: Expression
    arguments: tuple[Expression | SpreadElement, ...] = ()
    type_arguments: tuple[TypeNode, ...] = ()
    optional: bool = False


@dataclass(frozen=True, kw_only=True)
class NewExpression(Node):
    callee: Expression
    arguments: tuple[Expression | SpreadElement, ...] = ()


@dataclass(frozen=True, kw_only=True)
class MemberExpression(Node):
    object: Expression
    property: Expression
    computed: bool = False


@dataclass(frozen=True, kw_only=True)
class FunctionExpression(Node):
    name: str | None = None
    params: tuple[Parameter, ...] = ()
    body: BlockStatement | None = None
    return_type: TypeNode | None = None
    is_async: bool = False
    is_generator: bool = False


@dataclass(frozen=True, kw_only=True)
class ArrowFunctionExpression(Node):
    params: tuple[Parameter, ...] = ()
    body: BlockStatement | Expression | None = None
    return_type: TypeNode | None = None
    is_async: bool = False


@dataclass(frozen=True, kw_only=True)
class ClassExpression(Node):
    name: str | None = None


@dataclass(frozen=True, kw_only=True)
class UnaryExpression(Node):
    operator: str
    argument: Expression


@dataclass(frozen=True, kw_only=True)
class BinaryExpression(Node):
    operator: str
    left: Expression
    right: Expression


@dataclass(frozen=True, kw_only=True)
class AssignmentExpression(Node):
    operator: str
    left: Expression
    right: Expression


@dataclass(frozen=True, kw_only=True)
class ConditionalExpression(Node):
    test: Expression
    consequent: Expression
    alternate: Expression


@dataclass(frozen=True, kw_only=True)
class AwaitExpression(Node):
    argument: Expression


@dataclass(frozen=True, kw_only=True)
class SequenceExpression(Node):
    expressions: tuple[Expression, ...] = ()


@dataclass(frozen=True, kw_only=True)
class TSAsExpression(Node):
    expression: Expression
    annotation: TypeNode | None = None  # None for `as const`


@dataclass(frozen=True, kw_only=True)
class TSSatisfiesExpression(Node):
    expression: Expression
    annotation: TypeNode | None = None


@dataclass(frozen=True, kw_only=True)
class TSNonNullExpression(Node):
    expression: Expression


@dataclass(frozen=True, kw_only=True)
class ParenthesizedExpression(Node):
    expression: Expression


@dataclass(frozen=True, kw_only=True)
class UnknownExpression(Node):
    kind: str


Expression: TypeAlias = (
    "Identifier | ThisExpression | StringLiteral | NumericLiteral | BooleanLiteral | NullLiteral"
    " | RegExpLiteral | TemplateLiteral | ObjectExpression | ArrayExpression | CallExpression"
    " | NewExpression | MemberExpression | FunctionExpression | ArrowFunctionExpression"
    " | ClassExpression | UnaryExpression | BinaryExpression | AssignmentExpression"
    " | ConditionalExpression | AwaitExpression | SequenceExpression | TSAsExpression"
    " | TSSatisfiesExpression | TSNonNullExpression | ParenthesizedExpression | UnknownExpression"
)


# ----------------------------------------------------------------------
# Binding patterns
# ----------------------------------------------------------------------


@dataclass(frozen=True, kw_only=True)
class PatternProperty(Node):
    key: str
    value: Pattern


@dataclass(frozen=True, kw_only=True)
class ObjectPattern(Node):
    properties: tuple[PatternProperty | RestElement, ...] = ()


@dataclass(frozen=True, kw_only=True)
class ArrayPattern(Node):
    elements: tuple[Pattern, ...] = ()


@dataclass(frozen=True, kw_only=True)
class RestElement(Node):
    argument: Pattern


@dataclass(frozen=True, kw_only=True)
class AssignmentPattern(Node):
    left: Pattern
    right: Expression


Pattern: TypeAlias = (
    "Identifier | ObjectPattern | ArrayPattern | RestElement | AssignmentPattern"
    " | MemberExpression | UnknownExpression"
)


@dataclass(frozen=True, kw_only=True)
class Parameter(Node):
    """A function parameter: binding pattern plus optional annotation."""

    pattern: Pattern
    annotation: TypeNode | None = None
    optional: bool = False


# ----------------------------------------------------------------------
# Statements
# ----------------------------------------------------------------------


@dataclass(frozen=True, kw_only=True)
class VariableDeclarator(Node):
    id: Pattern
    init: Expression | None = None
    annotation: TypeNode | None = None


@dataclass(frozen=True, kw_only=True)
class VariableDeclaration(Node):
    kind: Literal["const", "let", "var"]
    declarations: tuple[VariableDeclarator, ...] = ()


@dataclass(frozen=True, kw_only=True)
class FunctionDeclaration(Node):
    name: str | None = None
    params: tuple[Parameter, ...] = ()
    body: BlockStatement | None = None
    return_type: TypeNode | None = None
    is_async: bool = False
    is_generator: bool = False


@dataclass(frozen=True, kw_only=True)
class ClassDeclaration(Node):
    name: str | None = None


@dataclass(frozen=True, kw_only=True)
class ExpressionStatement(Node):
    expression: Expression


@dataclass(frozen=True, kw_only=True)
class BlockStatement(Node):
    body: tuple[Statement, ...] = ()


@dataclass(frozen=True, kw_only=True)
class ReturnStatement(Node):
    argument: Expression | None = None


@dataclass(frozen=True, kw_only=True)
class IfStatement(Node):
    test: Expression
    consequent: Statement
    alternate: Statement | None = None


@dataclass(frozen=True, kw_only=True)
class LoopStatement(Node):
    kind: str  # for_statement, for_in_statement, while_statement, do_statement
    body: Statement


@dataclass(frozen=True, kw_only=True)
class TryStatement(Node):
    block: BlockStatement
    handler: BlockStatement | None = None
    finalizer: BlockStatement | None = None


@dataclass(frozen=True, kw_only=True)
class ImportSpecifier(Node):
    kind: Literal["default", "namespace", "named"]
    imported: str
    local: str
    is_type: bool = False


@dataclass(frozen=True, kw_only=True)
class ImportDeclaration(Node):
    source: str
    specifiers: tuple[ImportSpecifier, ...] = ()
    is_type_only: bool = False


@dataclass(frozen=True, kw_only=True)
class ExportDefaultDeclaration(Node):
    declaration: Expression | FunctionDeclaration | ClassDeclaration


@dataclass(frozen=True, kw_only=True)
class ExportNamedDeclaration(Node):
    declaration: Statement | None = None
    specifiers: tuple[str, ...] = ()
    source: str | None = None


@dataclass(frozen=True, kw_only=True)
class InterfaceDeclaration(Node):
    name: str
    body: TypeLiteral
    extends: tuple[TypeNode, ...] = ()


@dataclass(frozen=True, kw_only=True)
class TypeAliasDeclaration(Node):
    name: str
    annotation: TypeNode


@dataclass(frozen=True, kw_only=True)
class UnknownStatement(Node):
    kind: str


Statement: TypeAlias = (
    "VariableDeclaration | FunctionDeclaration | ClassDeclaration | ExpressionStatement"
    " | BlockStatement | ReturnStatement | IfStatement | LoopStatement | TryStatement"
    " | ImportDeclaration | ExportDefaultDeclaration | ExportNamedDeclaration"
    " | InterfaceDeclaration | TypeAliasDeclaration | UnknownStatement"
)


@dataclass(frozen=True, kw_only=True)
class Program(Node):
    body: tuple[Statement, ...] = ()


FUNCTION_NODES = (FunctionExpression, ArrowFunctionExpression)
