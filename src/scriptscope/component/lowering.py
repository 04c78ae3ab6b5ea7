"""Lower a native tree-sitter script tree into the typed script tree.

Lowering reads grammar field names (``child_by_field_name``) so it has to
run while the native tree is alive, i.e. between pool acquire and release.
Every node it produces is positioned in document coordinates by shifting
with the block's ``origin``.

Constructs the analyzer does not model lower to ``UnknownStatement``,
``UnknownExpression`` or ``OtherType``; a top-level statement that cannot
be lowered at all is logged and replaced by ``UnknownStatement``.
"""

from __future__ import annotations

from typing import Any

from scriptscope.component import script_tree as st
from scriptscope.core.logging import get_logger
from scriptscope.parsing.materialize import ORIGIN, Position

log = get_logger(__name__)

_SKIP_KINDS = frozenset({"comment", "empty_statement", "hash_bang_line"})
_FUNCTION_EXPRESSION_KINDS = frozenset({"function_expression", "function", "generator_function"})
_FUNCTION_DECLARATION_KINDS = frozenset(
    {"function_declaration", "generator_function_declaration", "function_signature"}
)
_LOOP_KINDS = frozenset({"for_statement", "for_in_statement", "while_statement", "do_statement"})


def _decode(raw: bytes | None) -> str:
    return raw.decode("utf-8", errors="replace") if raw is not None else ""


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"`":
        return text[1:-1]
    return text


def _named(node: Any) -> list[Any]:
    return [c for c in node.named_children if c.type not in _SKIP_KINDS]


def _has_token(node: Any, token: str) -> bool:
    return any(not c.is_named and c.type == token for c in node.children)


class ScriptLowerer:
    """Stateless apart from the coordinate origin of the block."""

    def __init__(self, origin: Position = ORIGIN) -> None:
        self.origin = origin

    # ------------------------------------------------------------------
    # Shared
    # ------------------------------------------------------------------

    def _span(self, node: Any) -> dict[str, Any]:
        start = Position(node.start_point[0], node.start_point[1]).shifted(self.origin)
        end = Position(node.end_point[0], node.end_point[1]).shifted(self.origin)
        return {"start": start, "end": end, "text": _decode(node.text)}

    def _name_of(self, node: Any, field: str = "name") -> str | None:
        child = node.child_by_field_name(field)
        return _decode(child.text) if child is not None else None

    # ------------------------------------------------------------------
    # Program / statements
    # ------------------------------------------------------------------

    def program(self, root: Any) -> st.Program:
        body: list[st.Statement] = []
        for child in _named(root):
            try:
                body.append(self.statement(child))
            except Exception as e:
                log.warning(
                    "lowering_failed",
                    kind=child.type,
                    row=child.start_point[0] + self.origin.row,
                    error=str(e),
                )
                body.append(st.UnknownStatement(kind=child.type, **self._span(child)))
        return st.Program(body=tuple(body), **self._span(root))

    def block(self, node: Any) -> st.BlockStatement:
        return st.BlockStatement(
            body=tuple(self.statement(c) for c in _named(node)), **self._span(node)
        )

    def statement(self, node: Any) -> st.Statement:
        kind = node.type
        span = self._span(node)
        match kind:
            case "lexical_declaration" | "variable_declaration":
                return self.variable_declaration(node)
            case _ if kind in _FUNCTION_DECLARATION_KINDS:
                body = node.child_by_field_name("body")
                return st.FunctionDeclaration(
                    name=self._name_of(node),
                    params=self.parameters(node.child_by_field_name("parameters")),
                    body=self.block(body) if body is not None else None,
                    return_type=self.annotation(node.child_by_field_name("return_type")),
                    is_async=_has_token(node, "async"),
                    is_generator=kind.startswith("generator") or _has_token(node, "*"),
                    **span,
                )
            case "class_declaration" | "abstract_class_declaration":
                return st.ClassDeclaration(name=self._name_of(node), **span)
            case "expression_statement":
                inner = _named(node)
                if not inner:
                    return st.UnknownStatement(kind=kind, **span)
                return st.ExpressionStatement(expression=self.expression(inner[0]), **span)
            case "statement_block":
                return self.block(node)
            case "return_statement":
                inner = _named(node)
                return st.ReturnStatement(
                    argument=self.expression(inner[0]) if inner else None, **span
                )
            case "if_statement":
                alternative = node.child_by_field_name("alternative")
                if alternative is not None and alternative.type == "else_clause":
                    branches = _named(alternative)
                    alternative = branches[0] if branches else None
                return st.IfStatement(
                    test=self.expression(node.child_by_field_name("condition")),
                    consequent=self.statement(node.child_by_field_name("consequence")),
                    alternate=self.statement(alternative) if alternative is not None else None,
                    **span,
                )
            case _ if kind in _LOOP_KINDS:
                return st.LoopStatement(
                    kind=kind, body=self.statement(node.child_by_field_name("body")), **span
                )
            case "try_statement":
                return st.TryStatement(
                    block=self.block(node.child_by_field_name("body")),
                    handler=self._clause_body(node.child_by_field_name("handler")),
                    finalizer=self._clause_body(node.child_by_field_name("finalizer")),
                    **span,
                )
            case "import_statement":
                return self.import_declaration(node)
            case "export_statement":
                return self.export_statement(node)
            case "interface_declaration":
                body = node.child_by_field_name("body")
                extends: tuple[st.TypeNode, ...] = ()
                for child in node.children:
                    if child.type in ("extends_type_clause", "extends_clause"):
                        extends = tuple(self.type_node(t) for t in _named(child))
                return st.InterfaceDeclaration(
                    name=self._name_of(node) or "",
                    body=self.type_literal(body) if body is not None else st.TypeLiteral(**span),
                    extends=extends,
                    **span,
                )
            case "type_alias_declaration":
                return st.TypeAliasDeclaration(
                    name=self._name_of(node) or "",
                    annotation=self.type_node(node.child_by_field_name("value")),
                    **span,
                )
            case _:
                return st.UnknownStatement(kind=kind, **span)

    def _clause_body(self, clause: Any) -> st.BlockStatement | None:
        if clause is None:
            return None
        body = clause.child_by_field_name("body")
        return self.block(body) if body is not None else None

    def variable_declaration(self, node: Any) -> st.VariableDeclaration:
        kind = "var"
        if node.type == "lexical_declaration":
            kind_node = node.child_by_field_name("kind") or node.children[0]
            kind = _decode(kind_node.text)
        declarators = []
        for child in node.named_children:
            if child.type != "variable_declarator":
                continue
            value = child.child_by_field_name("value")
            declarators.append(
                st.VariableDeclarator(
                    id=self.pattern(child.child_by_field_name("name")),
                    init=self.expression(value) if value is not None else None,
                    annotation=self.annotation(child.child_by_field_name("type")),
                    **self._span(child),
                )
            )
        return st.VariableDeclaration(
            kind=kind if kind in ("const", "let") else "var",  # type: ignore[arg-type]
            declarations=tuple(declarators),
            **self._span(node),
        )

    def import_declaration(self, node: Any) -> st.ImportDeclaration:
        source = node.child_by_field_name("source")
        specifiers: list[st.ImportSpecifier] = []
        for clause in node.named_children:
            if clause.type != "import_clause":
                continue
            for part in clause.named_children:
                if part.type == "identifier":
                    name = _decode(part.text)
                    specifiers.append(
                        st.ImportSpecifier(kind="default", imported="default", local=name, **self._span(part))
                    )
                elif part.type == "namespace_import":
                    idents = [c for c in part.named_children if c.type == "identifier"]
                    if idents:
                        name = _decode(idents[0].text)
                        specifiers.append(
                            st.ImportSpecifier(kind="namespace", imported="*", local=name, **self._span(part))
                        )
                elif part.type == "named_imports":
                    for spec in part.named_children:
                        if spec.type != "import_specifier":
                            continue
                        imported = self._name_of(spec) or ""
                        local = self._name_of(spec, "alias") or imported
                        specifiers.append(
                            st.ImportSpecifier(
                                kind="named",
                                imported=_unquote(imported),
                                local=local,
                                is_type=_has_token(spec, "type"),
                                **self._span(spec),
                            )
                        )
        return st.ImportDeclaration(
            source=_unquote(_decode(source.text)) if source is not None else "",
            specifiers=tuple(specifiers),
            is_type_only=_has_token(node, "type"),
            **self._span(node),
        )

    def export_statement(self, node: Any) -> st.Statement:
        span = self._span(node)
        declaration = node.child_by_field_name("declaration")
        if _has_token(node, "default"):
            value = node.child_by_field_name("value")
            if declaration is not None:
                lowered = self.statement(declaration)
                if isinstance(lowered, (st.FunctionDeclaration, st.ClassDeclaration)):
                    return st.ExportDefaultDeclaration(declaration=lowered, **span)
            if value is not None:
                return st.ExportDefaultDeclaration(declaration=self.expression(value), **span)
            return st.UnknownStatement(kind=node.type, **span)

        names: list[str] = []
        for child in node.named_children:
            if child.type != "export_clause":
                continue
            for spec in child.named_children:
                if spec.type == "export_specifier":
                    exported = self._name_of(spec, "alias") or self._name_of(spec) or ""
                    names.append(_unquote(exported))
        source = node.child_by_field_name("source")
        return st.ExportNamedDeclaration(
            declaration=self.statement(declaration) if declaration is not None else None,
            specifiers=tuple(names),
            source=_unquote(_decode(source.text)) if source is not None else None,
            **span,
        )

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def expression(self, node: Any) -> st.Expression:
        if node is None:
            raise ValueError("missing expression node")
        kind = node.type
        span = self._span(node)
        match kind:
            case (
                "identifier"
                | "property_identifier"
                | "shorthand_property_identifier"
                | "private_property_identifier"
                | "undefined"
                | "super"
            ):
                return st.Identifier(name=span["text"], **span)
            case "this":
                return st.ThisExpression(**span)
            case "string":
                return st.StringLiteral(value=_unquote(span["text"]), **span)
            case "number":
                return st.NumericLiteral(value=span["text"], **span)
            case "true" | "false":
                return st.BooleanLiteral(value=kind == "true", **span)
            case "null":
                return st.NullLiteral(**span)
            case "regex":
                pattern = node.child_by_field_name("pattern")
                return st.RegExpLiteral(pattern=_decode(pattern.text) if pattern else span["text"], **span)
            case "template_string":
                return self.template_literal(node)
            case "object":
                return self.object_expression(node)
            case "array":
                return st.ArrayExpression(
                    elements=tuple(self.argument(c) for c in _named(node)), **span
                )
            case "call_expression":
                callee = node.child_by_field_name("function")
                args = node.child_by_field_name("arguments")
                type_args = node.child_by_field_name("type_arguments")
                return st.CallExpression(
                    callee=self.expression(callee),
                    arguments=self.arguments(args),
                    type_arguments=tuple(self.type_node(t) for t in _named(type_args))
                    if type_args is not None
                    else (),
                    optional=any(c.type == "optional_chain" for c in node.children),
                    **span,
                )
            case "new_expression":
                return st.NewExpression(
                    callee=self.expression(node.child_by_field_name("constructor")),
                    arguments=self.arguments(node.child_by_field_name("arguments")),
                    **span,
                )
            case "member_expression":
                return st.MemberExpression(
                    object=self.expression(node.child_by_field_name("object")),
                    property=self.expression(node.child_by_field_name("property")),
                    **span,
                )
            case "subscript_expression":
                return st.MemberExpression(
                    object=self.expression(node.child_by_field_name("object")),
                    property=self.expression(node.child_by_field_name("index")),
                    computed=True,
                    **span,
                )
            case _ if kind in _FUNCTION_EXPRESSION_KINDS:
                body = node.child_by_field_name("body")
                return st.FunctionExpression(
                    name=self._name_of(node),
                    params=self.parameters(node.child_by_field_name("parameters")),
                    body=self.block(body) if body is not None else None,
                    return_type=self.annotation(node.child_by_field_name("return_type")),
                    is_async=_has_token(node, "async"),
                    is_generator=kind == "generator_function" or _has_token(node, "*"),
                    **span,
                )
            case "arrow_function":
                return self.arrow_function(node)
            case "class":
                return st.ClassExpression(name=self._name_of(node), **span)
            case "unary_expression":
                return st.UnaryExpression(
                    operator=self._name_of(node, "operator") or "",
                    argument=self.expression(node.child_by_field_name("argument")),
                    **span,
                )
            case "binary_expression":
                return st.BinaryExpression(
                    operator=self._name_of(node, "operator") or "",
                    left=self.expression(node.child_by_field_name("left")),
                    right=self.expression(node.child_by_field_name("right")),
                    **span,
                )
            case "assignment_expression" | "augmented_assignment_expression":
                operator = self._name_of(node, "operator") or "="
                return st.AssignmentExpression(
                    operator=operator,
                    left=self.expression(node.child_by_field_name("left")),
                    right=self.expression(node.child_by_field_name("right")),
                    **span,
                )
            case "ternary_expression":
                return st.ConditionalExpression(
                    test=self.expression(node.child_by_field_name("condition")),
                    consequent=self.expression(node.child_by_field_name("consequence")),
                    alternate=self.expression(node.child_by_field_name("alternative")),
                    **span,
                )
            case "await_expression":
                return st.AwaitExpression(argument=self.expression(_named(node)[0]), **span)
            case "sequence_expression":
                return st.SequenceExpression(
                    expressions=tuple(self.expression(c) for c in _named(node)), **span
                )
            case "as_expression" | "satisfies_expression":
                parts = _named(node)
                annotation = self.type_node(parts[1]) if len(parts) > 1 else None
                cls = st.TSAsExpression if kind == "as_expression" else st.TSSatisfiesExpression
                return cls(expression=self.expression(parts[0]), annotation=annotation, **span)
            case "non_null_expression":
                return st.TSNonNullExpression(expression=self.expression(_named(node)[0]), **span)
            case "parenthesized_expression":
                return st.ParenthesizedExpression(expression=self.expression(_named(node)[0]), **span)
            case _:
                return st.UnknownExpression(kind=kind, **span)

    def argument(self, node: Any) -> st.Expression | st.SpreadElement:
        if node.type == "spread_element":
            return st.SpreadElement(argument=self.expression(_named(node)[0]), **self._span(node))
        return self.expression(node)

    def arguments(self, node: Any) -> tuple[st.Expression | st.SpreadElement, ...]:
        if node is None:
            return ()
        if node.type == "template_string":  # tagged template
            return (self.template_literal(node),)
        return tuple(self.argument(c) for c in _named(node))

    def template_literal(self, node: Any) -> st.TemplateLiteral:
        quasis: list[str] = []
        expressions: list[st.Expression] = []
        current: list[str] = []
        for child in node.children:
            if child.type == "template_substitution":
                quasis.append("".join(current))
                current = []
                inner = _named(child)
                if inner:
                    expressions.append(self.expression(inner[0]))
            elif child.type != "`":
                current.append(_decode(child.text))
        quasis.append("".join(current))
        return st.TemplateLiteral(quasis=tuple(quasis), expressions=tuple(expressions), **self._span(node))

    def object_expression(self, node: Any) -> st.ObjectExpression:
        members: list[st.ObjectMember] = []
        for child in _named(node):
            span = self._span(child)
            if child.type == "pair":
                key = child.child_by_field_name("key")
                members.append(
                    st.ObjectProperty(
                        key=self.property_key(key),
                        value=self.expression(child.child_by_field_name("value")),
                        computed=key.type == "computed_property_name",
                        **span,
                    )
                )
            elif child.type == "shorthand_property_identifier":
                ident = st.Identifier(name=span["text"], **span)
                members.append(st.ObjectProperty(key=ident, value=ident, shorthand=True, **span))
            elif child.type == "method_definition":
                members.append(self.object_method(child))
            elif child.type == "spread_element":
                members.append(st.SpreadElement(argument=self.expression(_named(child)[0]), **span))
        return st.ObjectExpression(properties=tuple(members), **self._span(node))

    def property_key(self, node: Any) -> st.Expression:
        if node.type == "computed_property_name":
            return self.expression(_named(node)[0])
        return self.expression(node)

    def object_method(self, node: Any) -> st.ObjectMethod:
        key = node.child_by_field_name("name")
        kind = "method"
        if _has_token(node, "get"):
            kind = "get"
        elif _has_token(node, "set"):
            kind = "set"
        body = node.child_by_field_name("body")
        return st.ObjectMethod(
            key=self.property_key(key),
            kind=kind,  # type: ignore[arg-type]
            params=self.parameters(node.child_by_field_name("parameters")),
            body=self.block(body) if body is not None else None,
            return_type=self.annotation(node.child_by_field_name("return_type")),
            is_async=_has_token(node, "async"),
            is_generator=_has_token(node, "*"),
            computed=key.type == "computed_property_name",
            **self._span(node),
        )

    def arrow_function(self, node: Any) -> st.ArrowFunctionExpression:
        single = node.child_by_field_name("parameter")
        if single is not None:
            params: tuple[st.Parameter, ...] = (
                st.Parameter(pattern=self.pattern(single), **self._span(single)),
            )
        else:
            params = self.parameters(node.child_by_field_name("parameters"))
        body = node.child_by_field_name("body")
        lowered: st.BlockStatement | st.Expression | None = None
        if body is not None:
            lowered = self.block(body) if body.type == "statement_block" else self.expression(body)
        return st.ArrowFunctionExpression(
            params=params,
            body=lowered,
            return_type=self.annotation(node.child_by_field_name("return_type")),
            is_async=_has_token(node, "async"),
            **self._span(node),
        )

    # ------------------------------------------------------------------
    # Parameters / patterns
    # ------------------------------------------------------------------

    def parameters(self, node: Any) -> tuple[st.Parameter, ...]:
        if node is None:
            return ()
        params: list[st.Parameter] = []
        for child in _named(node):
            span = self._span(child)
            if child.type in ("required_parameter", "optional_parameter"):
                pattern_node = child.child_by_field_name("pattern")
                if pattern_node is None:
                    continue
                pattern = self.pattern(pattern_node)
                value = child.child_by_field_name("value")
                if value is not None:
                    pattern = st.AssignmentPattern(left=pattern, right=self.expression(value), **span)
                params.append(
                    st.Parameter(
                        pattern=pattern,
                        annotation=self.annotation(child.child_by_field_name("type")),
                        optional=child.type == "optional_parameter",
                        **span,
                    )
                )
            elif child.type in ("identifier", "object_pattern", "array_pattern", "rest_pattern", "assignment_pattern"):
                params.append(st.Parameter(pattern=self.pattern(child), **span))
        return tuple(params)

    def pattern(self, node: Any) -> st.Pattern:
        kind = node.type
        span = self._span(node)
        match kind:
            case "identifier" | "shorthand_property_identifier_pattern" | "undefined":
                return st.Identifier(name=span["text"], **span)
            case "object_pattern":
                props: list[st.PatternProperty | st.RestElement] = []
                for child in _named(node):
                    child_span = self._span(child)
                    if child.type == "shorthand_property_identifier_pattern":
                        ident = st.Identifier(name=child_span["text"], **child_span)
                        props.append(st.PatternProperty(key=ident.name, value=ident, **child_span))
                    elif child.type == "pair_pattern":
                        key = child.child_by_field_name("key")
                        props.append(
                            st.PatternProperty(
                                key=_unquote(_decode(key.text)),
                                value=self.pattern(child.child_by_field_name("value")),
                                **child_span,
                            )
                        )
                    elif child.type == "object_assignment_pattern":
                        left = self.pattern(child.child_by_field_name("left"))
                        key_name = left.name if isinstance(left, st.Identifier) else _decode(child.text)
                        props.append(
                            st.PatternProperty(
                                key=key_name,
                                value=st.AssignmentPattern(
                                    left=left,
                                    right=self.expression(child.child_by_field_name("right")),
                                    **child_span,
                                ),
                                **child_span,
                            )
                        )
                    elif child.type == "rest_pattern":
                        props.append(st.RestElement(argument=self.pattern(_named(child)[0]), **child_span))
                return st.ObjectPattern(properties=tuple(props), **span)
            case "array_pattern":
                return st.ArrayPattern(elements=tuple(self.pattern(c) for c in _named(node)), **span)
            case "rest_pattern":
                return st.RestElement(argument=self.pattern(_named(node)[0]), **span)
            case "assignment_pattern":
                return st.AssignmentPattern(
                    left=self.pattern(node.child_by_field_name("left")),
                    right=self.expression(node.child_by_field_name("right")),
                    **span,
                )
            case "member_expression" | "subscript_expression":
                return self.expression(node)  # type: ignore[return-value]
            case _:
                return st.UnknownExpression(kind=kind, **span)

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    def annotation(self, node: Any) -> st.TypeNode | None:
        """Lower a ``type_annotation`` wrapper (or a bare type) if present."""
        if node is None:
            return None
        if node.type == "type_annotation":
            inner = _named(node)
            return self.type_node(inner[0]) if inner else None
        return self.type_node(node)

    def type_literal(self, node: Any) -> st.TypeLiteral:
        members: list[st.TypeMember] = []
        for child in _named(node):
            span = self._span(child)
            if child.type == "property_signature":
                members.append(
                    st.PropertySignature(
                        name=_unquote(self._name_of(child) or ""),
                        annotation=self.annotation(child.child_by_field_name("type")),
                        optional=_has_token(child, "?"),
                        readonly=_has_token(child, "readonly"),
                        **span,
                    )
                )
            elif child.type == "call_signature":
                members.append(
                    st.CallSignature(
                        parameters=self.parameters(child.child_by_field_name("parameters")),
                        return_type=self.annotation(child.child_by_field_name("return_type")),
                        **span,
                    )
                )
            elif child.type == "method_signature":
                members.append(
                    st.MethodSignature(
                        name=_unquote(self._name_of(child) or ""),
                        parameters=self.parameters(child.child_by_field_name("parameters")),
                        return_type=self.annotation(child.child_by_field_name("return_type")),
                        optional=_has_token(child, "?"),
                        **span,
                    )
                )
        return st.TypeLiteral(members=tuple(members), **self._span(node))

    def _flatten(self, node: Any, kind: str) -> list[st.TypeNode]:
        out: list[st.TypeNode] = []
        for child in _named(node):
            if child.type == kind:
                out.extend(self._flatten(child, kind))
            else:
                out.append(self.type_node(child))
        return out

    def _tuple_element(self, node: Any) -> st.TypeNode:
        if node.type in ("tuple_parameter", "optional_tuple_parameter"):
            annotated = self.annotation(node.child_by_field_name("type"))
            if annotated is not None:
                return annotated
        return self.type_node(node)

    def type_node(self, node: Any) -> st.TypeNode:
        if node is None:
            raise ValueError("missing type node")
        kind = node.type
        span = self._span(node)
        match kind:
            case "type_annotation":
                inner = _named(node)
                return self.type_node(inner[0]) if inner else st.OtherType(kind=kind, **span)
            case "predefined_type":
                return st.TypeKeyword(name=span["text"], **span)
            case "type_identifier" | "nested_type_identifier":
                return st.TypeReference(name=span["text"], **span)
            case "generic_type":
                args = node.child_by_field_name("type_arguments")
                return st.TypeReference(
                    name=self._name_of(node) or span["text"],
                    type_arguments=tuple(self.type_node(t) for t in _named(args)) if args is not None else (),
                    **span,
                )
            case "array_type":
                return st.ArrayType(element=self.type_node(_named(node)[0]), **span)
            case "union_type":
                return st.UnionType(types=tuple(self._flatten(node, kind)), **span)
            case "intersection_type":
                return st.IntersectionType(types=tuple(self._flatten(node, kind)), **span)
            case "function_type":
                return st.FunctionType(
                    parameters=self.parameters(node.child_by_field_name("parameters")),
                    return_type=self.annotation(node.child_by_field_name("return_type")),
                    **span,
                )
            case "object_type" | "interface_body":
                return self.type_literal(node)
            case "tuple_type":
                return st.TupleType(elements=tuple(self._tuple_element(t) for t in _named(node)), **span)
            case "parenthesized_type":
                return st.ParenthesizedType(inner=self.type_node(_named(node)[0]), **span)
            case "literal_type":
                inner = _named(node)
                literal = inner[0].type if inner else ""
                literal_kind = {
                    "string": "string",
                    "number": "number",
                    "unary_expression": "number",
                    "true": "boolean",
                    "false": "boolean",
                    "null": "null",
                    "undefined": "undefined",
                }.get(literal, "other")
                return st.LiteralType(kind=literal_kind, value=span["text"], **span)  # type: ignore[arg-type]
            case "infer_type":
                idents = [c for c in node.named_children if c.type == "type_identifier"]
                name = _decode(idents[0].text) if idents else span["text"]
                return st.InferType(name=name, **span)
            case "conditional_type":
                return st.ConditionalType(
                    check=self.type_node(node.child_by_field_name("left")),
                    extends=self.type_node(node.child_by_field_name("right")),
                    true_type=self.type_node(node.child_by_field_name("consequence")),
                    false_type=self.type_node(node.child_by_field_name("alternative")),
                    **span,
                )
            case _:
                return st.OtherType(kind=kind, **span)


def lower_program(native_root: Any, origin: Position = ORIGIN) -> st.Program:
    """Lower a native ``program`` node into a typed ``Program``."""
    return ScriptLowerer(origin).program(native_root)
