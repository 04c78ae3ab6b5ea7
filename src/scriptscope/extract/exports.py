"""Export statement extraction."""

from __future__ import annotations

from scriptscope.core.logging import get_logger
from scriptscope.extract._walk import Visit, bfs, child_text
from scriptscope.extract.models import ExportInfo
from scriptscope.parsing.materialize import SyntaxNode

log = get_logger(__name__)

_FUNCTION_KINDS = frozenset(
    {"function_declaration", "generator_function_declaration", "function_signature", "function_expression"}
)
_CLASS_KINDS = frozenset({"class_declaration", "abstract_class_declaration", "class"})
_TYPE_KINDS = frozenset({"type_alias_declaration", "interface_declaration", "enum_declaration"})
_VARIABLE_KINDS = frozenset({"lexical_declaration", "variable_declaration"})


def _declared(declaration: SyntaxNode) -> list[tuple[str, str]]:
    """(name, export type) pairs introduced by one exported declaration."""
    kind = declaration.kind
    if kind == "ambient_declaration":
        inner = next((c for c in declaration.children if c.kind != "declare"), None)
        return _declared(inner) if inner is not None else []
    if kind in _FUNCTION_KINDS:
        name = child_text(declaration, "identifier")
        return [(name, "function")] if name else []
    if kind in _CLASS_KINDS:
        name = child_text(declaration, "type_identifier", "identifier")
        return [(name, "class")] if name else []
    if kind in _TYPE_KINDS:
        name = child_text(declaration, "type_identifier", "identifier")
        return [(name, "type")] if name else []
    if kind in _VARIABLE_KINDS:
        out: list[tuple[str, str]] = []
        for declarator in declaration.children_of("variable_declarator"):
            ident = declarator.find_child("identifier")
            if ident is not None:
                out.append((ident.text, "variable"))
        return out
    if kind == "identifier":
        return [(declaration.text, "variable")]
    return []


def _clause_names(clause: SyntaxNode) -> list[str]:
    names: list[str] = []
    for specifier in clause.children_of("export_specifier"):
        idents = [c for c in specifier.children if c.kind in ("identifier", "string")]
        if idents:
            # `{ a as b }` is exported as b
            names.append(idents[-1].text.strip("'\""))
    return names


def _exports_of(node: SyntaxNode) -> list[ExportInfo]:
    is_default = node.has_child("default")
    found: list[tuple[str, str]] = []
    for child in node.children:
        if child.kind == "export_clause":
            found.extend((name, "variable") for name in _clause_names(child))
        elif child.kind == "namespace_export":
            ident = child.find_child("identifier")
            if ident is not None:
                found.append((ident.text, "variable"))
        else:
            found.extend(_declared(child))
    return [
        ExportInfo(name=name, type=kind, is_default=is_default, start=node.start, end=node.end)  # type: ignore[arg-type]
        for name, kind in found
    ]


def extract_exports(root: SyntaxNode) -> list[ExportInfo]:
    """One record per exported name (overloads reported once)."""
    results: list[ExportInfo] = []
    seen: set[tuple[str, bool]] = set()
    visit: Visit
    for visit in bfs(root):
        node = visit.node
        if node.kind != "export_statement":
            continue
        try:
            records = _exports_of(node)
        except Exception as e:
            log.warning("extract_node_failed", extractor="exports", kind=node.kind, row=node.start.row, error=str(e))
            continue
        for record in records:
            key = (record.name, record.is_default)
            if key in seen:
                continue
            seen.add(key)
            results.append(record)
    log.debug("extract_done", extractor="exports", count=len(results))
    return results
