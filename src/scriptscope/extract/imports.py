"""Import statement extraction."""

from __future__ import annotations

from scriptscope.extract._walk import Visit, collect, strip_quotes
from scriptscope.extract.models import ImportInfo
from scriptscope.parsing.materialize import SyntaxNode


def _specifier_name(specifier: SyntaxNode) -> str | None:
    # `{ a as b }` reports the imported name `a`
    ident = specifier.find_child("identifier")
    return ident.text if ident is not None else None


def _extract_import(visit: Visit) -> ImportInfo | None:
    node = visit.node
    source_node = node.find_child("string")
    if source_node is None:
        return None
    info = ImportInfo(
        source=strip_quotes(source_node.text),
        is_type_only=node.has_child("type"),
        start=node.start,
        end=node.end,
    )
    clause = node.find_child("import_clause")
    if clause is None:
        info.is_side_effect = True
        return info
    for part in clause.children:
        if part.kind == "identifier":
            info.imports.append(part.text)
            info.is_default = True
        elif part.kind == "namespace_import":
            ident = part.find_child("identifier")
            if ident is not None:
                info.imports.append(ident.text)
            info.is_namespace = True
        elif part.kind == "named_imports":
            for specifier in part.children_of("import_specifier"):
                name = _specifier_name(specifier)
                if name:
                    info.imports.append(name)
    return info


def extract_imports(root: SyntaxNode) -> list[ImportInfo]:
    return collect(root, ("import_statement",), _extract_import, "imports")
