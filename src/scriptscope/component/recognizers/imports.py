"""Import declarations of a component script."""

from __future__ import annotations

from scriptscope.component.models import ScriptImportInfo
from scriptscope.component.script_tree import ImportDeclaration, Statement


def recognize_import(stmt: Statement) -> ScriptImportInfo | None:
    """Default and namespace imports are listed by local name, named imports
    by the name they are imported as."""
    if not isinstance(stmt, ImportDeclaration):
        return None
    names: list[str] = []
    for spec in stmt.specifiers:
        names.append(spec.local if spec.kind in ("default", "namespace") else spec.imported)
    return ScriptImportInfo(
        source=stmt.source,
        imported_names=names,
        is_default_import=any(s.kind == "default" for s in stmt.specifiers),
        is_namespace_import=any(s.kind == "namespace" for s in stmt.specifiers),
        is_type_import=stmt.is_type_only or (bool(stmt.specifiers) and all(s.is_type for s in stmt.specifiers)),
        start=stmt.start,
        end=stmt.end,
    )
