"""Dialect registry.

A dialect is one concrete input grammar variant. Each entry records which
tree-sitter grammar package provides it, how to obtain the language object
from that package, and which file extensions map to it.
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass
from importlib.util import find_spec
from typing import Any

import tree_sitter

from scriptscope.core.errors import ParseError


@dataclass(frozen=True)
class Dialect:
    """Grammar metadata for one dialect."""

    name: str
    grammar_package: str  # PyPI distribution name
    grammar_module: str  # import name
    min_version: str
    language_func: str = "language"
    extensions: frozenset[str] = frozenset()


TYPESCRIPT = Dialect(
    name="typescript",
    grammar_package="tree-sitter-typescript",
    grammar_module="tree_sitter_typescript",
    min_version="0.23.0",
    language_func="language_typescript",
    # Plain scripts are parsed with the typescript grammar (a superset).
    extensions=frozenset({"ts", "mts", "cts", "js", "mjs", "cjs"}),
)

TSX = Dialect(
    name="tsx",
    grammar_package="tree-sitter-typescript",
    grammar_module="tree_sitter_typescript",
    min_version="0.23.0",
    language_func="language_tsx",
    extensions=frozenset({"tsx", "jsx"}),
)

HTML = Dialect(
    name="html",
    grammar_package="tree-sitter-html",
    grammar_module="tree_sitter_html",
    min_version="0.23.0",
    extensions=frozenset({"html", "htm"}),
)

DIALECTS: dict[str, Dialect] = {d.name: d for d in (TYPESCRIPT, TSX, HTML)}

_EXT_TO_DIALECT: dict[str, Dialect] = {
    ext: dialect for dialect in DIALECTS.values() for ext in dialect.extensions
}

# <script lang="..."> values inside single-file components
_SCRIPT_LANG_TO_DIALECT: dict[str, str] = {
    "ts": "typescript",
    "typescript": "typescript",
    "js": "typescript",
    "javascript": "typescript",
    "tsx": "tsx",
    "jsx": "tsx",
}


def get_dialect(name: str) -> Dialect:
    """Look up a dialect by name, raising ParseError if unknown."""
    dialect = DIALECTS.get(name)
    if dialect is None:
        raise ParseError.unsupported_dialect(name)
    return dialect


def extension_of(filename: str) -> str:
    """Lower-cased extension without the dot ('' if none)."""
    base = filename.replace("\\", "/").rsplit("/", 1)[-1]
    if "." not in base:
        return ""
    return base.rsplit(".", 1)[-1].lower()


def dialect_for_extension(ext: str) -> Dialect | None:
    return _EXT_TO_DIALECT.get(ext.lower().lstrip("."))


def dialect_for_filename(filename: str) -> Dialect:
    """Resolve the script dialect for a filename.

    Raises:
        ParseError: If the extension has no script dialect.
    """
    ext = extension_of(filename)
    dialect = dialect_for_extension(ext)
    if dialect is None or dialect is HTML:
        raise ParseError.unsupported_extension(filename, ext)
    return dialect


def dialect_for_script_lang(lang: str | None) -> Dialect:
    """Dialect for a component <script lang="..."> attribute (default: typescript)."""
    if not lang:
        return TYPESCRIPT
    name = _SCRIPT_LANG_TO_DIALECT.get(lang.lower())
    if name is None:
        raise ParseError.unsupported_dialect(lang)
    return DIALECTS[name]


def is_grammar_installed(dialect: Dialect) -> bool:
    """Check whether the dialect's grammar module can be imported."""
    return find_spec(dialect.grammar_module) is not None


def load_language(dialect: Dialect) -> Any:
    """Load the compiled tree-sitter Language for a dialect.

    Raises:
        ParseError: If the grammar module or its language function is missing.
    """
    try:
        mod = importlib.import_module(dialect.grammar_module)
        lang_fn = getattr(mod, dialect.language_func)
    except (ImportError, AttributeError) as err:
        raise ParseError.grammar_unavailable(dialect.name, dialect.grammar_module, str(err)) from err
    return tree_sitter.Language(lang_fn())
