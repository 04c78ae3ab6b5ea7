"""Parser resources: dialects, the parser pool and the tree materializer."""

from scriptscope.parsing.dialects import (
    DIALECTS,
    HTML,
    TSX,
    TYPESCRIPT,
    Dialect,
    dialect_for_extension,
    dialect_for_filename,
    dialect_for_script_lang,
    extension_of,
    get_dialect,
    is_grammar_installed,
    load_language,
)
from scriptscope.parsing.materialize import ORIGIN, Position, SyntaxNode, materialize
from scriptscope.parsing.pool import (
    ParserHandle,
    ParserPool,
    get_parser_pool,
    reset_parser_pool,
)

__all__ = [
    # Dialects
    "DIALECTS",
    "HTML",
    "TSX",
    "TYPESCRIPT",
    "Dialect",
    "dialect_for_extension",
    "dialect_for_filename",
    "dialect_for_script_lang",
    "extension_of",
    "get_dialect",
    "is_grammar_installed",
    "load_language",
    # Materializer
    "ORIGIN",
    "Position",
    "SyntaxNode",
    "materialize",
    # Pool
    "ParserHandle",
    "ParserPool",
    "get_parser_pool",
    "reset_parser_pool",
]
