"""Result assembler: the public parse entry points.

``parse_script`` runs the generic extractors over one script.
``parse_component_file`` splits a single-file component, runs the script
pipeline on each script block (positions in document coordinates), the
semantic analyzer on the lowered scripts and the template analyzer on the
template block, and merges everything into one result.

Both are async-first; the sync variants wrap them in ``asyncio.run``.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Any

from scriptscope.component.analyzer import ScriptAnalysis, analyze_script
from scriptscope.component.lowering import lower_program
from scriptscope.component.models import (
    CompositionAPIInfo,
    OptionsAPIInfo,
    ScriptImportInfo,
    StyleInfo,
    TemplateInfo,
)
from scriptscope.component.script_tree import Program
from scriptscope.component.splitter import SFCBlock, split_async
from scriptscope.component.template import analyze_template
from scriptscope.config.constants import COMPONENT_EXTENSIONS
from scriptscope.core.errors import InternalError, ParseError, ScriptScopeError
from scriptscope.core.logging import get_logger
from scriptscope.extract import (
    ClassInfo,
    ExportInfo,
    FunctionCallInfo,
    FunctionInfo,
    ImportInfo,
    TypeInfo,
    VariableInfo,
    extract_classes,
    extract_exports,
    extract_function_calls,
    extract_functions,
    extract_imports,
    extract_types,
    extract_variables,
)
from scriptscope.parsing.dialects import (
    Dialect,
    dialect_for_filename,
    dialect_for_script_lang,
    extension_of,
    get_dialect,
)
from scriptscope.parsing.materialize import ORIGIN, Position, SyntaxNode, materialize
from scriptscope.parsing.pool import ParserHandle, ParserPool, get_parser_pool

log = get_logger(__name__)

COMPONENT_LANGUAGE = "component"


# ----------------------------------------------------------------------
# Results
# ----------------------------------------------------------------------


def _dump(items: list[Any]) -> list[dict[str, Any]]:
    return [item.to_dict() for item in items]


@dataclass
class ParseResult:
    """Generic declarations of one script."""

    language: str
    ast: SyntaxNode | None = field(default=None, repr=False)
    functions: list[FunctionInfo] = field(default_factory=list)
    function_calls: list[FunctionCallInfo] = field(default_factory=list)
    classes: list[ClassInfo] = field(default_factory=list)
    variables: list[VariableInfo] = field(default_factory=list)
    imports: list[ImportInfo] = field(default_factory=list)
    exports: list[ExportInfo] = field(default_factory=list)
    types: list[TypeInfo] = field(default_factory=list)

    def extend(self, other: ParseResult) -> None:
        """Append another result's declarations (component script blocks)."""
        self.functions.extend(other.functions)
        self.function_calls.extend(other.function_calls)
        self.classes.extend(other.classes)
        self.variables.extend(other.variables)
        self.imports.extend(other.imports)
        self.exports.extend(other.exports)
        self.types.extend(other.types)

    def to_dict(self, include_ast: bool = False) -> dict[str, Any]:
        out: dict[str, Any] = {"language": self.language}
        if include_ast and self.ast is not None:
            out["ast"] = self.ast.to_dict()
        out.update(
            functions=_dump(self.functions),
            function_calls=_dump(self.function_calls),
            classes=_dump(self.classes),
            variables=_dump(self.variables),
            imports=_dump(self.imports),
            exports=_dump(self.exports),
            types=_dump(self.types),
        )
        return out


@dataclass
class ComponentParseResult(ParseResult):
    """A single-file component: script declarations plus component semantics.

    Fields for blocks that are absent, or that failed to parse, stay empty.
    """

    template_info: TemplateInfo | None = None
    style_info: list[StyleInfo] = field(default_factory=list)
    options_api: OptionsAPIInfo | None = None
    composition_api: CompositionAPIInfo | None = None
    script_imports: list[ScriptImportInfo] = field(default_factory=list)
    script_setup: bool = False
    warnings: list[str] = field(default_factory=list)

    def to_dict(self, include_ast: bool = False) -> dict[str, Any]:
        out = super().to_dict(include_ast=include_ast)
        out["script_setup"] = self.script_setup
        if self.template_info is not None:
            out["template_info"] = self.template_info.to_dict()
        if self.style_info:
            out["style_info"] = _dump(self.style_info)
        if self.options_api is not None:
            out["options_api"] = self.options_api.to_dict()
        if self.composition_api is not None:
            out["composition_api"] = self.composition_api.to_dict()
        if self.script_imports:
            out["script_imports"] = _dump(self.script_imports)
        if self.warnings:
            out["warnings"] = list(self.warnings)
        return out


# ----------------------------------------------------------------------
# Script pipeline
# ----------------------------------------------------------------------


def _validate(code: Any, filename: Any) -> None:
    if not isinstance(code, str) or not code.strip():
        raise ParseError.invalid_input("code")
    if not isinstance(filename, str) or not filename.strip():
        raise ParseError.invalid_input("filename")


def _release(pool: ParserPool, dialect: str, handle: ParserHandle) -> None:
    try:
        pool.release(dialect, handle)
    except Exception as e:
        log.warning("parser_release_failed", dialect=dialect, handle_id=handle.id, error=str(e))


def _extract(root: SyntaxNode, language: str) -> ParseResult:
    return ParseResult(
        language=language,
        ast=root,
        functions=extract_functions(root),
        function_calls=extract_function_calls(root),
        classes=extract_classes(root),
        variables=extract_variables(root),
        imports=extract_imports(root),
        exports=extract_exports(root),
        types=extract_types(root),
    )


async def _run_script(
    code: str,
    dialect: Dialect,
    filename: str,
    pool: ParserPool,
    origin: Position = ORIGIN,
    lower: bool = False,
) -> tuple[ParseResult, Program | None]:
    """Acquire, parse, materialize, extract (and optionally lower), release."""
    started = time.perf_counter()
    handle = await pool.acquire(dialect.name)
    try:
        try:
            tree = handle.parse(code.encode("utf-8"))
        except (TypeError, ValueError) as e:
            raise ParseError.parse_failed(filename, str(e)) from e
        if tree is None:
            raise ParseError.parse_failed(filename, "parser returned no tree")
        root = materialize(tree.root_node, origin)
        result = _extract(root, dialect.name)
        program = lower_program(tree.root_node, origin) if lower else None
    finally:
        _release(pool, dialect.name, handle)
    log.debug(
        "script_parsed",
        filename=filename,
        dialect=dialect.name,
        functions=len(result.functions),
        classes=len(result.classes),
        duration_ms=round((time.perf_counter() - started) * 1000, 2),
    )
    return result, program


async def parse_script_async(
    code: str,
    filename: str,
    dialect: str | None = None,
    *,
    pool: ParserPool | None = None,
) -> ParseResult:
    """Parse one script and extract its generic declarations.

    Args:
        code: Source text.
        filename: Used to infer the dialect from its extension.
        dialect: Explicit dialect name, overriding the extension.
        pool: Parser pool (defaults to the shared one).

    Raises:
        ParseError: Empty input, unsupported extension or dialect, missing
            grammar, or a parser failure.
    """
    _validate(code, filename)
    spec = get_dialect(dialect) if dialect else dialect_for_filename(filename)
    result, _ = await _run_script(code, spec, filename, pool or get_parser_pool())
    return result


def parse_script(code: str, filename: str, dialect: str | None = None) -> ParseResult:
    return asyncio.run(parse_script_async(code, filename, dialect))


# ----------------------------------------------------------------------
# Component pipeline
# ----------------------------------------------------------------------


def _style_info(block: SFCBlock) -> StyleInfo:
    return StyleInfo(lang=block.lang, scoped=block.scoped, module=block.module, start=block.start, end=block.end)


async def _analyze_script_block(
    block: SFCBlock, filename: str, pool: ParserPool
) -> tuple[ParseResult, ScriptAnalysis] | None:
    kind = "script setup" if block.setup else "script"
    if block.src:
        log.info("component_block_skipped", filename=filename, block=kind, src=block.src)
        return None
    try:
        dialect = dialect_for_script_lang(block.lang)
        result, program = await _run_script(block.content, dialect, filename, pool, origin=block.start, lower=True)
        if program is None:
            raise InternalError.unexpected("script block was not lowered", block=kind)
        return result, analyze_script(program, script_setup=block.setup)
    except ScriptScopeError as e:
        log.warning("component_block_failed", filename=filename, block=kind, error=str(e))
    except Exception as e:
        log.warning("component_block_failed", filename=filename, block=kind, error=str(e), exc_info=True)
    return None


async def parse_component_file_async(
    code: str,
    filename: str,
    *,
    pool: ParserPool | None = None,
) -> ComponentParseResult:
    """Parse a single-file component.

    Blocks that fail to parse are logged and left out of the result.

    Raises:
        ParseError: Empty input or a non-component extension.
    """
    _validate(code, filename)
    ext = extension_of(filename)
    if ext not in COMPONENT_EXTENSIONS:
        raise ParseError.unsupported_extension(filename, ext)
    pool = pool or get_parser_pool()

    descriptor = await split_async(code, pool)
    result = ComponentParseResult(
        language=COMPONENT_LANGUAGE,
        ast=descriptor.root,
        script_setup=descriptor.script_setup is not None,
        warnings=list(descriptor.warnings),
    )

    template = descriptor.template
    if template is not None and template.node is not None:
        try:
            result.template_info = analyze_template(template.node, lang=template.lang)
        except Exception as e:
            log.warning("component_block_failed", filename=filename, block="template", error=str(e), exc_info=True)

    result.style_info = [_style_info(block) for block in descriptor.styles]

    analysis = ScriptAnalysis()
    for block in (descriptor.script, descriptor.script_setup):
        if block is None:
            continue
        parsed = await _analyze_script_block(block, filename, pool)
        if parsed is None:
            continue
        partial, block_analysis = parsed
        result.extend(partial)
        analysis = analysis.merge(block_analysis)

    result.options_api = analysis.options_api
    result.composition_api = analysis.composition_api
    result.script_imports = analysis.script_imports
    log.debug(
        "component_parsed",
        filename=filename,
        script_setup=result.script_setup,
        style=("composition" if result.composition_api else "options" if result.options_api else None),
        warnings=len(result.warnings),
    )
    return result


def parse_component_file(code: str, filename: str) -> ComponentParseResult:
    return asyncio.run(parse_component_file_async(code, filename))
