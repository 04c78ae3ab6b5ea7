"""Markdown summary of a parse result.

One ``## Title (count)`` section per non-empty record list. Positions are
printed as ``[L<row>:C<col>]`` after each entry when enabled.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from scriptscope.assembler import ComponentParseResult, ParseResult
from scriptscope.component.models import (
    CompositionAPIInfo,
    OptionsAPIInfo,
    PropInfo,
    ScriptImportInfo,
    StyleInfo,
    TemplateInfo,
)
from scriptscope.config.models import SummaryConfig
from scriptscope.core.logging import get_logger
from scriptscope.extract.models import ClassInfo, FunctionInfo, ImportInfo, TypeInfo
from scriptscope.parsing.materialize import Position

log = get_logger(__name__)

VALUE_PREVIEW_LENGTH = 50


# ----------------------------------------------------------------------
# Formatting helpers
# ----------------------------------------------------------------------


def format_position(position: Position | None) -> str:
    if position is None:
        return ""
    return f"[L{position.row}:C{position.column}]"


def format_parameters(parameters: Sequence[str] | None) -> str:
    return ", ".join(parameters) if parameters else "none"


def format_value(value: str | None) -> str:
    if not value:
        return "undefined"
    if len(value) > VALUE_PREVIEW_LENGTH:
        return value[:VALUE_PREVIEW_LENGTH] + "..."
    return value


def format_import(names: Sequence[str], source: str, is_default: bool, is_namespace: bool) -> str:
    if is_default and names:
        head = f"default {names[0]}"
    elif is_namespace and names:
        head = f"* as {names[0]}"
    else:
        head = ", ".join(names)
    return f"{head} from {source}" if head else f"from {source}"


class _Writer:
    """Accumulates summary lines under one set of options."""

    def __init__(self, options: SummaryConfig) -> None:
        self.options = options
        self.lines: list[str] = []

    def pos(self, record: Any) -> str:
        return f" {format_position(record.start)}" if self.options.show_positions else ""

    def typed(self, type_: str | None, prefix: str = ": ") -> str:
        return f"{prefix}{type_}" if self.options.show_types and type_ else ""

    def section(self, title: str, items: Sequence[Any], render: Callable[[Any], str | list[str]]) -> None:
        if not items:
            return
        self.lines.extend([f"## {title} ({len(items)})", ""])
        for item in items:
            rendered = render(item)
            if isinstance(rendered, str):
                self.lines.append(rendered)
            else:
                self.lines.extend(rendered)
        self.lines.append("")

    def text(self) -> str:
        return "\n".join(self.lines)


# ----------------------------------------------------------------------
# Script sections
# ----------------------------------------------------------------------


def _class_lines(w: _Writer, cls: ClassInfo) -> list[str]:
    extends = f" extends {cls.extends}" if cls.extends else ""
    implements = f" implements {', '.join(cls.implements)}" if cls.implements else ""
    abstract = "abstract " if cls.is_abstract else ""
    lines = [f"- {abstract}{cls.name}{extends}{implements}{w.pos(cls)}"]
    if cls.properties:
        lines.append("  Properties:")
        for prop in cls.properties:
            visibility = f"{prop.visibility} " if prop.visibility else ""
            static = "static " if prop.is_static else ""
            readonly = "readonly " if prop.is_readonly else ""
            lines.append(f"  - {visibility}{static}{readonly}{prop.name}{w.typed(prop.type)}")
    if cls.accessors:
        lines.append("  Accessors:")
        for accessor in cls.accessors:
            lines.append(f"  - {accessor.accessor} {accessor.name}{w.typed(accessor.type)}")
    if cls.methods:
        lines.append("  Methods:")
        for method in cls.methods:
            flags = "".join(
                f"{flag} "
                for flag, on in (("static", method.is_static), ("async", method.is_async), ("abstract", method.is_abstract))
                if on
            )
            returns = w.typed(method.return_type or "void", " -> ")
            lines.append(f"  - {flags}{method.name}({format_parameters(method.parameters)}){returns}")
    return lines


def _type_lines(w: _Writer, t: TypeInfo) -> list[str]:
    lines = [f"- {t.name} ({t.kind}){w.pos(t)}"]
    if t.properties:
        lines.append("  Properties:")
        for prop in t.properties:
            optional = "?" if prop.is_optional else ""
            readonly = "readonly " if prop.is_readonly else ""
            lines.append(f"  - {readonly}{prop.name}{optional}{w.typed(prop.type or 'any')}")
    if t.methods:
        lines.append("  Methods:")
        for method in t.methods:
            returns = w.typed(method.return_type or "void", " -> ")
            lines.append(f"  - {method.name}({format_parameters(method.parameters)}){returns}")
    if t.enum_members:
        lines.append(f"  Members: {', '.join(t.enum_members)}")
    if t.type_body and not w.options.compact:
        lines.append(f"  = {format_value(t.type_body)}")
    return lines


def _function_line(w: _Writer, fn: FunctionInfo) -> str:
    kind = f" [{fn.kind}]" if w.options.show_types else ""
    prefix = "async " if fn.is_async else ""
    return f"- {prefix}{fn.name}({format_parameters(fn.parameters)}) -> {fn.return_type or 'void'}{kind}{w.pos(fn)}"


def _import_line(w: _Writer, imp: ImportInfo) -> str:
    if imp.is_side_effect:
        return f"- {imp.source} [side-effect]{w.pos(imp)}"
    type_only = " [type]" if imp.is_type_only else ""
    return f"- {format_import(imp.imports, imp.source, imp.is_default, imp.is_namespace)}{type_only}{w.pos(imp)}"


def _script_sections(w: _Writer, result: ParseResult) -> None:
    w.section("Functions", result.functions, lambda fn: _function_line(w, fn))
    w.section(
        "Function Calls",
        result.function_calls,
        lambda call: f"- {call.name}({format_parameters(call.arguments)}){w.pos(call)}",
    )
    w.section("Classes", result.classes, lambda cls: _class_lines(w, cls))
    w.section(
        "Variables",
        result.variables,
        lambda v: (
            f"- {'const' if v.is_const else 'let'} {v.name}{w.typed(v.type)}"
            f"{'' if w.options.compact else ' = ' + format_value(v.value)}{w.pos(v)}"
        ),
    )
    w.section("Imports", result.imports, lambda imp: _import_line(w, imp))
    w.section(
        "Exports",
        result.exports,
        lambda exp: f"- {'default ' if exp.is_default else ''}{exp.name} ({exp.type}){w.pos(exp)}",
    )
    w.section("Types", result.types, lambda t: _type_lines(w, t))


# ----------------------------------------------------------------------
# Component sections
# ----------------------------------------------------------------------


def _template_section(w: _Writer, info: TemplateInfo | None) -> None:
    w.lines.extend(["## Template Info", ""])
    if info is None:
        w.lines.extend(["- Has Template: No", ""])
        return
    w.lines.append("- Has Template: Yes")
    if info.lang:
        w.lines.append(f"- Language: {info.lang}")
    directives = list(dict.fromkeys(f"v-{d.name}" for d in info.directives))
    if directives:
        w.lines.append(f"- Directives: {', '.join(directives)}")
    if info.bindings:
        w.lines.append(f"- Bindings: {', '.join(dict.fromkeys(b.name for b in info.bindings))}")
    if info.events:
        w.lines.append(f"- Events: {', '.join(dict.fromkeys(e.name for e in info.events))}")
    if info.components:
        w.lines.append(f"- Components: {', '.join(info.components)}")
    if info.slots:
        w.lines.append(f"- Slots: {', '.join(info.slots)}")
    w.lines.append("")


def _style_lines(style: StyleInfo) -> list[str]:
    lines = ["- Has Style: Yes"]
    if style.lang:
        lines.append(f"  - Language: {style.lang}")
    lines.append(f"  - Scoped: {'true' if style.scoped else 'false'}")
    if style.module:
        lines.append(f"  - Module: {style.module}")
    return lines


def _options_section(w: _Writer, info: OptionsAPIInfo) -> None:
    w.lines.extend(["## Options API", ""])
    counts = (
        ("Props", info.props),
        ("Emits", info.emits),
        ("Data Properties", info.data_properties),
        ("Computed Properties", info.computed_properties),
        ("Watch Properties", info.watch_properties),
        ("Methods", info.methods),
        ("Lifecycle Hooks", info.lifecycle_hooks),
        ("Mixins", info.mixins),
    )
    for label, items in counts:
        if items:
            w.lines.append(f"- {label}: {len(items)}")
    w.lines.append("")
    if w.options.compact:
        return
    w.section(
        "Data Properties",
        info.data_properties,
        lambda d: f"- {d.name}{w.typed(d.type)} = {format_value(d.initial_value)}{w.pos(d)}",
    )
    w.section(
        "Computed Properties",
        info.computed_properties,
        lambda c: (
            f"- {c.name}{' [getter]' if c.is_getter else ''}{' [setter]' if c.is_setter else ''}"
            f"{' [deps: ' + ', '.join(c.dependencies) + ']' if c.dependencies else ''}{w.pos(c)}"
        ),
    )
    w.section(
        "Watch Properties",
        info.watch_properties,
        lambda p: (
            f"- {p.name}({format_parameters(p.parameters)})"
            f"{' [deep]' if p.is_deep else ''}{' [immediate]' if p.is_immediate else ''}"
            f" [{p.callback_type}]{w.pos(p)}"
        ),
    )
    w.section(
        "Mixins",
        info.mixins,
        lambda m: f"- {m.name}{' from ' + m.source if m.source and m.source != m.name else ''}{w.pos(m)}",
    )


def _prop_lines(w: _Writer, prop: PropInfo) -> list[str]:
    required = " (required)" if prop.required else ""
    model = " [v-model]" if prop.is_model_prop else ""
    slots = " [slots]" if prop.is_slots_prop else ""
    validator = " [validator]" if prop.validator else ""
    lines = [f"- {prop.name}{w.typed(prop.type)}{required}{model}{slots}{validator}{w.pos(prop)}"]
    default = prop.default
    if default is not None:
        if default.type == "primitive" and default.value is not None:
            lines.append(f"  - Default: {default.value}")
        elif default.is_factory and default.factory_expression:
            lines.append(f"  - Default: {default.factory_expression}")
        elif default.value is not None:
            lines.append(f"  - Default: {default.value}")
    return lines


def _shared_sections(w: _Writer, info: OptionsAPIInfo | CompositionAPIInfo) -> None:
    """Props, emits, methods and lifecycle hooks exist in both groupings."""
    w.section("Props", info.props, lambda p: _prop_lines(w, p))
    w.section("Emits", info.emits, lambda e: f"- {e.name}({format_parameters(e.parameters)}){w.pos(e)}")
    w.section(
        "Methods",
        info.methods,
        lambda m: (
            f"- {'async ' if m.is_async else ''}{m.name}({format_parameters(m.parameters)})"
            f"{w.typed(m.return_type, ' -> ')}{w.pos(m)}"
        ),
    )
    w.section(
        "Lifecycle Hooks",
        info.lifecycle_hooks,
        lambda h: f"- {h.name}({format_parameters(h.parameters)}){w.pos(h)}",
    )


def _composition_section(w: _Writer, info: CompositionAPIInfo) -> None:
    w.lines.extend(["## Composition API", ""])
    w.section("Refs", info.refs, lambda r: f"- {r.name}{w.typed(r.type)}{' [shallow]' if r.is_shallow else ''}{w.pos(r)}")
    w.section(
        "Reactives",
        info.reactives,
        lambda r: f"- {r.name}{w.typed(r.type)}{' [shallow]' if r.is_shallow else ''}{w.pos(r)}",
    )
    w.section(
        "Computed",
        info.computed,
        lambda c: (
            f"- {c.name}{w.typed(c.type)}{' [readonly]' if c.is_readonly else ''}{' [setter]' if c.has_setter else ''}"
            f"{' [deps: ' + ', '.join(c.dependencies) + ']' if c.dependencies else ''}{w.pos(c)}"
        ),
    )
    w.section(
        "Watch",
        info.watch,
        lambda x: (
            f"- {x.name}({', '.join(x.dependencies)}){' [deep]' if x.is_deep else ''}"
            f"{' [immediate]' if x.is_immediate else ''}{' [flush: ' + x.flush + ']' if x.flush else ''}"
            f"{' [array]' if x.is_array_watch else ''}{w.pos(x)}"
        ),
    )
    w.section(
        "Watch Effects",
        info.watch_effects,
        lambda e: (
            f"- {e.name}{' [flush: ' + e.flush + ']' if e.flush else ''}"
            f"{' [onCleanup]' if e.uses_on_cleanup else ''}"
            f"{' [reads: ' + ', '.join(e.reactive_variables) + ']' if e.reactive_variables and not w.options.compact else ''}"
            f"{w.pos(e)}"
        ),
    )
    w.section(
        "Provide",
        info.provide,
        lambda p: f"- {p.key}{' [symbol]' if p.is_symbol_key else ''}{' [reactive]' if p.is_reactive else ''}{w.pos(p)}",
    )
    w.section(
        "Inject",
        info.inject,
        lambda i: (
            f"- {i.key}{' as ' + i.alias if i.alias else ''}{' [symbol]' if i.is_symbol_key else ''}"
            f"{' [reactive]' if i.is_reactive else ''}{w.pos(i)}"
        ),
    )
    w.section(
        "Variables",
        info.variables,
        lambda v: f"- {'const' if v.is_const else 'let'} {v.name}{w.typed(v.type)}{w.pos(v)}",
    )
    w.section("Expose", info.expose, lambda e: f"- {e.name} [{e.type}]{w.typed(e.value_type)}{w.pos(e)}")


def _script_import_line(w: _Writer, imp: ScriptImportInfo) -> str:
    head = format_import(imp.imported_names, imp.source, imp.is_default_import, imp.is_namespace_import)
    return f"- {head}{' [type]' if imp.is_type_import else ''}{w.pos(imp)}"


def _component_sections(w: _Writer, result: ComponentParseResult) -> None:
    w.lines.extend(["## Script Type", "", f"- {'script setup' if result.script_setup else 'script'}", ""])
    _template_section(w, result.template_info)
    w.section("Style Info", result.style_info, _style_lines)
    if result.options_api is not None:
        _options_section(w, result.options_api)
        _shared_sections(w, result.options_api)
    if result.composition_api is not None:
        _composition_section(w, result.composition_api)
        _shared_sections(w, result.composition_api)
    w.section("Script Imports", result.script_imports, lambda imp: _script_import_line(w, imp))
    if result.warnings:
        w.section("Warnings", result.warnings, lambda message: f"- {message}")


# ----------------------------------------------------------------------
# Entry point
# ----------------------------------------------------------------------


def build_summary(
    result: ParseResult | ComponentParseResult,
    filepath: str,
    options: SummaryConfig | None = None,
) -> str:
    """Render ``result`` as Markdown."""
    w = _Writer(options or SummaryConfig())
    is_component = isinstance(result, ComponentParseResult)
    title = "Component Analysis" if is_component else "Code Analysis"
    w.lines.extend([f"# {title}: {filepath}", "", f"Language: {result.language}", ""])
    if is_component:
        _component_sections(w, result)  # type: ignore[arg-type]
    _script_sections(w, result)
    summary = w.text()
    log.debug("summary_built", filepath=filepath, lines=len(w.lines))
    return summary
