"""Script semantic analyzer for single-file components.

Decides the authoring style of a lowered script block and runs the matching
recognizers over it:

- ``<script setup>`` or an options object with a ``setup()`` function gives
  the Composition grouping, over the top-level statements followed by the
  setup body (including statements nested in blocks, conditionals, loops
  and ``try``).
- An options object without ``setup()`` gives the Options grouping.
- Anything else is analyzed as Composition.

The two groupings are never both produced for one block, and an empty
grouping is reported as ``None``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeVar

from scriptscope.component.models import (
    CompositionAPIInfo,
    OptionsAPIInfo,
    ScriptImportInfo,
)
from scriptscope.component.recognizers import (
    ScriptScope,
    nested_statements,
    recognize_composition_hooks,
    recognize_computed,
    recognize_computed_properties,
    recognize_data_properties,
    recognize_define_emits,
    recognize_define_props,
    recognize_expose,
    recognize_import,
    recognize_inject,
    recognize_methods,
    recognize_mixins,
    recognize_options_emits,
    recognize_options_hooks,
    recognize_options_methods,
    recognize_options_props,
    recognize_provide,
    recognize_reactives,
    recognize_refs,
    recognize_variables,
    recognize_watch,
    recognize_watch_effects,
    recognize_watch_properties,
)
from scriptscope.component.script_tree import Program
from scriptscope.core.errors import InternalError
from scriptscope.core.logging import get_logger

log = get_logger(__name__)

G = TypeVar("G", OptionsAPIInfo, CompositionAPIInfo)


@dataclass
class ScriptAnalysis:
    """Semantic view of one or more script blocks of a component."""

    options_api: OptionsAPIInfo | None = None
    composition_api: CompositionAPIInfo | None = None
    script_imports: list[ScriptImportInfo] = field(default_factory=list)

    def merge(self, other: ScriptAnalysis) -> ScriptAnalysis:
        """Combine the analyses of a ``<script>`` and a ``<script setup>`` block."""
        options = self.options_api or other.options_api
        if self.options_api is not None and other.options_api is not None:
            options = _concat(self.options_api, other.options_api)
        composition = self.composition_api or other.composition_api
        if self.composition_api is not None and other.composition_api is not None:
            composition = _concat(self.composition_api, other.composition_api)
        if composition is not None:
            # a component with any Composition block is a Composition component
            options = None
        return ScriptAnalysis(
            options_api=options,
            composition_api=composition,
            script_imports=self.script_imports + other.script_imports,
        )


def _concat(first: G, second: G) -> G:
    merged = type(first)()
    for name in vars(merged):
        setattr(merged, name, getattr(first, name) + getattr(second, name))
    return merged


def analyze_options(scope: ScriptScope) -> OptionsAPIInfo:
    options = scope.options
    if options is None:
        raise InternalError.unexpected("options analysis requires a component options object")
    return OptionsAPIInfo(
        data_properties=recognize_data_properties(options),
        computed_properties=recognize_computed_properties(options),
        watch_properties=recognize_watch_properties(options),
        methods=recognize_options_methods(options),
        lifecycle_hooks=recognize_options_hooks(options),
        mixins=recognize_mixins(options),
        props=recognize_options_props(options),
        emits=recognize_options_emits(options),
    )


def analyze_composition(scope: ScriptScope) -> CompositionAPIInfo:
    info = CompositionAPIInfo()
    if scope.options is not None:
        # setup(props, { emit }) components still declare props/emits as options
        info.props.extend(recognize_options_props(scope.options))
        info.emits.extend(recognize_options_emits(scope.options))

    statements = list(nested_statements(scope.composition_statements))
    for stmt in statements:
        info.refs.extend(recognize_refs(stmt))
        info.reactives.extend(recognize_reactives(stmt))
        info.computed.extend(recognize_computed(stmt))
        info.watch.extend(recognize_watch(stmt))
        info.watch_effects.extend(recognize_watch_effects(stmt))
        info.lifecycle_hooks.extend(recognize_composition_hooks(stmt))
        info.provide.extend(recognize_provide(stmt))
        info.inject.extend(recognize_inject(stmt))
        info.variables.extend(recognize_variables(stmt))
        info.props.extend(recognize_define_props(stmt, scope.local_types))
        info.emits.extend(recognize_define_emits(stmt, scope.local_types))
        info.methods.extend(recognize_methods(stmt))

    functions = frozenset(m.name for m in info.methods)
    for stmt in statements:
        info.expose.extend(recognize_expose(stmt, functions))
    return info


def analyze_script(program: Program, *, script_setup: bool = False) -> ScriptAnalysis:
    """Analyze one lowered script block."""
    scope = ScriptScope.of(program, script_setup=script_setup)
    imports = [i for i in map(recognize_import, program.body) if i is not None]

    if scope.options is not None and not script_setup and not scope.has_setup_function:
        options = analyze_options(scope)
        log.debug("script_analyzed", style="options", empty=options.is_empty())
        return ScriptAnalysis(options_api=None if options.is_empty() else options, script_imports=imports)

    composition = analyze_composition(scope)
    log.debug("script_analyzed", style="composition", empty=composition.is_empty(), script_setup=script_setup)
    return ScriptAnalysis(
        composition_api=None if composition.is_empty() else composition,
        script_imports=imports,
    )
