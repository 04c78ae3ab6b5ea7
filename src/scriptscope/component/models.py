"""Records produced for single-file components.

Template and style records describe the markup blocks; the remaining
records come from the script semantic analyzer and are grouped by authoring
style into ``OptionsAPIInfo`` or ``CompositionAPIInfo``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Literal

from scriptscope.extract.models import Record

# ----------------------------------------------------------------------
# Template / style
# ----------------------------------------------------------------------


@dataclass
class DirectiveInfo(Record):
    name: str  # directive name without the v- prefix, e.g. "if", "model", "slot"
    value: str | None = None
    argument: str | None = None
    modifiers: list[str] = field(default_factory=list)
    element: str = ""


@dataclass
class BindingInfo(Record):
    name: str
    expression: str
    element: str = ""
    modifiers: list[str] = field(default_factory=list)


@dataclass
class EventInfo(Record):
    name: str
    handler: str
    modifiers: list[str] = field(default_factory=list)
    element: str = ""


@dataclass
class TemplateInfo(Record):
    directives: list[DirectiveInfo] = field(default_factory=list)
    bindings: list[BindingInfo] = field(default_factory=list)
    events: list[EventInfo] = field(default_factory=list)
    components: list[str] = field(default_factory=list)
    slots: list[str] = field(default_factory=list)
    lang: str | None = None


@dataclass
class StyleInfo(Record):
    lang: str | None = None  # preprocessor, e.g. "scss"
    scoped: bool = False
    module: str | None = None  # css-module name ("$style" for a bare `module`)


# ----------------------------------------------------------------------
# Script semantics
# ----------------------------------------------------------------------


@dataclass
class PropDefault:
    type: Literal["primitive", "object", "array", "function", "expression"]
    value: str | None = None
    is_factory: bool = False
    factory_expression: str | None = None


@dataclass
class PropInfo(Record):
    name: str
    type: str | None = None
    default: PropDefault | None = None
    required: bool = False
    validator: bool = False
    validator_expression: str | None = None
    is_model_prop: bool = False
    is_slots_prop: bool = False


@dataclass
class EmitInfo(Record):
    name: str
    parameters: list[str] = field(default_factory=list)
    type: str | None = None


@dataclass
class ScriptMethodInfo(Record):
    name: str
    parameters: list[str] = field(default_factory=list)
    return_type: str | None = None
    is_async: bool = False


@dataclass
class RefInfo(Record):
    name: str
    type: str | None = None
    initial_value: str | None = None
    is_shallow: bool = False


@dataclass
class ReactiveInfo(Record):
    name: str
    type: str | None = None
    initial_value: str | None = None
    is_shallow: bool = False


@dataclass
class ComputedInfo(Record):
    name: str
    type: str | None = None
    is_readonly: bool = True
    has_setter: bool = False
    dependencies: list[str] = field(default_factory=list)


@dataclass
class WatchInfo(Record):
    name: str
    dependencies: list[str] = field(default_factory=list)
    parameters: list[str] = field(default_factory=list)
    is_deep: bool = False
    is_immediate: bool = False
    flush: Literal["pre", "post", "sync"] | None = None
    is_array_watch: bool = False
    callback_type: Literal["function", "object"] = "function"


@dataclass
class WatchEffectInfo(Record):
    name: str
    parameters: list[str] = field(default_factory=list)
    flush: Literal["pre", "post", "sync"] | None = None
    on_track: bool = False
    on_trigger: bool = False
    reactive_variables: list[str] = field(default_factory=list)
    uses_on_cleanup: bool = False


@dataclass
class LifecycleHookInfo(Record):
    name: str
    parameters: list[str] = field(default_factory=list)


@dataclass
class ProvideInfo(Record):
    key: str
    value: str | None = None
    is_symbol_key: bool = False
    is_reactive: bool = False


@dataclass
class InjectInfo(Record):
    key: str
    alias: str | None = None
    default: str | None = None
    is_symbol_key: bool = False
    is_reactive: bool = False


@dataclass
class ScriptVariableInfo(Record):
    name: str
    type: str | None = None
    value: str | None = None
    is_const: bool = False


@dataclass
class ExposeInfo(Record):
    name: str
    type: Literal["property", "method"]
    value_type: str | None = None
    initial_value: str | None = None


@dataclass
class DataPropertyInfo(Record):
    name: str
    type: str | None = None
    initial_value: str | None = None


@dataclass
class ComputedPropertyInfo(Record):
    name: str
    dependencies: list[str] = field(default_factory=list)
    is_getter: bool = False
    is_setter: bool = False


@dataclass
class WatchPropertyInfo(Record):
    name: str
    dependencies: list[str] = field(default_factory=list)
    parameters: list[str] = field(default_factory=list)
    is_deep: bool = False
    is_immediate: bool = False
    callback_type: Literal["function", "object"] = "function"


@dataclass
class MixinInfo(Record):
    name: str
    source: str | None = None  # module the mixin comes from, when known


@dataclass
class ScriptImportInfo(Record):
    source: str
    imported_names: list[str] = field(default_factory=list)
    is_default_import: bool = False
    is_namespace_import: bool = False
    is_type_import: bool = False


# ----------------------------------------------------------------------
# Groupings
# ----------------------------------------------------------------------


class _Grouping:
    """Shared helpers for the authoring-style groupings."""

    def is_empty(self) -> bool:
        return all(not getattr(self, f.name) for f in fields(self))  # type: ignore[arg-type]

    def to_dict(self) -> dict[str, Any]:
        """Only non-empty lists are serialized."""
        out: dict[str, Any] = {}
        for f in fields(self):  # type: ignore[arg-type]
            items = getattr(self, f.name)
            if items:
                out[f.name] = [item.to_dict() for item in items]
        return out


@dataclass
class OptionsAPIInfo(_Grouping):
    data_properties: list[DataPropertyInfo] = field(default_factory=list)
    computed_properties: list[ComputedPropertyInfo] = field(default_factory=list)
    watch_properties: list[WatchPropertyInfo] = field(default_factory=list)
    methods: list[ScriptMethodInfo] = field(default_factory=list)
    lifecycle_hooks: list[LifecycleHookInfo] = field(default_factory=list)
    mixins: list[MixinInfo] = field(default_factory=list)
    props: list[PropInfo] = field(default_factory=list)
    emits: list[EmitInfo] = field(default_factory=list)


@dataclass
class CompositionAPIInfo(_Grouping):
    refs: list[RefInfo] = field(default_factory=list)
    reactives: list[ReactiveInfo] = field(default_factory=list)
    computed: list[ComputedInfo] = field(default_factory=list)
    watch: list[WatchInfo] = field(default_factory=list)
    watch_effects: list[WatchEffectInfo] = field(default_factory=list)
    lifecycle_hooks: list[LifecycleHookInfo] = field(default_factory=list)
    provide: list[ProvideInfo] = field(default_factory=list)
    inject: list[InjectInfo] = field(default_factory=list)
    variables: list[ScriptVariableInfo] = field(default_factory=list)
    expose: list[ExposeInfo] = field(default_factory=list)
    props: list[PropInfo] = field(default_factory=list)
    emits: list[EmitInfo] = field(default_factory=list)
    methods: list[ScriptMethodInfo] = field(default_factory=list)
