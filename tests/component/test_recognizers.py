"""Tests for the component script recognizers, driven through the analyzer."""

from __future__ import annotations

from collections.abc import Callable

from scriptscope.component.analyzer import ScriptAnalysis
from scriptscope.component.models import CompositionAPIInfo, OptionsAPIInfo

Analyze = Callable[..., ScriptAnalysis]


def _composition(analyze: Analyze, source: str) -> CompositionAPIInfo:
    info = analyze(source, script_setup=True).composition_api
    assert info is not None
    return info


def _options(analyze: Analyze, source: str) -> OptionsAPIInfo:
    info = analyze(source).options_api
    assert info is not None
    return info


class TestProps:
    """Prop declarations."""

    def test_given_type_literal_then_required_follows_optional_marker(self, analyze: Analyze) -> None:
        info = _composition(analyze, "const props = defineProps<{ title: string; count?: number }>()")

        title, count = info.props
        assert (title.name, title.type, title.required) == ("title", "string", True)
        assert (count.name, count.type, count.required) == ("count", "number", False)
        assert info.variables == []

    def test_given_with_defaults_and_local_interface_then_defaults_merged(self, analyze: Analyze) -> None:
        source = """
interface Props { msg?: string; labels?: string[] }
const props = withDefaults(defineProps<Props>(), { msg: 'hello', labels: () => ['a'] })
"""
        info = _composition(analyze, source)

        msg, labels = info.props
        assert msg.default is not None
        assert (msg.default.type, msg.default.value) == ("primitive", "hello")
        assert labels.type == "string[]"
        assert labels.default is not None
        assert labels.default.type == "function"
        assert labels.default.is_factory
        assert labels.default.factory_expression == "() => ['a']"

    def test_given_options_object_then_constructor_types(self, analyze: Analyze) -> None:
        source = """
export default {
  props: {
    title: String,
    count: { type: Number, default: 0, required: false },
    modelValue: [String, Number],
  },
}
"""
        info = _options(analyze, source)

        title, count, model = info.props
        assert (title.type, title.required) == ("String", True)
        assert count.type == "Number"
        assert not count.required
        assert count.default is not None and count.default.value == "0"
        assert model.type == "String | Number"
        assert model.is_model_prop

    def test_given_validator_then_flagged(self, analyze: Analyze) -> None:
        source = "export default { props: { size: { type: String, validator: (v) => v.length > 0 } } }"
        (prop,) = _options(analyze, source).props

        assert prop.validator
        assert prop.validator_expression is not None

    def test_given_array_form_then_names_only(self, analyze: Analyze) -> None:
        info = _options(analyze, "export default { props: ['a', 'b'] }")

        assert [p.name for p in info.props] == ["a", "b"]
        assert all(p.type is None and not p.required for p in info.props)


class TestEmits:
    """Emitted events."""

    def test_given_call_signatures_then_event_and_payload_types(self, analyze: Analyze) -> None:
        source = "const emit = defineEmits<{ (e: 'change', id: number): void; (e: 'close'): void }>()"
        info = _composition(analyze, source)

        change, close = info.emits
        assert change.name == "change"
        assert change.parameters == ["number"]
        assert close.name == "close"
        assert close.parameters == []

    def test_given_runtime_array_then_names(self, analyze: Analyze) -> None:
        info = _composition(analyze, "defineEmits(['save', 'cancel'])")

        assert [e.name for e in info.emits] == ["save", "cancel"]

    def test_given_options_object_then_validator_parameters(self, analyze: Analyze) -> None:
        info = _options(analyze, "export default { emits: { submit: (payload) => true, close: null } }")

        submit, close = info.emits
        assert submit.parameters == ["payload"]
        assert close.parameters == []


class TestReactivity:
    """ref and reactive declarations."""

    def test_given_refs_then_initial_values_and_shallow_flag(self, analyze: Analyze) -> None:
        source = """
const count = ref(0)
const total = shallowRef<number>(1)
"""
        count, total = _composition(analyze, source).refs

        assert (count.name, count.initial_value, count.is_shallow, count.type) == ("count", "0", False, None)
        assert (total.name, total.initial_value, total.is_shallow, total.type) == ("total", "1", True, "number")

    def test_given_reactive_object_then_abbreviated_value(self, analyze: Analyze) -> None:
        (state,) = _composition(analyze, "const state = reactive({ items: [] })").reactives

        assert state.name == "state"
        assert state.initial_value == "{}"
        assert not state.is_shallow

    def test_given_annotation_then_it_wins_over_type_argument(self, analyze: Analyze) -> None:
        (ref,) = _composition(analyze, "const n: Ref<number> = ref<string>(0)").refs

        assert ref.type == "Ref<number>"


class TestComputed:
    """computed() and the computed option."""

    def test_given_getter_setter_object_then_writable(self, analyze: Analyze) -> None:
        source = """
const count = ref(1)
const doubled = computed({ get: () => count.value * 2, set: (v) => { count.value = v / 2 } })
"""
        (doubled,) = _composition(analyze, source).computed

        assert doubled.has_setter
        assert not doubled.is_readonly
        assert doubled.dependencies == ["count"]

    def test_given_props_access_then_dotted_dependency(self, analyze: Analyze) -> None:
        (label,) = _composition(analyze, "const label = computed(() => props.title.toUpperCase())").computed

        assert label.dependencies == ["props.title"]


class TestWatchers:
    """watch, watchEffect and the watch option."""

    def test_given_array_source_with_options_then_flags(self, analyze: Analyze) -> None:
        source = """
const a = ref(1)
const b = ref(2)
watch([a, b], ([na, nb]) => {}, { deep: true, immediate: true, flush: 'post' })
"""
        (w,) = _composition(analyze, source).watch

        assert w.name == "watch"
        assert w.dependencies == ["a", "b"]
        assert w.is_array_watch
        assert w.is_deep
        assert w.is_immediate
        assert w.flush == "post"
        assert w.parameters == ["[na, nb]"]

    def test_given_getter_source_then_member_path(self, analyze: Analyze) -> None:
        (w,) = _composition(analyze, "const stop = watch(() => props.id, (id) => {})").watch

        assert w.name == "stop"
        assert w.dependencies == ["props.id"]
        assert w.parameters == ["id"]
        assert not w.is_array_watch

    def test_given_watch_without_callback_then_ignored(self, analyze: Analyze) -> None:
        info = analyze("watch(source)", script_setup=True).composition_api

        assert info is None

    def test_given_post_effect_then_implied_flush_and_cleanup(self, analyze: Analyze) -> None:
        source = """
const count = ref(0)
watchPostEffect((onCleanup) => { console.log(count.value); onCleanup(() => {}) })
"""
        (effect,) = _composition(analyze, source).watch_effects

        assert effect.name == "watchPostEffect"
        assert effect.flush == "post"
        assert effect.uses_on_cleanup
        assert "count" in effect.reactive_variables

    def test_given_watch_option_then_function_and_object_forms(self, analyze: Analyze) -> None:
        source = """
export default {
  watch: {
    x(newVal, oldVal) {},
    items: { handler(val) {}, deep: true },
  },
}
"""
        x, items = _options(analyze, source).watch_properties

        assert (x.name, x.parameters, x.callback_type) == ("x", ["newVal", "oldVal"], "function")
        assert x.dependencies == ["x"]
        assert items.callback_type == "object"
        assert items.parameters == ["val"]
        assert items.is_deep
        assert not items.is_immediate


class TestLifecycle:
    """Lifecycle hooks."""

    def test_given_composition_hook_then_recorded(self, analyze: Analyze) -> None:
        (hook,) = _composition(analyze, "onMounted(async () => { await load() })").lifecycle_hooks

        assert hook.name == "onMounted"
        assert hook.parameters == []

    def test_given_options_hooks_then_method_and_function_forms(self, analyze: Analyze) -> None:
        source = "export default { mounted() {}, created: function () {}, name: 'X' }"
        hooks = _options(analyze, source).lifecycle_hooks

        assert [h.name for h in hooks] == ["mounted", "created"]

    def test_given_error_captured_then_parameters(self, analyze: Analyze) -> None:
        (hook,) = _options(analyze, "export default { errorCaptured(err, vm, info) {} }").lifecycle_hooks

        assert hook.parameters == ["err", "vm", "info"]


class TestInjection:
    """provide and inject."""

    SOURCE = """
const theme = ref('dark')
provide('theme', theme)
provide(Symbol('locale'), 'en')
provide('state', reactive({}))
const t = inject('theme', 'light')
"""

    def test_given_provides_then_keys_and_values(self, analyze: Analyze) -> None:
        theme, locale, state = _composition(analyze, self.SOURCE).provide

        assert (theme.key, theme.value, theme.is_symbol_key) == ("theme", "theme", False)
        assert (locale.key, locale.value, locale.is_symbol_key) == ("locale", "en", True)
        assert state.is_reactive
        assert not theme.is_reactive

    def test_given_inject_with_default_then_alias_and_default(self, analyze: Analyze) -> None:
        info = _composition(analyze, self.SOURCE)

        (inject,) = info.inject
        assert (inject.key, inject.alias, inject.default) == ("theme", "t", "light")
        assert "t" not in [v.name for v in info.variables]


class TestExpose:
    """defineExpose members."""

    def test_given_mixed_members_then_methods_and_properties(self, analyze: Analyze) -> None:
        source = """
const count = ref(0)
function reset() { count.value = 0 }
defineExpose({ count, reset, label: 'x', total: computed(() => count.value) })
"""
        exposed = {e.name: e for e in _composition(analyze, source).expose}

        assert exposed["count"].type == "property"
        assert exposed["count"].initial_value == "count"
        assert exposed["reset"].type == "method"
        assert exposed["reset"].value_type == "function"
        assert exposed["label"].type == "property"
        assert exposed["label"].value_type == "string"
        assert exposed["total"].type == "method"


class TestVariablesAndMethods:
    """Plain variables and script functions."""

    SOURCE = """
const title = 'Hello'
let n: number = 5
const handler = () => {}
const count = ref(0)
async function load(id: string): Promise<void> {}
"""

    def test_given_declarations_then_only_plain_values_are_variables(self, analyze: Analyze) -> None:
        info = _composition(analyze, self.SOURCE)

        title, n = info.variables
        assert (title.name, title.value, title.is_const, title.type) == ("title", "Hello", True, None)
        assert (n.name, n.value, n.is_const, n.type) == ("n", "5", False, "number")

    def test_given_functions_then_methods_with_signature(self, analyze: Analyze) -> None:
        info = _composition(analyze, self.SOURCE)

        handler, load = info.methods
        assert handler.name == "handler"
        assert (load.name, load.parameters, load.return_type, load.is_async) == (
            "load",
            ["id"],
            "Promise<void>",
            True,
        )


class TestOptionsSections:
    """data, computed, methods and mixins of an options object."""

    SOURCE = """
import Shared from './shared'
export default {
  mixins: [Shared],
  data() { return { x: 0, items: [] as string[] } },
  computed: {
    y() { return this.x * 2 },
    full: { get() { return this.x }, set(v) { this.x = v } },
  },
  methods: { inc() { this.x++ }, reset: function () {} },
}
"""

    def test_given_data_function_then_typed_properties(self, analyze: Analyze) -> None:
        x, items = _options(analyze, self.SOURCE).data_properties

        assert (x.name, x.type, x.initial_value) == ("x", "number", "0")
        assert (items.name, items.type, items.initial_value) == ("items", "string[]", "[]")

    def test_given_computed_section_then_getters_and_setters(self, analyze: Analyze) -> None:
        y, full = _options(analyze, self.SOURCE).computed_properties

        assert (y.is_getter, y.is_setter, y.dependencies) == (True, False, ["x"])
        assert (full.is_getter, full.is_setter, full.dependencies) == (True, True, ["x"])

    def test_given_methods_and_mixins_then_listed(self, analyze: Analyze) -> None:
        info = _options(analyze, self.SOURCE)

        assert [m.name for m in info.methods] == ["inc", "reset"]
        assert [m.name for m in info.mixins] == ["Shared"]

    def test_given_default_import_then_script_import(self, analyze: Analyze) -> None:
        (imp,) = analyze(self.SOURCE).script_imports

        assert imp.source == "./shared"
        assert imp.imported_names == ["Shared"]
        assert imp.is_default_import
        assert not imp.is_type_import
