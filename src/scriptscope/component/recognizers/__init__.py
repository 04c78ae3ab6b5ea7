"""Shape recognizers over the typed script tree.

Composition-style recognizers take one statement and return the records it
declares; Options-style recognizers take the component options object.
Every recognizer returns an empty list when the shape does not match.
"""

from scriptscope.component.recognizers._util import ScriptScope, nested_statements
from scriptscope.component.recognizers.computed import recognize_computed, recognize_computed_properties
from scriptscope.component.recognizers.emits import recognize_define_emits, recognize_options_emits
from scriptscope.component.recognizers.expose import recognize_expose
from scriptscope.component.recognizers.imports import recognize_import
from scriptscope.component.recognizers.injection import recognize_inject, recognize_provide
from scriptscope.component.recognizers.lifecycle import recognize_composition_hooks, recognize_options_hooks
from scriptscope.component.recognizers.methods import recognize_methods, recognize_options_methods
from scriptscope.component.recognizers.options import recognize_data_properties, recognize_mixins
from scriptscope.component.recognizers.props import recognize_define_props, recognize_options_props
from scriptscope.component.recognizers.reactivity import recognize_reactives, recognize_refs
from scriptscope.component.recognizers.variables import recognize_variables
from scriptscope.component.recognizers.watch import (
    recognize_watch,
    recognize_watch_effects,
    recognize_watch_properties,
)

__all__ = [
    "ScriptScope",
    "nested_statements",
    "recognize_composition_hooks",
    "recognize_computed",
    "recognize_computed_properties",
    "recognize_data_properties",
    "recognize_define_emits",
    "recognize_define_props",
    "recognize_expose",
    "recognize_import",
    "recognize_inject",
    "recognize_methods",
    "recognize_mixins",
    "recognize_options_emits",
    "recognize_options_hooks",
    "recognize_options_methods",
    "recognize_options_props",
    "recognize_provide",
    "recognize_reactives",
    "recognize_refs",
    "recognize_variables",
    "recognize_watch",
    "recognize_watch_effects",
    "recognize_watch_properties",
]
