"""Single-file component analysis: splitting, template and script semantics."""

from scriptscope.component.analyzer import (
    ScriptAnalysis,
    analyze_composition,
    analyze_options,
    analyze_script,
)
from scriptscope.component.lowering import lower_program
from scriptscope.component.models import (
    BindingInfo,
    CompositionAPIInfo,
    DirectiveInfo,
    EventInfo,
    OptionsAPIInfo,
    ScriptImportInfo,
    StyleInfo,
    TemplateInfo,
)
from scriptscope.component.splitter import SFCBlock, SFCDescriptor, split, split_async, split_tree
from scriptscope.component.template import analyze_template

__all__ = [
    # Splitter
    "SFCBlock",
    "SFCDescriptor",
    "split",
    "split_async",
    "split_tree",
    # Template
    "analyze_template",
    # Script
    "ScriptAnalysis",
    "analyze_composition",
    "analyze_options",
    "analyze_script",
    "lower_program",
    # Records
    "BindingInfo",
    "CompositionAPIInfo",
    "DirectiveInfo",
    "EventInfo",
    "OptionsAPIInfo",
    "ScriptImportInfo",
    "StyleInfo",
    "TemplateInfo",
]
