"""Tests for the Markdown summary renderer."""

from __future__ import annotations

from scriptscope.assembler import parse_component_file, parse_script
from scriptscope.config.models import SummaryConfig
from scriptscope.parsing.materialize import Position
from scriptscope.summary import build_summary, format_import, format_position, format_value

SCRIPT = """import { join } from 'path'
export const ROOT = '/srv'
export function greet(name: string): string { return join(ROOT, name) }
interface Options { verbose?: boolean }
"""

COMPONENT = """<template>
  <Child v-if="ready" :msg="msg" @close="done" />
</template>

<script setup lang="ts">
const props = defineProps<{ msg: string }>()
const ready = ref(false)
</script>
"""


class TestFormatting:
    """Formatting helpers."""

    def test_given_position_then_row_and_column(self) -> None:
        assert format_position(Position(3, 14)) == "[L3:C14]"
        assert format_position(None) == ""

    def test_given_long_value_then_truncated(self) -> None:
        assert format_value("x" * 60) == "x" * 50 + "..."
        assert format_value(None) == "undefined"

    def test_given_import_shapes_then_rendered(self) -> None:
        assert format_import(["React"], "react", True, False) == "default React from react"
        assert format_import(["fs"], "fs", False, True) == "* as fs from fs"
        assert format_import(["a", "b"], "./x", False, False) == "a, b from ./x"
        assert format_import([], "./polyfill", False, False) == "from ./polyfill"


class TestBuildSummary:
    """build_summary() tests."""

    def test_given_script_then_sections_with_counts(self) -> None:
        summary = build_summary(parse_script(SCRIPT, "greet.ts"), "src/greet.ts")

        assert summary.startswith("# Code Analysis: src/greet.ts")
        assert "Language: typescript" in summary
        assert "## Functions (1)" in summary
        assert "## Imports (1)" in summary
        assert "- join from path [L0:C0]" in summary
        assert "## Types (1)" in summary
        assert "- Options (interface) [L3:C0]" in summary
        assert "## Classes" not in summary

    def test_given_positions_disabled_then_no_markers(self) -> None:
        options = SummaryConfig(show_positions=False)

        summary = build_summary(parse_script(SCRIPT, "greet.ts"), "greet.ts", options)

        assert "[L" not in summary
        assert "- join from path\n" in summary

    def test_given_compact_then_variable_values_hidden(self) -> None:
        result = parse_script(SCRIPT, "greet.ts")

        full = build_summary(result, "greet.ts", SummaryConfig(show_positions=False))
        compact = build_summary(result, "greet.ts", SummaryConfig(show_positions=False, compact=True))

        assert "ROOT = '/srv'" in full
        assert "ROOT = '/srv'" not in compact

    def test_given_component_then_component_sections(self) -> None:
        result = parse_component_file(COMPONENT, "Panel.vue")

        summary = build_summary(result, "Panel.vue")

        assert summary.startswith("# Component Analysis: Panel.vue")
        assert "- script setup" in summary
        assert "- Has Template: Yes" in summary
        assert "- Directives: v-if" in summary
        assert "- Components: Child" in summary
        assert "## Composition API" in summary
        assert "- ready [L6:C6]" in summary
        assert "- msg: string (required)" in summary

    def test_given_component_without_template_then_marked(self) -> None:
        result = parse_component_file("<script>\nexport default { methods: { go() {} } }\n</script>\n", "Bare.vue")

        summary = build_summary(result, "Bare.vue", SummaryConfig(show_positions=False))

        assert "- Has Template: No" in summary
        assert "## Options API" in summary
        assert "- Methods: 1" in summary
        assert "- go(none)" in summary
