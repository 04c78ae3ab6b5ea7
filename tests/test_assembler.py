"""Tests for the public parse entry points."""

from __future__ import annotations

import asyncio

import pytest
from structlog.testing import capture_logs

from scriptscope.assembler import (
    COMPONENT_LANGUAGE,
    ComponentParseResult,
    parse_component_file,
    parse_component_file_async,
    parse_script,
    parse_script_async,
)
from scriptscope.core.errors import ErrorCode, ParseError
from scriptscope.parsing.materialize import Position
from scriptscope.parsing.pool import ParserPool

SCRIPT = """
import { readFile } from 'fs'

export function greet(name: string): string {
  return `hi ${name}`
}

export class Greeter {}
"""

COMPONENT = """<template>
  <button @click="inc">{{ count }}</button>
</template>

<script setup lang="ts">
import { ref } from 'vue'
const count = ref(0)
function inc() { count.value++ }
</script>

<style scoped>
button { color: red; }
</style>
"""


class TestParseScript:
    """parse_script() tests."""

    def test_given_typescript_then_generic_declarations(self) -> None:
        result = parse_script(SCRIPT, "greet.ts")

        assert result.language == "typescript"
        assert [f.name for f in result.functions] == ["greet"]
        assert [c.name for c in result.classes] == ["Greeter"]
        assert [i.source for i in result.imports] == ["fs"]
        assert {e.name for e in result.exports} == {"greet", "Greeter"}
        assert result.ast is not None
        assert result.ast.kind == "program"

    def test_given_explicit_dialect_then_extension_ignored(self) -> None:
        result = parse_script("const el = <div />", "snippet.txt", dialect="tsx")

        assert result.language == "tsx"
        assert [v.name for v in result.variables] == ["el"]

    def test_given_jsx_extension_then_tsx_dialect(self) -> None:
        assert parse_script("export const A = () => <p />", "a.jsx").language == "tsx"

    @pytest.mark.parametrize("code", ["", "   \n"])
    def test_given_blank_code_then_invalid_input(self, code: str) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_script(code, "a.ts")

        assert exc_info.value.code == ErrorCode.PARSE_INVALID_INPUT

    def test_given_blank_filename_then_invalid_input(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_script("const a = 1", "")

        assert exc_info.value.code == ErrorCode.PARSE_INVALID_INPUT

    @pytest.mark.parametrize("filename", ["main.py", "App.vue", "Makefile"])
    def test_given_non_script_extension_then_unsupported(self, filename: str) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_script("const a = 1", filename)

        assert exc_info.value.code == ErrorCode.PARSE_UNSUPPORTED_EXTENSION

    def test_given_unknown_dialect_then_unsupported_dialect(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_script("const a = 1", "a.ts", dialect="coffee")

        assert exc_info.value.code == ErrorCode.PARSE_UNSUPPORTED_DIALECT

    def test_given_same_input_twice_then_same_output(self) -> None:
        first = parse_script(SCRIPT, "greet.ts").to_dict()
        second = parse_script(SCRIPT, "greet.ts").to_dict()

        assert first == second

    def test_given_to_dict_then_ast_only_on_request(self) -> None:
        result = parse_script(SCRIPT, "greet.ts")

        assert "ast" not in result.to_dict()
        assert result.to_dict(include_ast=True)["ast"]["kind"] == "program"

    def test_given_syntax_error_then_partial_result(self) -> None:
        result = parse_script("function ok() {}\nconst = ;", "broken.ts")

        assert [f.name for f in result.functions] == ["ok"]

    @pytest.mark.asyncio
    async def test_given_concurrent_async_calls_then_all_complete(self) -> None:
        pool = ParserPool(max_per_dialect=2)

        results = await asyncio.gather(
            *(parse_script_async(f"function f{i}() {{}}", f"f{i}.ts", pool=pool) for i in range(6))
        )

        assert [r.functions[0].name for r in results] == [f"f{i}" for i in range(6)]
        assert pool.get_active_count("typescript") == 0


class TestParseComponentFile:
    """parse_component_file() tests."""

    def test_given_script_setup_component_then_all_sections(self) -> None:
        result = parse_component_file(COMPONENT, "Counter.vue")

        assert isinstance(result, ComponentParseResult)
        assert result.language == COMPONENT_LANGUAGE
        assert result.script_setup
        assert result.options_api is None
        assert result.composition_api is not None
        assert [r.name for r in result.composition_api.refs] == ["count"]
        assert [m.name for m in result.composition_api.methods] == ["inc"]
        assert result.template_info is not None
        assert [e.name for e in result.template_info.events] == ["click"]
        (style,) = result.style_info
        assert style.scoped
        assert [i.source for i in result.script_imports] == ["vue"]
        assert result.warnings == []

    def test_given_script_block_then_positions_in_document_coordinates(self) -> None:
        result = parse_component_file(COMPONENT, "Counter.vue")

        (inc,) = result.functions
        assert inc.name == "inc"
        assert inc.start == Position(7, 0)
        (imp,) = result.imports
        assert imp.start == Position(5, 0)
        assert result.composition_api is not None
        assert result.composition_api.refs[0].start == Position(6, 6)

    def test_given_component_then_ast_is_document_root(self) -> None:
        result = parse_component_file(COMPONENT, "Counter.vue")

        assert result.ast is not None
        assert result.ast.kind == "document"

    def test_given_options_component_then_options_grouping(self) -> None:
        source = """<template><p>{{ x }}</p></template>
<script>
export default { data() { return { x: 1 } } }
</script>
"""
        result = parse_component_file(source, "Options.vue")

        assert not result.script_setup
        assert result.composition_api is None
        assert result.options_api is not None
        assert [d.name for d in result.options_api.data_properties] == ["x"]

    def test_given_unsupported_script_lang_then_block_omitted(self) -> None:
        source = '<template><p /></template>\n<script lang="coffee">x = 1</script>\n'

        result = parse_component_file(source, "Broken.vue")

        assert result.template_info is not None
        assert result.functions == []
        assert result.options_api is None
        assert result.composition_api is None

    def test_given_unlowered_script_block_then_internal_error_logged_and_block_omitted(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A block whose typed tree is missing fails as an internal error, not a crash."""
        # Given
        monkeypatch.setattr("scriptscope.assembler.lower_program", lambda *_args: None)

        # When
        with capture_logs() as logs:
            result = parse_component_file(COMPONENT, "Counter.vue")

        # Then
        assert result.template_info is not None
        assert result.composition_api is None
        (failure,) = [e for e in logs if e["event"] == "component_block_failed"]
        assert failure["block"] == "script setup"
        assert "INTERNAL_ERROR" in failure["error"]

    def test_given_external_script_src_then_block_skipped(self) -> None:
        source = '<template><p /></template>\n<script src="./logic.ts"></script>\n'

        result = parse_component_file(source, "External.vue")

        assert result.composition_api is None
        assert result.script_imports == []

    def test_given_template_only_then_no_script_groupings(self) -> None:
        result = parse_component_file("<template><Child /></template>\n", "Shell.vue")

        assert result.template_info is not None
        assert result.template_info.components == ["Child"]
        assert result.options_api is None
        assert result.composition_api is None

    def test_given_script_extension_then_unsupported(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_component_file("<template></template>", "App.ts")

        assert exc_info.value.code == ErrorCode.PARSE_UNSUPPORTED_EXTENSION

    def test_given_to_dict_then_component_keys(self) -> None:
        data = parse_component_file(COMPONENT, "Counter.vue").to_dict()

        assert data["language"] == COMPONENT_LANGUAGE
        assert data["script_setup"] is True
        assert "composition_api" in data
        assert "options_api" not in data
        assert "ast" not in data

    @pytest.mark.asyncio
    async def test_given_async_variant_then_same_result(self) -> None:
        first = await parse_component_file_async(COMPONENT, "Counter.vue")
        second = await parse_component_file_async(COMPONENT, "Counter.vue")

        assert first.to_dict() == second.to_dict()
        assert first.composition_api is not None
