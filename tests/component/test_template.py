"""Tests for the template analyzer."""

from __future__ import annotations

import pytest

from scriptscope.component.models import TemplateInfo
from scriptscope.component.splitter import split
from scriptscope.component.template import analyze_template, is_component_tag

TEMPLATE = """<template>
  <div :class="cls" v-if="visible" @click.stop.prevent="onClick">
    <MyButton v-model:title="title" @save="save" />
    <keep-alive><component :is="view" /></keep-alive>
    <ListItem v-for="item in items" :key="item.id">
      <template #header="{ title }">{{ title }}</template>
    </ListItem>
    <slot name="footer" />
    <my-button />
    <MyButton />
  </div>
</template>
"""


@pytest.fixture
def info() -> TemplateInfo:
    template = split(TEMPLATE).template
    assert template is not None and template.node is not None
    return analyze_template(template.node, lang=template.lang)


class TestAnalyzeTemplate:
    """analyze_template() tests."""

    def test_given_bindings_then_argument_expression_and_element(self, info: TemplateInfo) -> None:
        assert [(b.name, b.expression, b.element) for b in info.bindings] == [
            ("class", "cls", "div"),
            ("is", "view", "component"),
            ("key", "item.id", "ListItem"),
        ]

    def test_given_event_modifiers_then_split(self, info: TemplateInfo) -> None:
        click, save = info.events

        assert (click.name, click.handler, click.modifiers) == ("click", "onClick", ["stop", "prevent"])
        assert (save.name, save.element) == ("save", "MyButton")

    def test_given_directives_then_name_argument_and_value(self, info: TemplateInfo) -> None:
        by_name = {d.name: d for d in info.directives}

        assert list(by_name) == ["if", "model", "for", "slot"]
        assert (by_name["if"].value, by_name["if"].argument) == ("visible", None)
        assert by_name["model"].argument == "title"
        assert by_name["for"].value == "item in items"
        assert (by_name["slot"].argument, by_name["slot"].value) == ("header", "{ title }")

    def test_given_slot_outlets_and_slot_usage_then_slots(self, info: TemplateInfo) -> None:
        assert info.slots == ["header", "footer"]

    def test_given_custom_tags_then_components_once_in_order(self, info: TemplateInfo) -> None:
        assert info.components == ["MyButton", "ListItem", "my-button"]

    def test_given_template_span_then_block_positions(self, info: TemplateInfo) -> None:
        assert info.start.row == 0
        assert info.end.row == 11

    def test_given_default_slot_shorthand_then_default_name(self) -> None:
        template = split('<template><Card v-slot="{ item }">{{ item }}</Card></template>').template
        assert template is not None and template.node is not None

        info = analyze_template(template.node)

        assert info.slots == ["default"]
        (directive,) = info.directives
        assert (directive.name, directive.argument, directive.value) == ("slot", "default", "{ item }")

    def test_given_dynamic_event_argument_then_brackets_kept(self) -> None:
        template = split('<template><div @[eventName].once="handle"></div></template>').template
        assert template is not None and template.node is not None

        (event,) = analyze_template(template.node).events

        assert event.name == "[eventName]"
        assert event.modifiers == ["once"]


class TestIsComponentTag:
    """is_component_tag() tests."""

    @pytest.mark.parametrize("name", ["div", "span", "svg", "path", "KeepAlive", "keep-alive", "Transition", "slot"])
    def test_given_native_or_builtin_then_false(self, name: str) -> None:
        assert not is_component_tag(name)

    @pytest.mark.parametrize("name", ["MyCard", "router-view", "Teleported"])
    def test_given_custom_then_true(self, name: str) -> None:
        assert is_component_tag(name)
