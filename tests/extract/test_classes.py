"""Tests for class extraction."""

from __future__ import annotations

from collections.abc import Callable

from scriptscope.extract import extract_classes
from scriptscope.parsing.materialize import SyntaxNode

Parse = Callable[..., SyntaxNode]

SOURCE = """
@Component({ selector: 'x' })
export abstract class Store<T> extends Base implements Disposable, Loggable {
  private readonly items: T[] = [];
  static count = 0;
  @Input() label: string;

  static async load(id: string): Promise<T> { return null as any }
  protected abstract save(item: T): void;
  get size(): number { return this.items.length }
  set size(value: number) {}
}
"""


class TestExtractClasses:
    """extract_classes() tests."""

    def test_given_class_then_heritage_and_generics(self, parse_tree: Parse) -> None:
        (cls,) = extract_classes(parse_tree(SOURCE))

        assert cls.name == "Store"
        assert cls.extends == "Base"
        assert cls.implements == ["Disposable", "Loggable"]
        assert cls.type_parameters == ["T"]
        assert cls.is_abstract
        assert cls.decorators == ["Component"]

    def test_given_static_async_method_then_only_those_flags(self, parse_tree: Parse) -> None:
        (cls,) = extract_classes(parse_tree(SOURCE))
        load = next(m for m in cls.methods if m.name == "load")

        assert load.is_static
        assert load.is_async
        assert not load.is_abstract
        assert load.visibility is None
        assert load.decorators == []
        assert load.parameters == ["id"]
        assert load.return_type == "Promise<T>"

    def test_given_abstract_method_then_flagged(self, parse_tree: Parse) -> None:
        (cls,) = extract_classes(parse_tree(SOURCE))
        save = next(m for m in cls.methods if m.name == "save")

        assert save.is_abstract
        assert save.visibility == "protected"
        assert save.return_type == "void"

    def test_given_fields_then_modifiers_and_decorators(self, parse_tree: Parse) -> None:
        (cls,) = extract_classes(parse_tree(SOURCE))
        props = {p.name: p for p in cls.properties}

        assert props["items"].visibility == "private"
        assert props["items"].is_readonly
        assert props["items"].type == "T[]"
        assert props["count"].is_static
        assert props["label"].decorators == ["Input"]
        assert props["label"].type == "string"

    def test_given_accessors_then_typed(self, parse_tree: Parse) -> None:
        (cls,) = extract_classes(parse_tree(SOURCE))
        accessors = {(a.name, a.accessor): a for a in cls.accessors}

        assert accessors[("size", "get")].type == "number"
        assert accessors[("size", "set")].type == "number"

    def test_given_plain_script_class_then_extends_read(self, parse_tree: Parse) -> None:
        (cls,) = extract_classes(parse_tree("class Dog extends Animal { bark() {} }", "tsx"))
        assert cls.extends == "Animal"
        assert [m.name for m in cls.methods] == ["bark"]
