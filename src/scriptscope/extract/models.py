"""Declaration records produced by the generic extractors.

Every record carries ``start``/``end`` positions of the node it was read
from.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Literal

from scriptscope.parsing.materialize import Position

Visibility = Literal["public", "private", "protected"]


@dataclass
class Record:
    """Base for all extracted records."""

    start: Position
    end: Position

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class FunctionInfo(Record):
    """Function declaration, expression, arrow function or object method."""

    name: str
    kind: str  # grammar node kind, e.g. "arrow_function"
    parameters: list[str] = field(default_factory=list)
    return_type: str = "unknown"
    is_async: bool = False
    is_generator: bool = False


@dataclass
class FunctionCallInfo(Record):
    """Top-level call expression."""

    name: str
    arguments: list[str] = field(default_factory=list)


@dataclass
class MethodInfo(Record):
    name: str
    parameters: list[str] = field(default_factory=list)
    return_type: str = "unknown"
    type_parameters: list[str] = field(default_factory=list)
    decorators: list[str] = field(default_factory=list)
    is_static: bool = False
    is_async: bool = False
    is_abstract: bool = False
    visibility: Visibility | None = None


@dataclass
class PropertyInfo(Record):
    name: str
    type: str | None = None
    is_static: bool = False
    is_abstract: bool = False
    is_readonly: bool = False
    visibility: Visibility | None = None
    decorators: list[str] = field(default_factory=list)


@dataclass
class AccessorInfo(Record):
    name: str
    accessor: Literal["get", "set"]
    type: str | None = None
    is_static: bool = False
    decorators: list[str] = field(default_factory=list)


@dataclass
class ClassInfo(Record):
    name: str
    extends: str | None = None
    implements: list[str] = field(default_factory=list)
    type_parameters: list[str] = field(default_factory=list)
    decorators: list[str] = field(default_factory=list)
    is_abstract: bool = False
    methods: list[MethodInfo] = field(default_factory=list)
    properties: list[PropertyInfo] = field(default_factory=list)
    accessors: list[AccessorInfo] = field(default_factory=list)


@dataclass
class VariableInfo(Record):
    name: str
    type: str | None = None
    value: str | None = None
    is_const: bool = False
    is_readonly: bool = False
    is_exported: bool = False
    scope: Literal["local", "module", "global"] = "local"
    decorators: list[str] = field(default_factory=list)


@dataclass
class ImportInfo(Record):
    source: str
    imports: list[str] = field(default_factory=list)
    is_default: bool = False
    is_namespace: bool = False
    is_type_only: bool = False
    is_side_effect: bool = False


@dataclass
class ExportInfo(Record):
    name: str
    type: Literal["function", "class", "variable", "type"]
    is_default: bool = False


@dataclass
class TypePropertyInfo(Record):
    name: str
    type: str = "unknown"
    is_optional: bool = False
    is_readonly: bool = False


@dataclass
class TypeMethodInfo(Record):
    name: str
    parameters: list[str] = field(default_factory=list)
    return_type: str = "unknown"
    is_optional: bool = False


@dataclass
class TypeInfo(Record):
    """Interface, type alias or enum declared at module level."""

    name: str
    kind: Literal["interface", "type", "enum"]
    properties: list[TypePropertyInfo] = field(default_factory=list)
    methods: list[TypeMethodInfo] = field(default_factory=list)
    type_parameters: list[str] = field(default_factory=list)
    extends: list[str] = field(default_factory=list)
    type_body: str | None = None
    enum_members: list[str] = field(default_factory=list)
