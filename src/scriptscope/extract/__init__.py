"""Generic declaration extractors over materialized syntax trees.

Each extractor is a pure function ``SyntaxNode -> list[record]``.
"""

from scriptscope.extract.calls import extract_function_calls
from scriptscope.extract.classes import extract_classes
from scriptscope.extract.exports import extract_exports
from scriptscope.extract.functions import extract_functions
from scriptscope.extract.imports import extract_imports
from scriptscope.extract.models import (
    AccessorInfo,
    ClassInfo,
    ExportInfo,
    FunctionCallInfo,
    FunctionInfo,
    ImportInfo,
    MethodInfo,
    PropertyInfo,
    Record,
    TypeInfo,
    TypeMethodInfo,
    TypePropertyInfo,
    VariableInfo,
)
from scriptscope.extract.types import extract_types
from scriptscope.extract.variables import extract_variables

__all__ = [
    # Extractors
    "extract_classes",
    "extract_exports",
    "extract_function_calls",
    "extract_functions",
    "extract_imports",
    "extract_types",
    "extract_variables",
    # Records
    "AccessorInfo",
    "ClassInfo",
    "ExportInfo",
    "FunctionCallInfo",
    "FunctionInfo",
    "ImportInfo",
    "MethodInfo",
    "PropertyInfo",
    "Record",
    "TypeInfo",
    "TypeMethodInfo",
    "TypePropertyInfo",
    "VariableInfo",
]
