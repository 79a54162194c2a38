"""Unicode MathClass table parsing and code point classification."""

from mathclass.classifier import (
    ClassificationIndex,
    IndexDiagnostics,
    build,
    classify,
    classify_all,
    find_class_overlap,
)
from mathclass.line_parser import parse_code_points, parse_line, parse_lines
from mathclass.range_table import ClassTable, ClassTableBuilder
from mathclass.types import (
    AmbiguousClassError,
    BuildError,
    ClassOverlapError,
    Err,
    InvalidCodePoint,
    MalformedLine,
    MathClass,
    Ok,
    ParsedLine,
    ParseError,
    Range,
    RangeOrderError,
    Result,
    UnknownClassTag,
)

__all__ = [
    "AmbiguousClassError",
    "BuildError",
    "ClassOverlapError",
    "ClassTable",
    "ClassTableBuilder",
    "ClassificationIndex",
    "Err",
    "IndexDiagnostics",
    "InvalidCodePoint",
    "MalformedLine",
    "MathClass",
    "Ok",
    "ParseError",
    "ParsedLine",
    "Range",
    "RangeOrderError",
    "Result",
    "UnknownClassTag",
    "build",
    "classify",
    "classify_all",
    "find_class_overlap",
    "parse_code_points",
    "parse_line",
    "parse_lines",
]
