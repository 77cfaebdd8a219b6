"""Core columnar library exports."""

from columnar.lib.columns import ColumnDescriptor, ResolvedColumn, compile_columns
from columnar.lib.errors import ColumnarError, InvalidColumn, UnresolvedExtractor
from columnar.lib.formatter import (
    CandidateContext,
    FormattedLine,
    FormatterSpec,
    Segment,
    build_formatter,
    build_line_formatter,
    compile_formatter,
)
from columnar.lib.registry import ExtractorRegistry, MapperRegistry

__all__ = [
    "CandidateContext",
    "ColumnDescriptor",
    "ColumnarError",
    "ExtractorRegistry",
    "FormattedLine",
    "FormatterSpec",
    "InvalidColumn",
    "MapperRegistry",
    "ResolvedColumn",
    "Segment",
    "UnresolvedExtractor",
    "build_formatter",
    "build_line_formatter",
    "compile_columns",
    "compile_formatter",
]
