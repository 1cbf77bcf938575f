# Copyright (c) Meta Platforms, Inc. and affiliates.

"""
latstat query module.

This module provides the streaming filter-and-aggregate pipeline:
- ResultsReader / parse_row: Read and parse TSV results lines
- FilterConfig / build_filter_predicate: Row constraints
- RunningStats / fold: Count, min, avg and max in nanoseconds
- ResultsScanner: Single-pass scan wiring the pieces together
"""

from .durations import parse_duration
from .filters import build_filter_predicate, FilterConfig, matches
from .formatters import convert_ns, format_summary, UNITS
from .reader import (
    InputUnavailableError,
    MalformedLineError,
    parse_row,
    ParsedRow,
    ResultsReader,
)
from .scanner import iter_output_lines, QueryConfig, ResultsScanner
from .stats import fold, RunningStats, summarize

__all__ = [
    "build_filter_predicate",
    "convert_ns",
    "FilterConfig",
    "fold",
    "format_summary",
    "InputUnavailableError",
    "iter_output_lines",
    "MalformedLineError",
    "matches",
    "parse_duration",
    "parse_row",
    "ParsedRow",
    "QueryConfig",
    "ResultsReader",
    "ResultsScanner",
    "RunningStats",
    "summarize",
    "UNITS",
]
