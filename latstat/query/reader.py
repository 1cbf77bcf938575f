# Copyright (c) Meta Platforms, Inc. and affiliates.

"""
Results reader for latstat.

This module provides the ResultsReader class for iterating over the raw
lines of a TSV results file (plain or Zstd-compressed), and parse_row for
turning one line into a ParsedRow.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Union

import zstandard as zstd

from latstat.compression import detect_compression, iter_lines

COMMENT_PREFIX = "#"
FIELD_SEPARATOR = "\t"

# Names of the leading numeric columns, in file order
NUMERIC_FIELDS = ("group", "request ID", "time")

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


class InputUnavailableError(Exception):
    """Exception raised when the results file cannot be read."""

    def __init__(self, path: Union[str, Path], cause: Exception) -> None:
        self.path = Path(path)
        self.cause = cause
        reason = getattr(cause, "strerror", None) or str(cause)
        super().__init__(f"error reading file: {self.path}: {reason}")


class MalformedLineError(ValueError):
    """Exception raised for a results line that cannot be parsed."""

    def __init__(self, line_number: int, raw_text: str, reason: str) -> None:
        self.line_number = line_number
        self.raw_text = raw_text
        self.reason = reason
        super().__init__(f"{reason} at line {line_number}: {raw_text!r}")


@dataclass(frozen=True)
class ParsedRow:
    """One data line of a results file."""

    group: int
    request: int
    elapsed_ns: int
    raw_text: str
    line_number: int


def _parse_int(value: str, name: str, raw_text: str, line_number: int) -> int:
    # int() alone would also accept whitespace and "_" separators
    if not _INT_PATTERN.fullmatch(value):
        raise MalformedLineError(line_number, raw_text, f"invalid {name} {value!r}")
    return int(value)


def parse_row(line: str, line_number: int) -> Optional[ParsedRow]:
    """
    Parse a single results line.

    Args:
        line: Raw line without its line terminator
        line_number: 1-based position of the line in the file

    Returns:
        The parsed row, or None for a comment line

    Raises:
        MalformedLineError: If the line has fewer than 3 tab-separated
            fields or one of the first three fields is not an integer

    Examples:
        >>> parse_row("1\\t2\\t3000000\\tGET /", 7).elapsed_ns
        3000000
        >>> parse_row("# group\\trequest\\tns", 1) is None
        True
    """
    if line.startswith(COMMENT_PREFIX):
        return None

    fields = line.split(FIELD_SEPARATOR)
    if len(fields) < len(NUMERIC_FIELDS):
        raise MalformedLineError(
            line_number,
            line,
            f"expected at least {len(NUMERIC_FIELDS)} fields, got {len(fields)}",
        )

    group, request, elapsed_ns = (
        _parse_int(value, name, line, line_number)
        for value, name in zip(fields, NUMERIC_FIELDS)
    )
    return ParsedRow(
        group=group,
        request=request,
        elapsed_ns=elapsed_ns,
        raw_text=line,
        line_number=line_number,
    )


class ResultsReader:
    """
    Reader for latstat results files.

    Supports TSV with optional Zstd compression. Every call to
    iter_lines() reopens the file and starts from the first line.

    Example:
        >>> reader = ResultsReader("results.tsv")
        >>> for number, line in enumerate(reader.iter_lines(), start=1):
        ...     row = parse_row(line, number)
    """

    def __init__(self, file_path: Union[str, Path]) -> None:
        """
        Initialize the ResultsReader.

        Args:
            file_path: Path to the results file (.tsv or .tsv.zst)

        Raises:
            InputUnavailableError: If the file cannot be opened for reading
        """
        self.file_path = Path(file_path)

        try:
            self.compression = detect_compression(self.file_path)
        except OSError as e:
            raise InputUnavailableError(self.file_path, e) from e

    def iter_lines(self) -> Iterator[str]:
        """
        Iterate over the raw lines of the file, without line terminators.

        Raises:
            InputUnavailableError: If the file cannot be opened or read
        """
        try:
            yield from iter_lines(self.file_path)
        except (OSError, UnicodeDecodeError, zstd.ZstdError) as e:
            raise InputUnavailableError(self.file_path, e) from e
