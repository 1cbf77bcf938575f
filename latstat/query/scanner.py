# Copyright (c) Meta Platforms, Inc. and affiliates.

"""
Single-pass scan of a results file.

ResultsScanner reads one line at a time, parses it, tests it against the
filter and either hands the row on (list mode) or folds its elapsed time
into running statistics (summary mode). Memory use does not grow with the
size of the file.
"""

from contextlib import closing
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Union

from latstat.query.filters import build_filter_predicate, FilterConfig
from latstat.query.formatters import DEFAULT_UNIT, format_summary, iter_row_lines
from latstat.query.reader import parse_row, ParsedRow, ResultsReader
from latstat.query.stats import RunningStats, summarize


@dataclass(frozen=True)
class QueryConfig:
    """Validated settings for one run."""

    path: Path
    filters: FilterConfig = field(default_factory=FilterConfig)
    list_rows: bool = False
    unit: str = DEFAULT_UNIT


class ResultsScanner:
    """
    Stream-based filter over a results file.

    Design principles:
    - Single-pass: the file is read once, line by line
    - Fail-fast: the first malformed line aborts the scan
    - Bounded memory: O(1) in summary mode, nothing buffered in list mode

    Counters (lines_read, comment_lines, rows_matched) describe the lines
    consumed so far and are complete once the scan has finished.

    Example:
        >>> scanner = ResultsScanner(ResultsReader("results.tsv"), FilterConfig(group=1))
        >>> stats = scanner.summarize()
        >>> print(stats.count, scanner.lines_read)
    """

    def __init__(self, reader: ResultsReader, filters: FilterConfig) -> None:
        """
        Initialize the scanner.

        Args:
            reader: Source of raw lines (consumed once!)
            filters: Row constraints applied to every parsed line
        """
        self._reader = reader
        self._filters = filters
        self._predicate = build_filter_predicate(filters)
        self._consumed = False
        self.lines_read = 0
        self.comment_lines = 0
        self.rows_matched = 0

    @classmethod
    def from_path(
        cls, path: Union[str, Path], filters: FilterConfig
    ) -> "ResultsScanner":
        return cls(ResultsReader(path), filters)

    @property
    def compression(self) -> str:
        return self._reader.compression

    def _ensure_not_consumed(self) -> None:
        """Raise error if the input has already been scanned."""
        if self._consumed:
            raise RuntimeError(
                "ResultsScanner input has already been consumed. "
                "Create a new scanner to scan again."
            )
        self._consumed = True

    def iter_matching_rows(self) -> Iterator[ParsedRow]:
        """
        Yield every row that passes the filter, in input order.

        Raises:
            MalformedLineError: On the first line that cannot be parsed
            InputUnavailableError: If the file cannot be opened or read
        """
        self._ensure_not_consumed()

        with closing(self._reader.iter_lines()) as lines:
            for line in lines:
                self.lines_read += 1
                row = parse_row(line, self.lines_read)
                if row is None:
                    self.comment_lines += 1
                    continue
                if self._predicate(row):
                    self.rows_matched += 1
                    yield row

    def summarize(self) -> RunningStats:
        """
        Aggregate elapsed times of all matching rows.

        Returns:
            Statistics in nanoseconds; count is 0 if nothing matched
        """
        return summarize(row.elapsed_ns for row in self.iter_matching_rows())


def iter_output_lines(scanner: ResultsScanner, config: QueryConfig) -> Iterator[str]:
    """
    Run the scan and yield the lines of the report.

    In list mode this yields the raw text of every matching row as soon as
    it is read. In summary mode it yields the two-line table once the scan
    has finished, or nothing if no row matched.
    """
    if config.list_rows:
        yield from iter_row_lines(scanner.iter_matching_rows())
        return

    summary = format_summary(scanner.summarize(), config.unit)
    if summary:
        yield from summary.split("\n")
