# Copyright (c) Meta Platforms, Inc. and affiliates.

"""
latstat CLI entry point.

Filters a TSV results file and prints either the matching rows or a
count/min/avg/max summary of their elapsed times.
"""

import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Iterable, Optional

import click
from latstat.query.durations import format_duration, parse_duration
from latstat.query.filters import FilterConfig
from latstat.query.formatters import DEFAULT_UNIT, UNITS
from latstat.query.reader import InputUnavailableError, MalformedLineError
from latstat.query.scanner import iter_output_lines, QueryConfig, ResultsScanner


def _get_package_version() -> str:
    """Get package version from metadata."""
    try:
        return version("latstat")
    except PackageNotFoundError:
        return "0+unknown"


class DurationParamType(click.ParamType):
    """Click parameter type for non-negative durations, converted to nanoseconds."""

    name = "duration"

    def convert(self, value, param, ctx) -> int:
        if isinstance(value, int):
            nanos = value
        else:
            try:
                nanos = parse_duration(value)
            except ValueError as e:
                self.fail(str(e), param, ctx)
        if nanos < 0:
            self.fail(f"duration must not be negative: {value!r}", param, ctx)
        return nanos


DURATION = DurationParamType()


def _describe_filters(filters: FilterConfig) -> str:
    """Describe active filters for verbose output."""
    if filters.is_empty:
        return "none"

    parts = []
    if filters.group is not None:
        parts.append(f"group={filters.group}")
    if filters.request is not None:
        parts.append(f"request={filters.request}")
    if filters.min_ns is not None:
        parts.append(f"min={format_duration(filters.min_ns)}")
    if filters.max_ns is not None:
        parts.append(f"max={format_duration(filters.max_ns)}")
    return ", ".join(parts)


def _write_lines(lines: Iterable[str], output_file: Optional[Path]) -> int:
    """
    Write lines to file or stdout as they are produced. Returns the line count.

    The output file is not opened until the first line is available, so a
    scan that fails before producing output leaves an existing file intact.
    """
    written = 0
    if output_file:
        lines = iter(lines)
        first = next(lines, None)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, "w", encoding="utf-8") as f:
            if first is not None:
                f.write(first + "\n")
                written += 1
            for line in lines:
                f.write(line + "\n")
                written += 1
        click.echo(f"{written} lines written to {output_file}", err=True)
    else:
        for line in lines:
            click.echo(line)
            written += 1
    return written


EXAMPLES = """
\b
Examples:
  latstat results.tsv
  latstat results.tsv --unit ns
  latstat results.tsv --group 1 --request 42
  latstat results.tsv --min 1.5ms --max 2s
  latstat results.tsv --list --min 1500000ns
  latstat results.tsv.zst --list -o slow.tsv
"""


@click.command(name="latstat", epilog=EXAMPLES)
@click.argument("results", type=click.Path(path_type=Path))
@click.option(
    "--min",
    "min_ns",
    type=DURATION,
    default=None,
    help="Keep rows with at least this elapsed time (3rd column), e.g. 1500000ns or 1.5ms.",
)
@click.option(
    "--max",
    "max_ns",
    type=DURATION,
    default=None,
    help="Keep rows with at most this elapsed time (3rd column), e.g. 2s.",
)
@click.option(
    "--group",
    "-g",
    type=int,
    default=None,
    help="Keep rows of the given group (goroutine) (1st column).",
)
@click.option(
    "--request",
    "-r",
    type=int,
    default=None,
    help="Keep rows with the given request number (2nd column).",
)
@click.option(
    "--list",
    "-l",
    "list_rows",
    is_flag=True,
    help="List matching rows, do not display the summary.",
)
@click.option(
    "--unit",
    "-u",
    type=click.Choice(UNITS),
    default=DEFAULT_UNIT,
    show_default=True,
    help="Time unit used for the summary.",
)
@click.option(
    "--output",
    "-o",
    "output_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help=(
        "Output file path (default: stdout). "
        "Not touched if the scan fails before producing output."
    ),
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Report scan statistics on stderr.",
)
@click.version_option(version=_get_package_version(), prog_name="latstat")
def main(
    results: Path,
    min_ns: Optional[int],
    max_ns: Optional[int],
    group: Optional[int],
    request: Optional[int],
    list_rows: bool,
    unit: str,
    output_file: Optional[Path],
    verbose: bool,
) -> None:
    """
    Filter and summarize the timed operations in RESULTS.

    RESULTS is a tab-separated file (plain or Zstd-compressed) whose rows
    start with a group id, a request id and an elapsed time in
    nanoseconds. Lines starting with '#' are ignored.
    """
    config = QueryConfig(
        path=results,
        filters=FilterConfig(
            group=group, request=request, min_ns=min_ns, max_ns=max_ns
        ),
        list_rows=list_rows,
        unit=unit,
    )

    try:
        scanner = ResultsScanner.from_path(config.path, config.filters)
        if verbose:
            click.echo(f"Input:       {config.path}", err=True)
            click.echo(f"Compression: {scanner.compression}", err=True)
            click.echo(f"Filters:     {_describe_filters(config.filters)}", err=True)
        _write_lines(iter_output_lines(scanner, config), output_file)
    except (InputUnavailableError, MalformedLineError) as e:
        raise click.ClickException(str(e))

    if verbose:
        click.echo(
            f"Scanned {scanner.lines_read} lines "
            f"({scanner.comment_lines} comments), "
            f"{scanner.rows_matched} rows matched",
            err=True,
        )


if __name__ == "__main__":
    sys.exit(main())
