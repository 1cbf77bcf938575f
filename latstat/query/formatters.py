# Copyright (c) Meta Platforms, Inc. and affiliates.

"""
Report formatting for latstat.

Provides the fixed-width summary table and unit conversion.
All functions are pure (no side effects) and return strings or numbers.
"""

from typing import Iterable, Iterator, Union

from latstat.query.reader import ParsedRow
from latstat.query.stats import RunningStats

# Nanoseconds per display unit
UNIT_DIVISORS = {
    "ns": 1,
    "ms": 1_000_000,
}
UNITS = tuple(UNIT_DIVISORS)
DEFAULT_UNIT = "ms"

COLUMN_WIDTH = 12
COLUMN_SEPARATOR = "\t"


def convert_ns(value: Union[int, float], unit: str) -> float:
    """
    Convert a nanosecond value to the given display unit.

    Args:
        value: Value in nanoseconds
        unit: One of UNITS

    Returns:
        The value expressed in unit

    Raises:
        ValueError: If unit is not supported
    """
    try:
        divisor = UNIT_DIVISORS[unit]
    except KeyError:
        raise ValueError(
            f"unit must be one of: {', '.join(UNITS)} (got {unit!r})"
        ) from None
    return value / divisor


def _label(name: str, unit: str) -> str:
    return f"{name} ({unit})"


def format_summary(stats: RunningStats, unit: str = DEFAULT_UNIT) -> str:
    """
    Format statistics as a two-line, tab-separated table.

    Every column is right-aligned in a 12-character field and the time
    columns show two decimals.

    Args:
        stats: Aggregated statistics in nanoseconds
        unit: Display unit for min, avg and max

    Returns:
        Header and data row joined by a newline, or an empty string when
        no rows were aggregated

    Example:
        >>> stats = RunningStats(3, 6000000, 1000000, 3000000)
        >>> format_summary(stats).split("\\n")[1].split("\\t")
        ['           3', '        1.00', '        2.00', '        3.00']
    """
    if stats.count == 0:
        return ""

    w = COLUMN_WIDTH
    header = [
        "count",
        _label("min", unit),
        _label("avg", unit),
        _label("max", unit),
    ]
    values = [
        convert_ns(stats.min, unit),
        convert_ns(stats.mean, unit),
        convert_ns(stats.max, unit),
    ]

    header_line = COLUMN_SEPARATOR.join(f"{h:>{w}}" for h in header)
    data_line = COLUMN_SEPARATOR.join(
        [f"{stats.count:>{w}d}"] + [f"{v:>{w}.2f}" for v in values]
    )
    return f"{header_line}\n{data_line}"


def iter_row_lines(rows: Iterable[ParsedRow]) -> Iterator[str]:
    """Yield the original text of each row, unchanged and in order."""
    for row in rows:
        yield row.raw_text
