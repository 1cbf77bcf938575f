# Copyright (c) Meta Platforms, Inc. and affiliates.

"""
Running statistics over elapsed times.

Values are folded in nanoseconds with integer arithmetic; conversion to a
display unit happens only when a summary is formatted.
"""

from dataclasses import dataclass
from functools import reduce
from typing import Iterable, Optional


@dataclass
class RunningStats:
    """Count, sum, min and max of the values seen so far."""

    count: int = 0
    total: int = 0
    min: Optional[int] = None
    max: Optional[int] = None

    @property
    def mean(self) -> Optional[float]:
        """Arithmetic mean in nanoseconds, or None if no value was folded."""
        if self.count == 0:
            return None
        return self.total / self.count


def fold(stats: RunningStats, nanos: int) -> RunningStats:
    """
    Add one value to stats in place and return it.

    Example:
        >>> stats = fold(fold(RunningStats(), 3), 1)
        >>> (stats.count, stats.total, stats.min, stats.max)
        (2, 4, 1, 3)
    """
    if stats.count == 0 or nanos < stats.min:
        stats.min = nanos
    if stats.count == 0 or nanos > stats.max:
        stats.max = nanos
    stats.count += 1
    stats.total += nanos
    return stats


def summarize(values: Iterable[int]) -> RunningStats:
    """Fold every value of an iterable into a fresh RunningStats."""
    return reduce(fold, values, RunningStats())
