# Copyright (c) Meta Platforms, Inc. and affiliates.

"""
Row filters for latstat queries.

A FilterConfig holds up to four independent constraints. Every constraint
left as None matches all rows, and a row must pass all active constraints.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from latstat.query.reader import ParsedRow


@dataclass(frozen=True)
class FilterConfig:
    """Active row constraints for one run. Bounds are inclusive nanoseconds."""

    group: Optional[int] = None
    request: Optional[int] = None
    min_ns: Optional[int] = None
    max_ns: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return (
            self.group is None
            and self.request is None
            and self.min_ns is None
            and self.max_ns is None
        )


def matches(row: ParsedRow, config: FilterConfig) -> bool:
    """
    Check whether a row passes every active constraint in config.

    Examples:
        >>> row = ParsedRow(1, 2, 3000000, "1\\t2\\t3000000", 1)
        >>> matches(row, FilterConfig(group=1, min_ns=1500000))
        True
        >>> matches(row, FilterConfig(max_ns=2999999))
        False
    """
    if config.group is not None and row.group != config.group:
        return False
    if config.request is not None and row.request != config.request:
        return False
    if config.max_ns is not None and row.elapsed_ns > config.max_ns:
        return False
    if config.min_ns is not None and row.elapsed_ns < config.min_ns:
        return False
    return True


def build_filter_predicate(config: FilterConfig) -> Callable[[ParsedRow], bool]:
    """
    Bind config to matches, giving a one-argument row predicate.

    Args:
        config: Filter constraints for the run

    Returns:
        Predicate function that takes a ParsedRow and returns bool
    """
    def predicate(row: ParsedRow) -> bool:
        return matches(row, config)

    return predicate
