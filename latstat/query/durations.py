# Copyright (c) Meta Platforms, Inc. and affiliates.

"""
Duration parsing for time-bound filters.

Accepts the duration syntax used by Go's time.ParseDuration, which is the
format benchmark harnesses usually print: an optional sign followed by one
or more decimal numbers, each with a unit suffix, such as "1500000ns",
"1.5ms" or "1h2m3.5s". Valid units are "ns", "us" (or "µs"/"μs"), "ms",
"s", "m" and "h". A bare integer is read as nanoseconds.
"""

import re
from decimal import Decimal

NANOS_PER_UNIT = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # micro sign
    "μs": 1_000,  # greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 60 * 60 * 1_000_000_000,
}

# Longer suffixes first so "ms" is not read as "m" followed by "s"
_UNIT_ALTERNATION = "|".join(
    re.escape(u) for u in sorted(NANOS_PER_UNIT, key=len, reverse=True)
)
_COMPONENT = rf"(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:{_UNIT_ALTERNATION})"
_DURATION_PATTERN = re.compile(rf"([+-]?)((?:{_COMPONENT})+)")
_COMPONENT_PATTERN = re.compile(
    rf"([0-9]+(?:\.[0-9]*)?|\.[0-9]+)({_UNIT_ALTERNATION})"
)
_BARE_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_duration(text: str) -> int:
    """
    Parse a duration string into whole nanoseconds.

    Fractional nanoseconds are truncated toward zero.

    Args:
        text: Duration such as "1500000ns", "2.5ms" or "1m30s"

    Returns:
        The duration in nanoseconds

    Raises:
        ValueError: If text is not a valid duration

    Examples:
        >>> parse_duration("1500000ns")
        1500000
        >>> parse_duration("1.5ms")
        1500000
        >>> parse_duration("1m30s")
        90000000000
        >>> parse_duration("250")
        250
    """
    if _BARE_INT_PATTERN.fullmatch(text):
        return int(text)

    match = _DURATION_PATTERN.fullmatch(text)
    if not match:
        raise ValueError(f"invalid duration {text!r}")

    sign, body = match.groups()
    nanos = sum(
        Decimal(number) * NANOS_PER_UNIT[unit]
        for number, unit in _COMPONENT_PATTERN.findall(body)
    )
    result = int(nanos)
    return -result if sign == "-" else result


def format_duration(nanos: int) -> str:
    """Render nanoseconds compactly for diagnostics, e.g. 1500000 -> '1.5ms'."""
    for unit in ("h", "m", "s", "ms", "us"):
        scale = NANOS_PER_UNIT[unit]
        if abs(nanos) >= scale:
            number = f"{Decimal(nanos) / scale:f}"
            if "." in number:
                number = number.rstrip("0").rstrip(".")
            return number + unit
    return f"{nanos}ns"
