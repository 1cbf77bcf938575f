# Copyright (c) Meta Platforms, Inc. and affiliates.

"""
Unit tests for formatters module.
"""

import unittest

from latstat.query.formatters import (
    COLUMN_WIDTH,
    convert_ns,
    DEFAULT_UNIT,
    format_summary,
    iter_row_lines,
    UNITS,
)
from latstat.query.reader import parse_row
from latstat.query.stats import RunningStats, summarize
from tests.test_base import SUMMARY_HEADER_MS, SUMMARY_HEADER_NS


class TestConvertNs(unittest.TestCase):
    """Tests for convert_ns function."""

    def test_units(self):
        self.assertEqual(UNITS, ("ns", "ms"))
        self.assertEqual(DEFAULT_UNIT, "ms")

    def test_ns_unchanged(self):
        self.assertEqual(convert_ns(1500000, "ns"), 1500000)

    def test_ms(self):
        self.assertEqual(convert_ns(1500000, "ms"), 1.5)
        self.assertEqual(convert_ns(2500000.0, "ms"), 2.5)

    def test_invalid_unit(self):
        with self.assertRaises(ValueError) as ctx:
            convert_ns(1, "us")
        self.assertIn("unit must be one of: ns, ms", str(ctx.exception))


class TestFormatSummary(unittest.TestCase):
    """Tests for format_summary function."""

    def test_empty_stats(self):
        """Test nothing is rendered when no row matched."""
        self.assertEqual(format_summary(RunningStats()), "")
        self.assertEqual(format_summary(RunningStats(), "ns"), "")

    def test_ms_layout(self):
        """Test the exact two-line layout in milliseconds."""
        stats = summarize([1200000, 2200000, 4100000])
        output = format_summary(stats, "ms")
        self.assertEqual(
            output,
            SUMMARY_HEADER_MS
            + "\n"
            + "           3\t        1.20\t        2.50\t        4.10",
        )

    def test_ns_layout(self):
        """Test values are shown unscaled in nanoseconds."""
        stats = summarize([1000000, 3000000, 2000000])
        lines = format_summary(stats, "ns").split("\n")
        self.assertEqual(lines[0], SUMMARY_HEADER_NS)
        self.assertEqual(
            lines[1], "           3\t  1000000.00\t  2000000.00\t  3000000.00"
        )

    def test_fixed_width_columns(self):
        """Test every column is right-aligned in a 12-character field."""
        stats = summarize([1, 2])
        for line in format_summary(stats, "ms").split("\n"):
            fields = line.split("\t")
            self.assertEqual(len(fields), 4)
            for field in fields:
                self.assertEqual(len(field), COLUMN_WIDTH)
                self.assertFalse(field.endswith(" "))

    def test_wide_values_not_truncated(self):
        """Test values wider than the field are printed in full."""
        stats = summarize([10**15])
        data = format_summary(stats, "ns").split("\n")[1]
        self.assertIn("1000000000000000.00", data)

    def test_two_decimals(self):
        """Test values are rounded to two decimals."""
        stats = summarize([1234567])
        data = format_summary(stats, "ms").split("\n")[1]
        self.assertEqual(data.split("\t")[1].strip(), "1.23")

    def test_invalid_unit(self):
        with self.assertRaises(ValueError):
            format_summary(summarize([1]), "s")


class TestIterRowLines(unittest.TestCase):
    """Tests for iter_row_lines function."""

    def test_passthrough(self):
        """Test raw text is passed through unchanged, in order."""
        lines = ["2\t1\t5\textra  text", "1\t1\t7"]
        rows = [parse_row(line, i) for i, line in enumerate(lines, start=1)]
        self.assertEqual(list(iter_row_lines(rows)), lines)
