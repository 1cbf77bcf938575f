# Copyright (c) Meta Platforms, Inc. and affiliates.

"""
Base test class and shared test data for latstat tests.
"""

import shutil
import tempfile
import unittest
from pathlib import Path


# Example inputs directory
EXAMPLE_INPUTS_DIR = Path(__file__).parent / "example_inputs"

# Real data file paths
RESULTS_TSV = EXAMPLE_INPUTS_DIR / "results_sample.tsv"
MALFORMED_TSV = EXAMPLE_INPUTS_DIR / "malformed_sample.tsv"

# Expected figures for RESULTS_TSV
RESULTS_TSV_LINE_COUNT = 8
RESULTS_TSV_COMMENT_COUNT = 2
RESULTS_TSV_ROW_COUNT = 6
MALFORMED_TSV_BAD_LINE = 3

# Three rows: min 1ms, avg 2ms, max 3ms
SIMPLE_RESULTS = "1\t1\t1000000\n1\t2\t3000000\n2\t1\t2000000\n"

SUMMARY_HEADER_MS = "       count\t    min (ms)\t    avg (ms)\t    max (ms)"
SUMMARY_HEADER_NS = "       count\t    min (ns)\t    avg (ns)\t    max (ns)"


class BaseResultsTest(unittest.TestCase):
    """Base class for latstat tests with shared setup/teardown."""

    @classmethod
    def setUpClass(cls):
        """Verify example input files exist."""
        for path in (RESULTS_TSV, MALFORMED_TSV):
            if not path.exists():
                raise FileNotFoundError(f"Example input file not found: {path}")

    def setUp(self):
        """Create a temporary directory for test files that need to be generated."""
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        """Remove the temporary directory."""
        shutil.rmtree(self.temp_dir)

    def create_temp_file(self, filename: str, content: str) -> Path:
        """Create a temporary file with given content, keeping line endings as-is."""
        filepath = self.temp_dir / filename
        filepath.write_bytes(content.encode("utf-8"))
        return filepath
