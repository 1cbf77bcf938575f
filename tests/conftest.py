# Copyright (c) Meta Platforms, Inc. and affiliates.

"""
Pytest configuration and shared fixtures for latstat tests.
"""

import tempfile
from pathlib import Path
from typing import Generator

import pytest
import zstandard as zstd


# Sample rows with extra columns, comments and mixed groups
SAMPLE_RESULTS_LINES = [
    "# group\trequest\telapsed_ns\tendpoint",
    "1\t1\t1000000\tGET /a",
    "1\t2\t3000000\tGET /b",
    "2\t1\t2000000\tPOST /a",
    "# second batch",
    "2\t2\t500000\tGET /a",
    "3\t7\t12000000\tGET /c\tretry",
]

SAMPLE_ELAPSED_NS = [1000000, 3000000, 2000000, 500000, 12000000]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_results_file(temp_dir: Path) -> Path:
    """Create a plain TSV results file."""
    filepath = temp_dir / "results.tsv"
    filepath.write_text("\n".join(SAMPLE_RESULTS_LINES) + "\n")
    return filepath


@pytest.fixture
def zstd_results_file(temp_dir: Path) -> Path:
    """Create a Zstd-compressed TSV results file."""
    filepath = temp_dir / "results.tsv.zst"
    content = ("\n".join(SAMPLE_RESULTS_LINES) + "\n").encode("utf-8")
    filepath.write_bytes(zstd.ZstdCompressor().compress(content))
    return filepath


@pytest.fixture
def empty_results_file(temp_dir: Path) -> Path:
    """Create an empty results file."""
    filepath = temp_dir / "empty.tsv"
    filepath.touch()
    return filepath
