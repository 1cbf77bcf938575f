# Copyright (c) Meta Platforms, Inc. and affiliates.

"""
Compression utilities for latstat results files.

Results files are usually plain TSV, but long benchmark runs are often
archived with Zstd. Compression is detected from the magic number, so a
compressed file is read the same way whatever its extension.
"""

import io
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, TextIO, Union

import zstandard as zstd

# Zstd magic number (little-endian): 0xFD2FB528
ZSTD_MAGIC = b"\x28\xb5\x2f\xfd"


def detect_compression(filepath: Union[str, Path]) -> str:
    """
    Detect compression format of a file.

    Args:
        filepath: Path to the file to check

    Returns:
        Compression type: "zstd" or "none"

    Raises:
        OSError: If the file cannot be opened
    """
    with open(filepath, "rb") as f:
        magic = f.read(4)
        if magic == ZSTD_MAGIC:
            return "zstd"

    return "none"


@contextmanager
def open_results_file(filepath: Union[str, Path]) -> Iterator[TextIO]:
    """
    Open a results file for reading text, handling compression.

    Lines are split on "\\n" only and newlines are not translated, so a
    stray "\\r" stays inside its line.

    Args:
        filepath: Path to the results file

    Yields:
        Text stream for reading the file contents

    Raises:
        OSError: If the file cannot be opened

    Example:
        >>> with open_results_file("results.tsv.zst") as f:
        ...     for line in f:
        ...         process(line)
    """
    filepath = Path(filepath)

    if detect_compression(filepath) == "zstd":
        # stream_reader handles multiple concatenated frames
        dctx = zstd.ZstdDecompressor()
        with open(filepath, "rb") as binary_file:
            with dctx.stream_reader(binary_file) as reader:
                with io.TextIOWrapper(
                    reader, encoding="utf-8", newline="\n"
                ) as text_stream:
                    yield text_stream
    else:
        with open(filepath, "r", encoding="utf-8", newline="\n") as f:
            yield f


def iter_lines(filepath: Union[str, Path]) -> Iterator[str]:
    """
    Iterate over lines in a results file, stripped of line terminators.

    The terminator is "\\n" optionally preceded by a single "\\r"; any other
    carriage return is part of the line.

    The file is closed when the iterator is exhausted, closed, or
    abandoned because the consumer raised.
    """
    with open_results_file(filepath) as f:
        for line in f:
            if line.endswith("\n"):
                line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
            yield line
