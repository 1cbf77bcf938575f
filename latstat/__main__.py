# Copyright (c) Meta Platforms, Inc. and affiliates.

"""
Allow running latstat as a module: python -m latstat
"""

from latstat.cli import main

if __name__ == "__main__":
    main()
