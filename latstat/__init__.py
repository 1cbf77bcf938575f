# Copyright (c) Meta Platforms, Inc. and affiliates.

"""latstat: filter and summarize timed-operation results files."""
