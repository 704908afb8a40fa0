# SPDX-FileCopyrightText: 2025-present Yiming Zang <yiming.zang@tu-dortmund.de>
#
# SPDX-License-Identifier: MIT
"""
Project package for the juvenile snowshoe hare report.
Provides loading, aggregation, two-sample comparison and regression utilities.
"""

from importlib.resources import files
import pandas as pd

from .aggregation import count_by_year, mean_weight_by_sex_and_site, summarize_groups, summarize_year_counts
from .analysis import DataPreprocessor, Modeler, RegressionResult, load_dataset, read_records
from .comparison import (
    DescriptiveStats, TestResult, compare_means, descriptive_stats,
    effect_size, effect_size_band, percent_difference,
)
from .errors import (
    DegenerateInputError, EmptySampleError, HareReportError,
    InsufficientDataError, ParseError, SourceReadError,
)
from .report import HareReport, analyze, build_report

__all__ = [
    "DataPreprocessor", "Modeler", "RegressionResult", "load_dataset", "read_records",
    "count_by_year", "mean_weight_by_sex_and_site", "summarize_groups", "summarize_year_counts",
    "DescriptiveStats", "TestResult", "compare_means", "descriptive_stats",
    "effect_size", "effect_size_band", "percent_difference",
    "HareReport", "analyze", "build_report",
    "HareReportError", "SourceReadError", "ParseError", "EmptySampleError",
    "InsufficientDataError", "DegenerateInputError",
    "example_path", "load_example",
]


def example_path(name: str = "sample_hares.csv"):
    """path of a packaged example file located in harereport/Dataset/."""
    return files("harereport") / "Dataset" / name


def load_example(name: str = "sample_hares.csv") -> pd.DataFrame:
    """Load packaged example dataset (raw, before preprocessing)."""
    return pd.read_csv(example_path(name))
