# SPDX-FileCopyrightText: 2025-present Yiming Zang <yiming.zang@tu-dortmund.de>
#
# SPDX-License-Identifier: MIT
"""
One report run: load the juvenile dataset once, compute every aggregate,
comparison and fit over it, hand the results to the presentation layer.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Tuple, Union
import logging
import pandas as pd

from .aggregation import (
    YearCountSummary, count_by_year, mean_weight_by_sex_and_site, summarize_year_counts,
)
from .analysis import Modeler, RegressionResult, load_dataset
from .comparison import (
    DescriptiveStats, TestResult, compare_means, descriptive_stats, effect_size,
    effect_size_band, percent_difference, weight_sample,
)
from .constants import FEMALE, HINDFT_COL, MALE, SEX_COL, SITE_COL, WEIGHT_COL, YEAR_COL

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class HareReport:
    """everything the narrative and the three charts need."""
    data: pd.DataFrame
    year_counts: pd.DataFrame
    year_count_summary: YearCountSummary
    mean_weights: Dict[Tuple[str, str], float]
    group_a: DescriptiveStats
    group_b: DescriptiveStats
    ttest: TestResult
    cohens_d: float
    effect_band: str
    percent_difference: float
    regression: RegressionResult

    def numbers(self) -> Dict[str, float]:
        """flat view of the scalar results, keyed by name."""
        return {
            "n_juveniles": float(len(self.data)),
            "years": float(self.year_count_summary.years),
            "count_min": float(self.year_count_summary.min),
            "count_max": float(self.year_count_summary.max),
            "count_mean": self.year_count_summary.mean,
            "count_median": self.year_count_summary.median,
            "mean_a": self.group_a.mean,
            "mean_b": self.group_b.mean,
            "t": self.ttest.statistic,
            "t_df": self.ttest.df,
            "t_p": self.ttest.p_value,
            "mean_difference": self.ttest.mean_difference,
            "cohens_d": self.cohens_d,
            "percent_difference": self.percent_difference,
            "slope": self.regression.slope,
            "intercept": self.regression.intercept,
            "r_squared_adj": self.regression.r_squared_adj,
            "pearson_r": self.regression.pearson_r,
            "slope_p": self.regression.p_value,
        }


def analyze(df: pd.DataFrame,
            group_a: str = MALE,
            group_b: str = FEMALE,
            sex_col: str = SEX_COL,
            site_col: str = SITE_COL,
            weight_col: str = WEIGHT_COL,
            hindft_col: str = HINDFT_COL,
            year_col: str = YEAR_COL) -> HareReport:
    """run every computation over an already loaded juvenile dataset."""
    year_counts = count_by_year(df, year_col)
    stats_a = descriptive_stats(df, group_a, sex_col, weight_col)
    stats_b = descriptive_stats(df, group_b, sex_col, weight_col)
    sample_a = weight_sample(df, group_a, sex_col, weight_col)
    sample_b = weight_sample(df, group_b, sex_col, weight_col)
    d = effect_size(sample_a, sample_b)

    return HareReport(
        data=df.copy(),
        year_counts=year_counts,
        year_count_summary=summarize_year_counts(year_counts),
        mean_weights=mean_weight_by_sex_and_site(df, sex_col, site_col, weight_col),
        group_a=stats_a,
        group_b=stats_b,
        ttest=compare_means(sample_a, sample_b),
        cohens_d=d,
        effect_band=effect_size_band(d),
        percent_difference=percent_difference(stats_a.mean, stats_b.mean),
        regression=Modeler(df).fit_linear(hindft_col, weight_col),
    )


def build_report(path: Union[str, Path], **columns) -> HareReport:
    """
    Load `path` and compute the full report.

    `columns` overrides the default column names (date_col, sex_col, age_col,
    site_col, weight_col, hindft_col, year_col).
    """
    df = load_dataset(path, **columns)
    logger.info("%d juvenile records loaded from %s", len(df), path)
    keep = {k: v for k, v in columns.items() if k not in ("age_col", "date_col")}
    return analyze(df, **keep)
