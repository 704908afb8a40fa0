# SPDX-FileCopyrightText: 2025-present Yiming Zang <yiming.zang@tu-dortmund.de>
#
# SPDX-License-Identifier: MIT
"""
Two-sample comparison of weight between sexes:
descriptive statistics, Welch t-test, Cohen's d.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional
import logging
import numpy as np
import pandas as pd
from scipy import stats

from .constants import EFFECT_SIZE_BANDS, LARGE_EFFECT, SEX_COL, WEIGHT_COL
from .errors import DegenerateInputError, EmptySampleError, InsufficientDataError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DescriptiveStats:
    group: str
    mean: float
    sd: Optional[float]
    n: int


@dataclass(frozen=True)
class TestResult:
    """Welch two-sample t-test. mean_difference is mean(a) - mean(b)."""
    __test__ = False
    statistic: float
    df: float
    p_value: float
    mean_difference: float


def _values(sample: Iterable[float], name: str, minimum: int = 1) -> np.ndarray:
    """float array without missing values; at least `minimum` of them."""
    values = pd.Series(sample, dtype=float).dropna().to_numpy()
    if len(values) == 0:
        raise EmptySampleError(f"sample '{name}' has no observations", stage="compare", field=name)
    if len(values) < minimum:
        raise InsufficientDataError(f"sample '{name}' needs at least {minimum} observations, got {len(values)}",
                                    stage="compare", field=name)
    return values


def weight_sample(df: pd.DataFrame, group: str,
                  sex_col: str = SEX_COL,
                  weight_col: str = WEIGHT_COL) -> pd.Series:
    """non-missing weights of one sex."""
    return df.loc[df[sex_col] == group, weight_col].dropna()


def descriptive_stats(df: pd.DataFrame, group: str,
                      sex_col: str = SEX_COL,
                      weight_col: str = WEIGHT_COL) -> DescriptiveStats:
    """mean, sample sd (n-1) and count of the weights of one sex."""
    values = _values(weight_sample(df, group, sex_col, weight_col), group)
    n = len(values)
    return DescriptiveStats(
        group=group,
        mean=float(values.mean()),
        sd=float(values.std(ddof=1)) if n > 1 else None,
        n=n,
    )


def compare_means(sample_a: Iterable[float], sample_b: Iterable[float]) -> TestResult:
    """
    Welch two-sample t-test (unequal variances), two-sided.
    Degrees of freedom use the Welch-Satterthwaite approximation.
    """
    a = _values(sample_a, "a", minimum=2)
    b = _values(sample_b, "b", minimum=2)

    if a.var(ddof=1) == 0 and b.var(ddof=1) == 0:
        raise DegenerateInputError("both samples have zero variance", stage="compare")

    welch = stats.ttest_ind(a, b, equal_var=False)
    res = TestResult(
        statistic=float(welch.statistic),
        df=float(welch.df),
        p_value=float(welch.pvalue),
        mean_difference=float(a.mean() - b.mean()),
    )
    logger.debug("welch t=%.3f df=%.2f p=%.3g", res.statistic, res.df, res.p_value)
    return res


def pooled_sd(sample_a: Iterable[float], sample_b: Iterable[float]) -> float:
    """sqrt(((n_a-1) s_a^2 + (n_b-1) s_b^2) / (n_a + n_b - 2))"""
    a = _values(sample_a, "a")
    b = _values(sample_b, "b")
    dof = len(a) + len(b) - 2
    if dof < 1:
        raise InsufficientDataError("pooled sd needs at least 3 observations in total", stage="compare")
    ss = (len(a) - 1) * (a.var(ddof=1) if len(a) > 1 else 0.0) \
        + (len(b) - 1) * (b.var(ddof=1) if len(b) > 1 else 0.0)
    return float(np.sqrt(ss / dof))


def effect_size(sample_a: Iterable[float], sample_b: Iterable[float]) -> float:
    """Cohen's d: (mean_a - mean_b) / pooled sd."""
    a = _values(sample_a, "a")
    b = _values(sample_b, "b")
    s = pooled_sd(a, b)
    if s == 0:
        raise DegenerateInputError("pooled standard deviation is zero", stage="compare")
    return float((a.mean() - b.mean()) / s)


def effect_size_band(d: float) -> str:
    """negligible / small / medium / large by |d|."""
    for bound, label in EFFECT_SIZE_BANDS:
        if abs(d) < bound:
            return label
    return LARGE_EFFECT


def percent_difference(mean_a: float, mean_b: float) -> float:
    """(mean_a - mean_b) as a percentage of the average of the two means."""
    average = (mean_a + mean_b) / 2
    if average == 0:
        raise DegenerateInputError("average of the two means is zero", stage="compare")
    return 100 * (mean_a - mean_b) / average
