# SPDX-FileCopyrightText: 2025-present Yiming Zang <yiming.zang@tu-dortmund.de>
#
# SPDX-License-Identifier: MIT
"""
Grouped counts and means over the juvenile dataset.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple, Union
import logging
import pandas as pd

from .constants import SEX_COL, SITE_COL, WEIGHT_COL, YEAR_COL
from .errors import EmptySampleError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class YearCountSummary:
    """spread of the per-year juvenile counts."""
    years: int
    min: int
    max: int
    mean: float
    median: float


def summarize_groups(df: pd.DataFrame,
                     keys: Union[str, Iterable[str]],
                     value_col: Optional[str] = None) -> pd.DataFrame:
    """
    Group `df` by `keys` and reduce each group.

    Always reports `count` (rows per group). With `value_col`, also reports
    `n` (non-missing values), `mean` and `sd`; a group without any
    non-missing value keeps its row with NaN mean. Missing key values form
    their own group instead of being dropped.
    """
    keys = [keys] if isinstance(keys, str) else list(keys)
    grouped = df.groupby(keys, dropna=False, sort=True)
    out = grouped.size().rename("count").to_frame()
    if value_col is not None:
        values = grouped[value_col]
        out["n"] = values.count()
        out["mean"] = values.mean()
        out["sd"] = values.std(ddof=1)
    return out.reset_index()


def count_by_year(df: pd.DataFrame, year_col: str = YEAR_COL) -> pd.DataFrame:
    """
    Records per year, ordered by year. Years without records are absent,
    not zero-filled.
    """
    return summarize_groups(df, year_col)[[year_col, "count"]]


def summarize_year_counts(year_counts: pd.DataFrame, count_col: str = "count") -> YearCountSummary:
    """min / max / mean / median of the per-year counts."""
    counts = year_counts[count_col]
    if counts.empty:
        raise EmptySampleError("no years to summarize", stage="aggregate", field=count_col)
    return YearCountSummary(
        years=int(len(counts)),
        min=int(counts.min()),
        max=int(counts.max()),
        mean=float(counts.mean()),
        median=float(counts.median()),
    )


def mean_weight_by_sex_and_site(df: pd.DataFrame,
                                sex_col: str = SEX_COL,
                                site_col: str = SITE_COL,
                                weight_col: str = WEIGHT_COL) -> Dict[Tuple[str, str], float]:
    """
    Mean weight per (sex, site). Missing weights are ignored; a group whose
    weights are all missing maps to NaN.
    """
    table = summarize_groups(df, [sex_col, site_col], weight_col)
    means = {
        (row[sex_col], row[site_col]): float(row["mean"])
        for _, row in table.iterrows()
    }
    empty = [k for k, n in zip(means, table["n"]) if n == 0]
    if empty:
        logger.warning("no recorded weights for %s; mean left undefined", empty)
    return means
