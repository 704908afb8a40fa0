# SPDX-FileCopyrightText: 2025-present Yiming Zang <yiming.zang@tu-dortmund.de>
#
# SPDX-License-Identifier: MIT
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Union
import logging
import re
import pandas as pd
import statsmodels.formula.api as smf
from scipy import stats

from .constants import (
    AGE_COL, DATE_COL, DATE_FORMATS, HINDFT_COL, JUVENILE_CODE, SEX_COL,
    SEX_LABELS, SITE_COL, UNSPECIFIED_SEX, WEIGHT_COL, YEAR_COL,
)
from .errors import DegenerateInputError, InsufficientDataError, ParseError, SourceReadError

logger = logging.getLogger(__name__)


def _clean_name(name: object) -> str:
    """lower-case, runs of non-alphanumerics to a single underscore."""
    return re.sub(r"[^0-9a-z]+", "_", str(name).strip().lower()).strip("_")


def _to_datetime(s: pd.Series, formats: Iterable[str] = DATE_FORMATS) -> pd.Series:
    """parse with each format in turn; rows still unparsed stay NaT."""
    if pd.api.types.is_datetime64_any_dtype(s):
        return s
    raw = s.astype(str).str.strip()
    parsed = None
    for fmt in formats:
        attempt = pd.to_datetime(raw, format=fmt, errors="coerce")
        parsed = attempt if parsed is None else parsed.fillna(attempt)
    return parsed


def read_records(path: Union[str, Path], **kwargs) -> pd.DataFrame:
    """Read the raw delimited source. No cleaning happens here."""
    path = Path(path)
    try:
        df = pd.read_csv(path, **kwargs)
    except pd.errors.EmptyDataError as e:
        raise ParseError(f"no columns in {path}", stage="load") from e
    except pd.errors.ParserError as e:
        raise ParseError(f"cannot parse {path} as a table: {e}", stage="load") from e
    except UnicodeDecodeError as e:
        raise SourceReadError(f"cannot decode {path}: {e}", stage="load") from e
    except OSError as e:
        raise SourceReadError(f"cannot read {path}: {e}", stage="load") from e
    logger.info("read %d rows from %s", len(df), path)
    return df


class DataPreprocessor:
    """
    data preprocessing for the trapping records:
    1) normalize column names
    2) parse m/d/y dates, derive year
    3) weight / hind-foot length to float, blanks stay NaN
    4) sex codes (f/m) to Female/Male, anything else Unspecified
    5) keep juvenile rows only
    """

    def __init__(self, df: pd.DataFrame,
                 date_col: str = DATE_COL,
                 sex_col: str = SEX_COL,
                 age_col: str = AGE_COL,
                 site_col: str = SITE_COL,
                 weight_col: str = WEIGHT_COL,
                 hindft_col: str = HINDFT_COL,
                 year_col: str = YEAR_COL):
        self.df = df.copy()
        self.date_col = date_col
        self.sex_col = sex_col
        self.age_col = age_col
        self.site_col = site_col
        self.weight_col = weight_col
        self.hindft_col = hindft_col
        self.year_col = year_col

    @property
    def required_columns(self):
        return (self.date_col, self.sex_col, self.age_col,
                self.site_col, self.weight_col, self.hindft_col)

    def normalize_columns(self) -> "DataPreprocessor":
        """canonical column names; fails if a required one is absent."""
        self.df.columns = [_clean_name(c) for c in self.df.columns]
        for col in self.required_columns:
            if col not in self.df.columns:
                raise ParseError(f"required column '{col}' not found, have {list(self.df.columns)}",
                                 stage="load", field=col)
        return self

    def parse_dates(self) -> "DataPreprocessor":
        """parse the date column and add the integer year."""
        parsed = _to_datetime(self.df[self.date_col])
        bad = parsed.isna()
        if bad.any():
            examples = self.df.loc[bad, self.date_col].head(5).tolist()
            raise ParseError(f"{int(bad.sum())} dates not in month/day/year form, e.g. {examples}",
                             stage="load", field=self.date_col)
        self.df[self.date_col] = parsed
        self.df[self.year_col] = parsed.dt.year.astype(int)
        return self

    def coerce_measurements(self) -> "DataPreprocessor":
        """weight and hind-foot length as float. unparseable values become NaN, never 0."""
        for col in (self.weight_col, self.hindft_col):
            before = self.df[col].notna()
            self.df[col] = pd.to_numeric(self.df[col], errors="coerce").astype(float)
            coerced = int((before & self.df[col].isna()).sum())
            if coerced:
                logger.warning("%d non-numeric values in '%s' treated as missing", coerced, col)
        return self

    def recode_sex(self) -> "DataPreprocessor":
        codes = self.df[self.sex_col].astype(str).str.strip().str.lower()
        labels = codes.map(SEX_LABELS)
        unspecified = labels.isna()
        if unspecified.any():
            logger.warning("%d rows with sex codes %s recoded as %s",
                           int(unspecified.sum()), sorted(codes[unspecified].unique()), UNSPECIFIED_SEX)
        self.df[self.sex_col] = labels.fillna(UNSPECIFIED_SEX)
        logger.debug("sex labels: %s", self.df[self.sex_col].value_counts().to_dict())
        return self

    def filter_age(self, code: str = JUVENILE_CODE) -> "DataPreprocessor":
        """keep only rows whose age code equals `code`."""
        codes = self.df[self.age_col].astype(str).str.strip().str.lower()
        self.df[self.age_col] = codes
        keep = codes == code
        logger.info("kept %d of %d rows with age code '%s'", int(keep.sum()), len(self.df), code)
        self.df = self.df[keep].reset_index(drop=True)
        return self

    def run(self, code: str = JUVENILE_CODE) -> "DataPreprocessor":
        return (self.normalize_columns()
                .parse_dates()
                .coerce_measurements()
                .recode_sex()
                .filter_age(code))

    @property
    def data(self) -> pd.DataFrame:
        """get the processed DataFrame."""
        return self.df.copy()


def load_dataset(path: Union[str, Path], **columns) -> pd.DataFrame:
    """read `path` and return the juvenile dataset. `columns` overrides column names."""
    return DataPreprocessor(read_records(path), **columns).run().data


@dataclass(frozen=True)
class RegressionResult:
    """single-predictor OLS fit."""
    predictor: str
    response: str
    slope: float
    intercept: float
    r_squared_adj: float
    pearson_r: float
    p_value: float
    n: int

    @property
    def equation(self) -> str:
        sign = "-" if self.intercept < 0 else "+"
        return f"{self.response} = {self.slope:.2f}({self.predictor}) {sign} {abs(self.intercept):.2f}"


class Modeler:
    """
    OLS fitting of one response on one predictor (based on statsmodels).
    Example:
        res = Modeler(df).fit_linear("hindft", "weight")
        res.slope, res.r_squared_adj, res.equation
    """

    def __init__(self, df: pd.DataFrame):
        self.df = df

    def fit_linear(self, predictor: str = HINDFT_COL,
                   response: str = WEIGHT_COL) -> RegressionResult:
        """pairs with either value missing are dropped before fitting."""
        pairs = self.df[[predictor, response]].astype(float).dropna()
        n = len(pairs)
        if n < 2:
            raise InsufficientDataError(f"need at least 2 complete pairs, got {n}",
                                        stage="regress", field=predictor)
        x = pairs[predictor]
        y = pairs[response]
        if x.nunique() < 2:
            raise DegenerateInputError(f"all {n} values of '{predictor}' are identical",
                                       stage="regress", field=predictor)

        model = smf.ols(formula=f"{response} ~ {predictor}", data=pairs).fit()
        r, _ = stats.pearsonr(x, y)

        res = RegressionResult(
            predictor=predictor,
            response=response,
            slope=float(model.params[predictor]),
            intercept=float(model.params["Intercept"]),
            r_squared_adj=float(model.rsquared_adj),
            pearson_r=float(r),
            p_value=float(model.pvalues[predictor]),
            n=n,
        )
        logger.info("fit %s: adj R2=%.3f, r=%.3f, n=%d", res.equation, res.r_squared_adj, res.pearson_r, n)
        return res
