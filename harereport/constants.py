# SPDX-FileCopyrightText: 2025-present Yiming Zang <yiming.zang@tu-dortmund.de>
#
# SPDX-License-Identifier: MIT
"""
Column names, codes and thresholds used across the report.
"""

# canonical column names after normalization
DATE_COL = "date"
YEAR_COL = "year"
SEX_COL = "sex"
AGE_COL = "age"
SITE_COL = "grid"
WEIGHT_COL = "weight"
HINDFT_COL = "hindft"

# month/day/year, four-digit year first
DATE_FORMATS = ("%m/%d/%Y", "%m/%d/%y")

JUVENILE_CODE = "j"

FEMALE = "Female"
MALE = "Male"
UNSPECIFIED_SEX = "Unspecified"
SEX_LABELS = {"f": FEMALE, "m": MALE}

# upper bounds on |d|; anything at or above the last is "large"
EFFECT_SIZE_BANDS = (
    (0.2, "negligible"),
    (0.5, "small"),
    (0.8, "medium"),
)
LARGE_EFFECT = "large"
