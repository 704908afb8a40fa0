# SPDX-FileCopyrightText: 2025-present Yiming Zang <yiming.zang@tu-dortmund.de>
#
# SPDX-License-Identifier: MIT
from __future__ import annotations
from typing import Optional


class HareReportError(Exception):
    """base error of a report run. carries the failing stage and field."""

    def __init__(self, message: str,
                 stage: Optional[str] = None,
                 field: Optional[str] = None):
        self.stage = stage
        self.field = field
        context = ", ".join(f"{k}={v}" for k, v in (("stage", stage), ("field", field)) if v)
        super().__init__(f"{message} ({context})" if context else message)


class SourceReadError(HareReportError, OSError):
    """the source file is missing or cannot be read."""


class ParseError(HareReportError, ValueError):
    """a required column is absent or a date cannot be parsed."""


class EmptySampleError(HareReportError, ValueError):
    """a statistic received zero valid observations."""


class InsufficientDataError(HareReportError, ValueError):
    """a statistic received fewer observations than it needs."""


class DegenerateInputError(HareReportError, ValueError):
    """zero variance where a statistic divides by it."""
