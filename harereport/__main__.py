# SPDX-FileCopyrightText: 2025-present Yiming Zang <yiming.zang@tu-dortmund.de>
#
# SPDX-License-Identifier: MIT
"""
Run the juvenile hare report over one input file.

Usage:
    python -m harereport data/bonanza_hares.csv
    python -m harereport data/bonanza_hares.csv --verbose
"""

import argparse
import logging
import sys

from .errors import HareReportError
from .report import build_report

logger = logging.getLogger("harereport")


def _sd(value) -> str:
    return "n/a" if value is None else f"{value:.2f}"


def summarize(report) -> str:
    a, b = report.group_a, report.group_b
    yc = report.year_count_summary
    reg = report.regression
    lines = [
        f"Juvenile records: {len(report.data)} over {yc.years} years "
        f"(per-year count min {yc.min}, max {yc.max}, mean {yc.mean:.1f}, median {yc.median:.1f})",
        f"{a.group}: mean {a.mean:.2f} g, sd {_sd(a.sd)}, n {a.n}",
        f"{b.group}: mean {b.mean:.2f} g, sd {_sd(b.sd)}, n {b.n}",
        f"Difference {report.ttest.mean_difference:.2f} g ({report.percent_difference:.1f}%), "
        f"Welch t({report.ttest.df:.1f}) = {report.ttest.statistic:.2f}, p = {report.ttest.p_value:.3g}",
        f"Cohen's d = {report.cohens_d:.2f} ({report.effect_band})",
        f"{reg.equation}, adj R2 = {reg.r_squared_adj:.3f}, Pearson's r = {reg.pearson_r:.3f}, "
        f"p = {reg.p_value:.3g}, n = {reg.n}",
    ]
    return "\n".join(lines)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="harereport", description="Juvenile hare exploratory report")
    parser.add_argument("path", help="delimited trapping records file")
    parser.add_argument("--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        report = build_report(args.path)
    except HareReportError as e:
        logger.error(f"report failed: {e}")
        return 1

    print(summarize(report))
    return 0


if __name__ == "__main__":
    sys.exit(main())
