"""Gold summary: yearly metal means for every year in a document.

Expectations:
- Input: a measurement document (see `heavy_metals.aggregate.yearly`).
- Output: a pandas DataFrame with one row per (year, metal) and columns
  `year`, `metal`, `value`, `threshold`, `sample_count`, `exceeds`.
"""
from __future__ import annotations

import logging
from typing import Any

import pandas as pd

from heavy_metals.aggregate.yearly import aggregate_with_diagnostics, distinct_years
from heavy_metals.models import GoldMetalYearly

log = logging.getLogger(__name__)

GOLD_COLUMNS = ["year", "metal", "value", "threshold", "sample_count", "exceeds"]


def yearly_summary(document: Any) -> pd.DataFrame:
    """Return the per-year, per-metal means across all distinct years.

    Rows are ordered by year ascending, then by the fixed metal order.
    Each row is validated through `GoldMetalYearly` before it is emitted.

    Args:
        document: Measurement document.

    Returns:
        DataFrame with `GOLD_COLUMNS`; empty (with those columns) when the
        document holds no years.
    """
    rows: list[dict[str, Any]] = []

    for year in distinct_years(document):
        result = aggregate_with_diagnostics(document, year)
        if result.skipped.total:
            log.warning(
                "Year %s: skipped %d malformed entries (depths=%d months=%d days=%d samples=%d)",
                year,
                result.skipped.total,
                result.skipped.depths,
                result.skipped.months,
                result.skipped.days,
                result.skipped.samples,
            )
        for stat in result.stats:
            row = GoldMetalYearly(
                year=year,
                metal=stat.metal,
                value=stat.value,
                threshold=stat.threshold,
                sample_count=result.sample_counts[stat.metal],
                exceeds=stat.exceeds,
            )
            rows.append(row.model_dump(mode="python"))

    log.info("Built yearly summary: %d rows", len(rows))
    return pd.DataFrame(rows, columns=GOLD_COLUMNS)


def exceedances(df: pd.DataFrame) -> pd.DataFrame:
    """Return only the summary rows whose mean is above the threshold."""
    if df.empty:
        return df
    return df[df["exceeds"].astype(bool)].reset_index(drop=True)
