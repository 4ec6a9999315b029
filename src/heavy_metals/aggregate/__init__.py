"""Yearly heavy-metal aggregation.

`yearly` holds the pure aggregator (`aggregate`, `distinct_years`) used by the
chart layer; `summary` and `load_gold` build and store the per-year Gold table.
"""

from heavy_metals.aggregate.yearly import (
    AggregationResult,
    InvalidInput,
    SkipCounts,
    aggregate,
    aggregate_with_diagnostics,
    distinct_years,
    read_metal_value,
)

__all__ = [
    "AggregationResult",
    "InvalidInput",
    "SkipCounts",
    "aggregate",
    "aggregate_with_diagnostics",
    "distinct_years",
    "read_metal_value",
]
