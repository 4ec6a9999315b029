"""heavy_metals package.

Turns the nested `Heavy_Metals` measurement document of a water-quality
realtime database into per-year, per-metal means compared against fixed
safety thresholds.

Architecture:
- `aggregate.yearly` is the pure core (`aggregate`, `distinct_years`)
- `ingest.snapshot` loads a document snapshot (REST fetch or JSON export)
- `aggregate.summary` / `aggregate.load_gold` build and store a Gold table
  in MongoDB
- Pydantic models validate the aggregator output and Gold rows
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
