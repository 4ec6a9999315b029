"""Utilities for loading Gold DataFrames into MongoDB.

Gold datasets are small (8 rows per year) and are upserted row-by-row into a
dedicated collection keyed on `(year, metal)`.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Sequence

import pandas as pd
from pymongo import UpdateOne
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

log = logging.getLogger(__name__)

GOLD_COLLECTION = "gold_metal_yearly_averages"
GOLD_KEY_FIELDS = ("year", "metal")


def _to_bson_safe(row: dict[str, Any]) -> dict[str, Any]:
    """Replace NaN (pandas' missing marker) with None."""
    for k, v in list(row.items()):
        if isinstance(v, float) and math.isnan(v):
            row[k] = None
    return row


def load_gold(
    pdf: pd.DataFrame,
    collection: Collection[dict[str, Any]],
    key_fields: Sequence[str] = GOLD_KEY_FIELDS,
) -> int:
    """Upsert a Gold summary into MongoDB.

    Args:
        pdf: Gold DataFrame (see `yearly_summary`).
        collection: Target PyMongo collection.
        key_fields: Fields used as the upsert key.

    Returns:
        Number of upsert operations sent (0 when the frame is empty or the
        write failed).
    """
    log.info("Generating gold collection: %s", collection.name)

    if pdf.empty:
        log.warning("No rows to load for %s", collection.name)
        return 0

    ops = []
    for row in pdf.to_dict("records"):
        row = _to_bson_safe(row)
        query = {k: row[k] for k in key_fields}
        ops.append(
            UpdateOne(
                query,
                {"$set": row},
                upsert=True,
            )
        )

    try:
        collection.bulk_write(ops, ordered=False)
    except PyMongoError as e:
        log.warning("Gold bulk write failed for %s: %s", collection.name, e)
        return 0

    log.info(
        "Gold load complete for %s: %d rows",
        collection.name,
        len(ops),
    )
    return len(ops)
