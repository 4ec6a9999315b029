"""Yearly per-metal averages over a nested heavy-metal measurement document.

Document shape (as exported from the realtime database `Heavy_Metals` node)::

    {depth: {year: [ {day: [ {"Cd_µg_L": 0.01, "Pb": 0.02, ...}, ... ]}, ... ]}}

A month may also be a list of day entries (integer day keys come back
from the database as arrays, with `null` for missing days).

The traversal is permissive: a branch with the wrong type at any level is
skipped and contributes nothing. Only a root that is not a mapping is
rejected, with `InvalidInput`.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Iterable

from heavy_metals.models import MetalStat
from heavy_metals.thresholds import METAL_THRESHOLDS, MetalThreshold

FIELD_SUFFIX = "_µg_L"


class InvalidInput(TypeError):
    """Raised when the measurement document root cannot be traversed."""


@dataclass
class SkipCounts:
    """Number of malformed branches skipped during one traversal.

    Attributes:
        depths: Depth records that are not mappings, or whose year entry is
            present but not a list.
        months: Month entries that are neither mappings nor lists.
        days: Day entries that are not lists.
        samples: Samples that are not mappings.
    """
    depths: int = 0
    months: int = 0
    days: int = 0
    samples: int = 0

    @property
    def total(self) -> int:
        return self.depths + self.months + self.days + self.samples


@dataclass(frozen=True)
class AggregationResult:
    """Aggregator output plus traversal diagnostics."""
    stats: list[MetalStat]
    sample_counts: dict[str, int] = field(default_factory=dict)
    skipped: SkipCounts = field(default_factory=SkipCounts)


def _is_number(value: Any) -> bool:
    # bool is an int subclass but JSON true/false are not readings
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _require_mapping(document: Any) -> Mapping[str, Any]:
    if not isinstance(document, Mapping):
        raise InvalidInput(
            f"measurement document must be a mapping, got {type(document).__name__}"
        )
    return document


def read_metal_value(sample: Mapping[str, Any], metal: str) -> float | None:
    """Return the reading for `metal` in one sample, or ``None``.

    Lookup order is fixed: ``"<metal>_µg_L"`` first, then plain ``"<metal>"``
    when the unit-suffixed field is missing or not numeric.
    """
    value = sample.get(metal + FIELD_SUFFIX)
    if not _is_number(value):
        value = sample.get(metal)
    if _is_number(value):
        return value
    return None


def _iter_samples(
    document: Mapping[str, Any], year: str, skipped: SkipCounts
) -> Iterable[Mapping[str, Any]]:
    """Yield every well-formed sample recorded under `year` for any depth."""
    for depth_record in document.values():
        if not isinstance(depth_record, Mapping):
            skipped.depths += 1
            continue
        year_record = depth_record.get(year)
        if year_record is None:
            continue
        if not _is_sequence(year_record):
            skipped.depths += 1
            continue

        for month_entry in year_record:
            if isinstance(month_entry, Mapping):
                day_entries = month_entry.values()
            elif _is_sequence(month_entry):
                day_entries = month_entry
            else:
                skipped.months += 1
                continue
            for day_samples in day_entries:
                if not _is_sequence(day_samples):
                    skipped.days += 1
                    continue
                for sample in day_samples:
                    if not isinstance(sample, Mapping):
                        skipped.samples += 1
                        continue
                    yield sample


def aggregate_with_diagnostics(
    document: Any,
    year: str,
    thresholds: tuple[MetalThreshold, ...] = METAL_THRESHOLDS,
) -> AggregationResult:
    """Compute per-metal means for `year` and report what was skipped.

    Args:
        document: Measurement document (depth -> year -> months -> days -> samples).
        year: Year key, e.g. "2020".
        thresholds: Metal table defining which metals are tracked and in
            which order.

    Returns:
        `AggregationResult` with one `MetalStat` per tracked metal in table
        order, per-metal sample counts, and skip counters.

    Raises:
        InvalidInput: if `document` is not a mapping.
    """
    document = _require_mapping(document)
    skipped = SkipCounts()
    values: dict[str, list[float]] = {t.symbol: [] for t in thresholds}

    for sample in _iter_samples(document, year, skipped):
        for t in thresholds:
            reading = read_metal_value(sample, t.symbol)
            if reading is not None:
                values[t.symbol].append(reading)

    stats = [
        MetalStat(
            metal=t.symbol,
            label=t.symbol,
            value=sum(values[t.symbol]) / len(values[t.symbol]) if values[t.symbol] else None,
            threshold=t.threshold,
        )
        for t in thresholds
    ]
    counts = {t.symbol: len(values[t.symbol]) for t in thresholds}
    return AggregationResult(stats=stats, sample_counts=counts, skipped=skipped)


def aggregate(
    document: Any,
    year: str,
    thresholds: tuple[MetalThreshold, ...] = METAL_THRESHOLDS,
) -> list[MetalStat]:
    """Return the mean reading of every tracked metal for `year`.

    A metal with no readings that year gets ``value=None`` (not 0), so
    "no data" stays distinguishable from "measured zero".

    Raises:
        InvalidInput: if `document` is not a mapping.
    """
    return aggregate_with_diagnostics(document, year, thresholds).stats


def distinct_years(document: Any) -> list[str]:
    """Return every year key found under any depth, unique and sorted ascending.

    Sorting is lexicographic, which matches numeric order for 4-digit years.

    Raises:
        InvalidInput: if `document` is not a mapping.
    """
    document = _require_mapping(document)
    years: set[str] = set()
    for depth_record in document.values():
        if isinstance(depth_record, Mapping):
            years.update(str(y) for y in depth_record.keys())
    return sorted(years)
