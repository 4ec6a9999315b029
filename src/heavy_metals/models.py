"""Pydantic models for aggregator output and Gold summary rows.

`MetalStat` is what the chart layer consumes; `GoldMetalYearly` is one row of
the per-year summary stored in MongoDB.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, ConfigDict


class MetalStat(BaseModel):
    """Mean reading for one metal in one year, paired with its threshold.

    Attributes:
        metal: Metal symbol (e.g. 'Pb').
        label: Display label (same as the symbol).
        value: Mean of all readings, or ``None`` when there were none.
        threshold: Safety threshold in µg/L.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)
    metal: str
    label: str
    value: float | None
    threshold: float = Field(..., gt=0)

    @property
    def exceeds(self) -> bool:
        """True when a measured mean is above the safety threshold."""
        return self.value is not None and self.value > self.threshold


class GoldMetalYearly(BaseModel):
    """Gold model representing the yearly mean per metal."""
    model_config = ConfigDict(extra="forbid")
    year: str
    metal: str
    value: float | None
    threshold: float = Field(..., gt=0)
    sample_count: int = Field(..., ge=0)
    exceeds: bool
