"""Static safety thresholds for the tracked heavy metals.

The table is fixed at build time and defines both the set of tracked metals
and their output order (Cd, Pb, Hg, Cu, Zn, Fe, Mn, Al).
"""

from __future__ import annotations

from dataclasses import dataclass

UNIT = "µg/L"


@dataclass(frozen=True)
class MetalThreshold:
    """Safety limit for one metal.

    Attributes:
        symbol: Two-letter chemical symbol (e.g. "Cd").
        threshold: Safety concentration limit in µg/L.
        name: Element name.
        description: Short health note shown next to the chart.
    """
    symbol: str
    threshold: float
    name: str
    description: str


METAL_THRESHOLDS: tuple[MetalThreshold, ...] = (
    MetalThreshold("Cd", 0.005, "Cadmium", "Toxic to kidneys and aquatic life."),
    MetalThreshold("Pb", 0.01, "Lead", "Affects nervous system, dangerous for children and wildlife."),
    MetalThreshold("Hg", 1, "Mercury", "Causes neurological and developmental problems."),
    MetalThreshold("Cu", 1, "Copper", "Can cause gastrointestinal distress and is toxic to fish."),
    MetalThreshold("Zn", 10, "Zinc", "Essential but toxic at high concentrations."),
    MetalThreshold("Fe", 300, "Iron", "Excess can affect taste and stain water, but is less toxic."),
    MetalThreshold("Mn", 50, "Manganese", "Can affect taste and stain water, high levels may be neurotoxic."),
    MetalThreshold("Al", 200, "Aluminum", "Can be toxic to fish and affect water clarity."),
)

_BY_SYMBOL = {t.symbol: t for t in METAL_THRESHOLDS}


def get_threshold(symbol: str) -> MetalThreshold:
    """Return the threshold record for a metal symbol.

    Raises:
        KeyError: if `symbol` is not one of the tracked metals.
    """
    return _BY_SYMBOL[symbol]


def explain(symbol: str) -> str:
    """Return the display note for a metal, e.g. 'Cadmium (Cd): ... Safety threshold: 0.005 µg/L.'"""
    t = get_threshold(symbol)
    return f"{t.name} ({t.symbol}): {t.description} Safety threshold: {t.threshold:g} {UNIT}."
