from __future__ import annotations

import dataclasses

import pytest

from heavy_metals.thresholds import METAL_THRESHOLDS, explain, get_threshold


def test_metal_order_is_fixed() -> None:
    assert tuple(t.symbol for t in METAL_THRESHOLDS) == ("Cd", "Pb", "Hg", "Cu", "Zn", "Fe", "Mn", "Al")


def test_threshold_lookup() -> None:
    assert get_threshold("Fe").threshold == 300
    assert get_threshold("Cd").name == "Cadmium"
    with pytest.raises(KeyError):
        get_threshold("Xx")


def test_threshold_records_are_immutable() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        METAL_THRESHOLDS[0].threshold = 1  # type: ignore[misc]


def test_explain_matches_display_note() -> None:
    assert explain("Cd") == (
        "Cadmium (Cd): Toxic to kidneys and aquatic life. Safety threshold: 0.005 µg/L."
    )
    assert explain("Fe").endswith("Safety threshold: 300 µg/L.")
