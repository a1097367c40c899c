"""Precipitation Condition Index."""

from __future__ import annotations

from droughtindices.analytics.normalize import normalize_to_percentage
from droughtindices.raster.model import Raster


def calculate_precipitation_index(precipitation: Raster) -> Raster:
    """Rescale precipitation to 0 (driest cell) .. 100 (wettest cell)."""
    return normalize_to_percentage(precipitation, name="pci")
