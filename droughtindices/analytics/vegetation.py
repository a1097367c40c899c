"""Vegetation indices: NDVI and the Vegetation Condition Index."""

from __future__ import annotations

from droughtindices.analytics.normalize import normalize_to_percentage
from droughtindices.raster.model import Raster


def calculate_ndvi(red: Raster, nir: Raster) -> Raster:
    """Normalized Difference Vegetation Index, ``(nir - red) / (nir + red)``.

    Values are not clipped to [-1, 1]. Cells where both bands are zero
    become no data.
    """
    return ((nir - red) / (nir + red)).rename("ndvi")


def calculate_vci(ndvi: Raster) -> Raster:
    """Vegetation Condition Index: NDVI rescaled to 0 (driest) .. 100 (greenest)."""
    return normalize_to_percentage(ndvi, name="vci")
