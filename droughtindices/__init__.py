"""Drought condition indices (NDVI, VCI, LST, TCI, PCI, SDCI) from raster bands."""

from droughtindices.raster.model import (
    DegenerateRangeError,
    EmptyRasterError,
    Extent,
    Raster,
    RasterError,
    ShapeMismatchError,
)
from droughtindices.analytics import (
    calculate_lst,
    calculate_ndvi,
    calculate_precipitation_index,
    calculate_sdci,
    calculate_tci,
    calculate_vci,
    normalize_to_percentage,
)

__all__ = [
    "Raster",
    "Extent",
    "RasterError",
    "ShapeMismatchError",
    "DegenerateRangeError",
    "EmptyRasterError",
    "normalize_to_percentage",
    "calculate_ndvi",
    "calculate_lst",
    "calculate_vci",
    "calculate_tci",
    "calculate_precipitation_index",
    "calculate_sdci",
]
