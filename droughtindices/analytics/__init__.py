"""Pixel-wise index transforms."""

from .normalize import normalize_to_percentage
from .vegetation import calculate_ndvi, calculate_vci
from .temperature import calculate_lst, calculate_tci
from .precipitation import calculate_precipitation_index
from .drought import calculate_sdci

__all__ = [
    "normalize_to_percentage",
    "calculate_ndvi",
    "calculate_vci",
    "calculate_lst",
    "calculate_tci",
    "calculate_precipitation_index",
    "calculate_sdci",
]
