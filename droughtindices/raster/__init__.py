"""Raster value type, cell-wise operations and GeoTIFF I/O."""

from .model import (
    DegenerateRangeError,
    EmptyRasterError,
    Extent,
    Raster,
    RasterError,
    ShapeMismatchError,
    add,
    cell_max,
    cell_min,
    check_aligned,
    clamp,
    divide,
    log,
    multiply,
    set_where,
    subtract,
    summarize,
)

__all__ = [
    "Raster",
    "Extent",
    "RasterError",
    "ShapeMismatchError",
    "DegenerateRangeError",
    "EmptyRasterError",
    "add",
    "subtract",
    "multiply",
    "divide",
    "log",
    "set_where",
    "clamp",
    "cell_min",
    "cell_max",
    "summarize",
    "check_aligned",
]
