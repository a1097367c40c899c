"""In-memory raster value type and its cell-wise operations.

A :class:`Raster` is a 2-D grid of float64 samples with an explicit no-data
mask and opaque georeferencing (extent and CRS) that every operation carries
through unchanged. Per-cell numeric failures (division by zero, logarithm of a
non-positive value) become no-data at that cell; structural problems raise a
:class:`RasterError` subclass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import operator
from typing import Callable, NamedTuple, Optional, Union

import numpy as np


class RasterError(Exception):
    """Base class for structural raster errors."""


class ShapeMismatchError(RasterError):
    """Operands of a multi-raster operation have different grid dimensions."""


class DegenerateRangeError(RasterError):
    """A normalization input has zero dynamic range over its valid cells."""


class EmptyRasterError(RasterError):
    """A global reduction was attempted on a raster with no valid cells."""


class Extent(NamedTuple):
    """Bounding box in CRS units."""

    left: float
    bottom: float
    right: float
    top: float


Operand = Union["Raster", float, int]


@dataclass(frozen=True, eq=False)
class Raster:
    """Immutable single-band grid with a no-data mask.

    ``mask`` is True where a cell holds no data. Non-finite samples in
    ``data`` are always treated as no data.
    """

    data: np.ndarray
    mask: Optional[np.ndarray] = None
    extent: Optional[Extent] = None
    crs: Optional[str] = None
    name: str = "layer"
    _valid: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        data = np.array(self.data, dtype=np.float64)
        if data.ndim != 2:
            raise ValueError(f"Raster data must be 2-D, got shape {data.shape}")
        mask = ~np.isfinite(data)
        if self.mask is not None:
            given = np.asarray(self.mask, dtype=bool)
            if given.shape != data.shape:
                raise ShapeMismatchError(
                    f"Mask shape {given.shape} does not match data shape {data.shape}"
                )
            mask |= given
        data[mask] = np.nan
        data.flags.writeable = False
        mask.flags.writeable = False
        extent = (
            Extent(*map(float, self.extent))
            if self.extent is not None
            else Extent(0.0, 0.0, float(data.shape[1]), float(data.shape[0]))
        )
        object.__setattr__(self, "data", data)
        object.__setattr__(self, "mask", mask)
        object.__setattr__(self, "extent", extent)
        object.__setattr__(self, "_valid", ~mask)

    @classmethod
    def from_array(
        cls,
        values,
        *,
        extent=None,
        crs: Optional[str] = None,
        name: str = "layer",
        nodata: Optional[float] = None,
    ) -> "Raster":
        """Build a raster from array-like ``values``; cells equal to ``nodata`` are masked."""
        arr = np.asarray(values, dtype=np.float64)
        mask = arr == nodata if nodata is not None else None
        return cls(arr, mask=mask, extent=extent, crs=crs, name=name)

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def shape(self) -> tuple[int, int]:
        return (self.height, self.width)

    @property
    def resolution(self) -> tuple[float, float]:
        """Cell size as ``(xres, yres)`` in CRS units."""
        return (
            (self.extent.right - self.extent.left) / self.width,
            (self.extent.top - self.extent.bottom) / self.height,
        )

    @property
    def valid(self) -> np.ndarray:
        """Boolean array, True where a cell holds data."""
        return self._valid

    @property
    def valid_count(self) -> int:
        return int(self._valid.sum())

    def filled(self, fill: float = np.nan) -> np.ndarray:
        """Return a writable copy of the samples with no-data cells set to ``fill``."""
        out = self.data.copy()
        out[self.mask] = fill
        return out

    def derive(self, data: np.ndarray, mask: np.ndarray, name: Optional[str] = None) -> "Raster":
        """Return a new raster on this grid with ``data``/``mask`` and optional new name."""
        return Raster(
            data,
            mask=mask,
            extent=self.extent,
            crs=self.crs,
            name=self.name if name is None else name,
        )

    def rename(self, name: str) -> "Raster":
        return self.derive(self.data, self.mask, name=name)

    def __add__(self, other: Operand) -> "Raster":
        return add(self, other)

    def __radd__(self, other: Operand) -> "Raster":
        return add(other, self)

    def __sub__(self, other: Operand) -> "Raster":
        return subtract(self, other)

    def __rsub__(self, other: Operand) -> "Raster":
        return subtract(other, self)

    def __mul__(self, other: Operand) -> "Raster":
        return multiply(self, other)

    def __rmul__(self, other: Operand) -> "Raster":
        return multiply(other, self)

    def __truediv__(self, other: Operand) -> "Raster":
        return divide(self, other)

    def __rtruediv__(self, other: Operand) -> "Raster":
        return divide(other, self)

    def __neg__(self) -> "Raster":
        return multiply(self, -1.0)

    def __repr__(self) -> str:
        return (
            f"Raster(name={self.name!r}, shape={self.shape}, "
            f"valid={self.valid_count}, crs={self.crs!r})"
        )


def check_aligned(*rasters: Raster) -> None:
    """Raise :class:`ShapeMismatchError` unless all rasters share one grid shape."""
    shapes = [r.shape for r in rasters]
    if len(set(shapes)) > 1:
        names = ", ".join(f"{r.name}={r.shape}" for r in rasters)
        raise ShapeMismatchError(f"Rasters are not aligned: {names}")


def _unpack(value: Operand):
    if isinstance(value, Raster):
        return value.data, value.mask
    return float(value), False


def _binary(a: Operand, b: Operand, op: Callable) -> Raster:
    if isinstance(a, Raster) and isinstance(b, Raster):
        check_aligned(a, b)
    template = a if isinstance(a, Raster) else b
    if not isinstance(template, Raster):
        raise TypeError("At least one operand must be a Raster")
    a_data, a_mask = _unpack(a)
    b_data, b_mask = _unpack(b)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        out = op(a_data, b_data)
    mask = a_mask | b_mask | ~np.isfinite(out)
    return template.derive(out, mask)


def add(a: Operand, b: Operand) -> Raster:
    return _binary(a, b, operator.add)


def subtract(a: Operand, b: Operand) -> Raster:
    return _binary(a, b, operator.sub)


def multiply(a: Operand, b: Operand) -> Raster:
    return _binary(a, b, operator.mul)


def divide(a: Operand, b: Operand) -> Raster:
    """Cell-wise ``a / b``; cells with a zero divisor become no data."""
    return _binary(a, b, operator.truediv)


def log(raster: Raster) -> Raster:
    """Cell-wise natural logarithm; non-positive cells become no data."""
    positive = raster.valid & (np.nan_to_num(raster.data, nan=0.0) > 0)
    out = np.log(np.where(positive, raster.data, 1.0))
    return raster.derive(out, ~positive)


def set_where(
    raster: Raster,
    predicate: Union[Callable[[np.ndarray], np.ndarray], np.ndarray],
    value: float,
) -> Raster:
    """Return a copy with every valid cell matching ``predicate`` set to ``value``.

    ``predicate`` is either a callable applied to the sample array or a
    boolean array of the raster's shape. No-data cells are never changed.
    """
    with np.errstate(invalid="ignore"):
        hits = predicate(raster.data) if callable(predicate) else predicate
    hits = np.asarray(hits, dtype=bool)
    if hits.shape != raster.shape:
        raise ShapeMismatchError(
            f"Predicate shape {hits.shape} does not match raster {raster.shape}"
        )
    out = raster.filled()
    out[hits & raster.valid] = value
    return raster.derive(out, raster.mask)


def clamp(raster: Raster, lower: float, upper: float) -> Raster:
    """Clamp valid cells to ``[lower, upper]``."""
    low = set_where(raster, lambda a: a < lower, lower)
    return set_where(low, lambda a: a > upper, upper)


def _valid_values(raster: Raster, what: str) -> np.ndarray:
    if raster.valid_count == 0:
        raise EmptyRasterError(f"Cannot compute {what} of '{raster.name}': no valid cells")
    return raster.data[raster.valid]


def cell_min(raster: Raster) -> float:
    """Minimum over valid cells."""
    return float(_valid_values(raster, "min").min())


def cell_max(raster: Raster) -> float:
    """Maximum over valid cells."""
    return float(_valid_values(raster, "max").max())


def summarize(raster: Raster) -> dict:
    """Return min/max/mean/std and the valid cell count of ``raster``."""
    values = _valid_values(raster, "statistics")
    return {
        "min": float(values.min()),
        "max": float(values.max()),
        "mean": float(values.mean()),
        "std": float(values.std()),
        "valid_cells": int(values.size),
        "total_cells": int(raster.data.size),
    }
