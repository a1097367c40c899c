"""Min-max normalization shared by the condition indices."""

from __future__ import annotations

import logging
from typing import Optional

from droughtindices.raster.model import (
    DegenerateRangeError,
    Raster,
    cell_max,
    cell_min,
)

logger = logging.getLogger(__name__)


def value_range(raster: Raster) -> tuple[float, float]:
    """Return ``(min, max)`` over valid cells, rejecting a zero-width range."""
    lo, hi = cell_min(raster), cell_max(raster)
    if hi == lo:
        raise DegenerateRangeError(
            f"'{raster.name}' has no spatial variation (all valid cells == {lo})"
        )
    return lo, hi


def normalize_to_percentage(raster: Raster, name: Optional[str] = None) -> Raster:
    """Rescale *raster* linearly so its minimum maps to 0 and its maximum to 100.

    Raises:
        EmptyRasterError: if *raster* has no valid cells.
        DegenerateRangeError: if every valid cell has the same value.
    """
    lo, hi = value_range(raster)
    logger.debug("Normalizing %s over [%g, %g]", raster.name, lo, hi)
    scaled = (raster - lo) / (hi - lo) * 100
    return scaled.rename(name or raster.name)
