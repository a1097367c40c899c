"""GeoTIFF reading and writing for :class:`Raster` objects."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Optional

import numpy as np
import rasterio
from rasterio.errors import RasterioIOError
from rasterio.transform import from_bounds

from droughtindices.raster.model import Extent, Raster, RasterError

NODATA_VALUE = -9999.0

logger = logging.getLogger(__name__)


class RasterFormatError(RasterError):
    """Raised when a file exists but cannot be decoded as a raster."""


@dataclass(frozen=True)
class InputBands:
    """The five co-registered inputs of the drought index pipeline."""

    red: Raster
    nir: Raster
    thermal1: Raster
    thermal2: Raster
    precipitation: Raster


def read_raster(path: str | os.PathLike, name: Optional[str] = None) -> Raster:
    """Read band 1 of *path* into a :class:`Raster`.

    The file's nodata value and any non-finite sample are masked. ``name``
    defaults to the file stem.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Raster file not found: {path}")
    try:
        with rasterio.open(path) as src:
            arr = src.read(1).astype(np.float64)
            bounds = src.bounds
            crs = src.crs.to_string() if src.crs else None
            nodata = src.nodata
    except RasterioIOError as e:
        raise RasterFormatError(f"Unsupported or corrupt raster {path}: {e}") from e
    raster = Raster.from_array(
        arr,
        extent=Extent(bounds.left, bounds.bottom, bounds.right, bounds.top),
        crs=crs,
        name=name or path.stem,
        nodata=nodata,
    )
    logger.debug("Read %r from %s", raster, path)
    return raster


def write_raster(raster: Raster, path: str | os.PathLike) -> str:
    """Write *raster* as a single-band float64 GeoTIFF, replacing any existing file.

    No-data cells are stored as ``NODATA_VALUE``; extent and CRS are kept.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    ext = raster.extent
    profile = {
        "driver": "GTiff",
        "height": raster.height,
        "width": raster.width,
        "count": 1,
        "dtype": "float64",
        "crs": raster.crs,
        "transform": from_bounds(
            ext.left, ext.bottom, ext.right, ext.top, raster.width, raster.height
        ),
        "nodata": NODATA_VALUE,
        "compress": "lzw",
    }
    try:
        with rasterio.open(path, "w", **profile) as dst:
            dst.write(raster.filled(NODATA_VALUE), 1)
            dst.update_tags(name=raster.name)
    except RasterioIOError as e:
        raise OSError(f"Cannot write raster to {path}: {e}") from e
    logger.info("✔ Saved %s to %s", raster.name, path)
    return str(path)


def read_input_rasters(
    red_path: str,
    nir_path: str,
    thermal1_path: str,
    thermal2_path: str,
    precipitation_path: str,
) -> InputBands:
    """Read the red, NIR, two thermal and precipitation rasters."""
    return InputBands(
        red=read_raster(red_path, name="red"),
        nir=read_raster(nir_path, name="nir"),
        thermal1=read_raster(thermal1_path, name="thermal1"),
        thermal2=read_raster(thermal2_path, name="thermal2"),
        precipitation=read_raster(precipitation_path, name="precipitation"),
    )


def export_analysis_results(raster: Raster, output_path: str | os.PathLike) -> str:
    """Write *raster* to *output_path* and return the path."""
    return write_raster(raster, output_path)
