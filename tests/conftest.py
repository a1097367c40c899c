# pylint: disable=missing-module-docstring,missing-function-docstring,redefined-outer-name
import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest
import rasterio
from rasterio.transform import from_bounds

from droughtindices.raster.io import InputBands
from droughtindices.raster.model import Extent, Raster

EXTENT = Extent(500000.0, 4100000.0, 500120.0, 4100090.0)
CRS = "EPSG:32633"


def make_raster(values, name="layer", mask=None):
    """Raster on the shared test grid (UTM 33N, 30 m cells for 3x4)."""
    return Raster(np.asarray(values, dtype=float), mask=mask, extent=EXTENT, crs=CRS, name=name)


@pytest.fixture
def raster_factory():
    return make_raster


@pytest.fixture
def bands():
    """Small scene with varied vegetation, temperature and rainfall."""
    red = make_raster(
        [[0.10, 0.12, 0.20, 0.30], [0.08, 0.10, 0.15, 0.25], [0.05, 0.07, 0.10, 0.20]],
        "red",
    )
    nir = make_raster(
        [[0.30, 0.40, 0.25, 0.32], [0.45, 0.35, 0.30, 0.28], [0.50, 0.40, 0.35, 0.22]],
        "nir",
    )
    thermal1 = make_raster(
        [[22000, 23000, 25000, 27000], [21000, 22500, 24000, 26000], [20000, 21000, 23000, 25500]],
        "thermal1",
    )
    thermal2 = make_raster(
        [[21500, 22500, 24500, 26500], [20500, 22000, 23500, 25500], [19500, 20500, 22500, 25000]],
        "thermal2",
    )
    precipitation = make_raster(
        [[80, 60, 40, 20], [90, 70, 50, 30], [100, 85, 55, 10]], "precipitation"
    )
    return InputBands(red, nir, thermal1, thermal2, precipitation)


@pytest.fixture
def geotiff_factory(tmp_path):
    """Write a float32 GeoTIFF on the shared test grid and return its path."""

    def _write(name, values, nodata=None):
        arr = np.asarray(values, dtype="float32")
        path = tmp_path / f"{name}.tif"
        profile = {
            "driver": "GTiff",
            "height": arr.shape[0],
            "width": arr.shape[1],
            "count": 1,
            "dtype": "float32",
            "crs": CRS,
            "transform": from_bounds(*EXTENT, arr.shape[1], arr.shape[0]),
            "nodata": nodata,
        }
        with rasterio.open(path, "w", **profile) as dst:
            dst.write(arr, 1)
        return str(path)

    return _write


@pytest.fixture
def band_files(bands, geotiff_factory):
    """The ``bands`` scene written to disk, keyed like ``InputBands`` fields."""
    return {
        field: geotiff_factory(field, getattr(bands, field).data)
        for field in ("red", "nir", "thermal1", "thermal2", "precipitation")
    }
