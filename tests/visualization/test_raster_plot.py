import numpy as np
import pytest
from matplotlib.colors import BoundaryNorm
import matplotlib.pyplot as plt

from droughtindices.visualization.raster_plot import RAMP_LEVELS, render_raster


def test_default_title_labels_and_ramp(raster_factory):
    r = raster_factory([[0.0, 5.0], [10.0, 20.0]], name="sdci")
    fig = render_raster(r)
    ax = fig.axes[0]
    assert ax.get_title() == "sdci - Raster"
    assert ax.get_xlabel() == "Longitude"
    assert ax.get_ylabel() == "Latitude"

    image = ax.images[0]
    assert image.get_cmap().N == RAMP_LEVELS
    norm = image.norm
    assert isinstance(norm, BoundaryNorm)
    assert len(norm.boundaries) == RAMP_LEVELS + 1
    assert norm.boundaries[0] == 0.0 and norm.boundaries[-1] == 20.0
    assert tuple(image.get_extent()) == pytest.approx(
        (r.extent.left, r.extent.right, r.extent.bottom, r.extent.top)
    )
    plt.close(fig)


def test_custom_labels_and_save(raster_factory, tmp_path):
    r = raster_factory([[1.0, np.nan], [3.0, 4.0]], name="lst")
    out = tmp_path / "plots" / "lst.png"
    fig = render_raster(
        r,
        title="Surface temperature",
        x_label="Easting",
        y_label="Northing",
        color_stops=("blue", "white", "red"),
        output_path=str(out),
    )
    assert out.exists()
    assert fig.axes[0].get_title() == "Surface temperature"
    assert fig.axes[0].get_xlabel() == "Easting"


def test_uniform_raster_still_renders(raster_factory, tmp_path):
    out = tmp_path / "flat.png"
    render_raster(raster_factory(np.full((2, 2), 5.0)), output_path=str(out))
    assert out.exists()
