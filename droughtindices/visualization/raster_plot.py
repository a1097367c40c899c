"""Colour-ramp plots of single-band rasters."""

from __future__ import annotations

import os
from typing import Optional, Sequence

import matplotlib.pyplot as plt
from matplotlib.colors import BoundaryNorm, LinearSegmentedColormap
from matplotlib.figure import Figure
import numpy as np

from droughtindices.core.logger import Logger
from droughtindices.raster.model import Raster, cell_max, cell_min

DEFAULT_COLOR_STOPS: tuple[str, ...] = ("green", "yellow", "red")
RAMP_LEVELS = 100


def _level_edges(raster: Raster) -> np.ndarray:
    """Return RAMP_LEVELS + 1 evenly spaced edges from the raster's min to max."""
    lo, hi = cell_min(raster), cell_max(raster)
    if hi == lo:
        lo, hi = lo - 0.5, hi + 0.5
    return np.linspace(lo, hi, RAMP_LEVELS + 1)


def render_raster(
    raster: Raster,
    title: Optional[str] = None,
    x_label: str = "Longitude",
    y_label: str = "Latitude",
    color_stops: Sequence[str] = DEFAULT_COLOR_STOPS,
    output_path: Optional[str] = None,
) -> Figure:
    """Plot *raster* with a colour ramp interpolated through *color_stops*.

    The ramp has 100 levels spread evenly between the raster's minimum and
    maximum; no-data cells stay transparent. When *output_path* is given the
    PNG is written there and the figure is closed.

    Args:
        raster: layer to draw.
        title: plot title, ``"<name> - Raster"`` when omitted.
        x_label: x-axis label.
        y_label: y-axis label.
        color_stops: matplotlib colour names, low value first.
        output_path: optional PNG destination.

    Returns:
        The matplotlib Figure.
    """
    logger = Logger.get_logger(__name__)
    cmap = LinearSegmentedColormap.from_list(
        f"{raster.name}_ramp", list(color_stops), N=RAMP_LEVELS
    )
    cmap.set_bad(alpha=0.0)
    norm = BoundaryNorm(_level_edges(raster), ncolors=cmap.N)

    ext = raster.extent
    fig, ax = plt.subplots(figsize=(7, 6))
    image = ax.imshow(
        np.ma.masked_array(raster.data, mask=raster.mask),
        cmap=cmap,
        norm=norm,
        extent=(ext.left, ext.right, ext.bottom, ext.top),
        interpolation="nearest",
    )
    ax.set_title(title or f"{raster.name} - Raster")
    ax.set_xlabel(x_label)
    ax.set_ylabel(y_label)
    ax.tick_params(labelsize=7)
    cbar = fig.colorbar(image, ax=ax, orientation="horizontal", pad=0.1)
    cbar.ax.tick_params(labelsize=8)

    if output_path:
        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
        fig.savefig(output_path, bbox_inches="tight")
        plt.close(fig)
        logger.info("Rendered %s to %s", raster.name, output_path)
    return fig
