"""Visualization helpers."""

from .raster_plot import render_raster

__all__ = ["render_raster"]
