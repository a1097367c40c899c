from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Optional

from droughtindices.analytics import (
    calculate_lst,
    calculate_ndvi,
    calculate_precipitation_index,
    calculate_sdci,
    calculate_tci,
    calculate_vci,
)
from droughtindices.core.config import ConfigManager
from droughtindices.core.logger import Logger
from droughtindices.raster.io import InputBands, read_input_rasters, write_raster
from droughtindices.raster.model import Raster, summarize
from droughtindices.visualization.raster_plot import render_raster


def layer_stats(raster: Raster) -> dict:
    """Statistics of *raster*; a layer with no valid cells reports only cell counts."""
    if raster.valid_count == 0:
        return {"valid_cells": 0, "total_cells": int(raster.data.size)}
    return summarize(raster)


@dataclass(frozen=True)
class DroughtIndexResult:
    """All layers produced by one pipeline run."""

    ndvi: Raster
    vci: Raster
    lst: Raster
    tci: Raster
    pci: Raster
    sdci: Raster

    def layers(self) -> Dict[str, Raster]:
        return {
            "ndvi": self.ndvi,
            "vci": self.vci,
            "lst": self.lst,
            "tci": self.tci,
            "pci": self.pci,
            "sdci": self.sdci,
        }


@dataclass
class DroughtPipeline:
    """Encapsulate the bands -> SDCI workflow."""

    config: ConfigManager = field(default_factory=ConfigManager)
    logger: logging.Logger = field(
        default_factory=lambda: Logger.get_logger(__name__)
    )

    def compute(self, bands: InputBands) -> DroughtIndexResult:
        """Derive every index from *bands* in memory."""
        # 1. Vegetation
        ndvi = calculate_ndvi(bands.red, bands.nir)
        vci = calculate_vci(ndvi)

        # 2. Temperature
        lst = calculate_lst(
            bands.red,
            bands.nir,
            bands.thermal1,
            bands.thermal2,
            **self.config.get_lst_params(),
        )
        tci = calculate_tci(lst)

        # 3. Precipitation and composite
        pci = calculate_precipitation_index(bands.precipitation)
        sdci = calculate_sdci(vci, tci, pci)

        result = DroughtIndexResult(ndvi, vci, lst, tci, pci, sdci)
        for layer, raster in result.layers().items():
            self.logger.info(
                "%s stats: %s",
                layer,
                layer_stats(raster),
                extra={"layer": layer},
            )
        return result

    def run(
        self,
        red: str,
        nir: str,
        thermal1: str,
        thermal2: str,
        precipitation: str,
        out_dir: str,
        plots: bool = False,
        palette: Optional[str] = None,
    ) -> Dict[str, str]:
        """Read inputs, compute all indices and write them to *out_dir*.

        Returns a mapping of layer name to written GeoTIFF path; the
        statistics file and PNG plots are included as ``stats`` and
        ``<layer>_png``.
        """
        bands = read_input_rasters(red, nir, thermal1, thermal2, precipitation)
        result = self.compute(bands)
        os.makedirs(out_dir, exist_ok=True)

        outputs: Dict[str, str] = {}
        stats = {}
        color_stops = self.config.get_palette(palette) if plots else None
        for layer, raster in result.layers().items():
            outputs[layer] = write_raster(
                raster, self.config.get_output_path(out_dir, layer)
            )
            stats[layer] = layer_stats(raster)
            if plots and raster.valid_count == 0:
                self.logger.warning(
                    "Skipping plot of %s: no valid cells", layer, extra={"layer": layer}
                )
            elif plots:
                png = os.path.join(out_dir, f"{layer}.png")
                render_raster(raster, color_stops=color_stops, output_path=png)
                outputs[f"{layer}_png"] = png

        stats_path = os.path.join(out_dir, "stats.json")
        with open(stats_path, "w", encoding="utf-8") as f:
            json.dump(stats, f, indent=2)
        outputs["stats"] = stats_path
        self.logger.info("Wrote %d layers to %s", len(result.layers()), out_dir)
        return outputs
