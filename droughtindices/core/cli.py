"""
droughtindices CLI entrypoint - commands to derive NDVI, LST and the full
SDCI layer stack from GeoTIFF bands, and to plot any resulting raster.
"""

import sys

import click  # type: ignore
from click import echo

from droughtindices.analytics import calculate_lst, calculate_ndvi
from droughtindices.core.config import ConfigManager, ConfigValidationError
from droughtindices.core.logger import Logger
from droughtindices.core.pipeline import DroughtPipeline
from droughtindices.raster.io import read_raster, write_raster
from droughtindices.raster.model import RasterError
from droughtindices.visualization.raster_plot import render_raster

logger = Logger.get_logger(__name__)

HANDLED_ERRORS = (RasterError, ConfigValidationError, OSError)

_raster_path = click.Path(exists=True, dir_okay=False)


def _check_raster_format(ctx, param, value):
    """Reject input files whose extension is not a supported raster format."""
    cfg = ConfigManager()
    if not cfg.is_supported_raster(value):
        raise click.BadParameter(
            f"Unsupported raster format for {value}; "
            f"expected one of {', '.join(cfg.supported_raster_formats)}"
        )
    return value


def _fail(action: str, err: Exception) -> None:
    logger.debug("%s failed", action, exc_info=True)
    echo(f"❌  {action} failed: {err}", err=True)
    sys.exit(1)


@click.group()
def cli():
    """droughtindices: drought condition indices from satellite rasters."""
    Logger.setup()


@cli.command()
@click.argument("red", type=_raster_path, callback=_check_raster_format)
@click.argument("nir", type=_raster_path, callback=_check_raster_format)
@click.option(
    "--output", "-o", type=click.Path(), default="ndvi.tif", help="Output GeoTIFF"
)
def ndvi(red, nir, output):
    """Compute NDVI from the RED and NIR band rasters."""
    try:
        result = calculate_ndvi(read_raster(red), read_raster(nir))
        write_raster(result, output)
        echo(f"✅  NDVI written to `{output}`")
    except HANDLED_ERRORS as e:
        _fail("NDVI", e)


@cli.command()
@click.argument("red", type=_raster_path, callback=_check_raster_format)
@click.argument("nir", type=_raster_path, callback=_check_raster_format)
@click.argument("thermal1", type=_raster_path, callback=_check_raster_format)
@click.argument("thermal2", type=_raster_path, callback=_check_raster_format)
@click.option(
    "--output", "-o", type=click.Path(), default="lst.tif", help="Output GeoTIFF"
)
@click.option(
    "--unit",
    "-u",
    default=ConfigManager.DEFAULT_LST_UNIT,
    help="'C' for Celsius; anything else yields Kelvin",
)
@click.option(
    "--pv-coeff",
    type=float,
    default=ConfigManager.DEFAULT_PV_COEFF,
    help="Emissivity gain per unit of proportional vegetation",
)
@click.option(
    "--lse-coeff",
    type=float,
    default=ConfigManager.DEFAULT_LSE_COEFF,
    help="Bare-soil emissivity",
)
def lst(red, nir, thermal1, thermal2, output, unit, pv_coeff, lse_coeff):
    """Compute Land Surface Temperature from RED, NIR and two THERMAL bands."""
    try:
        result = calculate_lst(
            read_raster(red),
            read_raster(nir),
            read_raster(thermal1),
            read_raster(thermal2),
            pv_coeff=pv_coeff,
            lse_coeff=lse_coeff,
            unit=unit,
        )
        write_raster(result, output)
        echo(f"✅  LST written to `{output}`")
    except HANDLED_ERRORS as e:
        _fail("LST", e)


@cli.command()
@click.argument("red", type=_raster_path, callback=_check_raster_format)
@click.argument("nir", type=_raster_path, callback=_check_raster_format)
@click.argument("thermal1", type=_raster_path, callback=_check_raster_format)
@click.argument("thermal2", type=_raster_path, callback=_check_raster_format)
@click.argument("precipitation", type=_raster_path, callback=_check_raster_format)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False),
    default="drought_output",
    help="Directory for the index rasters",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML/TOML/JSON settings file",
)
@click.option("--plots/--no-plots", default=False, help="Also render PNG plots")
@click.option("--palette", "-p", default=None, help="Preset palette for plots")
def sdci(
    red,
    nir,
    thermal1,
    thermal2,
    precipitation,
    output_dir,
    config_path,
    plots,
    palette,
):
    """
    Run the full pipeline: NDVI, VCI, LST, TCI, PCI and the composite SDCI.
    """
    try:
        pipeline = DroughtPipeline(config=ConfigManager(config_path), logger=logger)
        outputs = pipeline.run(
            red,
            nir,
            thermal1,
            thermal2,
            precipitation,
            out_dir=output_dir,
            plots=plots,
            palette=palette,
        )
        for layer, path in outputs.items():
            echo(f"  {layer}: {path}")
        echo(f"✅  Drought indices written under {output_dir}/")
    except HANDLED_ERRORS as e:
        _fail("SDCI pipeline", e)


@cli.command()
@click.argument("raster", type=_raster_path, callback=_check_raster_format)
@click.option(
    "--output", "-o", type=click.Path(), required=True, help="Output PNG path"
)
@click.option("--title", "-t", default=None, help="Plot title")
@click.option("--palette", "-p", default=None, help="Preset palette name")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML/TOML/JSON settings file",
)
def plot(raster, output, title, palette, config_path):
    """Render RASTER as a colour-ramp PNG."""
    try:
        cfg = ConfigManager(config_path)
        render_raster(
            read_raster(raster),
            title=title,
            color_stops=cfg.get_palette(palette),
            output_path=output,
        )
        echo(f"✅  Plot written to `{output}`")
    except HANDLED_ERRORS as e:
        _fail("Plot", e)


if __name__ == "__main__":
    cli()
