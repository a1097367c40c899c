"""
Land Surface Temperature from Landsat 8 bands and the Temperature Condition Index.

LST follows the single-channel emissivity correction::

    NDVI -> proportional vegetation -> emissivity
    thermal DN -> radiance -> brightness temperature
    LST = BT / (1 + (w * BT / rho) * ln(emissivity))

The calibration constants below belong to the Landsat 8 TIRS bands 10/11.
"""

from __future__ import annotations

import logging

from droughtindices.analytics.normalize import value_range
from droughtindices.analytics.vegetation import calculate_ndvi
from droughtindices.raster.model import Raster, clamp, log

logger = logging.getLogger(__name__)

# NDVI thresholds for bare soil and full vegetation cover
NDVI_SOIL = 0.2
NDVI_VEGETATION = 0.5

# TIRS radiance rescaling (RADIANCE_MULT_BAND_x / RADIANCE_ADD_BAND_x)
RADIANCE_MULT = 0.0003342
RADIANCE_ADD = 0.1

# TIRS thermal conversion constants
K1_CONSTANT = 774.89
K2_CONSTANT = 1321.08

# Emitted radiance wavelength (um) and h*c/sigma (um K)
EMISSION_WAVELENGTH = 10.8
RHO = 14380.0

KELVIN_OFFSET = 273.15
CELSIUS = "C"
KELVIN = "K"

DEFAULT_PV_COEFF = 0.004
DEFAULT_LSE_COEFF = 0.986


def proportional_vegetation(ndvi: Raster) -> Raster:
    """Fraction of vegetation cover, linear between the soil and vegetation NDVI, clamped to [0, 1]."""
    pv = (ndvi - NDVI_SOIL) / (NDVI_VEGETATION - NDVI_SOIL)
    return clamp(pv, 0.0, 1.0).rename("pv")


def land_surface_emissivity(
    pv: Raster,
    pv_coeff: float = DEFAULT_PV_COEFF,
    lse_coeff: float = DEFAULT_LSE_COEFF,
) -> Raster:
    return (pv * pv_coeff + lse_coeff).rename("lse")


def thermal_radiance(band: Raster) -> Raster:
    """Top-of-atmosphere spectral radiance of a thermal band."""
    return band * RADIANCE_MULT + RADIANCE_ADD


def brightness_temperature(band: Raster) -> Raster:
    """At-sensor brightness temperature (K) of a thermal band."""
    radiance = thermal_radiance(band)
    return (K2_CONSTANT / log(K1_CONSTANT / radiance + 1)).rename(f"bt_{band.name}")


def calculate_lst(
    red: Raster,
    nir: Raster,
    thermal1: Raster,
    thermal2: Raster,
    pv_coeff: float = DEFAULT_PV_COEFF,
    lse_coeff: float = DEFAULT_LSE_COEFF,
    unit: str = KELVIN,
) -> Raster:
    """
    Calculate Land Surface Temperature from red, NIR and the two thermal bands.

    Args:
        red: red band (Landsat 8 B4).
        nir: near-infrared band (B5).
        thermal1: thermal band B10 digital numbers.
        thermal2: thermal band B11 digital numbers.
        pv_coeff: emissivity gain per unit of proportional vegetation.
        lse_coeff: emissivity of bare soil.
        unit: "C" for Celsius; any other label yields Kelvin.

    Returns:
        Raster named "lst". Cells whose emissivity or radiance is out of the
        logarithm's domain are no data.
    """
    ndvi = calculate_ndvi(red, nir)
    pv = proportional_vegetation(ndvi)
    lse = land_surface_emissivity(pv, pv_coeff, lse_coeff)

    bt = (brightness_temperature(thermal1) + brightness_temperature(thermal2)) / 2

    lst = bt / (1 + (EMISSION_WAVELENGTH * bt / RHO) * log(lse))

    if unit == CELSIUS:
        lst = lst - KELVIN_OFFSET
    elif unit != KELVIN:
        logger.warning("Unrecognised LST unit %r; returning Kelvin", unit)
    return lst.rename("lst")


def calculate_tci(lst: Raster) -> Raster:
    """Temperature Condition Index: hottest cell maps to 0, coolest to 100."""
    lo, hi = value_range(lst)
    return ((hi - lst) / (hi - lo) * 100).rename("tci")
