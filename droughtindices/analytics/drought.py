"""Standardized Drought Condition Index."""

from __future__ import annotations

from droughtindices.raster.model import Raster, check_aligned

# Contribution of each condition index to the composite score
TCI_WEIGHT = 0.5
PCI_WEIGHT = 0.3
VCI_WEIGHT = 0.2


def calculate_sdci(vci: Raster, tci: Raster, pci: Raster) -> Raster:
    """Blend VCI, TCI and PCI into the SDCI, ``0.5*tci + 0.3*pci + 0.2*vci``.

    Raises:
        ShapeMismatchError: if the three rasters do not share a grid shape.
    """
    check_aligned(vci, tci, pci)
    sdci = TCI_WEIGHT * tci + PCI_WEIGHT * pci + VCI_WEIGHT * vci
    return sdci.rename("sdci")
