"""core.config
---------------

Configuration loader for droughtindices. Settings come from built-in
defaults, optionally overlaid by a YAML/TOML/JSON file, and are read back via
:py:meth:`ConfigManager.get` or the typed helpers below.
"""

import os
import json
import yaml
import toml

from droughtindices.analytics import temperature


class ConfigValidationError(Exception):
    """Raised when configuration loading or validation fails."""


class ConfigManager:
    """
    Holds pipeline settings: LST coefficients and output unit, plot palettes
    and output naming.
    """

    # Raster file extensions the CLI accepts as input
    SUPPORTED_RASTER_FORMATS: tuple[str, ...] = (".tif", ".tiff", ".img", ".vrt")

    # Colour stops for raster plots, low value first
    PRESET_PALETTES: dict[str, tuple[str, ...]] = {
        "drought": ("green", "yellow", "red"),
        "red-yellow-green": ("red", "yellow", "green"),
        "white-green": ("white", "green"),
        "blue-white-red": ("blue", "white", "red"),
    }

    DEFAULT_PV_COEFF: float = temperature.DEFAULT_PV_COEFF
    DEFAULT_LSE_COEFF: float = temperature.DEFAULT_LSE_COEFF
    DEFAULT_LST_UNIT: str = temperature.KELVIN
    DEFAULT_PALETTE: str = "drought"
    OUTPUT_TEMPLATE: str = "{layer}.tif"

    def __init__(self, config_path=None):
        self.config = {
            "pv_coeff": self.DEFAULT_PV_COEFF,
            "lse_coeff": self.DEFAULT_LSE_COEFF,
            "lst_unit": self.DEFAULT_LST_UNIT,
            "palette": self.DEFAULT_PALETTE,
            "output_template": self.OUTPUT_TEMPLATE,
        }
        self.supported_raster_formats = list(self.SUPPORTED_RASTER_FORMATS)
        self.preset_palettes = {k: list(v) for k, v in self.PRESET_PALETTES.items()}
        if config_path:
            self.load(config_path)

    def load(self, path: str) -> None:
        """
        Load configuration from a file (YAML, TOML, or JSON).
        Overwrites existing keys in self.config; a ``palettes`` mapping in the
        file is added to the preset palettes instead.
        """
        ext = os.path.splitext(path)[1].lower()
        try:
            with open(path, "r", encoding="utf-8") as f:
                if ext in (".yaml", ".yml"):
                    data = yaml.safe_load(f)
                elif ext == ".toml":
                    data = toml.load(f)
                elif ext == ".json":
                    data = json.load(f)
                else:
                    raise ConfigValidationError(f"Unsupported config format: {ext}")
        except ConfigValidationError:
            raise
        except Exception as e:
            raise ConfigValidationError(
                f"Failed to load config from {path}: {e}"
            ) from e
        if not isinstance(data, dict):
            raise ConfigValidationError(f"Config file {path} did not produce a dict")
        palettes = data.pop("palettes", None)
        if palettes is not None:
            if not isinstance(palettes, dict):
                raise ConfigValidationError("'palettes' must be a mapping")
            self.preset_palettes.update({k: list(v) for k, v in palettes.items()})
        self.config.update(data)

    def get(self, key, default=None):
        """
        Retrieve a configuration value by key, or return `default` if not present.
        Falls back to instance attributes such as ``preset_palettes``.
        """
        if key in self.config:
            return self.config.get(key, default)
        if hasattr(self, key):
            return getattr(self, key)
        return default

    def merge(self, other: "ConfigManager") -> None:
        """
        Merge another ConfigManager into this one; values in ``other`` win.
        """
        if not isinstance(other, ConfigManager):
            raise TypeError("Can only merge ConfigManager instances")
        self.config.update(other.config)
        self.supported_raster_formats = list(
            dict.fromkeys(self.supported_raster_formats + other.supported_raster_formats)
        )
        self.preset_palettes.update(other.preset_palettes)

    def is_supported_raster(self, path: str) -> bool:
        """True when *path* has one of the supported raster file extensions."""
        ext = os.path.splitext(path)[1].lower()
        return ext in self.get("supported_raster_formats", [])

    def get_lst_params(self) -> dict:
        """Return keyword arguments for ``calculate_lst``."""
        try:
            return {
                "pv_coeff": float(self.get("pv_coeff", self.DEFAULT_PV_COEFF)),
                "lse_coeff": float(self.get("lse_coeff", self.DEFAULT_LSE_COEFF)),
                "unit": str(self.get("lst_unit", self.DEFAULT_LST_UNIT)),
            }
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(f"Invalid LST parameters: {e}") from e

    def get_palette(self, name: str | None = None) -> list[str]:
        """Return the colour stops for palette ``name`` (default: configured one)."""
        key = name or self.get("palette", self.DEFAULT_PALETTE)
        if key not in self.preset_palettes:
            raise ConfigValidationError(
                f"Unknown palette '{key}'. Choose from: {sorted(self.preset_palettes)}"
            )
        return list(self.preset_palettes[key])

    def get_output_path(self, out_dir: str, layer: str) -> str:
        """Return the output raster path for ``layer`` inside ``out_dir``."""
        template = self.get("output_template", self.OUTPUT_TEMPLATE)
        return os.path.join(out_dir, template.format(layer=layer))
