"""
Module for centralized, configurable logging across droughtindices modules.
"""

import logging
import os
import json
from datetime import datetime, timezone

LEVEL_ENV = "DROUGHTINDICES_LOG_LEVEL"
FORMAT_ENV = "DROUGHTINDICES_LOG_FMT"


class JSONFormatter(logging.Formatter):
    """
    Formatter that renders each record as one JSON object with the keys
    timestamp (ISO8601, UTC), level, name and message, plus ``layer`` when
    the record concerns one index layer (passed via ``extra``).
    """

    def format(self, record):
        payload = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        layer = getattr(record, "layer", None)
        if layer is not None:
            payload["layer"] = layer
        return json.dumps(payload)


class Logger:
    """
    Central logging setup shared by the CLI, the pipeline and the transforms.
    """

    _configured = False

    @staticmethod
    def setup(
        level: int | None = None,
        fmt: str | None = None,
        datefmt: str = "%Y-%m-%d %H:%M:%S",
    ) -> None:
        """
        Configure the root logger once per process.

        ``level`` falls back to ``DROUGHTINDICES_LOG_LEVEL`` and ``fmt`` to
        ``DROUGHTINDICES_LOG_FMT``; a format of ``json`` switches to
        :class:`JSONFormatter`, anything else is used as a text format string.
        """
        if Logger._configured:
            return
        if level is None:
            env_level = os.getenv(LEVEL_ENV, "INFO").upper()
            effective_level = getattr(logging, env_level, logging.INFO)
        else:
            effective_level = level

        fmt_mode = fmt if fmt is not None else os.getenv(FORMAT_ENV, "")
        text_fmt = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
        root = logging.getLogger()
        root.handlers.clear()

        if fmt_mode.lower() == "json":
            handler = logging.StreamHandler()
            handler.setFormatter(JSONFormatter(datefmt=datefmt))
            root.addHandler(handler)
            root.setLevel(effective_level)
        else:
            logging.basicConfig(
                level=effective_level,
                format=fmt_mode or text_fmt,
                datefmt=datefmt,
            )
        Logger._configured = True

    @staticmethod
    def get_logger(
        name: str = "droughtindices",
        *,
        level: int | None = None,
        fmt: str | None = None,
    ) -> logging.Logger:
        """
        Return the named logger, configuring logging first if needed.

        Parameters:
            name: The name of the logger.
            level: Optional logging level used if logging is not set up yet.
            fmt: Optional format ("json" or a format string) used likewise.
        """
        Logger.setup(level=level, fmt=fmt)
        return logging.getLogger(name)
