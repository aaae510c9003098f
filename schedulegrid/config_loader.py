"""schedulegrid.config_loader

Small config loader for the availability grid.

- Reads YAML (PyYAML) files, or JSON when the file has a ``.json`` suffix.
- Exposes a typed dataclass ``Config`` and a ``load_config()`` helper that
  accepts an optional path override.
- Engine constants (grid hours, instance caps) are not configurable.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from schedulegrid.domain.conflict_grid import GridMode

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class Config:
    """Typed configuration for schedulegrid.

    Fields:
        mode: whose availability is shown, ``personal`` or ``team``
        log_level: logging level name
        week_offset: weeks to shift the displayed window from the current week
    """

    mode: GridMode = GridMode.PERSONAL
    log_level: str = "INFO"
    week_offset: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Config:
        """Create Config from a plain mapping, applying defaults and validation.

        Unknown modes and log levels fall back to their defaults with a
        warning; ``week_offset`` is coerced to int.
        """
        if data is None:
            data = {}

        raw_mode = str(data.get("mode", GridMode.PERSONAL.value)).lower()
        try:
            mode = GridMode(raw_mode)
        except ValueError:
            logger.warning("Config mode=%r is not recognized; using personal", raw_mode)
            mode = GridMode.PERSONAL

        log_level = data.get("log_level", "INFO")
        log_level = str(log_level).upper() if log_level is not None else "INFO"
        if log_level not in _LOG_LEVELS:
            logger.warning("Config log_level=%r is not recognized; using INFO", log_level)
            log_level = "INFO"

        raw_offset = data.get("week_offset", 0)
        try:
            week_offset = int(raw_offset)
        except (TypeError, ValueError):
            logger.warning("Config week_offset=%r is not an int; using default 0", raw_offset)
            week_offset = 0

        return cls(mode=mode, log_level=log_level, week_offset=week_offset)


def _load_yaml_or_json(path: Path) -> Any:
    """Load a mapping from a YAML file, or from JSON for ``.json`` files."""
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        return json.loads(text)
    loaded = yaml.safe_load(text)
    # safe_load returns None for empty files
    return {} if loaded is None else loaded


def load_config(path: str | None = None) -> Config:
    """Load configuration from a YAML/JSON file and return a Config instance.

    Args:
        path: Optional path to the config file. Defaults to
              ./schedulegrid/config.yaml relative to the working directory.

    Behavior:
    - If file is missing: returns Config() with defaults.
    - If file exists but top-level is not a mapping: raises ValueError.
    """
    p = Path(path) if path else Path.cwd() / "schedulegrid" / "config.yaml"
    logger.debug("Attempting to load config from %s", p)
    if not p.exists():
        logger.info("Config file %s not found; using defaults", p)
        return Config()

    raw = _load_yaml_or_json(p)
    if not isinstance(raw, dict):
        logger.warning("Config file %s parsed but top-level is not a mapping: %r", p, raw)
        raise ValueError("Config file must contain a mapping at top level")  # noqa: TRY004
    cfg = Config.from_dict(raw)
    logger.info("Loaded configuration from %s", p)
    logger.debug("Configuration values: %s", cfg)
    return cfg
