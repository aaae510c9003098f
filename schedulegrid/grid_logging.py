"""
Central logging configuration for schedulegrid.

Keeps schedulegrid's own loggers at INFO (or DEBUG on request) while holding
third-party libraries at WARNING so per-block tracing stays readable.
"""

import logging
import os
from typing import Optional

from colorlog import ColoredFormatter

LOG_FORMAT = "%(asctime)s %(log_color)s%(levelname)-7s%(reset)s %(name)s: %(message)s"
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}

GRID_MODULES = [
    "schedulegrid",
    "schedulegrid.calendar.recurrence",
    "schedulegrid.domain.block_extraction",
    "schedulegrid.domain.overlap_layout",
    "schedulegrid.domain.conflict_grid",
    "schedulegrid.domain.week_view",
]

SUPPRESSED_LOGGERS = [
    "yaml",
    "pydantic",
    "dateutil",
]


def configure_grid_logging(debug_mode: bool = False, force_debug: Optional[bool] = None) -> None:
    """
    Configure logging levels for schedulegrid.

    Args:
        debug_mode: Whether to enable debug logging for schedulegrid modules
        force_debug: Override debug mode setting (None to use env var detection)

    Environment Variables:
        SCHEDULEGRID_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        SCHEDULEGRID_LOG_LEVEL: Override root log level (DEBUG, INFO, WARNING, ERROR)
    """
    env_debug = os.getenv("SCHEDULEGRID_DEBUG", "").lower() in ("1", "true", "yes")
    env_log_level = os.getenv("SCHEDULEGRID_LOG_LEVEL", "").upper()

    if force_debug is not None:
        final_debug = force_debug
    elif env_debug:
        final_debug = True
    else:
        final_debug = debug_mode

    root_level = logging.DEBUG if final_debug else logging.INFO
    if env_log_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
        root_level = getattr(logging, env_log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    # Only add a console handler if none exist so host applications keep theirs
    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(root_level)
        handler.setFormatter(ColoredFormatter(LOG_FORMAT, datefmt="%H:%M:%S", log_colors=LOG_COLORS))
        root_logger.addHandler(handler)

    logger_config: dict[str, int] = {name: logging.WARNING for name in SUPPRESSED_LOGGERS}
    grid_level = logging.DEBUG if final_debug else logging.INFO
    for module in GRID_MODULES:
        logger_config[module] = grid_level

    for logger_name, level in logger_config.items():
        logging.getLogger(logger_name).setLevel(level)

    if final_debug:
        root_logger.info("Debug logging enabled for schedulegrid modules.")
    else:
        root_logger.info("Production logging configuration applied.")


def reset_logging_to_debug() -> None:
    """
    Reset all loggers to DEBUG level for troubleshooting.
    """
    logging.getLogger().setLevel(logging.DEBUG)
    for logger_name in SUPPRESSED_LOGGERS + GRID_MODULES:
        logging.getLogger(logger_name).setLevel(logging.DEBUG)

    logging.getLogger().info("All loggers reset to DEBUG level for troubleshooting")


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their current levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}
    for logger_name in ["schedulegrid", *SUPPRESSED_LOGGERS]:
        status[logger_name] = logging.getLevelName(logging.getLogger(logger_name).level)
    return status
