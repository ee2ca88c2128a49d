"""
Logging configuration.

We use a YAML logging config (`src/cityradius/config/logging.yaml`) and then apply
runtime overrides from settings (e.g., `CITYRADIUS_LOG_LEVEL`, `CITYRADIUS_LOG_PERFORMANCE`).
"""

from __future__ import annotations

import copy
import logging.config

from cityradius.config.settings import get_logging_config, get_settings

PERFORMANCE_LOGGER = "cityradius.performance"


def configure_logging() -> None:
    """Configure the Python logging system based on packaged YAML config + settings."""
    settings = get_settings()
    # The YAML dict is cached; dictConfig must not see our edits leak back into it.
    config = copy.deepcopy(get_logging_config())

    level = settings.app.log_level.upper()
    config.setdefault("root", {})["level"] = level
    handler_level = "DEBUG" if settings.app.log_performance else level
    for handler in config.get("handlers", {}).values():
        if isinstance(handler, dict) and "level" in handler:
            handler["level"] = handler_level

    perf = config.setdefault("loggers", {}).setdefault(PERFORMANCE_LOGGER, {})
    perf["level"] = "DEBUG" if settings.app.log_performance else level

    logging.config.dictConfig(config)
