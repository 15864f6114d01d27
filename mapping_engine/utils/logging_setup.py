"""Process-level logging setup."""

import logging
from typing import Optional

from mapping_engine.config import AppConfig, get_config


def setup_logging(config: Optional[AppConfig] = None) -> int:
    """
    Configure root logging at the configured level.

    Meant for processes embedding the engine; library modules only create
    module-level loggers.

    Args:
        config: Configuration to read ``log_level`` from (defaults to global config)

    Returns:
        The numeric level applied
    """
    config = config or get_config()
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level)
    return level
