"""
Sentinel Grid - Logging Setup

Root logger configuration for entry points. Library modules only ever
call ``logging.getLogger(__name__)``.
"""

import logging
import os
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    """
    Configure the root logger.

    Args:
        level: Log level name or number (SENTINEL_LOG_LEVEL or INFO if omitted)
    """
    if level is None:
        level = os.getenv("SENTINEL_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
