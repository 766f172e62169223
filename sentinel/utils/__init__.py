"""
Sentinel Grid - Utilities
"""

from sentinel.utils.logging_setup import configure_logging, LOG_FORMAT

__all__ = [
    "configure_logging",
    "LOG_FORMAT",
]
