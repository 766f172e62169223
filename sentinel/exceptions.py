"""
Sentinel Grid - Border Sector Risk Intelligence
Exceptions
"""


class SentinelError(Exception):
    """Base exception for Sentinel Grid errors."""
    pass


class ConfigurationError(SentinelError):
    """Invalid configuration values (weights, thresholds, grid size)."""
    pass


class InvalidSectorError(SentinelError):
    """Sector identifier is malformed or outside the configured grid."""

    def __init__(self, sector_id: str, reason: str = "unknown sector"):
        super().__init__(f"Invalid sector '{sector_id}': {reason}")
        self.sector_id = sector_id
        self.reason = reason
